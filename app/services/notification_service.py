# app/services/notification_service.py
import requests

from app.celery_worker import celery_app
from app.utils.retry import http_retry
from app.utils.settings import TELEGRAM_BOT_TOKEN, TELEGRAM_API_URL, USER_KEY_PREFIX
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień o zamówieniach.
    Używa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_notification(user_id: str, order_id: str):
        """
        Wysyła powiadomienie o złożeniu zamówienia.
        Błąd brokera nie może wpłynąć na zamówienie.
        """
        try:
            send_order_notification_task.delay(user_id, order_id)
        except Exception as e:
            logger.warning(f"Nie udało się zakolejkować powiadomienia dla {order_id}: {e}")


class TelegramBotClient:
    def __init__(self, token: str | None = None, base_url: str | None = None, timeout: int = 5):
        self.token = token if token is not None else TELEGRAM_BOT_TOKEN
        self.base_url = (base_url or TELEGRAM_API_URL).rstrip("/")
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.token)

    @http_retry()
    def send_message(self, chat_id: int, text: str) -> dict:
        url = f"{self.base_url}/bot{self.token}/sendMessage"
        logger.info(f"TelegramBotClient sendMessage chat={chat_id}")

        resp = requests.post(url, json={"chat_id": chat_id, "text": text}, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()


def telegram_chat_id(user_id: str) -> int | None:
    """telegram_123 -> 123, inne klucze -> None."""
    if not user_id.startswith(USER_KEY_PREFIX):
        return None
    raw = user_id[len(USER_KEY_PREFIX):]
    return int(raw) if raw.isdigit() else None


@celery_app.task(name="app.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: str, order_id: str):
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} placed")

    bot = TelegramBotClient()
    chat_id = telegram_chat_id(user_id)
    if not bot.enabled or chat_id is None:
        return {"user_id": user_id, "order_id": order_id, "status": "logged"}

    try:
        bot.send_message(chat_id, f"Zamówienie {order_id} zostało przyjęte.")
    except requests.RequestException as e:
        logger.warning(f"Telegram sendMessage nie powiodło się dla {order_id}: {e}")
        return {"user_id": user_id, "order_id": order_id, "status": "failed"}

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
