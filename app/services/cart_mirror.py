import functools
import json

import redis

from app.domain.errors import StoreError
from app.utils.retry import redis_retry
from app.utils.settings import REDIS_URL, CART_MIRROR_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

_KEY_PREFIX = "cart:mirror:"


def mirror_key(user_id: str) -> str:
    return f"{_KEY_PREFIX}{user_id}"


def mirror_op(func):
    """RedisError po wyczerpaniu retry -> StoreError(cart_mirror)."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except redis.RedisError as e:
            logger.error(f"Mirror koszyka niedostepny ({func.__name__}): {e}")
            raise StoreError("cart_mirror", "Mirror koszyka jest niedostepny") from e

    return wrapper


class CartMirror:
    """
    Lokalna kopia ilosci w koszyku (redis hash na usera)
    -pole = menu_item_id, wartosc = json {restaurant_id, quantity}
    -baza jest zrodlem prawdy, mirror poprawia refresh
    -brak locka: przy wyscigu wygrywa ostatni zapis
    """

    def __init__(self, client: redis.Redis | None = None, ttl: int = CART_MIRROR_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.ttl = ttl

    @mirror_op
    @redis_retry()
    def exists(self, user_id: str) -> bool:
        return bool(self.redis.exists(mirror_key(user_id)))

    @mirror_op
    @redis_retry()
    def lines(self, user_id: str) -> dict[str, dict]:
        raw = self.redis.hgetall(mirror_key(user_id))
        return {item_id: json.loads(value) for item_id, value in raw.items()}

    @mirror_op
    @redis_retry()
    def get_line(self, user_id: str, menu_item_id: str) -> dict | None:
        raw = self.redis.hget(mirror_key(user_id), menu_item_id)
        return json.loads(raw) if raw else None

    def get_quantity(self, user_id: str, menu_item_id: str) -> int:
        line = self.get_line(user_id, menu_item_id)
        return line["quantity"] if line else 0

    def restaurant_ids(self, user_id: str) -> set[str]:
        # "aktualna restauracja" liczona z calego koszyka, nie z pierwszej linii
        return {line["restaurant_id"] for line in self.lines(user_id).values()}

    @mirror_op
    @redis_retry()
    def set_line(self, user_id: str, menu_item_id: str, restaurant_id: str, quantity: int) -> None:
        key = mirror_key(user_id)
        pipe = self.redis.pipeline()
        pipe.hset(key, menu_item_id, json.dumps({"restaurant_id": restaurant_id, "quantity": quantity}))
        pipe.expire(key, self.ttl)
        pipe.execute()

    @mirror_op
    @redis_retry()
    def remove_line(self, user_id: str, menu_item_id: str) -> None:
        self.redis.hdel(mirror_key(user_id), menu_item_id)

    @mirror_op
    @redis_retry()
    def replace(self, user_id: str, lines: dict[str, dict]) -> None:
        """Podmiana calego mirrora naraz (MULTI/EXEC)."""
        key = mirror_key(user_id)
        pipe = self.redis.pipeline(transaction=True)
        pipe.delete(key)
        if lines:
            pipe.hset(key, mapping={item_id: json.dumps(line) for item_id, line in lines.items()})
            pipe.expire(key, self.ttl)
        pipe.execute()

    @mirror_op
    @redis_retry()
    def clear(self, user_id: str) -> None:
        self.redis.delete(mirror_key(user_id))

    @mirror_op
    def user_ids(self) -> list[str]:
        return [key[len(_KEY_PREFIX):] for key in self.redis.scan_iter(match=f"{_KEY_PREFIX}*")]
