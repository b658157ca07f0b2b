from sqlalchemy.orm import Session

from app.repos.user_repo import UserRepo
from app.domain.schemas import TelegramUserIn, UserProfileOut
from app.utils.settings import USER_KEY_PREFIX


def user_key(telegram_id: int) -> str:
    """Klucz partycji koszyka/zamowien, z prefiksem dostawcy tozsamosci."""
    return f"{USER_KEY_PREFIX}{telegram_id}"


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def upsert_telegram_profile(self, payload: TelegramUserIn) -> UserProfileOut:
        profile = self.repo.upsert_profile(
            user_key(payload.id),
            telegram_id=payload.id,
            telegram_username=payload.username,
            first_name=payload.first_name,
            last_name=payload.last_name,
            language_code=payload.language_code,
            is_premium=payload.is_premium,
        )
        return UserProfileOut.model_validate(profile)

    def get_profile(self, user_id: str) -> UserProfileOut:
        profile = self.repo.get_by_user_id(user_id)
        if not profile:
            raise ValueError("User not found")
        return UserProfileOut.model_validate(profile)
