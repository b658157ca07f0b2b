from sqlalchemy import select

from app.data.models.user import UserProfileModel
from app.repos.base import BaseRepo


class UserRepo(BaseRepo):

    def get_by_user_id(self, user_id: str) -> UserProfileModel | None:
        with self.store_op("get_user_profile"):
            stmt = select(UserProfileModel).where(UserProfileModel.user_id == user_id)
            return self.db.execute(stmt).scalar_one_or_none()

    def upsert_profile(self, user_id: str, **fields) -> UserProfileModel:
        with self.store_op("upsert_user_profile"):
            stmt = select(UserProfileModel).where(UserProfileModel.user_id == user_id)
            profile = self.db.execute(stmt).scalar_one_or_none()
            if profile is None:
                profile = UserProfileModel(user_id=user_id)
                self.db.add(profile)
            for name, value in fields.items():
                setattr(profile, name, value)
            self.db.commit()
            self.db.refresh(profile)
            return profile
