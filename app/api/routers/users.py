from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.api.deps import store_http_error
from app.domain.errors import StoreError
from app.services.user_service import UserService
from app.domain.schemas import TelegramUserIn, UserProfileOut

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/telegram", response_model=UserProfileOut)
def upsert_telegram_user(payload: TelegramUserIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.upsert_telegram_profile(payload)
    except StoreError as e:
        raise store_http_error(e)


@router.get("/{user_id}", response_model=UserProfileOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_profile(user_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise store_http_error(e)
