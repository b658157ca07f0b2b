from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import store_http_error
from app.data.database import get_db
from app.domain.errors import StoreError
from app.domain.schemas import RestaurantOut, MenuItemOut
from app.repos.catalog_repo import CatalogRepo

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("/", response_model=List[RestaurantOut])
def list_restaurants(db: Session = Depends(get_db)):
    try:
        return CatalogRepo(db).list_active_restaurants()
    except StoreError as e:
        raise store_http_error(e)


@router.get("/{restaurant_id}", response_model=RestaurantOut)
def get_restaurant(restaurant_id: str, db: Session = Depends(get_db)):
    try:
        restaurant = CatalogRepo(db).get_restaurant(restaurant_id)
    except StoreError as e:
        raise store_http_error(e)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return restaurant


@router.get("/{restaurant_id}/menu", response_model=List[MenuItemOut])
def get_menu(restaurant_id: str, db: Session = Depends(get_db)):
    repo = CatalogRepo(db)
    try:
        if not repo.get_restaurant(restaurant_id):
            raise HTTPException(status_code=404, detail="Restaurant not found")
        return repo.get_menu_items(restaurant_id)
    except StoreError as e:
        raise store_http_error(e)
