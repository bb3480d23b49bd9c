# storefront/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import CategoryEnvelope, CategoryIn, CategoryOut, MessageOut
from storefront.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


def get_service(db: Session):
    return CategoryService(db)


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return get_service(db).list_categories()


@router.post("", response_model=CategoryEnvelope)
def create_category(payload: CategoryIn, db: Session = Depends(get_db)):
    category = get_service(db).create_category(payload.name)
    return CategoryEnvelope(category=category, message="Category created successfully")


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_category(category_id)


@router.patch("/{category_id}", response_model=CategoryEnvelope)
def rename_category(category_id: int, payload: CategoryIn, db: Session = Depends(get_db)):
    category = get_service(db).rename_category(category_id, payload.name)
    return CategoryEnvelope(category=category, message="Category updated successfully")


@router.delete("/{category_id}", response_model=MessageOut)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    get_service(db).delete_category(category_id)
    return MessageOut(message="Category deleted successfully")
