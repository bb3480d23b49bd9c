# storefront/api/routers/products.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from storefront.api.deps import get_asset_client
from storefront.data.database import get_db
from storefront.domain.schemas import MessageOut, ProductCreated, ProductOut, ProductPage, ProductUpdated
from storefront.services.asset_client import AssetClient
from storefront.services.product_service import ImageUpload, ProductService
from storefront.utils.settings import PRODUCTS_DEFAULT_LIMIT

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session, asset_client: AssetClient):
    return ProductService(db=db, asset_client=asset_client)


def _form_fields(**fields) -> dict:
    # blank form inputs count as "not sent"
    return {k: v for k, v in fields.items() if v is not None and v != ""}


def _image(upload: UploadFile | None) -> ImageUpload | None:
    if upload is None:
        return None
    return ImageUpload(
        filename=upload.filename or "",
        content=upload.file.read(),
        content_type=upload.content_type,
    )


@router.get("", response_model=ProductPage)
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(PRODUCTS_DEFAULT_LIMIT, ge=1),
    search: str = Query(""),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    db: Session = Depends(get_db),
    asset_client: AssetClient = Depends(get_asset_client),
):
    svc = get_service(db, asset_client)
    return svc.list_products(page=page, limit=limit, search=search, category_id=category_id)


@router.post("", response_model=ProductCreated, status_code=201)
def create_product(
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    stock: Optional[str] = Form(None),
    categoryId: Optional[str] = Form(None),
    imageFile: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    asset_client: AssetClient = Depends(get_asset_client),
):
    svc = get_service(db, asset_client)
    product = svc.create_product(
        _form_fields(name=name, price=price, description=description, stock=stock, categoryId=categoryId),
        _image(imageFile),
    )
    return ProductCreated(data=product, message="Product created successfully")


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    asset_client: AssetClient = Depends(get_asset_client),
):
    return get_service(db, asset_client).get_product(product_id)


@router.patch("/{product_id}", response_model=ProductUpdated)
def update_product(
    product_id: int,
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    stock: Optional[str] = Form(None),
    categoryId: Optional[str] = Form(None),
    imageFile: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    asset_client: AssetClient = Depends(get_asset_client),
):
    svc = get_service(db, asset_client)
    product = svc.update_product(
        product_id,
        _form_fields(name=name, price=price, description=description, stock=stock, categoryId=categoryId),
        _image(imageFile),
    )
    return ProductUpdated(success=True, product=product, message="Product updated successfully")


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    asset_client: AssetClient = Depends(get_asset_client),
):
    get_service(db, asset_client).delete_product(product_id)
    return MessageOut(message="Product deleted successfully")
