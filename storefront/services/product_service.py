# storefront/services/product_service.py
import math
from dataclasses import dataclass
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFoundError, UpstreamAssetError, ValidationError, field_details
from storefront.domain.schemas import Pagination, ProductCreate, ProductOut, ProductPage, ProductPatch
from storefront.repos.category_repo import CategoryRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.asset_client import AssetClient
from storefront.utils.settings import PRODUCTS_DEFAULT_LIMIT, PRODUCTS_MAX_LIMIT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ImageUpload:
    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.filename or not self.content


def _validate(model, raw: Dict[str, Any]):
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError("Invalid product data", details=field_details(e.errors())) from e


class ProductService:
    """
    Admin catalog use cases (create, update, delete) and the storefront listing.
    Image files live in object storage, the row only keeps the public URL.
    """

    def __init__(self, db: Session, asset_client: AssetClient):
        self.repo = ProductRepo(db)
        self.categories = CategoryRepo(db)
        self.asset_client = asset_client

    #query
    def get_product(self, product_id: int) -> ProductOut:
        return ProductOut.model_validate(self._get_or_404(product_id))

    def list_products(
        self,
        page: int = 1,
        limit: int = PRODUCTS_DEFAULT_LIMIT,
        search: str = "",
        category_id: int | None = None,
    ) -> ProductPage:
        if page < 1:
            raise ValidationError.for_field("page", "page must be at least 1")
        if limit < 1:
            raise ValidationError.for_field("limit", "limit must be at least 1")
        limit = min(limit, PRODUCTS_MAX_LIMIT)

        items, total = self.repo.search_products(
            offset=(page - 1) * limit,
            limit=limit,
            search=search or "",
            category_id=category_id,
        )

        return ProductPage(
            success=True,
            product=[ProductOut.model_validate(p) for p in items],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
        )

    #commands
    def create_product(self, raw: Dict[str, Any], image: ImageUpload | None) -> ProductOut:
        data = _validate(ProductCreate, raw)

        if image is None or image.is_empty:
            raise ValidationError.for_field("imageFile", "Product image is required")

        self._check_category(data.category_id)

        # nothing is persisted if the upload fails
        image_url = self.asset_client.upload(image.filename, image.content, image.content_type)

        try:
            created = self.repo.create_product(
                ProductModel(
                    name=data.name,
                    price=data.price,
                    description=data.description,
                    stock=data.stock,
                    category_id=data.category_id,
                    image_url=image_url,
                )
            )
        except Exception:
            self._discard_image(image_url)
            raise

        logger.info(f"Created product {created.id} '{created.name}'")
        return ProductOut.model_validate(created)

    def update_product(
        self,
        product_id: int,
        raw: Dict[str, Any],
        image: ImageUpload | None = None,
    ) -> ProductOut:
        product = self._get_or_404(product_id)

        patch = _validate(ProductPatch, raw)
        merged = {
            "name": product.name,
            "price": product.price,
            "description": product.description,
            "stock": product.stock,
            "category_id": product.category_id,
            **patch.model_dump(exclude_none=True),
        }
        data = _validate(ProductCreate, merged)

        if data.category_id != product.category_id:
            self._check_category(data.category_id)

        values = data.model_dump()
        old_image_url = None

        if image is not None and not image.is_empty:
            # upload failure aborts the update, the row is left untouched
            values["image_url"] = self.asset_client.upload(image.filename, image.content, image.content_type)
            old_image_url = product.image_url

        try:
            updated = self.repo.update_product(product, values)
        except Exception:
            if old_image_url is not None:
                self._discard_image(values["image_url"])
            raise

        if old_image_url:
            self._discard_image(old_image_url)

        logger.info(f"Updated product {product_id}")
        return ProductOut.model_validate(updated)

    def delete_product(self, product_id: int) -> None:
        product = self._get_or_404(product_id)
        image_url = product.image_url

        self.repo.delete_product(product)
        logger.info(f"Deleted product {product_id}")

        if image_url:
            self._discard_image(image_url)

    def _discard_image(self, image_url: str) -> None:
        try:
            self.asset_client.delete(image_url)
        except UpstreamAssetError as e:
            logger.warning(f"Failed to delete image {image_url}: {e.message}")

    def _check_category(self, category_id: int | None) -> None:
        if category_id is not None and not self.categories.get_category(category_id):
            raise ValidationError.for_field("categoryId", f"Category {category_id} does not exist")

    def _get_or_404(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product
