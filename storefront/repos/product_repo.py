# storefront/repos/product_repo.py
from typing import Any

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel

_LIKE_ESCAPE = "\\"


def _like_pattern(search: str) -> str:
    # search is a literal substring, not a LIKE pattern
    escaped = (
        search.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped.lower()}%"


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product: ProductModel, values: dict[str, Any]) -> ProductModel:
        for field, value in values.items():
            setattr(product, field, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()

    def search_products(
        self,
        offset: int,
        limit: int,
        search: str = "",
        category_id: int | None = None,
    ) -> tuple[list[ProductModel], int]:
        """Return one page of matching products (newest first) and the unpaged match count."""
        conditions = []
        if search:
            conditions.append(func.lower(ProductModel.name).like(_like_pattern(search), escape=_LIKE_ESCAPE))
        if category_id is not None:
            conditions.append(ProductModel.category_id == category_id)

        total = self.db.scalar(select(func.count()).select_from(ProductModel).where(*conditions))

        stmt = (
            select(ProductModel)
            .where(*conditions)
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.scalars(stmt)), total
