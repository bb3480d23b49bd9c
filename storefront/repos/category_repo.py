# storefront/repos/category_repo.py
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> list[CategoryModel]:
        return list(self.db.scalars(select(CategoryModel).order_by(CategoryModel.name)))

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def find_by_name(self, name: str, exclude_id: int | None = None) -> CategoryModel | None:
        stmt = select(CategoryModel).where(func.lower(CategoryModel.name) == name.lower())
        if exclude_id is not None:
            stmt = stmt.where(CategoryModel.id != exclude_id)
        return self.db.scalars(stmt.limit(1)).first()

    def create_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def rename_category(self, category: CategoryModel, name: str) -> CategoryModel:
        category.name = name
        self.db.commit()
        self.db.refresh(category)
        return category

    def count_products(self, category_id: int) -> int:
        return self.db.scalar(
            select(func.count()).select_from(ProductModel).where(ProductModel.category_id == category_id)
        )

    def detach_products(self, category_id: int) -> int:
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.category_id == category_id)
            .values(category_id=None)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def delete_category(self, category: CategoryModel) -> None:
        self.db.delete(category)
        self.db.commit()

    def rollback(self):
        self.db.rollback()
