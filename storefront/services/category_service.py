# storefront/services/category_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.schemas import CategoryOut
from storefront.repos.category_repo import CategoryRepo
from storefront.utils.settings import CATEGORY_DELETE_POLICY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DELETE_POLICIES = ("nullify", "restrict")


class CategoryService:
    def __init__(self, db: Session, delete_policy: str = CATEGORY_DELETE_POLICY):
        if delete_policy not in DELETE_POLICIES:
            raise ValueError(f"Unknown category delete policy: {delete_policy}")
        self.repo = CategoryRepo(db)
        self.delete_policy = delete_policy

    def list_categories(self) -> list[CategoryOut]:
        return [CategoryOut.model_validate(c) for c in self.repo.list_categories()]

    def get_category(self, category_id: int) -> CategoryOut:
        return CategoryOut.model_validate(self._get_or_404(category_id))

    def create_category(self, name: str) -> CategoryOut:
        if self.repo.find_by_name(name):
            raise ConflictError("Category is already exist.")

        try:
            created = self.repo.create_category(CategoryModel(name=name))
        except IntegrityError as e:
            # lost a race against a concurrent create, the unique index caught it
            self.repo.rollback()
            raise ConflictError("Category is already exist.") from e

        logger.info(f"Created category {created.id} '{created.name}'")
        return CategoryOut.model_validate(created)

    def rename_category(self, category_id: int, name: str) -> CategoryOut:
        category = self._get_or_404(category_id)

        if self.repo.find_by_name(name, exclude_id=category_id):
            raise ConflictError("Category name is already in use.")

        try:
            updated = self.repo.rename_category(category, name)
        except IntegrityError as e:
            self.repo.rollback()
            raise ConflictError("Category name is already in use.") from e

        logger.info(f"Renamed category {category_id} to '{name}'")
        return CategoryOut.model_validate(updated)

    def delete_category(self, category_id: int) -> None:
        category = self._get_or_404(category_id)

        if self.delete_policy == "restrict":
            in_use = self.repo.count_products(category_id)
            if in_use:
                raise ConflictError(
                    f"Category is used by {in_use} product(s) and cannot be deleted."
                )
        else:
            detached = self.repo.detach_products(category_id)
            if detached:
                logger.info(f"Unlinked {detached} product(s) from category {category_id}")

        self.repo.delete_category(category)
        logger.info(f"Deleted category {category_id}")

    def _get_or_404(self, category_id: int) -> CategoryModel:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFoundError("Category not found.")
        return category
