# storefront/data/models/category.py
from sqlalchemy import Column, Integer, String, Index, func
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    products = relationship("ProductModel", back_populates="category", passive_deletes=True)

    # case-insensitive uniqueness, "Cakes" and "cakes" collide
    __table_args__ = (Index("uq_categories_name_lower", func.lower(name), unique=True),)
