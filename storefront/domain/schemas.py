# storefront/domain/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire format is camelCase (imageUrl, categoryId, totalPages ...)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(BaseModel):
    message: str


class SuccessOut(BaseModel):
    success: bool
    message: str


# ---------------------------------------------------------------- categories

class CategoryIn(BaseModel):
    name: str = Field(..., max_length=100)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category Required")
        return v


class CategoryOut(CamelModel):
    id: int
    name: str


class CategoryEnvelope(BaseModel):
    category: CategoryOut
    message: str


# ------------------------------------------------------------------ products

class ProductCreate(CamelModel):
    """Fields of the admin product form, validated before anything is uploaded."""

    name: str = Field(..., min_length=1, max_length=255)
    price: int = Field(..., ge=1)
    description: str = Field(..., min_length=1)
    stock: int = Field(..., ge=0)
    category_id: Optional[int] = None

    @field_validator("name", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field required")
        return v


class ProductPatch(CamelModel):
    name: Optional[str] = None
    price: Optional[int] = None
    description: Optional[str] = None
    stock: Optional[int] = None
    category_id: Optional[int] = None


class ProductOut(CamelModel):
    id: int
    name: str
    description: str
    price: int
    stock: int
    image_url: str
    category_id: Optional[int] = None
    created_at: datetime
    category: Optional[CategoryOut] = None


class ProductCreated(BaseModel):
    data: ProductOut
    message: str


class ProductUpdated(BaseModel):
    success: bool
    product: ProductOut
    message: str


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ProductPage(BaseModel):
    success: bool
    product: List[ProductOut]
    pagination: Pagination


# ---------------------------------------------------------------------- cart

class CartAddIn(CamelModel):
    user_id: str = Field(..., min_length=1)
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)


class CartRemoveIn(CamelModel):
    item_id: Optional[int] = None


class CartItemOut(CamelModel):
    id: int
    cart_id: int
    product_id: int
    quantity: int
    product: Optional[ProductOut] = None


class CartOut(CamelModel):
    id: int
    user_id: str
    created_at: datetime
    items: List[CartItemOut]
    total: int
    item_count: int


class EmptyCart(BaseModel):
    items: List[CartItemOut] = []


class EmptyCartOut(BaseModel):
    message: str
    cart: EmptyCart


# --------------------------------------------------------------------- users

class UserRegister(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)
    confirm_password: str

    @field_validator("email")
    @classmethod
    def gmail_only(cls, v: str) -> str:
        if not v.lower().endswith("@gmail.com"):
            raise ValueError("Email must be a gmail.com address")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class UserOut(CamelModel):
    id: str
    username: str
    email: str
    role: str
    created_at: datetime


class UserCreated(BaseModel):
    user: UserOut
    message: str


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)


class TokenOut(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserOut


class SessionUser(CamelModel):
    """Identity carried by a session token."""

    id: str
    username: str
    email: str
    role: str
