# storefront/schemas.py
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .models import INT_MAX


# Product
class ProductCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    item_name: str = Field(min_length=1, max_length=255)
    item_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    item_description: str = Field(min_length=1)
    # strict: true is not a rating
    item_rating: int = Field(strict=True, ge=-INT_MAX - 1, le=INT_MAX)
    item_image: str = Field(min_length=1, max_length=1024)


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item_name: str
    item_price: Decimal
    item_description: str
    item_rating: int
    item_image: str


class ProductListOut(BaseModel):
    products: List[ProductOut]
    total_items_in_cart: int


class ProductDetailOut(BaseModel):
    product: ProductOut
    total_items_in_cart: int


class ProductCreated(BaseModel):
    message: str
    productId: int


# Cart
class CartAddRequest(BaseModel):
    # strict: "3" or true is not a quantity
    product_id: int = Field(gt=0, le=INT_MAX, strict=True)
    quantity: int = Field(gt=0, le=INT_MAX, strict=True)


class QuantityUpdate(BaseModel):
    quantity: int = Field(gt=0, le=INT_MAX, strict=True)


class CartLineOut(ProductOut):
    """A cart line joined with its product."""

    quantity: int


class CartTotals(BaseModel):
    total_items: int
    total_price: Decimal


class CartSummary(CartTotals):
    items: List[CartLineOut]


class MessageOut(BaseModel):
    message: str
