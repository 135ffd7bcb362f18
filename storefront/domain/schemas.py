# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from decimal import Decimal
from datetime import datetime


class UserCreate(BaseModel):
    """Registers a principal."""

    id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = None


class UserRead(BaseModel):
    id: int
    name: str
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    original_price: Optional[Decimal] = None
    category: str
    brand: Optional[str] = None
    images: List[str] = []
    stock: int
    rating: float
    review_count: int
    featured: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductPage(BaseModel):
    products: List[ProductOut]
    total: int
    page: int
    total_pages: int


class ReviewAuthor(BaseModel):
    name: str
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ReviewIn(BaseModel):
    product_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1)
    comment: str = Field(..., min_length=1)


class ReviewOut(BaseModel):
    id: int
    product_id: int
    rating: int
    title: str
    comment: str
    created_at: datetime
    user: ReviewAuthor

    model_config = ConfigDict(from_attributes=True)


class ProductDetail(ProductOut):
    reviews: List[ReviewOut] = []
    related_products: List[ProductOut] = []


class ItemIn(BaseModel):
    """Adds a product to the caller's cart."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., ge=1)


class QuantityIn(BaseModel):
    quantity: int = Field(..., ge=1)


class PricingOut(BaseModel):
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class CartLineOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    items: List[CartLineOut]
    pricing: PricingOut


class AddressIn(BaseModel):
    full_name: str = Field(..., min_length=1)
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    is_default: bool = False


class AddressPatch(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1)
    street: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1)
    state: Optional[str] = Field(None, min_length=1)
    zip_code: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    is_default: Optional[bool] = None


class AddressOut(BaseModel):
    id: int
    full_name: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    phone: str
    is_default: bool

    model_config = ConfigDict(from_attributes=True)


class CheckoutIn(BaseModel):
    """
    Checkout request. Prices and amounts are never accepted from the client.
    payment_intent_id is set when the client already confirmed an intent.
    """

    address_id: Optional[int] = None
    payment_method: Optional[str] = None
    payment_intent_id: Optional[str] = None


class PaymentIntentOut(BaseModel):
    client_secret: str
    amount: int
    currency: str


class OrderItemOut(BaseModel):
    product_id: int
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    order_number: str
    status: str
    payment_method: str
    payment_reference: str
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    currency: str
    created_at: datetime
    items: List[OrderItemOut]
    shipping_address: AddressOut

    model_config = ConfigDict(from_attributes=True)
