"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.cart.views import CartView
from storefront.inventory.repository import ProductView
from storefront.order.views import OrderView


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ProductSchema(BaseModel):
    id: str
    title: str
    price: float
    thumbnail: str | None = None
    available_quantity: int

    @classmethod
    def from_view(cls, view: ProductView | None) -> "ProductSchema | None":
        if view is None:
            return None
        return cls(
            id=view.id,
            title=view.title,
            price=view.price,
            thumbnail=view.thumbnail,
            available_quantity=view.available_quantity,
        )


class ShippingAddressSchema(BaseModel):
    full_address: str | None = None
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None
    phone: str | None = None


# ---------------------------------------------------------------------------
# Product Schemas
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    title: str
    description: str | None = None
    price: float = Field(ge=0)
    thumbnail: str | None = None
    quantity: int = Field(ge=0, default=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "The Pragmatic Programmer",
                    "description": "20th anniversary edition",
                    "price": 39.99,
                    "thumbnail": "https://cdn.example.com/pragprog.jpg",
                    "quantity": 25,
                }
            ]
        }
    }


class UpdateProductPriceRequest(BaseModel):
    price: float = Field(ge=0)


class RestockProductRequest(BaseModel):
    quantity: int = Field(ge=1)


class ProductIdResponse(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    quantity: int = Field(ge=1, default=1)


class IncrementCartItemRequest(BaseModel):
    increment_by: int = Field(ge=1, default=1)


class DecrementCartItemRequest(BaseModel):
    decrement_by: int = Field(ge=1, default=1)


class CartItemSchema(BaseModel):
    product_id: str
    quantity: int


class CartResponse(BaseModel):
    cart_id: str | None = None
    owner_id: str
    items: list[CartItemSchema] = []


class CartLineSchema(BaseModel):
    product_id: str
    product: ProductSchema | None = None
    quantity: int
    line_total: float


class CartViewResponse(BaseModel):
    cart_id: str | None = None
    owner_id: str
    items: list[CartLineSchema] = []
    total_amount: float = 0.0

    @classmethod
    def from_view(cls, view: CartView) -> "CartViewResponse":
        return cls(
            cart_id=view.cart_id,
            owner_id=view.owner_id,
            items=[
                CartLineSchema(
                    product_id=line.product_id,
                    product=ProductSchema.from_view(line.product),
                    quantity=line.quantity,
                    line_total=line.line_total,
                )
                for line in view.items
            ],
            total_amount=view.total_amount,
        )


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class CreateOrderRequest(ShippingAddressSchema):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_address": "House 12, Street 4, Gulberg III",
                    "street": "Street 4",
                    "city": "Lahore",
                    "postal_code": "54000",
                    "phone": "+92 300 1234567",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    order_status: str


class OrderItemSchema(BaseModel):
    product_id: str
    product: ProductSchema | None = None
    quantity: int
    price: float


class OrderResponse(BaseModel):
    order_id: str
    owner_id: str
    items: list[OrderItemSchema]
    shipping_address: ShippingAddressSchema
    payment_method: str
    payment_status: str
    order_status: str
    total_price: float
    payment_reference: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_view(cls, view: OrderView) -> "OrderResponse":
        return cls(
            order_id=view.order_id,
            owner_id=view.owner_id,
            items=[
                OrderItemSchema(
                    product_id=item.product_id,
                    product=ProductSchema.from_view(item.product),
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in view.items
            ],
            shipping_address=ShippingAddressSchema(**view.shipping_address),
            payment_method=view.payment_method,
            payment_status=view.payment_status,
            order_status=view.order_status,
            total_price=view.total_price,
            payment_reference=view.payment_reference,
            created_at=view.created_at,
        )


# ---------------------------------------------------------------------------
# Payment Schemas
# ---------------------------------------------------------------------------
class PaymentSessionResponse(BaseModel):
    url: str
    session_id: str


class WebhookResponse(BaseModel):
    received: bool = True
    outcome: str


class StatusResponse(BaseModel):
    status: str = "ok"
