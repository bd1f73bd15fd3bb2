"""FastAPI routes for the Storefront domain: products, cart, orders and payments."""

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from storefront.api.auth import Requester, admin_user, current_user
from storefront.api.schemas import (
    AddToCartRequest,
    CartItemSchema,
    CartResponse,
    CartViewResponse,
    CreateOrderRequest,
    CreateProductRequest,
    DecrementCartItemRequest,
    IncrementCartItemRequest,
    OrderResponse,
    PaymentSessionResponse,
    ProductIdResponse,
    ProductSchema,
    RestockProductRequest,
    StatusResponse,
    UpdateOrderStatusRequest,
    UpdateProductPriceRequest,
    WebhookResponse,
)
from storefront.cart.cart import Cart
from storefront.cart.items import AddProductToCart, DecrementCartItem, IncrementCartItem, RemoveProductFromCart
from storefront.cart.views import get_cart
from storefront.gateway import get_gateway
from storefront.inventory.ledger import InventoryLedger
from storefront.inventory.management import CreateProduct, RestockProduct, UpdateProductPrice
from storefront.inventory.repository import ProductView
from storefront.order.cancellation import CancelOrder
from storefront.order.creation import PlaceOrder
from storefront.order.status import UpdateOrderStatus
from storefront.order.views import get_all_orders, get_order, get_user_orders
from storefront.payment.checkout import create_payment_session
from storefront.payment.reconciliation import reconcile_event

# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, requester: Requester = Depends(admin_user)) -> ProductIdResponse:
    command = CreateProduct(
        title=body.title,
        description=body.description,
        price=body.price,
        thumbnail=body.thumbnail,
        quantity=body.quantity,
        owner_id=requester.user_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductSchema)
async def get_product(product_id: str) -> ProductSchema:
    return ProductSchema.from_view(ProductView.of(InventoryLedger().product(product_id)))


@product_router.patch("/{product_id}/price", response_model=StatusResponse)
async def update_product_price(
    product_id: str,
    body: UpdateProductPriceRequest,
    requester: Requester = Depends(admin_user),  # noqa: ARG001
) -> StatusResponse:
    command = UpdateProductPrice(product_id=product_id, price=body.price)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.patch("/{product_id}/restock", response_model=StatusResponse)
async def restock_product(
    product_id: str,
    body: RestockProductRequest,
    requester: Requester = Depends(admin_user),  # noqa: ARG001
) -> StatusResponse:
    command = RestockProduct(product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_response(owner_id: str) -> CartResponse:
    cart = current_domain.repository_for(Cart).for_owner(owner_id)
    if cart is None:
        return CartResponse(owner_id=owner_id)
    return CartResponse(
        cart_id=str(cart.id),
        owner_id=str(cart.owner_id),
        items=[CartItemSchema(product_id=str(item.product_id), quantity=item.quantity) for item in cart.items],
    )


@cart_router.patch("/add-product-to-cart/{product_id}", status_code=201, response_model=CartResponse)
async def add_product_to_cart(
    product_id: str,
    body: AddToCartRequest | None = None,
    requester: Requester = Depends(current_user),
) -> CartResponse:
    command = AddProductToCart(
        owner_id=requester.user_id,
        product_id=product_id,
        quantity=body.quantity if body else 1,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(requester.user_id)


@cart_router.patch("/remove-product-from-cart/{product_id}", response_model=CartResponse)
async def remove_product_from_cart(product_id: str, requester: Requester = Depends(current_user)) -> CartResponse:
    command = RemoveProductFromCart(owner_id=requester.user_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return _cart_response(requester.user_id)


@cart_router.patch("/increment-product-in-cart/{product_id}", response_model=CartResponse)
async def increment_product_in_cart(
    product_id: str,
    body: IncrementCartItemRequest | None = None,
    requester: Requester = Depends(current_user),
) -> CartResponse:
    command = IncrementCartItem(
        owner_id=requester.user_id,
        product_id=product_id,
        increment_by=body.increment_by if body else 1,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(requester.user_id)


@cart_router.patch("/decrement-product-in-cart/{product_id}", response_model=CartResponse)
async def decrement_product_in_cart(
    product_id: str,
    body: DecrementCartItemRequest | None = None,
    requester: Requester = Depends(current_user),
) -> CartResponse:
    command = DecrementCartItem(
        owner_id=requester.user_id,
        product_id=product_id,
        decrement_by=body.decrement_by if body else 1,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(requester.user_id)


@cart_router.get("/get-user-cart", response_model=CartViewResponse)
async def get_user_cart(requester: Requester = Depends(current_user)) -> CartViewResponse:
    return CartViewResponse.from_view(get_cart(requester.user_id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/order", tags=["orders"])


@order_router.post("/create-order", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, requester: Requester = Depends(current_user)) -> OrderResponse:
    command = PlaceOrder(
        owner_id=requester.user_id,
        full_address=body.full_address,
        street=body.street,
        city=body.city,
        postal_code=body.postal_code,
        phone=body.phone,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_view(get_order(order_id, requester.user_id))


@order_router.get("/get-order/{order_id}", response_model=OrderResponse)
async def get_single_order(order_id: str, requester: Requester = Depends(current_user)) -> OrderResponse:
    return OrderResponse.from_view(get_order(order_id, requester.user_id))


@order_router.get("/get-current-user-orders", response_model=list[OrderResponse])
async def get_current_user_orders(requester: Requester = Depends(current_user)) -> list[OrderResponse]:
    return [OrderResponse.from_view(view) for view in get_user_orders(requester.user_id)]


@order_router.get("/get-all-orders-admin", response_model=list[OrderResponse])
async def get_all_orders_admin(requester: Requester = Depends(admin_user)) -> list[OrderResponse]:  # noqa: ARG001
    return [OrderResponse.from_view(view) for view in get_all_orders()]


@order_router.patch("/update-order-status/{order_id}", response_model=StatusResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    requester: Requester = Depends(admin_user),  # noqa: ARG001
) -> StatusResponse:
    command = UpdateOrderStatus(order_id=order_id, order_status=body.order_status)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status=body.order_status)


@order_router.patch("/cancel-order/{order_id}", response_model=OrderResponse)
async def cancel_order(order_id: str, requester: Requester = Depends(current_user)) -> OrderResponse:
    command = CancelOrder(order_id=order_id, requested_by=requester.user_id)
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_view(get_order(order_id, requester.user_id))


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/create-stripe-payment/{order_id}", response_model=PaymentSessionResponse)
async def create_stripe_payment(order_id: str, requester: Requester = Depends(current_user)) -> PaymentSessionResponse:
    session = create_payment_session(order_id, requester.user_id)
    return PaymentSessionResponse(url=session.url, session_id=session.session_id)


@payment_router.post("/webhook", response_model=WebhookResponse)
async def payment_webhook(request: Request) -> WebhookResponse:
    """Reconcile a payment provider notification.

    The signature covers the exact bytes sent, so the body is read raw and
    never re-serialized before verification.
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature", "")

    event = get_gateway().construct_event(payload, signature)
    outcome = reconcile_event(event)
    return WebhookResponse(outcome=outcome.value)
