"""FastAPI routes for carts and checkout."""

from fastapi import APIRouter, Depends, HTTPException
from protean.utils.globals import current_domain

from tailoring.api.auth import Actor, optional_actor, require_actor
from tailoring.api.schemas import (
    AddCartLineRequest,
    CartIdResponse,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    CreateCartRequest,
    MergeGuestCartRequest,
    OrderIdResponse,
    SnapshotSchema,
    StatusResponse,
)
from tailoring.cart.cart import ShoppingCart
from tailoring.cart.lines import AddCartLine, ClearCart, RemoveCartLine
from tailoring.cart.management import CreateCart, MergeGuestCart
from tailoring.checkout.wizard import AuthenticationRequired
from tailoring.order.placement import PlaceOrder

router = APIRouter(prefix="/carts", tags=["carts"])


def snapshot_schema(snapshot) -> SnapshotSchema:
    return SnapshotSchema(
        item_id=str(snapshot.item_id),
        name=snapshot.name,
        category=snapshot.category,
        price=snapshot.price,
        image_url=snapshot.image_url,
    )


def _cart_response(cart: ShoppingCart) -> CartResponse:
    return CartResponse(
        cart_id=str(cart.id),
        status=cart.status,
        session_id=cart.session_id,
        customer_id=str(cart.customer_id) if cart.customer_id else None,
        lines=[
            CartLineResponse(
                line_id=str(line.id),
                design=snapshot_schema(line.design),
                fabric=snapshot_schema(line.fabric),
                total_price=line.total_price,
                added_at=line.added_at,
            )
            for line in cart.ordered_lines
        ],
        total=cart.total(),
        formatted_total=cart.formatted_total(),
    )


@router.post("", status_code=201, response_model=CartIdResponse)
async def create_cart(body: CreateCartRequest) -> CartIdResponse:
    command = CreateCart(customer_id=body.customer_id, session_id=body.session_id)
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str) -> CartResponse:
    return _cart_response(current_domain.repository_for(ShoppingCart).get(cart_id))


@router.post("/{cart_id}/lines", status_code=201, response_model=StatusResponse)
async def add_line(cart_id: str, body: AddCartLineRequest) -> StatusResponse:
    command = AddCartLine(cart_id=cart_id, design_id=body.design_id, fabric_id=body.fabric_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="added")


@router.delete("/{cart_id}/lines/{index}", response_model=StatusResponse)
async def remove_line(cart_id: str, index: int) -> StatusResponse:
    current_domain.process(RemoveCartLine(cart_id=cart_id, index=index), asynchronous=False)
    return StatusResponse(status="removed")


@router.delete("/{cart_id}/lines", response_model=StatusResponse)
async def clear_cart(cart_id: str) -> StatusResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return StatusResponse(status="cleared")


@router.post("/{cart_id}/merge", response_model=StatusResponse)
async def merge_guest_cart(
    cart_id: str, body: MergeGuestCartRequest, actor: Actor = Depends(require_actor)
) -> StatusResponse:
    """Move a guest cart's lines into the signed-in caller's own cart."""
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    if str(cart.customer_id or "") != actor.id:
        raise HTTPException(status_code=403, detail="Only your own cart can receive merged lines")

    command = MergeGuestCart(cart_id=cart_id, guest_cart_id=body.guest_cart_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="merged")


@router.post("/{cart_id}/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout(
    cart_id: str, body: CheckoutRequest, actor: Actor | None = Depends(optional_actor)
) -> OrderIdResponse:
    """Place an order from the cart. Anonymous callers are sent to the login page and the cart is left alone."""
    if actor is None:
        raise AuthenticationRequired()

    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    if cart.customer_id and str(cart.customer_id) != actor.id:
        raise HTTPException(status_code=403, detail="This cart belongs to another customer")

    command = PlaceOrder(
        cart_id=cart_id,
        customer_id=actor.id,
        customer_email=actor.email,
        **body.model_dump(),
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)
