"""FastAPI routes for orders: admin and customer lists, tailor queues, assignment and status."""

from fastapi import APIRouter, Depends, HTTPException
from protean.utils.globals import current_domain

from tailoring.api.auth import Actor, ensure_self_or_admin, require_actor, require_admin
from tailoring.api.carts import snapshot_schema
from tailoring.api.schemas import (
    AssignTailorRequest,
    OrderLineResponse,
    OrderListResponse,
    OrderResponse,
    StatusResponse,
    UpdateStatusRequest,
)
from tailoring.order import views
from tailoring.order.assignment import AssignTailor
from tailoring.order.order import Order
from tailoring.order.status_update import UpdateOrderStatus

router = APIRouter(prefix="/orders", tags=["orders"])


def order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        customer_email=order.customer_email,
        customer_name=order.customer_name,
        customer_address=order.customer_address,
        customer_phone=order.customer_phone,
        items=[
            OrderLineResponse(
                design=snapshot_schema(line.design),
                fabric=snapshot_schema(line.fabric),
                total_price=line.total_price,
            )
            for line in order.items
        ],
        total_amount=order.total_amount,
        payment_method=order.payment_method,
        payment_option=order.payment_option,
        payment_status=order.payment_status,
        status=order.status,
        tailor_id=str(order.tailor_id) if order.tailor_id else None,
        tailor_name=order.tailor_name,
        tailor_email=order.tailor_email,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _listing(orders) -> OrderListResponse:
    return OrderListResponse(orders=[order_response(order) for order in orders])


@router.get("", response_model=OrderListResponse)
async def list_orders(
    search: str | None = None, status: str | None = None, admin: Actor = Depends(require_admin)
) -> OrderListResponse:
    return _listing(views.admin_orders(search=search, status=status))


@router.get("/customers/{customer_id}", response_model=OrderListResponse)
async def list_customer_orders(
    customer_id: str, status: str | None = None, actor: Actor = Depends(require_actor)
) -> OrderListResponse:
    ensure_self_or_admin(actor, customer_id)
    return _listing(views.customer_orders(customer_id, status=status))


@router.get("/tailors/{tailor_id}/open", response_model=OrderListResponse)
async def list_tailor_open_orders(tailor_id: str, actor: Actor = Depends(require_actor)) -> OrderListResponse:
    ensure_self_or_admin(actor, tailor_id)
    return _listing(views.tailor_open_orders(tailor_id))


@router.get("/tailors/{tailor_id}/done", response_model=OrderListResponse)
async def list_tailor_done_orders(tailor_id: str, actor: Actor = Depends(require_actor)) -> OrderListResponse:
    ensure_self_or_admin(actor, tailor_id)
    return _listing(views.tailor_done_orders(tailor_id))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, actor: Actor = Depends(require_actor)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    allowed = actor.is_admin or actor.id == str(order.customer_id) or order.is_assigned_to(actor.id)
    if not allowed:
        raise HTTPException(status_code=403, detail="Not allowed to view this order")
    return order_response(order)


@router.put("/{order_id}/tailor", response_model=StatusResponse)
async def assign_tailor(order_id: str, body: AssignTailorRequest, actor: Actor = Depends(require_actor)) -> StatusResponse:
    command = AssignTailor(order_id=order_id, tailor_id=body.tailor_id, actor_id=actor.id, actor_role=actor.role)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="assigned")


@router.put("/{order_id}/status", response_model=StatusResponse)
async def update_status(
    order_id: str, body: UpdateStatusRequest, actor: Actor = Depends(require_actor)
) -> StatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, actor_id=actor.id, actor_role=actor.role)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="updated")
