"""FastAPI routes for the dashboards. Every call recomputes from the full collections."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from tailoring.api.auth import Actor, ensure_self_or_admin, require_actor, require_admin
from tailoring.api.orders import order_response
from tailoring.api.schemas import (
    AdminDashboardResponse,
    CustomerDashboardResponse,
    OrderCountsResponse,
    RecentCustomerResponse,
    TailorDashboardResponse,
)
from tailoring.stats import dashboards

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/admin", response_model=AdminDashboardResponse)
async def admin_dashboard(admin: Actor = Depends(require_admin)) -> AdminDashboardResponse:
    stats = dashboards.admin_dashboard()
    return AdminDashboardResponse(
        total_customers=stats.total_customers,
        total_tailors=stats.total_tailors,
        total_fabrics=stats.total_fabrics,
        total_designs=stats.total_designs,
        orders=OrderCountsResponse(**asdict(stats.orders)),
        recent_orders=[order_response(order) for order in stats.recent_orders],
        recent_customers=[
            RecentCustomerResponse(
                user_id=str(customer.id),
                name=customer.name,
                email=customer.email,
                created_at=customer.created_at,
            )
            for customer in stats.recent_customers
        ],
    )


@router.get("/tailors/{tailor_id}", response_model=TailorDashboardResponse)
async def tailor_dashboard(tailor_id: str, actor: Actor = Depends(require_actor)) -> TailorDashboardResponse:
    ensure_self_or_admin(actor, tailor_id)
    stats = dashboards.tailor_dashboard(tailor_id)
    return TailorDashboardResponse(
        tailor_id=stats.tailor_id,
        orders=OrderCountsResponse(**asdict(stats.orders)),
        total_earnings=stats.total_earnings,
        monthly_earnings=stats.monthly_earnings,
    )


@router.get("/customers/{customer_id}", response_model=CustomerDashboardResponse)
async def customer_dashboard(
    customer_id: str, actor: Actor = Depends(require_actor)
) -> CustomerDashboardResponse:
    ensure_self_or_admin(actor, customer_id)
    stats = dashboards.customer_dashboard(customer_id)
    return CustomerDashboardResponse(customer_id=stats.customer_id, orders=OrderCountsResponse(**asdict(stats.orders)))
