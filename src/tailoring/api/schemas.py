"""Pydantic request/response schemas for the TailorHub API.

These are external contracts, kept separate from the Protean commands they
are translated into.
"""

from datetime import datetime

from pydantic import Base64Bytes, BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CatalogItemRequest(BaseModel):
    name: str
    category: str
    price: float = Field(ge=0)
    image_url: str
    description: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Classic Panjabi",
                    "category": "Panjabi",
                    "price": 40.0,
                    "image_url": "https://res.cloudinary.com/demo/image/upload/tailor_designs/panjabi.jpg",
                    "description": "Straight cut with a mandarin collar",
                }
            ]
        }
    }


class UpdateCatalogItemRequest(BaseModel):
    name: str | None = None
    category: str | None = None
    price: float | None = Field(default=None, ge=0)
    image_url: str | None = None
    description: str | None = None


class CatalogItemResponse(BaseModel):
    item_id: str
    kind: str
    name: str
    category: str
    price: float
    image_url: str
    description: str | None = None
    created_at: datetime | None = None


class ItemIdResponse(BaseModel):
    item_id: str


class CategoryRequest(BaseModel):
    name: str


class CategoryResponse(BaseModel):
    category_id: str
    kind: str
    name: str


class CategoryIdResponse(BaseModel):
    category_id: str


class ImageUploadRequest(BaseModel):
    filename: str
    content_type: str
    data: Base64Bytes


class ImageUploadResponse(BaseModel):
    url: str
    public_id: str | None = None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    name: str
    email: str
    role: str = "customer"
    phone: str | None = None
    address: str | None = None
    experience: int | None = Field(default=None, ge=0)
    specialization: str | None = None


class UpdateProfileRequest(BaseModel):
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    experience: int | None = Field(default=None, ge=0)
    specialization: str | None = None


class UserIdResponse(BaseModel):
    user_id: str


class UserResponse(BaseModel):
    user_id: str
    name: str
    email: str
    role: str
    phone: str | None = None
    address: str | None = None
    experience: int | None = None
    specialization: str | None = None
    created_at: datetime | None = None


class AuthErrorResponse(BaseModel):
    code: str
    message: str


# ---------------------------------------------------------------------------
# Carts
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    session_id: str | None = None
    customer_id: str | None = None


class CartIdResponse(BaseModel):
    cart_id: str


class AddCartLineRequest(BaseModel):
    design_id: str
    fabric_id: str


class MergeGuestCartRequest(BaseModel):
    guest_cart_id: str


class SnapshotSchema(BaseModel):
    item_id: str
    name: str
    category: str | None = None
    price: float
    image_url: str | None = None


class CartLineResponse(BaseModel):
    line_id: str
    design: SnapshotSchema
    fabric: SnapshotSchema
    total_price: float
    added_at: datetime | None = None


class CartResponse(BaseModel):
    cart_id: str
    status: str
    session_id: str | None = None
    customer_id: str | None = None
    lines: list[CartLineResponse]
    total: float
    formatted_total: str


class CheckoutRequest(BaseModel):
    customer_name: str
    customer_address: str
    customer_phone: str
    payment_method: str
    payment_option: str | None = None
    expected_total: float = Field(ge=0)
    checkout_key: str = Field(min_length=1, max_length=64)


class OrderIdResponse(BaseModel):
    order_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderLineResponse(BaseModel):
    design: SnapshotSchema
    fabric: SnapshotSchema
    total_price: float


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    customer_email: str | None = None
    customer_name: str
    customer_address: str
    customer_phone: str
    items: list[OrderLineResponse]
    total_amount: float
    payment_method: str
    payment_option: str | None = None
    payment_status: str
    status: str
    tailor_id: str | None = None
    tailor_name: str | None = None
    tailor_email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class AssignTailorRequest(BaseModel):
    tailor_id: str


class UpdateStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Dashboards
# ---------------------------------------------------------------------------
class OrderCountsResponse(BaseModel):
    total: int
    today: int
    this_month: int
    pending: int
    processing: int
    open: int
    completed: int
    cancelled: int
    revenue: float
    monthly_revenue: float


class RecentCustomerResponse(BaseModel):
    user_id: str
    name: str
    email: str
    created_at: datetime | None = None


class AdminDashboardResponse(BaseModel):
    total_customers: int
    total_tailors: int
    total_fabrics: int
    total_designs: int
    orders: OrderCountsResponse
    recent_orders: list[OrderResponse]
    recent_customers: list[RecentCustomerResponse]


class TailorDashboardResponse(BaseModel):
    tailor_id: str
    orders: OrderCountsResponse
    total_earnings: float
    monthly_earnings: float


class CustomerDashboardResponse(BaseModel):
    customer_id: str
    orders: OrderCountsResponse
