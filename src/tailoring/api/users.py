"""FastAPI routes for user profiles."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from tailoring.api.auth import Actor, ensure_self_or_admin, require_actor, require_admin
from tailoring.api.schemas import (
    AuthErrorResponse,
    RegisterUserRequest,
    StatusResponse,
    UpdateProfileRequest,
    UserIdResponse,
    UserResponse,
)
from tailoring.people.auth_errors import message_for
from tailoring.people.profile import UpdateProfile
from tailoring.people.registration import RegisterUser
from tailoring.people.removal import RemoveUser
from tailoring.people.user import User

router = APIRouter(prefix="/users", tags=["users"])


def user_response(user: User) -> UserResponse:
    return UserResponse(
        user_id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        phone=user.phone,
        address=user.address,
        experience=user.experience,
        specialization=user.specialization,
        created_at=user.created_at,
    )


@router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    result = current_domain.process(RegisterUser(**body.model_dump()), asynchronous=False)
    return UserIdResponse(user_id=result)


@router.get("", response_model=list[UserResponse])
async def list_users(role: str = "customer", admin: Actor = Depends(require_admin)) -> list[UserResponse]:
    users = current_domain.repository_for(User).find_by_role(role.lower())
    return [user_response(user) for user in users]


@router.get("/auth-errors/{code:path}", response_model=AuthErrorResponse)
async def explain_auth_error(code: str) -> AuthErrorResponse:
    """Translate an auth service error code into a message fit for display."""
    return AuthErrorResponse(code=code, message=message_for(code))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, actor: Actor = Depends(require_actor)) -> UserResponse:
    ensure_self_or_admin(actor, user_id)
    return user_response(current_domain.repository_for(User).get(user_id))


@router.put("/{user_id}", response_model=StatusResponse)
async def update_profile(
    user_id: str, body: UpdateProfileRequest, actor: Actor = Depends(require_actor)
) -> StatusResponse:
    command = UpdateProfile(
        user_id=user_id,
        actor_id=actor.id,
        actor_role=actor.role,
        **body.model_dump(exclude_none=True),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="updated")


@router.delete("/{user_id}", response_model=StatusResponse)
async def remove_user(user_id: str, admin: Actor = Depends(require_admin)) -> StatusResponse:
    command = RemoveUser(user_id=user_id, actor_id=admin.id, actor_role=admin.role)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="removed")
