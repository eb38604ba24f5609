"""Caller identity for API requests.

Sign-in happens at the external auth service; the gateway in front of this
service forwards the signed-in user as headers. Nothing here verifies
passwords or tokens.
"""

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from tailoring.people.user import Role


@dataclass(frozen=True)
class Actor:
    id: str
    role: str
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def optional_actor(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> Actor | None:
    if not x_user_id:
        return None
    return Actor(id=x_user_id, role=(x_user_role or Role.CUSTOMER.value).lower(), email=x_user_email)


def require_actor(actor: Actor | None = Depends(optional_actor)) -> Actor:
    if actor is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return actor


def require_admin(actor: Actor = Depends(require_actor)) -> Actor:
    if not actor.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return actor


def ensure_self_or_admin(actor: Actor, user_id: str) -> None:
    if not actor.is_admin and actor.id != str(user_id):
        raise HTTPException(status_code=403, detail="Not allowed to view another user's data")
