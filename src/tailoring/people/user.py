"""User aggregate: customers, tailors and admins of the marketplace.

Sign-in itself is handled by an external auth service; this aggregate holds
the profile the rest of the domain needs: names for order denormalization,
roles for authorization and dashboard counts.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Integer, String, Text

from tailoring.domain import tailoring

MIN_PHONE_LENGTH = 11


class Role(Enum):
    CUSTOMER = "customer"
    TAILOR = "tailor"
    ADMIN = "admin"


@tailoring.aggregate
class User:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    phone = String(max_length=20)
    address = Text()
    role = String(required=True, choices=Role, default=Role.CUSTOMER.value)
    experience = Integer(min_value=0)
    specialization = String(max_length=150)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(cls, name, email, role, phone=None, address=None, experience=None, specialization=None):
        from tailoring.people.events import UserRegistered

        name = (name or "").strip()
        if not name:
            raise ValidationError({"name": ["Name is required"]})

        user = cls(
            name=name,
            email=email.strip().lower(),
            phone=phone,
            address=address,
            role=role,
            experience=experience,
            specialization=specialization,
            created_at=datetime.now(UTC),
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=user.created_at,
            )
        )
        return user

    @property
    def is_tailor(self) -> bool:
        return self.role == Role.TAILOR.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def update_profile(self, name=None, phone=None, address=None, experience=None, specialization=None):
        """Partial profile update. Email and role cannot be changed here."""
        from tailoring.people.events import ProfileUpdated

        if name is not None:
            if not name.strip():
                raise ValidationError({"name": ["Name is required"]})
            self.name = name.strip()
        if phone is not None:
            self.phone = phone
        if address is not None:
            self.address = address
        if experience is not None:
            self.experience = experience
        if specialization is not None:
            self.specialization = specialization
        self.updated_at = datetime.now(UTC)

        self.raise_(ProfileUpdated(user_id=str(self.id), name=self.name, phone=self.phone))

    def can_be_removed_by(self, actor_role: str) -> bool:
        return actor_role == Role.ADMIN.value and self.role != Role.ADMIN.value

    def can_be_edited_by(self, actor_id: str, actor_role: str) -> bool:
        # Admins may edit customers and tailors, never another admin
        if str(self.id) == str(actor_id):
            return True
        return actor_role == Role.ADMIN.value and self.role != Role.ADMIN.value
