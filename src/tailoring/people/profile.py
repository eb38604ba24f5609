"""Profile management: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from tailoring.domain import tailoring
from tailoring.people.permissions import PermissionDenied
from tailoring.people.user import MIN_PHONE_LENGTH, User

logger = structlog.get_logger(__name__)


@tailoring.command(part_of="User")
class UpdateProfile:
    user_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=10)
    name = String(max_length=100)
    phone = String(max_length=20)
    address = Text()
    experience = Integer(min_value=0)
    specialization = String(max_length=150)


@tailoring.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        if not user.can_be_edited_by(command.actor_id, command.actor_role):
            raise PermissionDenied(
                f"User {command.actor_id} cannot edit profile {command.user_id}", actor_id=command.actor_id
            )
        if command.phone is not None and not command.phone.strip():
            raise ValidationError({"phone": ["Phone number cannot be blank"]})
        if command.phone is not None and len(command.phone.strip()) < MIN_PHONE_LENGTH:
            raise ValidationError({"phone": [f"Phone number must be at least {MIN_PHONE_LENGTH} digits"]})

        user.update_profile(
            name=command.name,
            phone=command.phone,
            address=command.address,
            experience=command.experience,
            specialization=command.specialization,
        )
        repo.add(user)
        logger.info("Profile updated", user_id=str(user.id), actor_id=str(command.actor_id))
