"""User registration: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from tailoring.domain import tailoring
from tailoring.people.user import MIN_PHONE_LENGTH, User

logger = structlog.get_logger(__name__)


@tailoring.command(part_of="User")
class RegisterUser:
    """Create the profile for an account the auth service has already created."""

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    phone = String(max_length=20)
    role = String(required=True, max_length=10)
    address = Text()
    experience = Integer(min_value=0)
    specialization = String(max_length=150)


@tailoring.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["Email is already registered"]})
        if command.phone and len(command.phone) < MIN_PHONE_LENGTH:
            raise ValidationError({"phone": [f"Phone number must be at least {MIN_PHONE_LENGTH} digits"]})

        user = User.register(
            name=command.name,
            email=command.email,
            role=command.role,
            phone=command.phone,
            address=command.address,
            experience=command.experience,
            specialization=command.specialization,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)
