"""User removal: admins delete customer and tailor profiles.

Orders are left alone. They carry their own copy of the customer and tailor
details, so a removed tailor's name still shows on the orders they handled.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from tailoring.domain import tailoring
from tailoring.people.permissions import PermissionDenied
from tailoring.people.user import User

logger = structlog.get_logger(__name__)


@tailoring.command(part_of="User")
class RemoveUser:
    user_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=10)


@tailoring.command_handler(part_of=User)
class RemoveUserHandler:
    @handle(RemoveUser)
    def remove_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        if not user.can_be_removed_by(command.actor_role):
            raise PermissionDenied(
                f"User {command.actor_id} cannot remove user {command.user_id}", actor_id=command.actor_id
            )

        repo._dao.delete(user)
        logger.info("User removed", user_id=str(command.user_id), role=user.role, actor_id=str(command.actor_id))
