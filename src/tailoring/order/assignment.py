"""Tailor assignment: command and handler. Admin only."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from tailoring.domain import tailoring
from tailoring.order.order import Order
from tailoring.people.permissions import PermissionDenied
from tailoring.people.user import Role, User

logger = structlog.get_logger(__name__)


@tailoring.command(part_of="Order")
class AssignTailor:
    order_id = Identifier(required=True)
    tailor_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=10)


@tailoring.command_handler(part_of=Order)
class AssignTailorHandler:
    @handle(AssignTailor)
    def assign_tailor(self, command):
        if command.actor_role != Role.ADMIN.value:
            raise PermissionDenied("Only admins can assign tailors", actor_id=command.actor_id)

        tailor = current_domain.repository_for(User).get(command.tailor_id)
        if not tailor.is_tailor:
            raise ValidationError({"tailor_id": [f"User {command.tailor_id} is not a tailor"]})

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        # Name and email are copied; renaming the tailor later leaves this order alone
        order.assign_tailor(tailor_id=str(tailor.id), tailor_name=tailor.name, tailor_email=tailor.email)
        repo.add(order)

        logger.info("Tailor assigned", order_id=str(order.id), tailor_id=str(tailor.id))
