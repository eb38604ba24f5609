"""Order status updates: command and handler.

Admins may move any order; a tailor may move only the orders assigned to
them; customers may not change status at all.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from tailoring.domain import tailoring
from tailoring.order.order import Order
from tailoring.order.status import OrderStatus
from tailoring.people.permissions import PermissionDenied
from tailoring.people.user import Role

logger = structlog.get_logger(__name__)


@tailoring.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=10)


@tailoring.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        new_status = OrderStatus.parse(command.status)

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if command.actor_role == Role.ADMIN.value:
            pass
        elif command.actor_role == Role.TAILOR.value:
            if not order.is_assigned_to(command.actor_id):
                raise PermissionDenied(
                    f"Order {command.order_id} is not assigned to tailor {command.actor_id}",
                    actor_id=command.actor_id,
                )
        else:
            raise PermissionDenied("Customers cannot change order status", actor_id=command.actor_id)

        previous_status = order.status
        order.change_status(new_status, changed_by=command.actor_id, changed_by_role=command.actor_role)
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous_status,
            new_status=new_status.value,
            actor_role=command.actor_role,
        )
