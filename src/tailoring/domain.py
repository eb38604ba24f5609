"""Tailoring marketplace domain: catalogue, carts, checkout and the order lifecycle.

Customers pair a design with a fabric into cart lines and check out; admins
assign tailors and move orders through their lifecycle; tailors update the
orders assigned to them. Dashboards are derived by scanning whole collections.
"""

from protean.domain import Domain

from tailoring.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
tailoring = Domain(name="tailoring")
