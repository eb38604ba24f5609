"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from tailoring.domain import tailoring


@tailoring.event(part_of="User")
class UserRegistered:
    """A customer, tailor or admin profile was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    email = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@tailoring.event(part_of="User")
class ProfileUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    phone = String()
