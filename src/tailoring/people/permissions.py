"""Authorization failures raised by command handlers."""


class PermissionDenied(Exception):
    """The acting user's role or ownership does not allow the action."""

    def __init__(self, message, actor_id=None):
        super().__init__(message)
        self.actor_id = actor_id
