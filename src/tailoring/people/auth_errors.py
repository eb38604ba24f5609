"""Readable messages for the error codes returned by the external auth service."""

GENERIC_MESSAGE = "Something went wrong. Please try again."

AUTH_ERROR_MESSAGES = {
    "auth/user-not-found": "No account found with this email.",
    "auth/wrong-password": "Incorrect password. Please try again.",
    "auth/invalid-email": "Please enter a valid email address.",
    "auth/invalid-credential": "Invalid email or password.",
    "auth/email-already-in-use": "An account with this email already exists.",
    "auth/weak-password": "Password should be at least 6 characters.",
    "auth/requires-recent-login": "Please sign in again to complete this action.",
}


def message_for(code: str | None) -> str:
    return AUTH_ERROR_MESSAGES.get(code or "", GENERIC_MESSAGE)
