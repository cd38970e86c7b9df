# app/utils/tokens.py
import secrets

# Uppercase letters and digits without the easily confused 0/O and 1/I.
INVITEE_TOKEN_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INVITEE_TOKEN_LENGTH = 8


def generate_invitee_token(length: int = INVITEE_TOKEN_LENGTH) -> str:
    """Generate a short, human-typeable invitee token."""
    return "".join(secrets.choice(INVITEE_TOKEN_ALPHABET) for _ in range(length))


def generate_management_token() -> str:
    """Generate the opaque secret used for self-service cancel/reschedule."""
    return secrets.token_urlsafe(32)
