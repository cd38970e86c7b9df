from jose import jwt

from app.core.config import settings


def get_user_authentication_headers(tenant_id: str, user_id: str = "user_test") -> dict[str, str]:
    """
    Generates a valid JWT token and authentication headers for a test user.
    """
    payload = {"sub": user_id, "tenantId": tenant_id, "exp": 9999999999}  # High expiration for tests
    token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}
