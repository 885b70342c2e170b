"""
Authentication module for bearer JWT and API key validation.
Provides FastAPI dependencies for securing endpoints.

Every request resolves to a typed Actor (user ID plus role) exactly once,
here. Use cases never see raw headers or token claims.

Supported credentials:
- API keys: "key:user_id[:role]" sent as X-API-Key
- Bearer JWTs: HS256, verified with the shared secret; "sub" is the user
  and the optional "role" claim selects TRAINER or CLIENT
"""
import jwt
from fastapi import Depends, HTTPException, Header
from typing import Optional
import logging

from backend.settings import Settings, get_settings
from domain.models import Actor, Role

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


def _parse_role(value: Optional[str]) -> Role:
    """Map a role claim to a Role; anything unrecognised is a client."""
    if not value:
        return Role.CLIENT
    try:
        return Role(value.upper())
    except ValueError:
        logger.warning(f"Unknown role '{value}', treating as client")
        return Role.CLIENT


async def get_current_actor(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> Actor:
    """
    Authenticate via API key OR bearer JWT.
    Returns the calling Actor.

    Usage:
        @router.get("/protected")
        async def protected_route(actor: Actor = Depends(get_current_actor)):
            return {"user_id": actor.user_id}
    """
    # Option 1: API Key authentication
    if x_api_key:
        return validate_api_key(x_api_key, settings)

    # Option 2: JWT authentication
    if authorization:
        return validate_jwt(authorization, settings)

    raise HTTPException(
        status_code=401,
        detail="Missing authentication. Provide Authorization header or X-API-Key."
    )


def validate_api_key(api_key: str, settings: Settings) -> Actor:
    """
    Validate API key and return the Actor it names.

    API key format options:
    - "sk_test_abc123:user_12345" -> client user_12345
    - "sk_test_abc123:coach_1:trainer" -> trainer coach_1
    """
    valid_keys = settings.api_keys_list

    if not valid_keys:
        logger.warning("No API keys configured (API_KEYS env var empty)")
        raise HTTPException(status_code=401, detail="API key authentication not configured")

    parts = api_key.split(":")
    if parts[0] not in valid_keys:
        raise HTTPException(status_code=401, detail="Invalid API key")

    if len(parts) < 2 or not parts[1]:
        raise HTTPException(status_code=401, detail="API key missing user ID")

    role = _parse_role(parts[2] if len(parts) > 2 else None)
    return Actor(user_id=parts[1], role=role)


def validate_jwt(authorization: str, settings: Settings) -> Actor:
    """Validate an HS256 bearer JWT and return its Actor."""
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = authorization.split(" ", 1)[1]

    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            options=options,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT: {e}")
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing user ID")

    logger.debug(f"JWT validated for user: {user_id}")
    return Actor(user_id=user_id, role=_parse_role(payload.get("role")))
