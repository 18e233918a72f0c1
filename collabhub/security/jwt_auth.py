# =============================================================================
# File: collabhub/security/jwt_auth.py - JWT Authentication
# =============================================================================
# Responsibilities:
# - Verify access tokens issued by the auth service (subject = user id)
# - HTTP (Bearer) and WebSocket (?token= / Authorization header) dependencies
# - Token creation for local tooling and tests
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, WebSocket, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from collabhub.config.jwt_config import get_jwt_config

log = logging.getLogger("collabhub.security.jwt_auth")

DEFAULT_ACCESS_TOKEN_TTL = timedelta(minutes=15)


class JwtTokenManager:
    """Stateless helpers around python-jose using JWTConfig."""

    @staticmethod
    def create_access_token(
            user_id: int,
            expires_delta: Optional[timedelta] = None,
            additional_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        config = get_jwt_config()
        now = datetime.now(timezone.utc)
        claims: Dict[str, Any] = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + (expires_delta or DEFAULT_ACCESS_TOKEN_TTL)).timestamp()),
            "type": "access",
        }
        if config.audience:
            claims["aud"] = config.audience
        if additional_claims:
            claims.update(additional_claims)
        return jwt.encode(claims, config.get_secret_key(), algorithm=config.algorithm)

    @staticmethod
    def decode_token_payload(token: str) -> Optional[Dict[str, Any]]:
        """Return the verified claims, or None for an invalid or expired token."""
        config = get_jwt_config()
        options = {"verify_aud": bool(config.audience)}
        try:
            return jwt.decode(
                token,
                config.get_secret_key(),
                algorithms=[config.algorithm],
                audience=config.audience or None,
                options=options,
            )
        except JWTError as e:
            log.debug(f"JWT decode failed: {e}")
            return None

    @classmethod
    def get_subject_from_token(cls, token: str) -> Optional[int]:
        payload = cls.decode_token_payload(token)
        if not payload:
            return None
        return _subject_to_user_id(payload.get("sub"))


def _subject_to_user_id(subject: Any) -> Optional[int]:
    if subject is None or isinstance(subject, bool):
        return None
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None


# =============================================================================
# FastAPI dependencies
# =============================================================================

security_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
) -> int:
    """
    FastAPI dependency for HTTP endpoints.
    Expects 'Authorization: Bearer <token>' and returns the caller's user id.
    """
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    payload = JwtTokenManager.decode_token_payload(credentials.credentials)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    user_id = _subject_to_user_id(payload.get("sub"))
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    return user_id


def extract_ws_token(websocket: WebSocket, token_from_query: Optional[str] = None) -> Optional[str]:
    """?token= query param first, then 'Authorization: Bearer <token>'."""
    if token_from_query:
        return token_from_query

    auth = websocket.headers.get("Authorization")
    if not auth:
        return None
    try:
        scheme, creds = auth.split(maxsplit=1)
    except ValueError:
        log.debug("Malformed WebSocket Authorization header.")
        return None
    return creds if scheme.lower() == "bearer" else None


def get_current_user_ws(websocket: WebSocket, token_from_query: Optional[str] = None) -> Optional[int]:
    """
    Resolve the user of a WebSocket handshake.

    Returns None when no token was offered or it does not verify; the
    caller decides whether anonymous connections are allowed.
    """
    token = extract_ws_token(websocket, token_from_query)
    if not token:
        return None

    user_id = JwtTokenManager.get_subject_from_token(token)
    if user_id is None:
        log.warning("WebSocket provided invalid or expired token.")
    return user_id
