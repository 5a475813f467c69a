import hmac
import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Request, Response

from ..config import get_settings
from ..errors import AuthenticationError

logger = logging.getLogger(__name__)

JWT_ALG = "HS256"


def _secure_cookie_flag(request: Request | None = None) -> bool:
    if get_settings().environment == "production":
        return True
    if request is None:
        return False
    if request.url.scheme == "https":
        return True
    forwarded_proto = request.headers.get("X-Forwarded-Proto", "")
    return forwarded_proto.lower().split(",", 1)[0].strip() == "https"


def check_admin_credentials(email: str, password: str) -> bool:
    settings = get_settings()
    if not settings.admin_email or not settings.admin_password:
        logger.warning("ADMIN_EMAIL / ADMIN_PASSWORD non configurés, connexion admin impossible")
        return False
    email_ok = hmac.compare_digest(email.strip().lower().encode(), settings.admin_email.encode())
    password_ok = hmac.compare_digest(password.encode(), settings.admin_password.encode())
    return email_ok and password_ok


def sign_session(email: str, expires_in: timedelta | None = None) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expires_in = expires_in or timedelta(hours=settings.session_ttl_hours)
    payload = {
        "sub": email,
        "role": "admin",
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=JWT_ALG)


def decode_session(token: str) -> dict:
    try:
        decoded = jwt.decode(
            token,
            get_settings().jwt_secret,
            algorithms=[JWT_ALG],
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.PyJWTError:
        raise AuthenticationError("Session invalide ou expirée")

    if decoded.get("role") != "admin":
        raise AuthenticationError("Session invalide ou expirée")
    return decoded


def set_session_cookie(response: Response, token: str, request: Request | None = None):
    secure_flag = _secure_cookie_flag(request)
    response.set_cookie(
        key=get_settings().session_cookie_name,
        value=token,
        httponly=True,
        samesite="none" if secure_flag else "lax",
        secure=secure_flag,
        path="/",
        max_age=get_settings().session_ttl_hours * 60 * 60,
    )


def clear_session_cookie(response: Response, request: Request | None = None):
    secure_flag = _secure_cookie_flag(request)
    response.delete_cookie(
        key=get_settings().session_cookie_name,
        httponly=True,
        samesite="none" if secure_flag else "lax",
        secure=secure_flag,
        path="/",
    )


def _request_token(request: Request) -> str | None:
    authorization = request.headers.get("Authorization", "")
    if authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return request.cookies.get(get_settings().session_cookie_name)


def require_admin(request: Request) -> str:
    """Dépendance FastAPI : renvoie l'email de l'admin connecté, 401 sinon."""
    token = _request_token(request)
    if not token:
        raise AuthenticationError("Non authentifié")
    return decode_session(token)["sub"]
