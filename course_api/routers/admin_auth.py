from fastapi import APIRouter, Depends, Request, Response

from ..config import get_settings
from ..errors import AuthenticationError
from ..schemas.auth_schema import AdminMeOut, AdminSessionOut, LoginIn
from ..services import security

router = APIRouter(prefix="/admin", tags=["admin-auth"])


@router.post("/login", response_model=AdminSessionOut)
def login(payload: LoginIn, request: Request, response: Response):
    """
    Ouvre une session admin.
    Le jeton est posé en cookie httpOnly et renvoyé pour un usage en Bearer.
    """
    if not security.check_admin_credentials(payload.email, payload.password):
        raise AuthenticationError("Identifiants invalides")

    email = str(payload.email).strip().lower()
    token = security.sign_session(email)
    security.set_session_cookie(response, token, request)
    return AdminSessionOut(
        email=email,
        token=token,
        expires_in=get_settings().session_ttl_hours * 60 * 60,
    )


@router.post("/logout", status_code=204)
def logout(request: Request, response: Response):
    security.clear_session_cookie(response, request)
    return None


@router.get("/me", response_model=AdminMeOut)
def me(email: str = Depends(security.require_admin)):
    return AdminMeOut(email=email)
