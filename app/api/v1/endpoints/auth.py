from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, Response, Request, status
from fastapi.responses import JSONResponse
import logging

from app.core.config import settings
from app.core.limiter import limiter
from app.core.security import (
    AUTH_COOKIE_NAME,
    get_campus_store,
    get_current_session,
    session_token,
)
from app.schemas.userSchema import LoginRequest, RegisterRequest, Session, UserResponse
from app.services.CampusStore import CampusStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

INVALID_CREDENTIALS = "Email/Username atau kata sandi salah."

# -----------------------------
# Cookie Helpers
# -----------------------------
def set_auth_cookie(response: Response, token: str, expires: timedelta):
    """Set auth cookie."""
    production = settings.ENVIRONMENT == "production"
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=production,
        samesite="lax",
        domain=settings.COOKIE_DOMAIN,
        path="/",
        max_age=int(expires.total_seconds())
    )

def clear_auth_cookie(response: Response):
    """Clear auth cookie."""
    set_auth_cookie(response, "", timedelta(0))

def session_payload(session: Session) -> dict:
    return {
        "user_identifier": session.user_identifier,
        "name": session.name,
        "role": session.role.value,
    }

# -----------------------------
# Login
# -----------------------------
@router.post("/login")
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    store: CampusStore = Depends(get_campus_store)
):
    """
    Log in with the reserved admin pair or a registered account
    """
    session = store.auth.login(payload.user_identifier, payload.password)
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

    expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    response = JSONResponse({"message": "Login successful", "user": session_payload(session)})
    set_auth_cookie(response, session_token(session, expires), expires)
    return response

# -----------------------------
# Register
# -----------------------------
@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(
    request: Request,
    payload: RegisterRequest,
    store: CampusStore = Depends(get_campus_store)
):
    """
    Register a Mahasiswa, Dosen or Pegawai account
    """
    user = await store.auth.register(
        name=payload.name,
        user_identifier=payload.user_identifier,
        password=payload.password,
        confirm_password=payload.confirm_password,
        role=payload.role,
    )
    return UserResponse(name=user.name, user_identifier=user.user_identifier, role=user.role)

# -----------------------------
# Get Current Session
# -----------------------------
@router.get("/me")
async def get_me(session: Session = Depends(get_current_session)):
    """
    Return current authenticated session info
    """
    return session_payload(session)

# -----------------------------
# Logout
# -----------------------------
@router.post("/logout")
async def logout():
    response = JSONResponse({"message": "Logged out successfully"})
    clear_auth_cookie(response)
    return response
