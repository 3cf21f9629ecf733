"""FastAPI routes for staff sign-in, and the dependency guarding staff-only views."""

from fastapi import APIRouter, Header, HTTPException
from pydantic import BaseModel

from backoffice.session import InvalidCredentials, StaffSession, login, logout, resolve

router = APIRouter(prefix="/staff", tags=["staff"])


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    username: str


class StatusResponse(BaseModel):
    status: str = "ok"


def require_staff(x_staff_token: str | None = Header(default=None)) -> StaffSession:
    session = resolve(x_staff_token)
    if session is None:
        raise HTTPException(status_code=401, detail="Staff login required")
    return session


@router.post("/login", response_model=LoginResponse)
async def staff_login(body: LoginRequest) -> LoginResponse:
    try:
        session = login(body.username, body.password)
    except InvalidCredentials as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return LoginResponse(token=session.token, username=session.username)


@router.post("/logout", response_model=StatusResponse)
async def staff_logout(x_staff_token: str | None = Header(default=None)) -> StatusResponse:
    logout(x_staff_token)
    return StatusResponse()
