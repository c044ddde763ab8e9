from typing import Any
from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from imei_registry.services.session_authority import SessionAuthority, SessionHandle
from imei_registry.utils.auth_helper import (
    clear_session_cookie,
    get_session_authority,
    get_session_handle,
    set_session_cookie,
)

router = APIRouter()


class LoginRequest(BaseModel):
    password: Any = None


@router.post("/login")
def login(
    payload: LoginRequest,
    response: Response,
    handle: SessionHandle = Depends(get_session_handle),
    authority: SessionAuthority = Depends(get_session_authority),
):
    if not payload.password or not isinstance(payload.password, str):
        raise HTTPException(status_code=400, detail="Password required")

    if not authority.login(handle, payload.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    set_session_cookie(response, handle)
    return {"ok": True}


@router.post("/logout")
def logout(
    response: Response,
    handle: SessionHandle = Depends(get_session_handle),
    authority: SessionAuthority = Depends(get_session_authority),
):
    authority.logout(handle)
    clear_session_cookie(response)
    return {"ok": True}


@router.get("/me")
def me(
    handle: SessionHandle = Depends(get_session_handle),
    authority: SessionAuthority = Depends(get_session_authority),
):
    return {"isAdmin": authority.is_admin(handle)}
