from typing import Optional
from fastapi import Cookie, Depends, Response
from sqlmodel import Session

from imei_registry.db.db import get_session
from imei_registry.db.report_store import ReportStore
from imei_registry.db.session_store import SessionStore
from imei_registry.services.report_service import ReportService
from imei_registry.services.session_authority import SessionAuthority, SessionHandle
from imei_registry.utils import settings


def get_session_handle(
    session_id: Optional[str] = Cookie(default=None, alias=settings.SESSION_COOKIE_NAME),
) -> SessionHandle:
    return SessionHandle(id=session_id)


def get_session_authority(session: Session = Depends(get_session)) -> SessionAuthority:
    return SessionAuthority(
        SessionStore(session),
        admin_secret=settings.ADMIN_PASSWORD,
        ttl=settings.SESSION_TTL,
    )


def get_report_service(
    session: Session = Depends(get_session),
    authority: SessionAuthority = Depends(get_session_authority),
) -> ReportService:
    return ReportService(ReportStore(session), authority)


def set_session_cookie(response: Response, handle: SessionHandle):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=handle.id,
        max_age=int(settings.SESSION_TTL.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )


def clear_session_cookie(response: Response):
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
