import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from imei_registry.models.session import AdminSession
from imei_registry.utils.errors import StoreError

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands datetimes back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionStore:
    def __init__(self, session: Session):
        self.session = session

    def create(self, ttl: timedelta, is_admin: bool = False) -> AdminSession:
        now = datetime.now(timezone.utc)
        record = AdminSession(
            id=secrets.token_urlsafe(32),
            created_at=now,
            expires_at=now + ttl,
            is_admin=is_admin,
        )

        try:
            self.session.add(record)
            self.session.commit()
            self.session.refresh(record)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Failed to create session") from e

        return record

    def get(self, session_id: Optional[str]) -> Optional[AdminSession]:
        if not session_id:
            return None

        try:
            record = self.session.get(AdminSession, session_id)
        except SQLAlchemyError as e:
            raise StoreError("Failed to load session") from e

        if not record:
            return None

        if _as_utc(record.expires_at) <= datetime.now(timezone.utc):
            self.destroy(session_id)
            return None

        return record

    def destroy(self, session_id: Optional[str]) -> None:
        if not session_id:
            return

        try:
            record = self.session.get(AdminSession, session_id)
            if record:
                self.session.delete(record)
                self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Failed to destroy session") from e

    def purge_expired(self) -> int:
        # stored timestamps are UTC wall time without tzinfo
        now = datetime.now(timezone.utc).replace(tzinfo=None)

        try:
            result = self.session.exec(
                delete(AdminSession)
                .where(AdminSession.expires_at <= now)
                .execution_options(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Failed to purge expired sessions") from e

        purged = result.rowcount or 0
        if purged:
            logger.info("Purged %d expired admin sessions", purged)
        return purged
