import hmac
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from imei_registry.db.session_store import SessionStore
from imei_registry.utils.errors import ConfigurationError, UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass
class SessionHandle:
    id: Optional[str] = None


class SessionAuthority:
    def __init__(self, store: SessionStore, admin_secret: Optional[str], ttl: timedelta):
        self.store = store
        self.admin_secret = admin_secret
        self.ttl = ttl

    def _secret_matches(self, supplied_secret: str) -> bool:
        if not self.admin_secret:
            raise ConfigurationError("ADMIN_PASSWORD is not configured")

        # constant time, any length
        return hmac.compare_digest(
            supplied_secret.encode("utf-8"),
            self.admin_secret.encode("utf-8"),
        )

    def login(self, handle: SessionHandle, supplied_secret: str) -> bool:
        if not self._secret_matches(supplied_secret):
            logger.warning("Rejected admin login attempt")
            return False

        # fresh id on privilege change
        self.store.destroy(handle.id)
        self.store.purge_expired()
        record = self.store.create(self.ttl, is_admin=True)

        handle.id = record.id
        logger.info("Admin session started")
        return True

    def logout(self, handle: SessionHandle) -> bool:
        self.store.destroy(handle.id)
        handle.id = None
        return True

    def is_admin(self, handle: SessionHandle) -> bool:
        record = self.store.get(handle.id)
        return bool(record and record.is_admin)

    def require_admin(self, handle: SessionHandle) -> None:
        if not self.is_admin(handle):
            raise UnauthorizedError()
