from datetime import datetime, timezone
from sqlmodel import Field, SQLModel


class AdminSession(SQLModel, table=True):
    __tablename__ = "admin_sessions"

    id: str = Field(primary_key=True)  # opaque token carried in the cookie
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime = Field(index=True)

    is_admin: bool = Field(default=False)
