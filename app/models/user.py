import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, String, false
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class SubscriptionStatus(str, enum.Enum):
    FREE = "Free"
    PREMIUM = "Premium"


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        default=lambda: str(uuid.uuid4()),
        nullable=False,
        unique=True,
        index=True,
    )
    name: Mapped[str | None] = mapped_column(String(200), default=None)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    subscription_status: Mapped[SubscriptionStatus] = mapped_column(
        Enum(SubscriptionStatus, name="subscription_status", values_callable=lambda e: [m.value for m in e]),
        default=SubscriptionStatus.FREE,
        nullable=False,
    )
    is_admin: Mapped[bool] = mapped_column(default=False, server_default=false(), nullable=False)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    profile_picture_url: Mapped[str | None] = mapped_column(String(1000), default=None)
    mobile_number: Mapped[str | None] = mapped_column(String(20), default=None)
