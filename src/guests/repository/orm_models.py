from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.guests.dtos import GuestResponse, GuestStatus
from src.models.base import Base, TimeStamp, enum_values


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    status: Mapped[GuestStatus] = mapped_column(
        Enum(GuestStatus, name="guest_status_enum", values_callable=enum_values),
        default=GuestStatus.PENDING,
        nullable=False,
    )
    response: Mapped[GuestResponse | None] = mapped_column(
        Enum(GuestResponse, name="guest_response_enum", values_callable=enum_values),
        nullable=True,
    )

    # Headcount
    plus_ones: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    adults: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    children: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    invited_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Guest {self.name} - {self.status}>"
