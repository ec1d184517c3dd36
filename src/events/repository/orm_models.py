from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.events.dtos import EventStatus
from src.models.base import Base, TimeStamp, enum_values


class Event(Base, TimeStamp):
    __tablename__ = TableNames.EVENTS.value

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    timezone: Mapped[str] = mapped_column(String(64), default="UTC", nullable=False)
    location_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location_unit: Mapped[str | None] = mapped_column(String(255), nullable=True)
    show_map: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    status: Mapped[EventStatus] = mapped_column(
        Enum(EventStatus, name="event_status_enum", values_callable=enum_values),
        default=EventStatus.DRAFT,
        nullable=False,
        index=True,
    )

    # Invitation design
    json_content: Mapped[Any] = mapped_column(JSON, nullable=True)
    image_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    template_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.TEMPLATES.value}.uuid", ondelete="SET NULL"),
        nullable=True,
    )

    created_by_user_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_trashed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    # Guest policy
    private_guest_list: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    allow_plus_ones: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    max_plus_ones: Mapped[int | None] = mapped_column(Integer, nullable=True)
    allow_maybe_rsvp: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    allow_family_headcount: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    limit_event_capacity: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    max_event_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Event {self.title} on {self.start_date_time}>"
