from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp


class TemplateCategory(Base, TimeStamp):
    __tablename__ = TableNames.TEMPLATE_CATEGORIES.value

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<TemplateCategory {self.slug}>"


class Template(Base, TimeStamp):
    __tablename__ = TableNames.TEMPLATES.value

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Category slug, kept next to the foreign key for filtering and search
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.TEMPLATE_CATEGORIES.value}.uuid", ondelete="SET NULL"),
        nullable=True,
    )
    json_content: Mapped[Any] = mapped_column(JSON, nullable=True)
    background_style: Mapped[Any] = mapped_column(JSON, nullable=True)
    image_path: Mapped[str | None] = mapped_column(String(500), nullable=True)

    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), default=0, nullable=False)
    is_system_template: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_by_user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_trashed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Template {self.name}>"
