"""initial_schema

Revision ID: 3f1c2a7b9d10
Revises:
Create Date: 2026-10-01 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c2a7b9d10"
down_revision = None
branch_labels = None
depends_on = None


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "user_roles",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_protected", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_user_roles_slug", "user_roles", ["slug"], unique=True)

    op.create_table(
        "users",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=True),
        sa.Column("avatar", sa.String(length=500), nullable=True),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "INACTIVE", name="user_status_enum"),
            nullable=False,
            server_default="INACTIVE",
        ),
        sa.Column("role_id", sa.UUID(), nullable=True),
        sa.Column("is_trashed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_sign_in_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("email_verified_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["role_id"], ["user_roles.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role_id", "users", ["role_id"])

    op.create_table(
        "template_categories",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("thumbnail_url", sa.String(length=500), nullable=True),
        sa.Column("color", sa.String(length=20), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *timestamps(),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_template_categories_slug", "template_categories", ["slug"], unique=True)

    op.create_table(
        "templates",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("category_id", sa.UUID(), nullable=True),
        sa.Column("json_content", sa.JSON(), nullable=True),
        sa.Column("background_style", sa.JSON(), nullable=True),
        sa.Column("image_path", sa.String(length=500), nullable=True),
        sa.Column("is_premium", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("is_system_template", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by_user_id", sa.UUID(), nullable=True),
        sa.Column("is_trashed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *timestamps(),
        sa.ForeignKeyConstraint(
            ["category_id"], ["template_categories.uuid"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_templates_category", "templates", ["category"])
    op.create_index("ix_templates_created_by_user_id", "templates", ["created_by_user_id"])
    op.create_index("ix_templates_is_trashed", "templates", ["is_trashed"])

    op.create_table(
        "events",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("timezone", sa.String(length=64), nullable=False, server_default="UTC"),
        sa.Column("location_address", sa.String(length=500), nullable=True),
        sa.Column("location_unit", sa.String(length=255), nullable=True),
        sa.Column("show_map", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "status",
            sa.Enum("DRAFT", "PUBLISHED", "CANCELLED", "COMPLETED", name="event_status_enum"),
            nullable=False,
            server_default="DRAFT",
        ),
        sa.Column("json_content", sa.JSON(), nullable=True),
        sa.Column("image_path", sa.String(length=500), nullable=True),
        sa.Column("template_id", sa.UUID(), nullable=True),
        sa.Column("created_by_user_id", sa.UUID(), nullable=False),
        sa.Column("is_trashed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("private_guest_list", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("allow_plus_ones", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("max_plus_ones", sa.Integer(), nullable=True),
        sa.Column("allow_maybe_rsvp", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "allow_family_headcount", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("limit_event_capacity", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("max_event_capacity", sa.Integer(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["template_id"], ["templates.uuid"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by_user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_events_status", "events", ["status"])
    op.create_index("ix_events_created_by_user_id", "events", ["created_by_user_id"])
    op.create_index("ix_events_is_trashed", "events", ["is_trashed"])

    op.create_table(
        "guests",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("event_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column(
            "status",
            sa.Enum("PENDING", "CONFIRMED", "DECLINED", "INVITED", name="guest_status_enum"),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column(
            "response",
            sa.Enum("YES", "NO", "MAYBE", name="guest_response_enum"),
            nullable=True,
        ),
        sa.Column("plus_ones", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("adults", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("children", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("invited_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(["event_id"], ["events.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_guests_event_id", "guests", ["event_id"])
    op.create_index("ix_guests_email", "guests", ["email"])


def downgrade() -> None:
    op.drop_index("ix_guests_email", table_name="guests")
    op.drop_index("ix_guests_event_id", table_name="guests")
    op.drop_table("guests")
    op.drop_index("ix_events_is_trashed", table_name="events")
    op.drop_index("ix_events_created_by_user_id", table_name="events")
    op.drop_index("ix_events_status", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_templates_is_trashed", table_name="templates")
    op.drop_index("ix_templates_created_by_user_id", table_name="templates")
    op.drop_index("ix_templates_category", table_name="templates")
    op.drop_table("templates")
    op.drop_index("ix_template_categories_slug", table_name="template_categories")
    op.drop_table("template_categories")
    op.drop_index("ix_users_role_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_user_roles_slug", table_name="user_roles")
    op.drop_table("user_roles")
    op.execute("DROP TYPE guest_response_enum")
    op.execute("DROP TYPE guest_status_enum")
    op.execute("DROP TYPE event_status_enum")
    op.execute("DROP TYPE user_status_enum")
