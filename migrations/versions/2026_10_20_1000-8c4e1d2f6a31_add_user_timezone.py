"""add_user_timezone

Revision ID: 8c4e1d2f6a31
Revises: 3f1c2a7b9d10
Create Date: 2026-10-20 10:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "8c4e1d2f6a31"
down_revision = "3f1c2a7b9d10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("users", sa.Column("timezone", sa.String(length=64), nullable=True))


def downgrade() -> None:
    op.drop_column("users", "timezone")
