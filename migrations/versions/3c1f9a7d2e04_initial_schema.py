"""initial_schema

Create the schema for Anemi Meets:
- Cafes (venue catalogue)
- Meetup invites (token-addressed invites with soft delete)

Revision ID: 3c1f9a7d2e04
Revises:
Create Date: 2026-10-19 09:12:44.310518

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invite_status AS ENUM ('pending', 'confirmed', 'declined');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # CAFES table
    # ========================================================================
    op.create_table(
        "cafes",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("price_range", sa.String(10), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_cafes_city", "cafes", ["city"])

    # ========================================================================
    # MEETUP_INVITES table
    # ========================================================================
    op.create_table(
        "meetup_invites",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("organizer_name", sa.String(50), nullable=False),
        sa.Column("organizer_email", sa.String(254), nullable=False),
        sa.Column("invitee_name", sa.String(100), nullable=True),
        sa.Column("invitee_email", sa.String(254), nullable=True),
        sa.Column("cafe_id", sa.String(64), nullable=True),
        sa.Column(
            "available_dates",
            postgresql.ARRAY(sa.String(10)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "available_times",
            postgresql.ARRAY(sa.String(5)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("chosen_date", sa.String(10), nullable=True),
        sa.Column("chosen_time", sa.String(5), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending",
                "confirmed",
                "declined",
                name="invite_status",
                create_type=False,
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("confirmed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("declined_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("decline_reason", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(254), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["cafe_id"], ["cafes.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token", name="uq_meetup_invites_token"),
    )
    op.create_index(
        "idx_meetup_invites_created_by", "meetup_invites", ["created_by"]
    )
    op.create_index(
        "idx_meetup_invites_invitee_email", "meetup_invites", ["invitee_email"]
    )
    op.create_index("idx_meetup_invites_cafe_id", "meetup_invites", ["cafe_id"])
    # Expiry sweeps
    op.create_index(
        "idx_meetup_invites_status_expires_at",
        "meetup_invites",
        ["status", "expires_at"],
    )
    # Purge of soft-deleted rows
    op.create_index(
        "idx_meetup_invites_deleted_at",
        "meetup_invites",
        ["deleted_at"],
        postgresql_where=sa.text("deleted_at IS NOT NULL"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("meetup_invites")
    op.drop_table("cafes")
    op.execute("DROP TYPE IF EXISTS invite_status")
