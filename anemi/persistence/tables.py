"""SQLAlchemy table definitions for Anemi Meets.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, Float, ForeignKey, Index, MetaData, String, Table, Text
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CAFES TABLE (venue catalogue, read-only for the invite flow)
# ============================================================================
cafes_table = Table(
    "cafes",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("address", String(255), nullable=False),
    Column("city", String(100), nullable=False),
    Column("price_range", String(10), nullable=True),  # '$', '$$', ...
    Column("rating", Float, nullable=True),
    Column("description", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_cafes_city", cafes_table.c.city)

# ============================================================================
# MEETUP INVITES TABLE
# ============================================================================
meetup_invites_table = Table(
    "meetup_invites",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("token", String(255), nullable=False, unique=True),  # URL-safe token
    Column("organizer_name", String(50), nullable=False),
    Column("organizer_email", String(254), nullable=False),
    Column("invitee_name", String(100), nullable=True),
    Column("invitee_email", String(254), nullable=True),
    Column(
        "cafe_id",
        String(64),
        ForeignKey("cafes.id", ondelete="SET NULL"),
        nullable=True,  # NULL when no venue was picked
    ),
    Column(
        "available_dates",
        postgresql.ARRAY(String(10)),
        nullable=False,
        server_default="{}",
    ),
    Column(
        "available_times",
        postgresql.ARRAY(String(5)),
        nullable=False,
        server_default="{}",
    ),
    Column("chosen_date", String(10), nullable=True),  # YYYY-MM-DD
    Column("chosen_time", String(5), nullable=True),  # HH:MM
    Column(
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
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("confirmed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("declined_at", TIMESTAMP(timezone=True), nullable=True),
    Column("decline_reason", Text, nullable=True),
    Column("created_by", String(254), nullable=False),  # owner identity (email)
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_meetup_invites_created_by", meetup_invites_table.c.created_by)
Index("idx_meetup_invites_invitee_email", meetup_invites_table.c.invitee_email)
Index("idx_meetup_invites_cafe_id", meetup_invites_table.c.cafe_id)
# Expiry sweeps
Index(
    "idx_meetup_invites_status_expires_at",
    meetup_invites_table.c.status,
    meetup_invites_table.c.expires_at,
)
# Purge of soft-deleted rows
Index(
    "idx_meetup_invites_deleted_at",
    meetup_invites_table.c.deleted_at,
    postgresql_where=meetup_invites_table.c.deleted_at.is_not(None),
)
