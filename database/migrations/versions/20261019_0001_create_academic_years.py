"""create academic years

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "academic_years",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("quarter1_weeks", sa.Integer(), nullable=False, server_default="8"),
        sa.Column("quarter2_weeks", sa.Integer(), nullable=False, server_default="8"),
        sa.Column("quarter3_weeks", sa.Integer(), nullable=False, server_default="10"),
        sa.Column("quarter4_weeks", sa.Integer(), nullable=False, server_default="8"),
        sa.Column("autumn_holiday_start", sa.Date(), nullable=True),
        sa.Column("autumn_holiday_end", sa.Date(), nullable=True),
        sa.Column("winter_holiday_start", sa.Date(), nullable=True),
        sa.Column("winter_holiday_end", sa.Date(), nullable=True),
        sa.Column("spring_holiday_start", sa.Date(), nullable=True),
        sa.Column("spring_holiday_end", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_academic_years_is_active", "academic_years", ["is_active"])


def downgrade() -> None:
    op.drop_index("ix_academic_years_is_active", table_name="academic_years")
    op.drop_table("academic_years")
