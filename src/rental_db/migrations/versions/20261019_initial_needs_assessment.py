"""Create the needs-assessment tables.

``needs_assessment_questions`` holds the question catalog;
``needs_assessment_responses`` holds submitted questionnaires with their
answers and attachment metadata as JSONB.

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# revision identifiers, used by Alembic.
revision = "20261019_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "needs_assessment_questions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("category", sa.String(255), nullable=False),
        sa.Column("question", sa.Text, nullable=False),
        sa.Column("type", sa.String(50), nullable=False, server_default=sa.text("'text'")),
        sa.Column("options", JSONB, nullable=True),
        sa.Column("is_required", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("position", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column(
            "category_type", sa.String(50), nullable=False, server_default=sa.text("'general'"),
        ),
        sa.Column(
            "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("now()"),
        ),
    )
    op.create_index(
        "ix_questions_active_order",
        "needs_assessment_questions",
        ["category", "position"],
        postgresql_where=sa.text("is_active"),
    )

    op.create_table(
        "needs_assessment_responses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("response_number", sa.String(50), nullable=False, unique=True),
        sa.Column("client_company_name", sa.String(255), nullable=True),
        sa.Column("client_contact_person", sa.String(255), nullable=True),
        sa.Column("client_phone", sa.String(50), nullable=True),
        sa.Column("client_email", sa.String(255), nullable=True),
        sa.Column("client_address", sa.Text, nullable=True),
        sa.Column("responses", JSONB, nullable=False),
        sa.Column("attachments", JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("user_id", sa.Text, nullable=True),
        sa.Column(
            "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("now()"),
        ),
    )
    op.create_index(
        "ix_needs_assessment_responses_user_id", "needs_assessment_responses", ["user_id"],
    )
    op.create_index("ix_responses_created_at", "needs_assessment_responses", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_responses_created_at", table_name="needs_assessment_responses")
    op.drop_index("ix_needs_assessment_responses_user_id", table_name="needs_assessment_responses")
    op.drop_table("needs_assessment_responses")
    op.drop_index("ix_questions_active_order", table_name="needs_assessment_questions")
    op.drop_table("needs_assessment_questions")
