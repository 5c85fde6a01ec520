"""initial schema : banque de questions + résultats

Revision ID: 001_initial
Create Date: 19/10/2026
"""
from alembic import op
import sqlalchemy as sa

revision = '001_initial'
down_revision = None


def upgrade() -> None:
    # ── 1. BANQUE DE QUESTIONS ──
    op.create_table("questions",
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("text", sa.Text, nullable=False),
        sa.Column("type", sa.String, nullable=False),
    )
    op.create_index("ix_questions_id", "questions", ["id"])
    op.create_index("ix_questions_type", "questions", ["type"])

    # ── 2. RÉSULTATS ──
    # results : JSON {catégorie: pourcentage}, toujours 8 clés
    op.create_table("test_results",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("age", sa.Integer, nullable=False),
        sa.Column("gender", sa.String, nullable=False),
        sa.Column("student_class", sa.String, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("results", sa.JSON, nullable=False),
        sa.Column("dominant_type", sa.String, nullable=False),
    )
    op.create_index("ix_test_results_name", "test_results", ["name"])
    op.create_index("ix_test_results_student_class", "test_results", ["student_class"])
    op.create_index("ix_test_results_date", "test_results", ["date"])
    op.create_index("ix_test_results_dominant_type", "test_results", ["dominant_type"])


def downgrade() -> None:
    op.drop_table("test_results")
    op.drop_table("questions")
