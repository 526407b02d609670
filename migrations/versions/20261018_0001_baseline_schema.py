"""baseline schema: users, clients, projects, invoices

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None

USER_ROLE = sa.Enum("USER", "ADMIN", name="userrole")
PROJECT_STATUS = sa.Enum("TODO", "IN_PROGRESS", "COMPLETED", name="projectstatus")
INVOICE_STATUS = sa.Enum("DRAFT", "SENT", "PAID", "OVERDUE", name="invoicestatus")


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", USER_ROLE, nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "clients",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("company", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_clients_user_id", "clients", ["user_id"])
    op.create_index("idx_clients_user_created", "clients", ["user_id", "created_at"])

    op.create_table(
        "projects",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", PROJECT_STATUS, nullable=False),
        sa.Column("client_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_client_id", "projects", ["client_id"])
    op.create_index("ix_projects_user_id", "projects", ["user_id"])
    op.create_index("idx_projects_user_status", "projects", ["user_id", "status"])

    op.create_table(
        "invoices",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", INVOICE_STATUS, nullable=False),
        sa.Column("client_id", sa.String(length=36), nullable=False),
        sa.Column("project_id", sa.String(length=36), nullable=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("amount_ht", sa.Numeric(12, 2), nullable=False),
        sa.Column("tva", sa.Numeric(5, 2), nullable=False),
        sa.Column("amount_ttc", sa.Numeric(12, 2), nullable=False),
        sa.Column("pdf_url", sa.String(length=1024), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_invoices_client_id", "invoices", ["client_id"])
    op.create_index("ix_invoices_project_id", "invoices", ["project_id"])
    op.create_index("ix_invoices_user_id", "invoices", ["user_id"])
    op.create_index("idx_invoices_user_status", "invoices", ["user_id", "status"])
    op.create_index("idx_invoices_user_created", "invoices", ["user_id", "created_at"])


def downgrade() -> None:
    op.drop_table("invoices")
    op.drop_table("projects")
    op.drop_table("clients")
    op.drop_table("users")
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        INVOICE_STATUS.drop(bind, checkfirst=True)
        PROJECT_STATUS.drop(bind, checkfirst=True)
        USER_ROLE.drop(bind, checkfirst=True)
