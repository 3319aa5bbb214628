"""create project, purchase order and financial line tables

Revision ID: 3a91c0e5b7d2
Revises:
Create Date: 2026-03-18
"""

from alembic import op
import sqlalchemy as sa


revision = "3a91c0e5b7d2"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_code", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("legal_entity", sa.String(), nullable=True),
        sa.Column("currency", sa.String(length=8), nullable=True),
        sa.Column("billing_type", sa.String(), nullable=True),
        sa.Column("project_manager", sa.String(), nullable=True),
        sa.Column("delivery_manager", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("project_code"),
    )
    op.create_table(
        "purchase_orders",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("po_no", sa.String(), nullable=False),
        sa.Column("contract_no", sa.String(), nullable=True),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("po_currency", sa.String(length=8), nullable=False),
        sa.Column("po_amount", sa.Float(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("customer_name", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("po_no"),
    )
    op.create_index("idx_purchase_orders_project_id", "purchase_orders", ["project_id"], unique=False)

    op.create_table(
        "financial_lines",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("fl_no", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("fl_name", sa.String(), nullable=False),
        sa.Column("contract_type", sa.String(length=32), nullable=False),
        sa.Column("location_type", sa.String(length=32), nullable=False),
        sa.Column("execution_entity", sa.String(), nullable=True),
        sa.Column("currency", sa.String(length=8), nullable=False),
        sa.Column("timesheet_approver", sa.String(), nullable=True),
        sa.Column("schedule_start", sa.Date(), nullable=False),
        sa.Column("schedule_finish", sa.Date(), nullable=False),
        sa.Column("billing_rate", sa.Float(), nullable=False),
        sa.Column("rate_uom", sa.String(length=16), nullable=False),
        sa.Column("effort", sa.Float(), nullable=False),
        sa.Column("effort_uom", sa.String(length=16), nullable=False),
        sa.Column("revenue_amount", sa.Float(), nullable=False),
        sa.Column("expected_revenue", sa.Float(), nullable=False),
        sa.Column("total_funding", sa.Float(), nullable=False),
        sa.Column("total_planned_revenue", sa.Float(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("fl_no"),
    )
    op.create_index("idx_financial_lines_project_id", "financial_lines", ["project_id"], unique=False)
    op.create_index("idx_financial_lines_status", "financial_lines", ["status"], unique=False)

    op.create_table(
        "fl_funding_allocations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("financial_line_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("po_no", sa.String(), nullable=False),
        sa.Column("contract_no", sa.String(), nullable=True),
        sa.Column("project_currency", sa.String(length=8), nullable=True),
        sa.Column("po_currency", sa.String(length=8), nullable=True),
        sa.Column("unit_rate", sa.Float(), nullable=False),
        sa.Column("funding_units", sa.Float(), nullable=False),
        sa.Column("uom", sa.String(length=16), nullable=False),
        sa.Column("funding_value_project", sa.Float(), nullable=False),
        sa.Column("funding_amount_po_currency", sa.Float(), nullable=False),
        sa.Column("available_po_line_in_po", sa.Float(), nullable=False),
        sa.Column("available_po_line_in_project", sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(["financial_line_id"], ["financial_lines.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_fl_funding_fl", "fl_funding_allocations", ["financial_line_id"], unique=False)
    op.create_index("idx_fl_funding_po_no", "fl_funding_allocations", ["po_no"], unique=False)

    op.create_table(
        "fl_revenue_months",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("financial_line_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("planned_units", sa.Float(), nullable=False),
        sa.Column("planned_revenue", sa.Float(), nullable=False),
        sa.Column("actual_units", sa.Float(), nullable=False),
        sa.Column("actual_revenue", sa.Float(), nullable=False),
        sa.Column("forecasted_units", sa.Float(), nullable=False),
        sa.Column("forecasted_revenue", sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(["financial_line_id"], ["financial_lines.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_fl_revenue_fl", "fl_revenue_months", ["financial_line_id"], unique=False)

    op.create_table(
        "fl_payment_milestones",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("financial_line_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("milestone_name", sa.String(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.ForeignKeyConstraint(["financial_line_id"], ["financial_lines.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_fl_milestones_fl", "fl_payment_milestones", ["financial_line_id"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_fl_milestones_fl", table_name="fl_payment_milestones")
    op.drop_table("fl_payment_milestones")
    op.drop_index("idx_fl_revenue_fl", table_name="fl_revenue_months")
    op.drop_table("fl_revenue_months")
    op.drop_index("idx_fl_funding_po_no", table_name="fl_funding_allocations")
    op.drop_index("idx_fl_funding_fl", table_name="fl_funding_allocations")
    op.drop_table("fl_funding_allocations")
    op.drop_index("idx_financial_lines_status", table_name="financial_lines")
    op.drop_index("idx_financial_lines_project_id", table_name="financial_lines")
    op.drop_table("financial_lines")
    op.drop_index("idx_purchase_orders_project_id", table_name="purchase_orders")
    op.drop_table("purchase_orders")
    op.drop_table("projects")
