"""create_dealership_tables

Revision ID: 5b1d2e9c4a70
Revises:
Create Date: 2026-10-19 10:12:41.318204
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1d2e9c4a70'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


DOCUMENT_TYPES = ("DNI", "CEDULA", "PASSPORT", "DRIVER_LICENSE")


def upgrade() -> None:
    """Upgrade schema."""

    # MOTORCYCLES
    op.create_table(
        "motorcycles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("brand", sa.String(), nullable=False),
        sa.Column("model", sa.String(), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("engine_capacity", sa.Integer(), nullable=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "type",
            sa.Enum(
                "SPORT", "CRUISER", "TOURING", "STANDARD", "DIRT_BIKE", "SCOOTER", "ELECTRIC",
                name="motorcycle_type",
            ),
            nullable=True,
        ),
        sa.Column("color", sa.String(), nullable=True),
        sa.Column("stock", sa.Integer(), nullable=True),
        sa.Column("available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("price >= 0", name="ck_motorcycle_price_non_negative"),
    )
    op.create_index("ix_motorcycles_code", "motorcycles", ["code"], unique=True)

    # CUSTOMERS
    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("document_number", sa.String(), nullable=True, unique=True),
        sa.Column("document_type", sa.Enum(*DOCUMENT_TYPES, name="document_type"), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("zip_code", sa.String(), nullable=True),
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "INACTIVE", "BLOCKED", name="customer_status"),
            nullable=False,
        ),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_customers_email", "customers", ["email"], unique=True)

    # EMPLOYEES
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("document_number", sa.String(), nullable=True, unique=True),
        sa.Column(
            "document_type",
            sa.Enum(*DOCUMENT_TYPES, name="document_type"),
            nullable=True,
        ),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("zip_code", sa.String(), nullable=True),
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("job_title", sa.String(), nullable=False),
        sa.Column("position", sa.String(), nullable=True),
        sa.Column("salary", sa.Numeric(12, 2), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=True),
        sa.Column("termination_date", sa.Date(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "INACTIVE", "TERMINATED", name="employee_status"),
            nullable=False,
        ),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("salary IS NULL OR salary >= 0", name="ck_employee_salary_non_negative"),
    )
    op.create_index("ix_employees_email", "employees", ["email"], unique=True)

    # SALES
    op.create_table(
        "sales",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("sale_number", sa.String(), nullable=False),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=False),
        sa.Column("employee_id", sa.Integer(), sa.ForeignKey("employees.id"), nullable=False),
        sa.Column("sale_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("PENDING", "COMPLETED", "CANCELLED", name="sale_status"),
            nullable=False,
        ),
        sa.Column(
            "payment_method",
            sa.Enum(
                "CASH", "CREDIT_CARD", "DEBIT_CARD", "BANK_TRANSFER", "FINANCING",
                name="payment_method",
            ),
            nullable=True,
        ),
        sa.Column("total", sa.Numeric(12, 2), nullable=False),
    )
    op.create_index("ix_sales_sale_number", "sales", ["sale_number"], unique=True)
    op.create_index("ix_sales_customer_id", "sales", ["customer_id"], unique=False)
    op.create_index("ix_sales_employee_id", "sales", ["employee_id"], unique=False)
    op.create_index("ix_sales_customer_employee", "sales", ["customer_id", "employee_id"], unique=False)

    # DETAIL SALES
    op.create_table(
        "detail_sales",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "sale_id",
            sa.Integer(),
            sa.ForeignKey("sales.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("motorcycle_id", sa.Integer(), sa.ForeignKey("motorcycles.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("discount", sa.Numeric(12, 2), nullable=False),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.CheckConstraint("quantity >= 1", name="ck_detail_quantity_positive"),
        sa.CheckConstraint("discount >= 0", name="ck_detail_discount_non_negative"),
    )
    op.create_index("ix_detail_sales_sale_id", "detail_sales", ["sale_id"], unique=False)
    op.create_index("ix_detail_sales_motorcycle_id", "detail_sales", ["motorcycle_id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_detail_sales_motorcycle_id", table_name="detail_sales")
    op.drop_index("ix_detail_sales_sale_id", table_name="detail_sales")
    op.drop_table("detail_sales")

    op.drop_index("ix_sales_customer_employee", table_name="sales")
    op.drop_index("ix_sales_employee_id", table_name="sales")
    op.drop_index("ix_sales_customer_id", table_name="sales")
    op.drop_index("ix_sales_sale_number", table_name="sales")
    op.drop_table("sales")

    op.drop_index("ix_employees_email", table_name="employees")
    op.drop_table("employees")

    op.drop_index("ix_customers_email", table_name="customers")
    op.drop_table("customers")

    op.drop_index("ix_motorcycles_code", table_name="motorcycles")
    op.drop_table("motorcycles")
