from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "3c9e1f7a2b10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create realtors, realty_objects and sales."""
    op.create_table(
        "realtors",
        sa.Column("realtor_id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String()),
        sa.Column("last_name", sa.String()),
        sa.Column("middle_name", sa.String()),
        sa.Column("contact_phone", sa.String()),
    )

    op.create_table(
        "realty_objects",
        sa.Column("realty_object_id", sa.Integer(), primary_key=True),
        sa.Column("district_id", sa.Integer(), nullable=False),
        sa.Column("address", sa.String()),
        sa.Column("floorlevel", sa.Integer()),
        sa.Column("type_id", sa.Integer()),
        sa.Column("status", sa.Integer()),
        sa.Column("price", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("object_desc", sa.Text()),
        sa.Column("material_id", sa.Integer()),
        sa.Column("area", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("announcement_dt", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_realty_objects_district_id", "realty_objects", ["district_id"])
    op.create_index("ix_realty_objects_announcement_dt", "realty_objects", ["announcement_dt"])

    op.create_table(
        "sales",
        sa.Column("sale_id", sa.Integer(), primary_key=True),
        sa.Column(
            "realty_object_id",
            sa.Integer(),
            sa.ForeignKey("realty_objects.realty_object_id"),
            nullable=False,
        ),
        sa.Column("realtor_id", sa.Integer(), sa.ForeignKey("realtors.realtor_id"), nullable=False),
        sa.Column("sale_dt", sa.DateTime(), nullable=False),
        sa.Column("sale_price", sa.Float(), nullable=False),
    )
    op.create_index("ix_sales_realty_object_id", "sales", ["realty_object_id"])
    op.create_index("ix_sales_realtor_id", "sales", ["realtor_id"])
    op.create_index("ix_sales_sale_dt", "sales", ["sale_dt"])


def downgrade() -> None:
    """Drop the three tables (sales first, it holds the FKs)."""
    op.drop_table("sales")
    op.drop_table("realty_objects")
    op.drop_table("realtors")
