"""Create blockchain table

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Append-only, hash-chained block storage. prevHash and hash are unique so
the stored chain cannot fork.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261019_000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the blockchain table."""
    op.create_table(
        "blockchain",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("created_on", sa.BigInteger(), nullable=False),
        sa.Column("data", sa.Text(), nullable=True),
        sa.Column("prevHash", sa.LargeBinary(32), nullable=True),
        sa.Column("hash", sa.LargeBinary(32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("prevHash", name="uq_blockchain_prev_hash"),
        sa.UniqueConstraint("hash", name="uq_blockchain_hash"),
    )


def downgrade() -> None:
    """Drop the blockchain table."""
    op.drop_table("blockchain")
