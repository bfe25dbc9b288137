"""Create the accounts table."""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f6c1d2a9b7e"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create accounts with a unique email index."""

    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="user"),
        sa.Column(
            "status",
            sa.String(length=16),
            nullable=False,
            server_default=sa.text("'unverified'"),
        ),
        sa.Column("otp", sa.String(length=16), nullable=True),
        sa.Column("otp_expires", sa.DateTime(), nullable=True),
        sa.Column("profile_pic_public_id", sa.String(length=255), nullable=True),
        sa.Column("profile_pic_url", sa.String(length=512), nullable=True),
        sa.Column("session_issued_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)


def downgrade() -> None:
    """Drop the accounts table."""

    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")
