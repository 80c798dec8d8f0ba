from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("name", sa.String(60), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("address", sa.String(400), nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="normal_user"),
        sa.Column("claim_status", sa.String(50), nullable=False, server_default="none"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("role IN ('admin', 'normal_user')", name="ck_users_role"),
        sa.CheckConstraint("claim_status = 'none' OR role = 'normal_user'", name="ck_users_claim_status_role"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "stores",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("name", sa.String(60), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("address", sa.String(400), nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="store_owner"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("role = 'store_owner'", name="ck_stores_role"),
    )
    op.create_index("ix_stores_email", "stores", ["email"], unique=True)

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("rater_user_id", sa.Integer(), nullable=False, index=True),
        sa.Column("target_store_id", sa.Integer(), nullable=False, index=True),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["rater_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["target_store_id"], ["stores.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("rater_user_id", "target_store_id", name="uq_ratings_rater_store"),
        sa.CheckConstraint("score >= 1 AND score <= 5", name="ck_ratings_score_range"),
    )


def downgrade() -> None:
    op.drop_table("ratings")
    op.drop_index("ix_stores_email", table_name="stores")
    op.drop_table("stores")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
