"""Initial schema - users, domains and tenant-owned content tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(36), primary_key=True)


def _owner() -> sa.Column:
    return sa.Column(
        "user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("email_verified", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_admin", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "domains",
        _id(),
        _owner(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("supabase_url", sa.Text(), nullable=True),
        sa.Column("supabase_anon_key", sa.Text(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_domains_name", "domains", ["name"])

    op.create_table(
        "projects",
        _id(),
        _owner(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("overview", sa.Text(), nullable=True),
        sa.Column("technologies", sa.JSON(), nullable=True),
        sa.Column("features", sa.JSON(), nullable=True),
        sa.Column("live_url", sa.Text(), nullable=True),
        sa.Column("github_url", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("is_prompt", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "project_images",
        _id(),
        sa.Column(
            "project_id",
            sa.String(36),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("path", sa.Text(), nullable=True),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("original_name", sa.Text(), nullable=True),
        sa.Column("size", sa.Integer(), nullable=True),
        sa.Column("type", sa.String(100), nullable=True),
        sa.Column("bucket", sa.String(100), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )

    op.create_table(
        "categories",
        _id(),
        _owner(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("color", sa.String(20), nullable=False, server_default="#8B4513"),
        *_timestamps(),
    )

    op.create_table(
        "niche",
        _id(),
        _owner(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("overview", sa.Text(), nullable=True),
        sa.Column("tools", sa.Text(), nullable=True),
        sa.Column("key_features", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("ai_driven", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        "domains_technologies",
        _id(),
        _owner(),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(100), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(),
    )

    op.create_table(
        "tech_skills",
        _id(),
        sa.Column(
            "tech_id",
            sa.String(36),
            sa.ForeignKey("domains_technologies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _owner(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("level", sa.String(50), nullable=False, server_default="intermediate"),
        *_timestamps(),
    )

    op.create_table(
        "menus",
        _id(),
        _owner(),
        sa.Column("menu_type", sa.String(50), nullable=False),
        sa.Column("section_id", sa.String(100), nullable=True),
        sa.Column("label", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(100), nullable=True),
        sa.Column("link_url", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_in_header", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("show_in_footer", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("show_in_mobile", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        "dynamic_sections",
        _id(),
        _owner(),
        sa.Column("section_type", sa.String(50), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("subtitle", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("alignment", sa.String(10), nullable=False, server_default="left"),
        sa.Column("position_after", sa.String(100), nullable=True),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("section_id", sa.String(100), nullable=True),
        sa.Column("background_color", sa.String(20), nullable=True),
        sa.Column("background_image_url", sa.Text(), nullable=True),
        sa.Column("padding_top", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("padding_bottom", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("cta_button_text", sa.Text(), nullable=True),
        sa.Column("cta_button_link", sa.Text(), nullable=True),
        sa.Column("cta_button_target", sa.String(10), nullable=False, server_default="_self"),
        sa.Column("cta_button_style", sa.String(20), nullable=False, server_default="primary"),
        sa.Column("embed_type", sa.String(50), nullable=True),
        sa.Column("embed_url", sa.Text(), nullable=True),
        sa.Column("embed_code", sa.Text(), nullable=True),
        sa.Column("accordion_items", sa.JSON(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "contact_queries",
        _id(),
        _owner(),
        sa.Column("form_type", sa.String(50), nullable=False, server_default="contact"),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("company", sa.Text(), nullable=True),
        sa.Column("subject", sa.Text(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("budget", sa.String(100), nullable=True),
        sa.Column("timeline", sa.String(100), nullable=True),
        sa.Column("inquiry_type", sa.String(100), nullable=False, server_default="General Inquiry"),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        *_timestamps(),
    )

    op.create_table(
        "settings",
        _id(),
        _owner(),
        sa.Column("setting_key", sa.String(100), nullable=False),
        sa.Column("setting_value", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_unique_constraint("uq_settings_user_key", "settings", ["user_id", "setting_key"])

    # Every tenant-scoped read filters on user_id.
    for table in (
        "projects",
        "categories",
        "niche",
        "domains_technologies",
        "tech_skills",
        "menus",
        "dynamic_sections",
        "contact_queries",
    ):
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])
    op.create_index("ix_project_images_project_id", "project_images", ["project_id"])


def downgrade() -> None:
    op.drop_table("settings")
    op.drop_table("contact_queries")
    op.drop_table("dynamic_sections")
    op.drop_table("menus")
    op.drop_table("tech_skills")
    op.drop_table("domains_technologies")
    op.drop_table("niche")
    op.drop_table("categories")
    op.drop_table("project_images")
    op.drop_table("projects")
    op.drop_table("domains")
    op.drop_table("users")
