"""Menus, dynamic page sections and key/value settings."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from folio.database import Base


class Menu(Base):
    """Navigation entry, shown per location (header, footer, mobile)."""

    __tablename__ = "menus"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_type: Mapped[str] = mapped_column(String(50), nullable=False)
    section_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    label: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    link_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_in_header: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    show_in_footer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    show_in_mobile: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class DynamicSection(Base):
    """Free-form page section placed between the built-in ones."""

    __tablename__ = "dynamic_sections"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    section_type: Mapped[str] = mapped_column(String(50), nullable=False)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    subtitle: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    alignment: Mapped[str] = mapped_column(String(10), nullable=False, default="left")
    position_after: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    section_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    background_color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    background_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    padding_top: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    padding_bottom: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    cta_button_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    cta_button_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    cta_button_target: Mapped[str] = mapped_column(String(10), nullable=False, default="_self")
    cta_button_style: Mapped[str] = mapped_column(String(20), nullable=False, default="primary")
    embed_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    embed_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    embed_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    accordion_items: Mapped[list | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class Setting(Base):
    """One key/value pair per tenant; values are JSON-encoded text."""

    __tablename__ = "settings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    setting_key: Mapped[str] = mapped_column(String(100), nullable=False)
    setting_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "setting_key", name="uq_settings_user_key"),)
