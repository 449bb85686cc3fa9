"""
Registry of tenant-owned entity types.

Each EntitySpec tells the content gateway which table backs an entity, which
columns clients may write, what is required, how lists are ordered and which
rows the public may see.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from sqlalchemy import Table
from sqlalchemy.sql import ColumnElement

from folio.models import (
    Category,
    ContactQuery,
    DynamicSection,
    Menu,
    Niche,
    Project,
    ProjectImage,
    TechSkill,
    Technology,
)

Clauses = Callable[[Table], list[ColumnElement]]


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class ChildSpec:
    """One-to-many children fetched with a join and attached under ``key``."""

    model: type
    key: str
    foreign_key: str
    sort_key: Callable[[dict], Any]


@dataclass(frozen=True)
class Reference:
    """A written column that must point at a row the caller owns."""

    column: str
    model: type
    not_found: str


@dataclass(frozen=True)
class EntitySpec:
    name: str
    label: str
    model: type
    fields: tuple[str, ...]
    order_by: Clauses
    required: tuple[tuple[str, str], ...] = ()
    defaults: Mapping[str, Any] = field(default_factory=dict)
    choices: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    sortable: bool = False
    public_filter: Clauses | None = None
    filters: Callable[[Table, Mapping[str, Any]], list[ColumnElement]] | None = None
    children: ChildSpec | None = None
    references: tuple[Reference, ...] = ()
    rules: Callable[[Mapping[str, Any]], str | None] | None = None
    owner_fallback: bool = False
    # False for private entities: a matching Origin must not expose them
    domain_resolution: bool = True

    @property
    def table(self) -> Table:
        return self.model.__table__

    @property
    def not_found(self) -> str:
        return f"{self.label} not found"

    def clean(self, payload: Mapping[str, Any], partial: bool) -> dict[str, Any]:
        """
        Keep only client-writable columns.

        ``id`` and ``user_id`` are never writable. On partial updates a None for
        a NOT NULL column is dropped instead of written.
        """
        values = {}
        for name in self.fields:
            if name not in payload:
                continue
            value = payload[name]
            if value is None and partial and not self.table.c[name].nullable:
                continue
            values[name] = value
        for name, allowed in self.choices.items():
            if name in values and values[name] not in allowed:
                if partial:
                    values.pop(name)
                else:
                    values[name] = self.defaults.get(name, allowed[0])
        return values

    def validate(self, values: Mapping[str, Any], partial: bool) -> str | None:
        """First validation message for ``values``, or None when they are acceptable."""
        for name, message in self.required:
            if partial and name not in values:
                continue
            if is_empty(values.get(name)):
                return message
        return None

    def with_defaults(self, values: Mapping[str, Any]) -> dict[str, Any]:
        row = dict(self.defaults)
        row.update({k: v for k, v in values.items() if v is not None or self.table.c[k].nullable})
        return row


def _created_desc(table: Table) -> list[ColumnElement]:
    return [table.c.created_at.desc()]


def _sort_order_asc(table: Table) -> list[ColumnElement]:
    return [table.c.sort_order.asc(), table.c.created_at.asc()]


def _visible(table: Table) -> list[ColumnElement]:
    return [table.c.is_visible.is_(True)]


MENU_LOCATIONS = {"header": "show_in_header", "footer": "show_in_footer", "mobile": "show_in_mobile"}
SOCIAL_MENU_TYPES = ("social_facebook", "social_linkedin", "social_github", "social_instagram")


def _menu_filters(table: Table, filters: Mapping[str, Any]) -> list[ColumnElement]:
    column = MENU_LOCATIONS.get(filters.get("location") or "")
    if column is None:
        return []
    return [table.c[column].is_(True), table.c.is_visible.is_(True)]


def _menu_rules(menu: Mapping[str, Any]) -> str | None:
    if menu.get("menu_type") == "section" and is_empty(menu.get("section_id")):
        return "Section ID is required for section menu type"
    if menu.get("menu_type") in SOCIAL_MENU_TYPES and is_empty(menu.get("link_url")):
        return "Link URL is required for social menu types"
    return None


def _image_order(image: dict) -> tuple:
    return (image.get("order_index") or 0, str(image.get("created_at") or ""))


def _skill_order(skill: dict) -> tuple:
    return (str(skill.get("level") or ""), str(skill.get("created_at") or ""))


PROJECTS = EntitySpec(
    name="projects",
    label="Project",
    model=Project,
    fields=(
        "title",
        "description",
        "category",
        "overview",
        "technologies",
        "features",
        "live_url",
        "github_url",
        "status",
        "is_prompt",
    ),
    order_by=_created_desc,
    required=(("title", "Title is required"),),
    defaults=MappingProxyType({"status": "draft", "is_prompt": 0, "views": 0}),
    choices=MappingProxyType({"status": ("draft", "published")}),
    public_filter=lambda table: [table.c.status == "published"],
    children=ChildSpec(
        model=ProjectImage, key="project_images", foreign_key="project_id", sort_key=_image_order
    ),
)

CATEGORIES = EntitySpec(
    name="categories",
    label="Category",
    model=Category,
    fields=("name", "description", "color"),
    order_by=_created_desc,
    required=(("name", "Category name is required"),),
    defaults=MappingProxyType({"color": "#8B4513"}),
)

NICHES = EntitySpec(
    name="niches",
    label="Niche",
    model=Niche,
    fields=("title", "overview", "tools", "key_features", "image", "sort_order", "ai_driven"),
    order_by=_sort_order_asc,
    required=(("title", "Title is required"),),
    defaults=MappingProxyType({"sort_order": 1, "ai_driven": False}),
    sortable=True,
)

TECHNOLOGIES = EntitySpec(
    name="technologies",
    label="Technology/domain",
    model=Technology,
    fields=("type", "title", "icon", "sort_order"),
    order_by=_sort_order_asc,
    required=(("title", "Title is required"), ("type", "Type is required")),
    defaults=MappingProxyType({"sort_order": 1}),
    sortable=True,
    children=ChildSpec(model=TechSkill, key="tech_skills", foreign_key="tech_id", sort_key=_skill_order),
)

SKILLS = EntitySpec(
    name="skills",
    label="Skill",
    model=TechSkill,
    fields=("tech_id", "name", "level"),
    order_by=lambda table: [table.c.created_at.asc()],
    required=(("tech_id", "Tech ID is required"), ("name", "Name is required")),
    defaults=MappingProxyType({"level": "intermediate"}),
    references=(Reference("tech_id", Technology, "Technology/domain not found"),),
    owner_fallback=True,
)

MENUS = EntitySpec(
    name="menus",
    label="Menu",
    model=Menu,
    fields=(
        "menu_type",
        "section_id",
        "label",
        "icon",
        "link_url",
        "sort_order",
        "is_visible",
        "show_in_header",
        "show_in_footer",
        "show_in_mobile",
    ),
    order_by=_sort_order_asc,
    required=(("menu_type", "Menu type is required"), ("label", "Label is required")),
    defaults=MappingProxyType(
        {
            "sort_order": 1,
            "is_visible": True,
            "show_in_header": False,
            "show_in_footer": False,
            "show_in_mobile": False,
        }
    ),
    sortable=True,
    public_filter=_visible,
    filters=_menu_filters,
    rules=_menu_rules,
)

DYNAMIC_SECTIONS = EntitySpec(
    name="dynamic-sections",
    label="Section",
    model=DynamicSection,
    fields=(
        "section_type",
        "title",
        "subtitle",
        "content",
        "image_url",
        "video_url",
        "alignment",
        "position_after",
        "is_visible",
        "sort_order",
        "section_id",
        "background_color",
        "background_image_url",
        "padding_top",
        "padding_bottom",
        "cta_button_text",
        "cta_button_link",
        "cta_button_target",
        "cta_button_style",
        "embed_type",
        "embed_url",
        "embed_code",
        "accordion_items",
    ),
    order_by=_sort_order_asc,
    required=(("section_type", "Section type is required"),),
    defaults=MappingProxyType(
        {
            "alignment": "left",
            "is_visible": True,
            "sort_order": 1,
            "padding_top": 60,
            "padding_bottom": 60,
            "cta_button_target": "_self",
            "cta_button_style": "primary",
        }
    ),
    choices=MappingProxyType(
        {
            "alignment": ("left", "right", "center"),
            "cta_button_target": ("_self", "_blank"),
            "cta_button_style": ("primary", "secondary", "outline"),
        }
    ),
    sortable=True,
    public_filter=_visible,
)

CONTACT_QUERIES = EntitySpec(
    name="contact-queries",
    label="Contact query",
    model=ContactQuery,
    fields=(
        "form_type",
        "name",
        "email",
        "phone",
        "company",
        "subject",
        "message",
        "budget",
        "timeline",
        "inquiry_type",
        "status",
        "priority",
    ),
    order_by=_created_desc,
    required=(
        ("name", "Name is required"),
        ("email", "Email is required"),
        ("subject", "Subject is required"),
        ("message", "Message is required"),
    ),
    defaults=MappingProxyType(
        {
            "form_type": "contact",
            "inquiry_type": "General Inquiry",
            "status": "new",
            "priority": "medium",
        }
    ),
    choices=MappingProxyType(
        {
            "status": ("new", "in_progress", "completed", "cancelled"),
            "priority": ("low", "medium", "high", "urgent"),
        }
    ),
    owner_fallback=True,
    domain_resolution=False,
)

ENTITIES: Mapping[str, EntitySpec] = MappingProxyType(
    {
        spec.name: spec
        for spec in (
            PROJECTS,
            CATEGORIES,
            NICHES,
            TECHNOLOGIES,
            SKILLS,
            MENUS,
            DYNAMIC_SECTIONS,
            CONTACT_QUERIES,
        )
    }
)
