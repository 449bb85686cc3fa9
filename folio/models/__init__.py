"""Database models."""

from folio.models.tenant import Domain, User
from folio.models.project import Project, ProjectImage
from folio.models.content import Category, ContactQuery, Niche, TechSkill, Technology
from folio.models.layout import DynamicSection, Menu, Setting

__all__ = [
    "User",
    "Domain",
    "Project",
    "ProjectImage",
    "Category",
    "ContactQuery",
    "Niche",
    "TechSkill",
    "Technology",
    "DynamicSection",
    "Menu",
    "Setting",
]
