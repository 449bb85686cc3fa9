#!/usr/bin/env python3
"""
Seed script: creates a demo portfolio owner, binds localhost:3000 to them and
adds a few projects, images and menus.
Run after migrations: python scripts/seed.py
"""

import asyncio
import json
import os
import sys
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import jwt
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from folio.config import settings
from folio.database import get_engine_url_and_connect_args


OWNER_EMAIL = "owner@folio.local"
DEMO_DOMAIN = "localhost:3000"

PROJECTS = [
    {
        "title": "Headless Storefront",
        "description": "Storefront on a headless commerce API",
        "category": "Web Development",
        "technologies": ["Next.js", "GraphQL", "Stripe"],
        "status": "published",
        "images": ["storefront-home.png", "storefront-cart.png"],
    },
    {
        "title": "Fleet Telemetry Dashboard",
        "description": "Live map and alerts for a delivery fleet",
        "category": "Data",
        "technologies": ["FastAPI", "PostgreSQL", "Mapbox"],
        "status": "published",
        "images": ["fleet-map.png"],
    },
    {
        "title": "Internal Prompt Library",
        "description": "Work in progress, not shown publicly",
        "category": "AI/ML",
        "technologies": ["Python"],
        "status": "draft",
        "images": [],
    },
]

MENUS = [
    {"menu_type": "section", "section_id": "portfolio", "label": "Work", "show_in_header": True},
    {"menu_type": "section", "section_id": "contact", "label": "Contact", "show_in_header": True},
    {
        "menu_type": "social_github",
        "label": "GitHub",
        "link_url": "https://github.com/folio-demo",
        "show_in_footer": True,
    },
]


async def seed():
    url, connect_args = get_engine_url_and_connect_args(settings.database_url)
    engine = create_async_engine(url, connect_args=connect_args)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        now = datetime.now(timezone.utc)

        result = await session.execute(
            text("SELECT id FROM users WHERE email = :email"), {"email": OWNER_EMAIL}
        )
        row = result.fetchone()
        if row:
            user_id = str(row[0])
            print("Owner already exists, re-seeding content.")
        else:
            user_id = str(uuid4())
            await session.execute(
                text("""
                    INSERT INTO users (id, email, name, full_name, email_verified, is_admin, created_at, updated_at)
                    VALUES (:id, :email, 'demo', 'Demo Owner', 1, 0, :now, :now)
                """),
                {"id": user_id, "email": OWNER_EMAIL, "now": now},
            )

        result = await session.execute(
            text("SELECT id FROM domains WHERE name = :name"), {"name": DEMO_DOMAIN}
        )
        if result.fetchone() is None:
            await session.execute(
                text("""
                    INSERT INTO domains (id, user_id, name, status, created_at)
                    VALUES (:id, :uid, :name, 1, :now)
                """),
                {"id": str(uuid4()), "uid": user_id, "name": DEMO_DOMAIN, "now": now},
            )

        # Content is replaced wholesale on every run
        for table in ("project_images", "projects", "menus"):
            await session.execute(text(f"DELETE FROM {table} WHERE user_id = :uid"), {"uid": user_id})

        for offset, project in enumerate(PROJECTS):
            project_id = str(uuid4())
            created = now - timedelta(days=offset)
            await session.execute(
                text("""
                    INSERT INTO projects
                    (id, user_id, title, description, category, technologies, features, status, is_prompt, views, created_at, updated_at)
                    VALUES (:id, :uid, :title, :desc, :cat, :tech, :features, :status, 0, 0, :created, :created)
                """),
                {
                    "id": project_id,
                    "uid": user_id,
                    "title": project["title"],
                    "desc": project["description"],
                    "cat": project["category"],
                    "tech": json.dumps(project["technologies"]),
                    "features": json.dumps([]),
                    "status": project["status"],
                    "created": created,
                },
            )
            for index, name in enumerate(project["images"]):
                await session.execute(
                    text("""
                        INSERT INTO project_images (id, project_id, user_id, url, name, bucket, order_index, created_at)
                        VALUES (:id, :pid, :uid, :url, :name, :bucket, :idx, :now)
                    """),
                    {
                        "id": str(uuid4()),
                        "pid": project_id,
                        "uid": user_id,
                        "url": f"/images/{name}",
                        "name": name,
                        "bucket": settings.storage_images_bucket,
                        "idx": index,
                        "now": now,
                    },
                )

        for sort_order, menu in enumerate(MENUS, start=1):
            await session.execute(
                text("""
                    INSERT INTO menus
                    (id, user_id, menu_type, section_id, label, link_url, sort_order, is_visible,
                     show_in_header, show_in_footer, show_in_mobile, created_at, updated_at)
                    VALUES (:id, :uid, :type, :section, :label, :link, :sort, true,
                            :header, :footer, false, :now, :now)
                """),
                {
                    "id": str(uuid4()),
                    "uid": user_id,
                    "type": menu["menu_type"],
                    "section": menu.get("section_id"),
                    "label": menu["label"],
                    "link": menu.get("link_url"),
                    "sort": sort_order,
                    "header": menu.get("show_in_header", False),
                    "footer": menu.get("show_in_footer", False),
                    "now": now,
                },
            )
        await session.commit()

    await engine.dispose()

    token = jwt.encode(
        {"id": user_id, "email": OWNER_EMAIL, "exp": now + timedelta(days=7)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    print("Seed complete!")
    print(f"Owner: {OWNER_EMAIL} ({user_id}) bound to {DEMO_DOMAIN}")
    print(f"Dashboard token: {token}")
    print("Example: curl http://localhost:8000/api/projects -H 'Origin: http://localhost:3000'")
    print(f"         curl http://localhost:8000/api/projects -H 'Authorization: Bearer {token}'")


if __name__ == "__main__":
    asyncio.run(seed())
