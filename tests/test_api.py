"""HTTP tests for the FastAPI application."""

import pytest
from fastapi.testclient import TestClient

from folio.config import Settings
from folio.main import create_app
from folio.models import ContactQuery, Menu, Project, ProjectImage


def make_settings(db_url: str, jwt_secret: str, **overrides) -> Settings:
    values = {
        "database_url": db_url,
        "jwt_secret": jwt_secret,
        "supabase_url": "https://default.supabase.co",
        "supabase_anon_key": "default-key",
        "portfolio_owner_email": "",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def client(db_url, jwt_secret, session_maker):
    app = create_app(make_settings(db_url, jwt_secret), session_maker)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def acme(seed):
    """Tenant A bound to acme.local:3000 with one published and one draft project."""
    tenant = seed.user(email="a@acme.local", full_name="Acme Owner")
    seed.domain(tenant, "acme.local:3000")
    project = seed.add(Project, user_id=tenant, title="Acme site", status="published")["id"]
    seed.add(ProjectImage, project_id=project, user_id=tenant, url="/acme.png", order_index=0)
    seed.add(Project, user_id=tenant, title="Acme draft", status="draft")
    return tenant


def test_acme_origin_resolves_tenant(client, acme):
    response = client.get("/api/projects", headers={"Origin": "http://acme.local:3000"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["demo"] is False
    assert [p["title"] for p in body["data"]] == ["Acme site"]
    assert body["data"][0]["project_images"][0]["url"] == "/acme.png"


def test_domain_query_parameter_resolves_tenant(client, acme):
    body = client.get("/api/projects", params={"domain": "acme.local:3000"}).json()
    assert body["demo"] is False


def test_unmatched_origin_reads_demo(client, acme):
    body = client.get("/api/projects", headers={"Origin": "https://unknown.example"}).json()
    assert body["demo"] is True
    assert len(body["data"]) == 3


def test_unmatched_origin_write_is_401(client):
    response = client.post(
        "/api/projects", json={"title": "x"}, headers={"Origin": "https://unknown.example"}
    )
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Authentication required"}


def test_domain_resolution_does_not_authorize_writes(client, acme):
    """A matched origin identifies whose content to show, never who may write."""
    response = client.post(
        "/api/projects", json={"title": "x"}, headers={"Origin": "http://acme.local:3000"}
    )
    assert response.status_code == 401


def test_disabled_domain_reads_demo(client, seed):
    tenant = seed.user()
    seed.domain(tenant, "off.local:3000", status=0)
    body = client.get("/api/projects", headers={"Origin": "http://off.local:3000"}).json()
    assert body["demo"] is True


def test_token_wins_over_origin_and_shows_drafts(client, seed, acme, auth_headers):
    other = seed.user()
    seed.add(Project, user_id=other, title="Other draft", status="draft")
    headers = {**auth_headers(other), "Origin": "http://acme.local:3000"}
    body = client.get("/api/projects", headers=headers).json()
    assert body["demo"] is False
    assert [p["title"] for p in body["data"]] == ["Other draft"]


def test_resolved_tenant_without_content_is_empty(client, seed):
    tenant = seed.user()
    seed.domain(tenant, "empty.local")
    body = client.get("/api/categories", headers={"Origin": "https://empty.local"}).json()
    assert body == {"success": True, "data": [], "demo": False}


def test_create_update_delete(client, acme, auth_headers):
    headers = auth_headers(acme)
    created = client.post("/api/categories", json={"name": "Data", "color": "#000"}, headers=headers)
    assert created.status_code == 201
    category = created.json()["data"]
    assert category["user_id"] == acme

    updated = client.put(f"/api/categories/{category['id']}", json={"name": "Data eng"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["name"] == "Data eng"
    assert updated.json()["data"]["color"] == "#000"

    fetched = client.get(f"/api/categories/{category['id']}", headers=headers)
    assert fetched.json()["data"]["name"] == "Data eng"

    deleted = client.delete(f"/api/categories/{category['id']}", headers=headers)
    assert deleted.json() == {"success": True, "message": "Category deleted successfully"}
    assert client.get(f"/api/categories/{category['id']}", headers=headers).status_code == 404


def test_validation_error_is_400(client, acme, auth_headers):
    response = client.post("/api/categories", json={"description": "no name"}, headers=auth_headers(acme))
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Category name is required"}


def test_cross_tenant_update_looks_like_missing(client, seed, acme, auth_headers):
    intruder = seed.user()
    project_id = client.get(
        "/api/projects", headers={"Origin": "http://acme.local:3000"}
    ).json()["data"][0]["id"]

    foreign = client.put(f"/api/projects/{project_id}", json={"title": "pwned"}, headers=auth_headers(intruder))
    missing = client.put("/api/projects/does-not-exist", json={"title": "pwned"}, headers=auth_headers(intruder))
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json() == {"success": False, "error": "Project not found"}


def test_reorder_menus(client, seed, acme, auth_headers):
    first = seed.add(Menu, user_id=acme, menu_type="section", section_id="a", label="A", sort_order=1)["id"]
    second = seed.add(Menu, user_id=acme, menu_type="section", section_id="b", label="B", sort_order=2)["id"]
    body = {"menus": [{"id": first, "sort_order": 2}, {"id": second, "sort_order": 1}]}

    response = client.post("/api/menus/reorder", json=body, headers=auth_headers(acme))
    assert response.status_code == 200
    assert response.json()["success"] is True

    menus = client.get("/api/menus", headers={"Origin": "http://acme.local:3000"}).json()["data"]
    assert [m["label"] for m in menus] == ["B", "A"]


def test_reorder_rejects_bad_items(client, acme, auth_headers):
    response = client.post(
        "/api/menus/reorder", json={"menus": [{"id": "x"}]}, headers=auth_headers(acme)
    )
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_reorder_requires_auth(client):
    response = client.post("/api/niches/reorder", json=[{"id": "x", "sort_order": 1}])
    assert response.status_code == 401


def test_project_view_counter(client, acme):
    headers = {"Origin": "http://acme.local:3000"}
    project = client.get("/api/projects", headers=headers).json()["data"][0]
    assert client.post(f"/api/projects/{project['id']}/view", headers=headers).status_code == 200
    assert client.post(f"/api/projects/{project['id']}/view").status_code == 401


def test_settings_roundtrip(client, acme, auth_headers):
    headers = auth_headers(acme)
    assert client.get("/api/settings").json()["demo"] is True

    response = client.put("/api/settings", json={"settings": {"theme_name": "ocean"}}, headers=headers)
    assert response.status_code == 200
    assert response.json()["data"] == {"theme_name": "ocean"}

    public = client.get("/api/settings", headers={"Origin": "http://acme.local:3000"}).json()
    assert public == {"success": True, "data": {"theme_name": "ocean"}, "demo": False}


def test_auth_me(client, acme, auth_headers):
    assert client.get("/api/auth/me").json() == {"success": False, "error": "Authentication required"}
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer junk"}).status_code == 401

    body = client.get("/api/auth/me", headers=auth_headers(acme)).json()
    assert body["data"]["email"] == "a@acme.local"


def test_domain_user_lookup(client, acme):
    body = client.get("/api/domains/user", params={"domain": "acme.local:3000"}).json()
    assert body["data"]["full_name"] == "Acme Owner"

    assert client.get("/api/domains/user", params={"domain": "acme.local"}).status_code == 404
    assert client.get("/api/domains/user").status_code == 400


def test_domain_config(client, seed):
    tenant = seed.user()
    seed.domain(tenant, "custom.io", supabase_url="https://custom.supabase.co", supabase_anon_key="ck")

    custom = client.get("/api/domains/config", params={"domain": "custom.io"}).json()
    assert custom == {
        "success": True,
        "supabase_url": "https://custom.supabase.co",
        "supabase_anon_key": "ck",
        "is_custom": True,
    }

    default = client.get("/api/domains/config", params={"domain": "plain.io"}).json()
    assert default["is_custom"] is False
    assert default["supabase_url"] is None

    assert client.get("/api/domains/config").status_code == 400


def test_gallery_without_tenant(client):
    assert client.get("/api/gallery").json() == {"success": True, "data": [], "demo": True}


def test_contact_queries_owner_fallback(db_url, jwt_secret, session_maker, seed):
    owner = seed.user(email="owner@folio.local")
    seed.add(ContactQuery, user_id=owner, name="Ann", email="ann@example.com", subject="Hi", message="Hello")
    app_settings = make_settings(db_url, jwt_secret, portfolio_owner_email="owner@folio.local")
    app = create_app(app_settings, session_maker)
    with TestClient(app) as client:
        body = client.get("/api/contact-queries").json()
        assert body["demo"] is False
        assert [q["name"] for q in body["data"]] == ["Ann"]

        # The fallback is only for entities that opt in
        assert client.get("/api/projects").json()["demo"] is True


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_metrics_and_root(client):
    assert client.get("/metrics").json()["service"] == "folio"
    assert client.get("/").json()["service"] == "Folio"


def test_contact_queries_not_exposed_by_origin(client, seed, acme, auth_headers):
    """A matching Origin shows a tenant's portfolio, never their inbox."""
    seed.add(ContactQuery, user_id=acme, name="Bob", email="bob@example.com", subject="Hi", message="Private")

    public = client.get("/api/contact-queries", headers={"Origin": "http://acme.local:3000"}).json()
    assert public == {"success": True, "data": [], "demo": True}

    own = client.get("/api/contact-queries", headers=auth_headers(acme)).json()
    assert [q["name"] for q in own["data"]] == ["Bob"]


def test_contact_queries_origin_ignored_with_owner_fallback(db_url, jwt_secret, session_maker, seed):
    owner = seed.user(email="owner@folio.local")
    seed.add(ContactQuery, user_id=owner, name="Ann", email="ann@example.com", subject="Hi", message="Hello")
    other = seed.user()
    seed.domain(other, "other.local")
    seed.add(ContactQuery, user_id=other, name="Eve", email="eve@example.com", subject="Hi", message="Secret")

    app_settings = make_settings(db_url, jwt_secret, portfolio_owner_email="owner@folio.local")
    with TestClient(create_app(app_settings, session_maker)) as client:
        body = client.get("/api/contact-queries", headers={"Origin": "https://other.local"}).json()
        assert [q["name"] for q in body["data"]] == ["Ann"]


def test_validation_errors_use_envelope(client, acme, auth_headers):
    response = client.get("/api/projects", params={"limit": 0})
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["error"].startswith("limit:")

    response = client.put("/api/projects/x", json=["not", "an", "object"], headers=auth_headers(acme))
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert isinstance(response.json()["error"], str)


def test_project_images_endpoints(client, seed, acme, auth_headers):
    headers = auth_headers(acme)
    project = seed.add(Project, user_id=acme, title="Gallery", status="published")["id"]
    image = {"url": "https://cdn/x.png", "path": f"{acme}/x.png", "name": "x.png", "size": 10}

    created = client.post(f"/api/projects/{project}/images", json=image, headers=headers)
    assert created.status_code == 201
    assert created.json()["data"]["project_id"] == project

    assert client.post(f"/api/projects/{project}/images", json=image).status_code == 401
    bad = client.post(f"/api/projects/{project}/images", json={"url": "u"}, headers=headers)
    assert bad.json() == {"success": False, "error": "URL, path, and name are required"}

    intruder = auth_headers(seed.user())
    foreign = client.post(f"/api/projects/{project}/images", json=image, headers=intruder)
    missing = client.post("/api/projects/nope/images", json=image, headers=intruder)
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()
    assert client.delete(f"/api/projects/{project}/images", headers=intruder).status_code == 404

    deleted = client.delete(f"/api/projects/{project}/images", headers=headers)
    assert deleted.json() == {"success": True, "message": "Project images deleted successfully"}
    fetched = client.get(f"/api/projects/{project}", headers=headers).json()
    assert fetched["data"]["project_images"] == []


def test_view_counter_only_touches_domain_tenant(client, seed, acme, auth_headers):
    """Anonymous views count only against the project of the tenant the domain names."""
    other = seed.user()
    foreign = seed.add(Project, user_id=other, title="Other", status="published", views=7)["id"]
    headers = {"Origin": "http://acme.local:3000"}

    assert client.post(f"/api/projects/{foreign}/view", headers=headers).status_code == 404
    fetched = client.get(f"/api/projects/{foreign}", headers=auth_headers(other)).json()
    assert fetched["data"]["views"] == 7
