"""Unit tests for the object-storage gallery lister."""

import asyncio
import json
import typing

import httpx
import pytest

from folio.errors import StorageFailure
from folio.gateway.content import ContentGateway
from folio.storage.objects import ObjectLister
from folio.tenancy.cache import StoreConfig

CONFIG = StoreConfig(url="https://acme.supabase.co/", anon_key="anon-key", is_custom=True)

FILES = [
    {"id": "f1", "name": "hero.png", "metadata": {"size": 1200}},
    {"id": None, "name": "Team.JPEG", "metadata": {"size": 800}},
    {"id": "f3", "name": "resume.pdf", "metadata": {"size": 300}},
    {"id": "f4", "name": ".emptyFolderPlaceholder", "metadata": None},
]


def make_lister(handler) -> ObjectLister:
    return ObjectLister(CONFIG, bucket="images", transport=httpx.MockTransport(handler))


def test_list_images_filters_and_builds_urls():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["apikey"] = request.headers["apikey"]
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=FILES)

    images = asyncio.run(make_lister(handler).list_images("tenant-1"))

    assert seen["url"] == "https://acme.supabase.co/storage/v1/object/list/images"
    assert seen["apikey"] == "anon-key"
    assert seen["auth"] == "Bearer anon-key"
    assert seen["body"]["prefix"] == "tenant-1"

    assert [image["name"] for image in images] == ["hero.png", "Team.JPEG"]
    assert images[0]["url"] == (
        "https://acme.supabase.co/storage/v1/object/public/images/tenant-1/hero.png"
    )
    assert images[0]["fullPath"] == "tenant-1/hero.png"
    assert images[0]["id"] == "f1"
    # Files without an id are keyed by their path
    assert images[1]["id"] == "tenant-1/Team.JPEG"


def test_http_error_raises_storage_failure():
    def handler(request):
        return httpx.Response(500, json={"error": "internal"})

    with pytest.raises(StorageFailure):
        asyncio.run(make_lister(handler).list_files("tenant-1"))


def test_gallery_without_tenant_is_demo(executor):
    gateway = ContentGateway(executor)
    result = asyncio.run(gateway.list_gallery(None, None))
    assert result.data == []
    assert result.demo is True


def test_gallery_without_storage_is_empty(executor):
    gateway = ContentGateway(executor)
    result = asyncio.run(gateway.list_gallery("tenant-1", None))
    assert result.data == []
    assert result.demo is False


def test_gallery_lists_tenant_prefix(executor):
    def handler(request):
        assert json.loads(request.content)["prefix"] == "tenant-1"
        return httpx.Response(200, json=FILES[:1])

    gateway = ContentGateway(executor)
    result = asyncio.run(gateway.list_gallery("tenant-1", make_lister(handler)))
    assert result.demo is False
    assert [image["name"] for image in result.data] == ["hero.png"]


def test_gallery_storage_failure(executor):
    def handler(request):
        return httpx.Response(503)

    gateway = ContentGateway(executor)
    public = asyncio.run(gateway.list_gallery("tenant-1", make_lister(handler)))
    assert public.demo is True
    with pytest.raises(StorageFailure):
        asyncio.run(gateway.list_gallery("tenant-1", make_lister(handler), public=False))


def test_lister_does_not_shadow_builtin_list():
    """Return annotations in the class body must still refer to the builtin."""
    assert "list" not in vars(ObjectLister)
    assert typing.get_type_hints(ObjectLister.list_images)["return"] == list[dict]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"<html>gateway timeout</html>"),
        httpx.Response(200, json={"error": "Bucket not found"}),
        httpx.Response(200, json=["hero.png"]),
    ],
)
def test_unexpected_body_raises_storage_failure(response):
    lister = make_lister(lambda request: response)
    with pytest.raises(StorageFailure):
        asyncio.run(lister.list_images("tenant-1"))


def test_unexpected_body_public_gallery_degrades(executor):
    lister = make_lister(lambda request: httpx.Response(200, json={"error": "Bucket not found"}))
    result = asyncio.run(ContentGateway(executor).list_gallery("tenant-1", lister))
    assert result.demo is True
    assert result.data == []
