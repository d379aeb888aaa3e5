"""Shared fixtures: a fake CMS served in-process through httpx."""

import httpx
import pytest
import pytest_asyncio
import structlog

from cms_translate.clients.cms_client import CMSClient
from cms_translate.services.cache import QueryCache

from .fake_cms import FakeCMS

BASE_URL = "http://cms.test"


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any global logging configuration made by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_cms() -> FakeCMS:
    cms = FakeCMS()
    cms.add_content("a", "Burj Khalifa", type="attraction")
    cms.add_content("b", "Atlantis The Palm", type="hotel")
    cms.add_content("c", "Dubai Mall Guide", type="article")
    cms.add_content("draft", "Unpublished Draft", type="article", status="draft")
    return cms


def make_client(cms: FakeCMS) -> CMSClient:
    transport = httpx.ASGITransport(app=cms.build_app())
    return CMSClient(base_url=BASE_URL, api_token="test-token", transport=transport)


@pytest_asyncio.fixture
async def client(fake_cms: FakeCMS):
    async with make_client(fake_cms) as cms_client:
        yield cms_client


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()
