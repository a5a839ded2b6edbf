"""
Pytest configuration and fixtures for page CMS tests
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import pagecms.models  # noqa: F401
from pagecms.config import Settings
from pagecms.database import Base, get_db
from pagecms.models.category import Category, CategoryType
from pagecms.schemas.page import FaqContentIn, LandingContentIn, PartnerContentIn, RevisionCreate
from pagecms.services.lifecycle_service import PageLifecycleService
from pagecms.services.notification_service import ApprovalNotifier, get_approval_notifier
from pagecms.services.page_kinds import FAQ, LANDING, PARTNER

# Test database URL (SQLite in-memory for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_settings = Settings(
    frontend_urls="http://web.test,http://app.test",
    web_base_url="http://web.test",
    cms_base_url="http://cms.test",
)


class RecordingSender:
    """Notification sender that keeps every message instead of delivering it."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[str, list[str], dict]] = []

    async def send(self, template_selector, recipients, template_data):
        if self.fail:
            raise ConnectionError("SMTP server unavailable")
        self.sent.append((template_selector, list(recipients), dict(template_data)))


@pytest.fixture(scope="function")
async def engine():
    """Fresh in-memory database for each test function"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="function")
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def notifier(sender):
    return ApprovalNotifier(sender, config=test_settings)


@pytest.fixture
def landing_service(db, notifier):
    return PageLifecycleService(db, LANDING, notifier=notifier, config=test_settings)


@pytest.fixture
def partner_service(db, notifier):
    return PageLifecycleService(db, PARTNER, notifier=notifier, config=test_settings)


@pytest.fixture
def faq_service(db, notifier):
    return PageLifecycleService(db, FAQ, notifier=notifier, config=test_settings)


@pytest.fixture
def revision():
    """Factory for revision metadata"""

    def _make(author: str = "alice", message: str = "edit") -> RevisionCreate:
        return RevisionCreate(author=author, message=message)

    return _make


@pytest.fixture
def landing_payload(revision):
    """Factory for landing content; the alias follows the URL unless given."""

    def _make(url: str = "/about", url_alias: str | None = None, **overrides) -> LandingContentIn:
        data = {
            "title": "About us",
            "language": "en",
            "html_input": "<p>About</p>",
            "mode": "Draft",
            "url": url,
            "url_alias": url_alias if url_alias is not None else f"/alias{url}",
            "meta_tag": {"title": "About", "description": "About page"},
            "components": [{"type": "hero", "props": {"heading": "Hi"}}, {"type": "text", "props": {}}],
            "files": [{"name": "site.css", "download_url": "https://cdn.test/site.css", "file_type": "css"}],
            "revision": revision(),
        }
        data.update(overrides)
        return LandingContentIn(**data)

    return _make


@pytest.fixture
def partner_payload(revision):
    def _make(url: str = "/acme", **overrides) -> PartnerContentIn:
        data = {
            "title": "Acme case study",
            "language": "en",
            "url": url,
            "company_name": "Acme",
            "challenges": "Scale",
            "is_recommended": True,
            "revision": revision(),
        }
        data.update(overrides)
        return PartnerContentIn(**data)

    return _make


@pytest.fixture
def faq_payload(revision):
    def _make(url: str = "/faq/billing", **overrides) -> FaqContentIn:
        data = {"title": "Billing", "language": "en", "url": url, "revision": revision()}
        data.update(overrides)
        return FaqContentIn(**data)

    return _make


@pytest.fixture
async def keyword_categories(db):
    """Two categories under the keywords taxonomy plus one under another type"""
    keywords = CategoryType(type_code="category-keywords", name="Keywords")
    topics = CategoryType(type_code="topics", name="Topics")
    db.add_all([keywords, topics])
    await db.flush()
    categories = [
        Category(category_type_id=keywords.id, language_code="en", name="pricing", weight=1),
        Category(category_type_id=keywords.id, language_code="en", name="support", weight=2),
        Category(category_type_id=topics.id, language_code="en", name="finance", weight=1),
    ]
    db.add_all(categories)
    await db.commit()
    return categories


@pytest.fixture
async def client(session_factory, notifier):
    """HTTP client against the app with the test database and notifier"""
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_approval_notifier] = lambda: notifier

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def app_settings():
    return test_settings


@pytest.fixture
def failing_sender():
    return RecordingSender(fail=True)
