"""
Page Lifecycle Service

Versioning rules for page content: create, supersede, revert, duplicate and
preview. Content rows are never edited into a new state. Each transition
archives the row it replaces (mode ``Histories``) and inserts a fresh row,
so a page keeps an unbroken history per language.

All validation, including URL uniqueness, happens before the first write;
the writes of one operation share a single transaction.
"""

import logging
from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pagecms.config import Settings, settings
from pagecms.exceptions import (
    ContentNotFoundError,
    DuplicateUrlAliasError,
    DuplicateURLError,
    InvalidOperationError,
    MissingContentError,
    NoNewContentToDuplicateError,
    NoRevisionFoundError,
    PageNotFoundError,
    RevisionNotFoundError,
    TooMuchContentError,
    ValidationError,
)
from pagecms.models.base import utcnow
from pagecms.models.enums import PageLanguage, PageMode, PublishStatus, WorkflowStatus
from pagecms.schemas.page import ContentIn, PageQuery, RevisionCreate
from pagecms.services.content_builder import (
    apply_content,
    build_content,
    build_revision,
    clone_content,
    copy_revision,
    normalize_content_fields,
)
from pagecms.services.notification_service import ApprovalNotifier
from pagecms.services.page_kinds import PageKind
from pagecms.services.page_store import PageStore
from pagecms.utils.normalize import normalize_language, normalize_mode
from pagecms.utils.urls import build_preview_url, normalize_path, random_suffix, with_suffix

logger = logging.getLogger(__name__)


class PageLifecycleService:
    """Content lifecycle operations for one page kind."""

    def __init__(
        self,
        db: AsyncSession,
        kind: PageKind,
        notifier: ApprovalNotifier | None = None,
        config: Settings = settings,
    ):
        self.kind = kind
        self.store = PageStore(db, kind)
        self.notifier = notifier
        self.config = config

    # ============== Validation helpers ==============

    async def _ensure_unique(self, url: str, url_alias: str, exclude_page_id: UUID | None) -> None:
        if await self.store.is_url_duplicate(url, exclude_page_id):
            raise DuplicateURLError(url)
        if url_alias and await self.store.is_url_alias_duplicate(url_alias, exclude_page_id):
            raise DuplicateUrlAliasError(url_alias)

    async def _resolve_categories(self, category_ids: list[UUID]) -> list:
        categories = await self.store.get_categories(category_ids)
        missing = set(category_ids) - {category.id for category in categories}
        if missing:
            raise ValidationError(
                "Unknown category ids",
                field="category_ids",
                details={"missing": sorted(str(category_id) for category_id in missing)},
            )
        return categories

    async def _unique_suffixed(self, path: str, is_taken, error_cls) -> str:
        """``path`` plus a random suffix no other active content uses."""
        candidate = path
        for _ in range(self.config.duplicate_suffix_attempts):
            candidate = with_suffix(path, random_suffix(self.config.duplicate_suffix_length))
            if not await is_taken(candidate):
                return candidate
            logger.warning(f"Suffixed path '{candidate}' already taken, retrying")
        raise error_cls(candidate)

    def _notify_if_awaiting_approval(self, content) -> None:
        if self.notifier is None:
            return
        if self.notifier.notify_approval(self.kind.name, content) is not None:
            logger.info(f"Queued approval notifications for {self.kind.name} content {content.id}")

    # ============== Lifecycle transitions ==============

    async def create_page(self, contents: list[ContentIn]):
        """Create a page born with exactly one content version in one language."""
        if not contents:
            raise MissingContentError()
        if len(contents) > 1:
            raise TooMuchContentError()

        payload = contents[0]
        if payload.revision is None:
            raise NoRevisionFoundError()

        fields = normalize_content_fields(self.kind, payload)
        if not PageMode(fields["mode"]).is_current:
            raise InvalidOperationError(
                f"A page cannot be created with {fields['mode']} content", details={"mode": fields["mode"]}
            )
        await self._ensure_unique(fields["url"], fields["url_alias"], None)
        categories = await self._resolve_categories(payload.category_ids)

        content = build_content(self.kind, fields, payload, categories)
        content.revision = build_revision(payload.revision)
        page = self.kind.page_model(contents=[content])

        async with self.store.transaction():
            self.store.add(page)

        logger.info(f"Created {self.kind.name} page {page.id} with {content.language} content {content.id}")
        return await self.store.get_page(page.id)

    async def update_content(self, payload: ContentIn, previous_content_id: UUID):
        """Supersede a current content version: archive it and insert ``payload`` as its replacement."""
        page_id = await self.store.get_page_id_by_content_id(previous_content_id)
        if page_id is None:
            raise ContentNotFoundError(previous_content_id)
        previous = await self.store.get_content(previous_content_id)

        # Language is fixed across an update
        fields = normalize_content_fields(self.kind, payload, language=previous.language)
        if not PageMode(fields["mode"]).is_current:
            raise InvalidOperationError(
                f"Content cannot be superseded by {fields['mode']} content", details={"mode": fields["mode"]}
            )
        await self._ensure_unique(fields["url"], fields["url_alias"], page_id)
        if not previous.is_current:
            raise InvalidOperationError(
                f"Only current content can be superseded, content {previous.id} is {previous.mode}",
                details={"content_id": str(previous.id), "mode": previous.mode},
            )
        if payload.revision is None:
            raise NoRevisionFoundError()
        categories = await self._resolve_categories(payload.category_ids)

        content = build_content(self.kind, fields, payload, categories)
        content.page_id = page_id
        content.revision = build_revision(payload.revision)

        async with self.store.transaction():
            await self.store.archive(previous.id)
            self.store.add(content)
            await self.store.touch_page(page_id)

        logger.info(
            f"Superseded {self.kind.name} content {previous.id} with {content.id} "
            f"(page {page_id}, {content.language})"
        )
        saved = await self.store.get_content(content.id)
        self._notify_if_awaiting_approval(saved)
        return saved

    async def revert_content(self, revision_id: UUID, new_revision: RevisionCreate | None):
        """Restore the content recorded by ``revision_id`` as the new draft of its page and language."""
        if new_revision is None:
            raise NoRevisionFoundError()

        revision = await self.store.get_revision(revision_id)
        snapshot_id = getattr(revision, self.kind.revision_fk) if revision is not None else None
        if snapshot_id is None:
            raise RevisionNotFoundError(revision_id)
        snapshot = await self.store.get_content(snapshot_id)
        if snapshot is None:
            raise ContentNotFoundError(snapshot_id)

        await self._ensure_unique(snapshot.url, snapshot.url_alias, snapshot.page_id)
        current = await self.store.find_current_content(snapshot.page_id, snapshot.language)

        restored = clone_content(self.kind, snapshot, mode=PageMode.DRAFT.value)
        restored.page_id = snapshot.page_id
        restored.revision = build_revision(new_revision)

        async with self.store.transaction():
            if current is not None:
                await self.store.archive(current.id)
            self.store.add(restored)
            await self.store.touch_page(snapshot.page_id)

        logger.info(
            f"Reverted {self.kind.name} page {snapshot.page_id} ({snapshot.language}) "
            f"to revision {revision_id} as content {restored.id}"
        )
        return await self.store.get_content(restored.id)

    async def duplicate_page(self, page_id: UUID):
        """Clone a page with every non-archived content version into a new page under suffixed URLs."""
        page = await self.store.get_page(page_id, include_history=True)
        if page is None:
            raise PageNotFoundError(page_id)

        sources = [content for content in page.contents if content.mode != PageMode.HISTORIES.value]
        if not sources:
            raise NoNewContentToDuplicateError(page_id)

        clones = []
        for source in sources:
            url = await self._unique_suffixed(source.url, self.store.is_url_duplicate, DuplicateURLError)
            url_alias = source.url_alias
            if url_alias:
                url_alias = await self._unique_suffixed(
                    url_alias, self.store.is_url_alias_duplicate, DuplicateUrlAliasError
                )
            clone = clone_content(self.kind, source, url=url, url_alias=url_alias)
            if source.revision is not None:
                clone.revision = copy_revision(source.revision)
            clones.append(clone)

        duplicate = self.kind.page_model(contents=clones)
        async with self.store.transaction():
            self.store.add(duplicate)

        logger.info(f"Duplicated {self.kind.name} page {page_id} as {duplicate.id} ({len(clones)} contents)")
        return await self.store.get_page(duplicate.id)

    async def duplicate_content_to_another_language(self, content_id: UUID, new_revision: RevisionCreate | None):
        """Copy a content version into the page's other language.

        The copy keeps the source URL and alias: both languages of one page may
        share them, since uniqueness is only enforced between pages.
        """
        if new_revision is None:
            raise NoRevisionFoundError()

        source = await self.store.get_content(content_id)
        if source is None:
            raise ContentNotFoundError(content_id)

        target = PageLanguage(source.language).other
        existing = await self.store.find_current_content(source.page_id, target.value)
        if existing is not None:
            raise InvalidOperationError(
                f"Page already has {target.value} content",
                details={"page_id": str(source.page_id), "content_id": str(existing.id)},
            )

        mode = source.mode if source.is_current else PageMode.DRAFT.value
        clone = clone_content(self.kind, source, language=target.value, mode=mode)
        clone.page_id = source.page_id
        clone.revision = build_revision(new_revision)

        async with self.store.transaction():
            self.store.add(clone)
            await self.store.touch_page(source.page_id)

        logger.info(
            f"Duplicated {self.kind.name} content {content_id} from {source.language} "
            f"to {target.value} as {clone.id}"
        )
        return await self.store.get_content(clone.id)

    async def preview_content(self, page_id: UUID, payload: ContentIn) -> str:
        """Upsert the preview slot for the page and the payload's language; returns the preview URL."""
        page = await self.store.get_page(page_id)
        if page is None:
            raise PageNotFoundError(page_id)

        fields = normalize_content_fields(
            self.kind,
            payload,
            mode=PageMode.PREVIEW.value,
            publish_status=PublishStatus.NOT_PUBLISHED.value,
            workflow_status=WorkflowStatus.UNPUBLISHED.value,
            expired_at=utcnow() + timedelta(minutes=self.config.preview_ttl_minutes),
        )
        await self._ensure_unique(fields["url"], fields["url_alias"], page_id)

        preview = await self.store.find_preview(page_id, fields["language"])
        async with self.store.transaction():
            if preview is None:
                preview = build_content(self.kind, fields, payload, [])
                preview.page_id = page_id
                self.store.add(preview)
            else:
                apply_content(self.kind, preview, fields, payload, [])
                preview.revision = None

        logger.info(f"Upserted {self.kind.name} preview {preview.id} (page {page_id}, {preview.language})")
        return build_preview_url(self.config.preview_base_url, preview.language, self.kind.name, preview.id)

    # ============== Reads ==============

    async def find_pages(
        self,
        query: PageQuery | None = None,
        sort: str = "updated_at:desc",
        page: int = 1,
        limit: int = 20,
        language: str | None = None,
    ) -> tuple[list, int]:
        language = normalize_language(language).value if language else None
        return await self.store.list_pages(
            query or PageQuery(), language=language, sort=sort, page=max(page, 1), limit=max(limit, 1)
        )

    async def find_page(self, page_id: UUID):
        page = await self.store.get_page(page_id)
        if page is None:
            raise PageNotFoundError(page_id)
        return page

    async def find_content(self, page_id: UUID, language: str, mode: str):
        content = await self.store.find_content(
            page_id, normalize_language(language).value, normalize_mode(mode).value
        )
        if content is None:
            raise ContentNotFoundError()
        return content

    async def find_latest_content(self, page_id: UUID, language: str):
        content = await self.store.find_latest_content(page_id, normalize_language(language).value)
        if content is None:
            raise ContentNotFoundError()
        return content

    async def find_revisions(self, page_id: UUID, language: str) -> list:
        return await self.store.list_revisions(page_id, normalize_language(language).value)

    async def get_categories(self, page_id: UUID, category_type_code: str, language: str, mode: str) -> list:
        content = await self.find_content(page_id, language, mode)
        return await self.store.get_content_categories(content.id, category_type_code)

    async def get_published_content(self, url: str, language: str):
        path = normalize_path(url)
        if not path:
            raise ContentNotFoundError()
        content = await self.store.find_published_by_url(path, normalize_language(language).value)
        if content is None:
            raise ContentNotFoundError()
        return content

    async def get_preview_content(self, content_id: UUID):
        content = await self.store.find_live_preview(content_id, utcnow())
        if content is None:
            raise ContentNotFoundError(content_id)
        return content

    # ============== Deletes ==============

    async def delete_page(self, page_id: UUID) -> None:
        page = await self.store.get_page(page_id, include_history=True)
        if page is None:
            raise PageNotFoundError(page_id)

        async with self.store.transaction():
            await self.store.delete(page)

        logger.info(f"Deleted {self.kind.name} page {page_id}")

    async def delete_content(self, page_id: UUID, language: str, mode: str) -> None:
        content = await self.find_content(page_id, language, mode)

        async with self.store.transaction():
            await self.store.delete(content)

        logger.info(f"Deleted {self.kind.name} content {content.id} (page {page_id}, {content.language}, {content.mode})")
