"""
Page Store

Persistence for one page kind: lookups, the URL uniqueness queries and the
transaction boundary used by lifecycle operations.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pagecms.exceptions import ContentConflictError, DatabaseError, InvalidOperationError
from pagecms.models.base import utcnow
from pagecms.models.category import Category, CategoryType
from pagecms.models.enums import PageMode, WorkflowStatus
from pagecms.models.revision import Revision
from pagecms.schemas.page import PageQuery
from pagecms.services.page_kinds import PageKind

logger = logging.getLogger(__name__)

CURRENT_MODES = [mode.value for mode in PageMode.current_modes()]
KEYWORDS_CATEGORY_TYPE = "category-keywords"
PAGE_SORT_COLUMNS = ("created_at", "updated_at")
CONTENT_SORT_COLUMNS = ("title", "url", "url_alias", "workflow_status", "publish_status")


class PageStore:
    """Queries and writes for the page, content and revision tables of one page kind."""

    def __init__(self, db: AsyncSession, kind: PageKind):
        self.db = db
        self.kind = kind
        self.Page = kind.page_model
        self.Content = kind.content_model

    @asynccontextmanager
    async def transaction(self):
        """Commit everything done inside the block, or roll all of it back."""
        try:
            yield self.db
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Conflicting write on {self.kind.name} pages: {e.orig}")
            raise ContentConflictError(self.kind.name) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Transaction failed for {self.kind.name} pages: {e}")
            raise DatabaseError(str(e), operation=f"{self.kind.name}_page_transaction") from e
        except Exception:
            await self.db.rollback()
            raise

    def add(self, instance: Any) -> None:
        self.db.add(instance)

    async def delete(self, instance: Any) -> None:
        await self.db.delete(instance)

    # ============== Pages ==============

    def _current_contents(self):
        return selectinload(self.Page.contents.and_(self.Content.mode.in_(CURRENT_MODES)))

    async def get_page(self, page_id: UUID, include_history: bool = False):
        """Page with its current contents, or with every content row when ``include_history``."""
        stmt = select(self.Page).where(self.Page.id == page_id).execution_options(populate_existing=True)
        if include_history:
            stmt = stmt.options(selectinload(self.Page.contents))
        else:
            stmt = stmt.options(self._current_contents())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_pages(
        self,
        query: PageQuery,
        language: str | None = None,
        sort: str = "updated_at:desc",
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list, int]:
        Content = self.Content
        conditions = [Content.mode.in_(CURRENT_MODES)]
        if language:
            conditions.append(Content.language == language)
        if query.title:
            conditions.append(Content.title.ilike(f"%{query.title.strip()}%"))
        if query.url:
            conditions.append(Content.url.ilike(f"%{query.url.strip()}%"))
        if query.url_alias:
            conditions.append(Content.url_alias.ilike(f"%{query.url_alias.strip()}%"))
        if query.status:
            conditions.append(func.lower(Content.workflow_status) == query.status.strip().lower())
        if query.category_keywords:
            conditions.append(Content.id.in_(self._keyword_content_ids(query.category_keywords)))

        matching_pages = select(Content.page_id).where(*conditions).distinct()

        total = await self.db.scalar(select(func.count()).select_from(matching_pages.subquery()))

        stmt = (
            select(self.Page)
            .where(self.Page.id.in_(matching_pages))
            .order_by(self._sort_clause(sort, language))
            .offset((page - 1) * limit)
            .limit(limit)
            .options(self._current_contents())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total or 0

    def _keyword_content_ids(self, keywords: str):
        link = self.kind.category_table
        content_column = link.c[f"{self.kind.name}_content_id"]
        return (
            select(content_column)
            .join(Category, Category.id == link.c.category_id)
            .join(CategoryType, CategoryType.id == Category.category_type_id)
            .where(CategoryType.type_code == KEYWORDS_CATEGORY_TYPE, Category.name.ilike(f"%{keywords.strip()}%"))
        )

    def _sort_clause(self, sort: str, language: str | None):
        column, _, direction = (sort or "updated_at:desc").partition(":")
        column = column.strip().lower()
        descending = direction.strip().lower() != "asc"

        if column in CONTENT_SORT_COLUMNS:
            # Pages sort by their current content; the smallest value wins when a page has both languages
            conditions = [self.Content.page_id == self.Page.id, self.Content.mode.in_(CURRENT_MODES)]
            if language:
                conditions.append(self.Content.language == language)
            expression = (
                select(func.min(getattr(self.Content, column))).where(*conditions).correlate(self.Page).scalar_subquery()
            )
        else:
            if column not in PAGE_SORT_COLUMNS:
                logger.warning(f"Unsupported sort column '{column}', falling back to updated_at")
                column = "updated_at"
            expression = getattr(self.Page, column)
        return expression.desc() if descending else expression.asc()

    async def touch_page(self, page_id: UUID) -> None:
        await self.db.execute(update(self.Page).where(self.Page.id == page_id).values(updated_at=utcnow()))

    async def archive(self, content_id: UUID) -> None:
        """Move a live version to ``Histories``; fails if another writer archived it first."""
        result = await self.db.execute(
            update(self.Content)
            .where(self.Content.id == content_id, self.Content.mode.in_(CURRENT_MODES))
            .values(mode=PageMode.HISTORIES.value)
        )
        if result.rowcount != 1:
            raise InvalidOperationError(
                f"Content {content_id} is no longer current", details={"content_id": str(content_id)}
            )

    # ============== Content ==============

    async def get_content(self, content_id: UUID):
        result = await self.db.execute(
            select(self.Content).where(self.Content.id == content_id).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_page_id_by_content_id(self, content_id: UUID) -> UUID | None:
        return await self.db.scalar(select(self.Content.page_id).where(self.Content.id == content_id))

    async def _first_content(self, *conditions):
        result = await self.db.execute(
            select(self.Content)
            .where(*conditions)
            .order_by(self.Content.created_at.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_content(self, page_id: UUID, language: str, mode: str):
        return await self._first_content(
            self.Content.page_id == page_id, self.Content.language == language, self.Content.mode == mode
        )

    async def find_current_content(self, page_id: UUID, language: str):
        return await self._first_content(
            self.Content.page_id == page_id,
            self.Content.language == language,
            self.Content.mode.in_(CURRENT_MODES),
        )

    async def find_latest_content(self, page_id: UUID, language: str):
        return await self._first_content(self.Content.page_id == page_id, self.Content.language == language)

    async def find_preview(self, page_id: UUID, language: str):
        return await self.find_content(page_id, language, PageMode.PREVIEW.value)

    async def find_published_by_url(self, url: str, language: str):
        """Live published content reachable at ``url`` through either its URL or its alias."""
        return await self._first_content(
            # Blank aliases never match
            (self.Content.url == url) | ((self.Content.url_alias == url) & (self.Content.url_alias != "")),
            self.Content.language == language,
            self.Content.workflow_status == WorkflowStatus.PUBLISHED.value,
            self.Content.mode.in_(CURRENT_MODES),
        )

    async def find_live_preview(self, content_id: UUID, now: datetime):
        return await self._first_content(
            self.Content.id == content_id,
            self.Content.mode == PageMode.PREVIEW.value,
            self.Content.expired_at > now,
        )

    # ============== Uniqueness ==============

    async def _is_taken(self, column, value: str, exclude_page_id: UUID | None) -> bool:
        conditions = [column == value, self.Content.mode != PageMode.HISTORIES.value]
        if exclude_page_id is not None and exclude_page_id != UUID(int=0):
            conditions.append(self.Content.page_id != exclude_page_id)
        count = await self.db.scalar(select(func.count()).select_from(self.Content).where(*conditions))
        return bool(count)

    async def is_url_duplicate(self, url: str, exclude_page_id: UUID | None = None) -> bool:
        """Whether a non-archived row of another page already uses ``url``."""
        return await self._is_taken(self.Content.url, url, exclude_page_id)

    async def is_url_alias_duplicate(self, url_alias: str, exclude_page_id: UUID | None = None) -> bool:
        """Whether a non-archived row of another page already uses ``url_alias``."""
        return await self._is_taken(self.Content.url_alias, url_alias, exclude_page_id)

    # ============== Revisions & categories ==============

    async def get_revision(self, revision_id: UUID) -> Revision | None:
        return await self.db.get(Revision, revision_id)

    async def list_revisions(self, page_id: UUID, language: str) -> list[Revision]:
        fk = getattr(Revision, self.kind.revision_fk)
        result = await self.db.execute(
            select(Revision)
            .join(self.Content, fk == self.Content.id)
            .where(self.Content.page_id == page_id, self.Content.language == language)
            .order_by(Revision.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_categories(self, category_ids: list[UUID]) -> list[Category]:
        if not category_ids:
            return []
        result = await self.db.execute(select(Category).where(Category.id.in_(category_ids)))
        return list(result.scalars().all())

    async def get_content_categories(self, content_id: UUID, type_code: str) -> list[Category]:
        link = self.kind.category_table
        content_column = link.c[f"{self.kind.name}_content_id"]
        result = await self.db.execute(
            select(Category)
            .join(link, link.c.category_id == Category.id)
            .join(CategoryType, CategoryType.id == Category.category_type_id)
            .where(content_column == content_id, CategoryType.type_code == type_code)
            .order_by(Category.weight, Category.name)
        )
        return list(result.scalars().all())
