"""
Page Routes

CMS and public endpoints for landing, partner and FAQ pages. One router is
built per page kind; every handler delegates to ``PageLifecycleService``.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from pagecms.database import get_db
from pagecms.schemas.page import CategoryOut, PageListResponse, PageQuery, PreviewResponse, RevisionOut, RevisionRequest
from pagecms.services.lifecycle_service import PageLifecycleService
from pagecms.services.notification_service import ApprovalNotifier, get_approval_notifier
from pagecms.services.page_kinds import PAGE_KINDS, PageKind


def build_pages_router(kind: PageKind) -> APIRouter:
    """CMS router for one page kind, mounted under ``/cms/{kind}-pages``."""
    router = APIRouter(prefix=f"/cms/{kind.name}-pages", tags=[f"{kind.name.title()} Pages"])

    CreateSchema = kind.create_schema
    ContentSchema = kind.input_schema

    def get_service(
        db: AsyncSession = Depends(get_db),
        notifier: ApprovalNotifier = Depends(get_approval_notifier),
    ) -> PageLifecycleService:
        return PageLifecycleService(db, kind, notifier=notifier)

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_page(payload: CreateSchema, service: PageLifecycleService = Depends(get_service)):
        page = await service.create_page(payload.contents)
        return kind.serialize_page(page)

    @router.get("", response_model=PageListResponse)
    async def list_pages(
        title: str = "",
        url: str = "",
        url_alias: str = "",
        status_filter: str = Query("", alias="status"),
        category_keywords: str = "",
        language: str | None = None,
        sort: str = "updated_at:desc",
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        service: PageLifecycleService = Depends(get_service),
    ):
        query = PageQuery(
            title=title, url=url, url_alias=url_alias, status=status_filter, category_keywords=category_keywords
        )
        pages, total = await service.find_pages(query, sort=sort, page=page, limit=limit, language=language)
        return {"items": [kind.serialize_page(item) for item in pages], "total": total, "page": page, "limit": limit}

    @router.get("/{page_id}")
    async def get_page(page_id: UUID, service: PageLifecycleService = Depends(get_service)):
        return kind.serialize_page(await service.find_page(page_id))

    @router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_page(page_id: UUID, service: PageLifecycleService = Depends(get_service)):
        await service.delete_page(page_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.post("/{page_id}/duplicate", status_code=status.HTTP_201_CREATED)
    async def duplicate_page(page_id: UUID, service: PageLifecycleService = Depends(get_service)):
        return kind.serialize_page(await service.duplicate_page(page_id))

    @router.post("/{page_id}/preview", response_model=PreviewResponse)
    async def preview_content(
        page_id: UUID, payload: ContentSchema, service: PageLifecycleService = Depends(get_service)
    ):
        return {"preview_url": await service.preview_content(page_id, payload)}

    @router.get("/{page_id}/contents")
    async def find_content(
        page_id: UUID,
        language: str,
        mode: str = "Draft",
        service: PageLifecycleService = Depends(get_service),
    ):
        return kind.serialize_content(await service.find_content(page_id, language, mode))

    @router.get("/{page_id}/contents/latest")
    async def find_latest_content(
        page_id: UUID, language: str, service: PageLifecycleService = Depends(get_service)
    ):
        return kind.serialize_content(await service.find_latest_content(page_id, language))

    @router.delete("/{page_id}/contents", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_content(
        page_id: UUID,
        language: str,
        mode: str,
        service: PageLifecycleService = Depends(get_service),
    ):
        await service.delete_content(page_id, language, mode)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get("/{page_id}/revisions", response_model=list[RevisionOut])
    async def list_revisions(page_id: UUID, language: str, service: PageLifecycleService = Depends(get_service)):
        return await service.find_revisions(page_id, language)

    @router.get("/{page_id}/categories/{category_type_code}", response_model=list[CategoryOut])
    async def get_categories(
        page_id: UUID,
        category_type_code: str,
        language: str,
        mode: str = "Draft",
        service: PageLifecycleService = Depends(get_service),
    ):
        return await service.get_categories(page_id, category_type_code, language, mode)

    @router.put("/contents/{content_id}")
    async def update_content(
        content_id: UUID, payload: ContentSchema, service: PageLifecycleService = Depends(get_service)
    ):
        return kind.serialize_content(await service.update_content(payload, content_id))

    @router.post("/contents/{content_id}/duplicate-language", status_code=status.HTTP_201_CREATED)
    async def duplicate_content_to_another_language(
        content_id: UUID, payload: RevisionRequest, service: PageLifecycleService = Depends(get_service)
    ):
        content = await service.duplicate_content_to_another_language(content_id, payload.revision)
        return kind.serialize_content(content)

    @router.post("/revisions/{revision_id}/revert", status_code=status.HTTP_201_CREATED)
    async def revert_content(
        revision_id: UUID, payload: RevisionRequest, service: PageLifecycleService = Depends(get_service)
    ):
        return kind.serialize_content(await service.revert_content(revision_id, payload.revision))

    return router


def build_public_router(kind: PageKind) -> APIRouter:
    """Read-only router used by the public site, mounted under ``/app/{kind}-pages``."""
    router = APIRouter(prefix=f"/app/{kind.name}-pages", tags=[f"{kind.name.title()} Pages (public)"])

    def get_service(db: AsyncSession = Depends(get_db)) -> PageLifecycleService:
        return PageLifecycleService(db, kind)

    @router.get("")
    async def get_published_content(url: str, language: str, service: PageLifecycleService = Depends(get_service)):
        return kind.serialize_content(await service.get_published_content(url, language))

    @router.get("/preview/{content_id}")
    async def get_preview_content(content_id: UUID, service: PageLifecycleService = Depends(get_service)):
        return kind.serialize_content(await service.get_preview_content(content_id))

    return router


routers = [build_pages_router(kind) for kind in PAGE_KINDS.values()]
public_routers = [build_public_router(kind) for kind in PAGE_KINDS.values()]
