"""
Request and response schemas for landing, partner and FAQ pages.

Enum-valued fields (language, mode, statuses) are accepted as plain strings
so the lifecycle engine can coerce them case-insensitively and report
unknown codes with its own error type.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from pagecms.models.enums import PageMode, PublishStatus, WorkflowStatus


# ── Owned sub-resources ────────────────────────────────────────────────────────


class RevisionCreate(BaseModel):
    author: str = ""
    message: str = ""
    description: str = ""
    publish_status: str = PublishStatus.NOT_PUBLISHED.value


class MetaTagIn(BaseModel):
    title: str | None = None
    description: str | None = None
    cover_image: str | None = None


class ComponentIn(BaseModel):
    type: str
    props: dict[str, Any] = Field(default_factory=dict)


class LandingFileIn(BaseModel):
    name: str
    download_url: str
    file_type: str = "CSS"


# ── Content input ──────────────────────────────────────────────────────────────


class ContentIn(BaseModel):
    title: str = ""
    language: str
    html_input: str = ""
    mode: str = PageMode.DRAFT.value
    workflow_status: str = WorkflowStatus.DRAFT.value
    publish_status: str = PublishStatus.NOT_PUBLISHED.value
    url: str = ""
    url_alias: str = ""
    authored_at: datetime | None = None
    publish_on: datetime | None = None
    unpublish_on: datetime | None = None
    authored_on: datetime | None = None
    expired_at: datetime | None = None
    approval_email: list[str] = Field(default_factory=list)
    category_ids: list[UUID] = Field(default_factory=list)
    meta_tag: MetaTagIn | None = None
    components: list[ComponentIn] = Field(default_factory=list)
    revision: RevisionCreate | None = None


class LandingContentIn(ContentIn):
    files: list[LandingFileIn] = Field(default_factory=list)


class PartnerContentIn(ContentIn):
    thumbnail_image: str = ""
    thumbnail_alt_text: str = ""
    company_logo: str = ""
    company_alt_text: str = ""
    company_name: str = ""
    company_detail: str = ""
    lead_body: str = ""
    challenges: str = ""
    solutions: str = ""
    results: str = ""
    is_recommended: bool = False


class FaqContentIn(ContentIn):
    pass


class LandingPageCreate(BaseModel):
    contents: list[LandingContentIn] = Field(default_factory=list)


class PartnerPageCreate(BaseModel):
    contents: list[PartnerContentIn] = Field(default_factory=list)


class FaqPageCreate(BaseModel):
    contents: list[FaqContentIn] = Field(default_factory=list)


class RevisionRequest(BaseModel):
    """Body for operations that only need fresh revision metadata (revert, duplicate language)."""

    revision: RevisionCreate | None = None


class PageQuery(BaseModel):
    title: str = ""
    url: str = ""
    url_alias: str = ""
    status: str = ""
    category_keywords: str = ""


# ── Responses ──────────────────────────────────────────────────────────────────


class RevisionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    author: str
    message: str
    description: str
    publish_status: str
    created_at: datetime


class MetaTagOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str | None
    description: str | None
    cover_image: str | None


class ComponentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    props: dict[str, Any]
    position: int


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_type_id: UUID
    language_code: str
    name: str
    description: str | None
    weight: int
    publish_status: str


class LandingFileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    download_url: str
    file_type: str


class ContentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    page_id: UUID
    title: str
    language: str
    html_input: str
    mode: str
    workflow_status: str
    publish_status: str
    url: str
    url_alias: str
    authored_at: datetime | None
    publish_on: datetime | None
    unpublish_on: datetime | None
    authored_on: datetime | None
    expired_at: datetime | None
    approval_email: list[str]
    created_at: datetime
    updated_at: datetime
    meta_tag: MetaTagOut | None = None
    revision: RevisionOut | None = None
    components: list[ComponentOut] = Field(default_factory=list)
    categories: list[CategoryOut] = Field(default_factory=list)


class LandingContentOut(ContentOut):
    files: list[LandingFileOut] = Field(default_factory=list)


class PartnerContentOut(ContentOut):
    thumbnail_image: str
    thumbnail_alt_text: str
    company_logo: str
    company_alt_text: str
    company_name: str
    company_detail: str
    lead_body: str
    challenges: str
    solutions: str
    results: str
    is_recommended: bool


class FaqContentOut(ContentOut):
    pass


class PageOut(BaseModel):
    id: UUID
    created_at: datetime
    updated_at: datetime
    contents: list[dict[str, Any]] = Field(default_factory=list)


class PageListResponse(BaseModel):
    items: list[PageOut]
    total: int
    page: int
    limit: int


class PreviewResponse(BaseModel):
    preview_url: str
