"""
Page kinds served by the CMS.

Landing, partner and FAQ pages share one lifecycle; a ``PageKind`` carries
the per-kind pieces (tables, schemas, kind-specific fields) so the
lifecycle engine and store are written once.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Table

from pagecms.exceptions import ValidationError
from pagecms.models.category import faq_content_categories, landing_content_categories, partner_content_categories
from pagecms.models.content import COMMON_CONTENT_FIELDS
from pagecms.models.faq import FaqContent, FaqPage
from pagecms.models.landing import LandingContent, LandingPage
from pagecms.models.partner import PARTNER_CONTENT_FIELDS, PartnerContent, PartnerPage
from pagecms.schemas.page import (
    ContentOut,
    FaqContentIn,
    FaqContentOut,
    FaqPageCreate,
    LandingContentIn,
    LandingContentOut,
    LandingPageCreate,
    PageOut,
    PartnerContentIn,
    PartnerContentOut,
    PartnerPageCreate,
)


@dataclass(frozen=True)
class PageKind:
    name: str
    page_model: type
    content_model: type
    # Column on Revision pointing at this kind's content table
    revision_fk: str
    category_table: Table
    input_schema: type[LandingContentIn] | type[PartnerContentIn] | type[FaqContentIn]
    output_schema: type[ContentOut]
    create_schema: type
    extra_fields: tuple[str, ...] = ()
    allows_empty_alias: bool = True
    has_files: bool = False

    @property
    def content_fields(self) -> tuple[str, ...]:
        return COMMON_CONTENT_FIELDS + self.extra_fields

    def serialize_content(self, content) -> dict[str, Any]:
        return self.output_schema.model_validate(content).model_dump(mode="json")

    def serialize_page(self, page) -> dict[str, Any]:
        out = PageOut(
            id=page.id,
            created_at=page.created_at,
            updated_at=page.updated_at,
            contents=[self.serialize_content(content) for content in page.contents],
        )
        return out.model_dump(mode="json")


LANDING = PageKind(
    name="landing",
    page_model=LandingPage,
    content_model=LandingContent,
    revision_fk="landing_content_id",
    category_table=landing_content_categories,
    input_schema=LandingContentIn,
    output_schema=LandingContentOut,
    create_schema=LandingPageCreate,
    allows_empty_alias=False,
    has_files=True,
)

PARTNER = PageKind(
    name="partner",
    page_model=PartnerPage,
    content_model=PartnerContent,
    revision_fk="partner_content_id",
    category_table=partner_content_categories,
    input_schema=PartnerContentIn,
    output_schema=PartnerContentOut,
    create_schema=PartnerPageCreate,
    extra_fields=PARTNER_CONTENT_FIELDS,
)

FAQ = PageKind(
    name="faq",
    page_model=FaqPage,
    content_model=FaqContent,
    revision_fk="faq_content_id",
    category_table=faq_content_categories,
    input_schema=FaqContentIn,
    output_schema=FaqContentOut,
    create_schema=FaqPageCreate,
)

PAGE_KINDS: dict[str, PageKind] = {kind.name: kind for kind in (LANDING, PARTNER, FAQ)}


def get_page_kind(name: str) -> PageKind:
    kind = PAGE_KINDS.get((name or "").strip().lower())
    if kind is None:
        raise ValidationError(f"Unknown page kind '{name}'", field="page_kind", details={"allowed": list(PAGE_KINDS)})
    return kind
