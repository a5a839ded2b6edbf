from .page import (
    ContentIn,
    FaqContentIn,
    FaqPageCreate,
    LandingContentIn,
    LandingPageCreate,
    PageListResponse,
    PageOut,
    PageQuery,
    PartnerContentIn,
    PartnerPageCreate,
    PreviewResponse,
    RevisionCreate,
    RevisionRequest,
)

# Define the public API of this module
__all__ = [
    "ContentIn",
    "FaqContentIn",
    "FaqPageCreate",
    "LandingContentIn",
    "LandingPageCreate",
    "PageListResponse",
    "PageOut",
    "PageQuery",
    "PartnerContentIn",
    "PartnerPageCreate",
    "PreviewResponse",
    "RevisionCreate",
    "RevisionRequest",
]
