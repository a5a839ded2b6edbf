from .category import Category, CategoryType
from .component import Component
from .faq import FaqContent, FaqPage
from .landing import LandingContent, LandingContentFile, LandingPage
from .meta_tag import MetaTag
from .partner import PartnerContent, PartnerPage
from .revision import Revision

__all__ = [
    "Category",
    "CategoryType",
    "Component",
    "FaqContent",
    "FaqPage",
    "LandingContent",
    "LandingContentFile",
    "LandingPage",
    "MetaTag",
    "PartnerContent",
    "PartnerPage",
    "Revision",
]
