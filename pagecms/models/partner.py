from sqlalchemy import Boolean, Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from pagecms.database import Base
from pagecms.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from pagecms.models.category import partner_content_categories
from pagecms.models.content import ContentMixin

PARTNER_CONTENT_FIELDS = (
    "thumbnail_image",
    "thumbnail_alt_text",
    "company_logo",
    "company_alt_text",
    "company_name",
    "company_detail",
    "lead_body",
    "challenges",
    "solutions",
    "results",
    "is_recommended",
)


class PartnerPage(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "partner_pages"

    contents = relationship(
        "PartnerContent",
        # Versions are attached by page_id, never through this collection
        cascade="all",
        order_by="PartnerContent.created_at.desc()",
        lazy="selectin",
    )


class PartnerContent(ContentMixin, Base):
    __tablename__ = "partner_contents"

    page_id = Column(Uuid(as_uuid=True), ForeignKey("partner_pages.id", ondelete="CASCADE"), nullable=False, index=True)

    # Partner case-study fields
    thumbnail_image = Column(String(512), nullable=False, default="")
    thumbnail_alt_text = Column(String(255), nullable=False, default="")
    company_logo = Column(String(512), nullable=False, default="")
    company_alt_text = Column(String(255), nullable=False, default="")
    company_name = Column(String(255), nullable=False, default="")
    company_detail = Column(Text, nullable=False, default="")
    lead_body = Column(Text, nullable=False, default="")
    challenges = Column(Text, nullable=False, default="")
    solutions = Column(Text, nullable=False, default="")
    results = Column(Text, nullable=False, default="")
    is_recommended = Column(Boolean, nullable=False, default=False)

    revision = relationship(
        "Revision",
        foreign_keys="Revision.partner_content_id",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    components = relationship(
        "Component",
        foreign_keys="Component.partner_content_id",
        cascade="all, delete-orphan",
        order_by="Component.position",
        lazy="selectin",
    )
    categories = relationship("Category", secondary=partner_content_categories, lazy="selectin")
