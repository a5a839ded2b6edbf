from sqlalchemy import Column, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from pagecms.database import Base
from pagecms.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from pagecms.models.category import faq_content_categories
from pagecms.models.content import ContentMixin


class FaqPage(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "faq_pages"

    contents = relationship(
        "FaqContent",
        # Versions are attached by page_id, never through this collection
        cascade="all",
        order_by="FaqContent.created_at.desc()",
        lazy="selectin",
    )


class FaqContent(ContentMixin, Base):
    __tablename__ = "faq_contents"

    page_id = Column(Uuid(as_uuid=True), ForeignKey("faq_pages.id", ondelete="CASCADE"), nullable=False, index=True)

    revision = relationship(
        "Revision",
        foreign_keys="Revision.faq_content_id",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    components = relationship(
        "Component",
        foreign_keys="Component.faq_content_id",
        cascade="all, delete-orphan",
        order_by="Component.position",
        lazy="selectin",
    )
    categories = relationship("Category", secondary=faq_content_categories, lazy="selectin")
