from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from pagecms.database import Base
from pagecms.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from pagecms.models.category import landing_content_categories
from pagecms.models.content import ContentMixin
from pagecms.models.enums import FileType


class LandingPage(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "landing_pages"

    contents = relationship(
        "LandingContent",
        # Versions are attached by page_id, never through this collection
        cascade="all",
        order_by="LandingContent.created_at.desc()",
        lazy="selectin",
    )


class LandingContent(ContentMixin, Base):
    __tablename__ = "landing_contents"

    page_id = Column(Uuid(as_uuid=True), ForeignKey("landing_pages.id", ondelete="CASCADE"), nullable=False, index=True)

    revision = relationship(
        "Revision",
        foreign_keys="Revision.landing_content_id",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    components = relationship(
        "Component",
        foreign_keys="Component.landing_content_id",
        cascade="all, delete-orphan",
        order_by="Component.position",
        lazy="selectin",
    )
    categories = relationship("Category", secondary=landing_content_categories, lazy="selectin")
    files = relationship(
        "LandingContentFile",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class LandingContentFile(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Stylesheet or script attached to a landing content version."""

    __tablename__ = "landing_content_files"

    landing_content_id = Column(
        Uuid(as_uuid=True), ForeignKey("landing_contents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    download_url = Column(String(512), nullable=False)
    file_type = Column(String(10), nullable=False, default=FileType.CSS.value)
