from sqlalchemy import Column, ForeignKey, String, Text, Uuid

from pagecms.database import Base
from pagecms.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from pagecms.models.enums import PublishStatus


class Revision(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Audit record attached to exactly one content version of one page kind.

    Exactly one of the ``*_content_id`` columns is set. Revisions are written
    once alongside their content and only removed when the page is deleted.
    """

    __tablename__ = "revisions"

    landing_content_id = Column(
        Uuid(as_uuid=True), ForeignKey("landing_contents.id", ondelete="CASCADE"), nullable=True, index=True
    )
    partner_content_id = Column(
        Uuid(as_uuid=True), ForeignKey("partner_contents.id", ondelete="CASCADE"), nullable=True, index=True
    )
    faq_content_id = Column(
        Uuid(as_uuid=True), ForeignKey("faq_contents.id", ondelete="CASCADE"), nullable=True, index=True
    )
    publish_status = Column(String(50), nullable=False, default=PublishStatus.NOT_PUBLISHED.value)
    author = Column(String(255), nullable=False, default="")
    message = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
