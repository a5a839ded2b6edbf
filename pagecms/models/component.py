from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Uuid

from pagecms.database import Base
from pagecms.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class Component(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Rendering block owned by one content version; ``props`` is schema-less."""

    __tablename__ = "components"

    landing_content_id = Column(
        Uuid(as_uuid=True), ForeignKey("landing_contents.id", ondelete="CASCADE"), nullable=True, index=True
    )
    partner_content_id = Column(
        Uuid(as_uuid=True), ForeignKey("partner_contents.id", ondelete="CASCADE"), nullable=True, index=True
    )
    faq_content_id = Column(
        Uuid(as_uuid=True), ForeignKey("faq_contents.id", ondelete="CASCADE"), nullable=True, index=True
    )
    type = Column(String(100), nullable=False)
    props = Column(JSON, nullable=False, default=dict)
    position = Column(Integer, nullable=False, default=0)
