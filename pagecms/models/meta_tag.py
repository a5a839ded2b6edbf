from sqlalchemy import Column, String, Text

from pagecms.database import Base
from pagecms.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class MetaTag(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """SEO metadata owned one-to-one by a content version."""

    __tablename__ = "meta_tags"

    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    cover_image = Column(String(512), nullable=True)
