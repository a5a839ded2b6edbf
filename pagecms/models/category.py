from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text, Uuid
from sqlalchemy.orm import relationship

from pagecms.database import Base
from pagecms.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from pagecms.models.enums import PublishStatus


class CategoryType(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "category_types"

    type_code = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)


class Category(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "categories"

    category_type_id = Column(Uuid(as_uuid=True), ForeignKey("category_types.id"), nullable=False, index=True)
    language_code = Column(String(10), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    weight = Column(Integer, nullable=False, default=0)
    publish_status = Column(String(50), nullable=False, default=PublishStatus.NOT_PUBLISHED.value)

    category_type = relationship("CategoryType", lazy="selectin")


# Many-to-many links between content versions and categories; links are never owned
landing_content_categories = Table(
    "landing_content_categories",
    Base.metadata,
    Column("landing_content_id", Uuid(as_uuid=True), ForeignKey("landing_contents.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)

partner_content_categories = Table(
    "partner_content_categories",
    Base.metadata,
    Column("partner_content_id", Uuid(as_uuid=True), ForeignKey("partner_contents.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)

faq_content_categories = Table(
    "faq_content_categories",
    Base.metadata,
    Column("faq_content_id", Uuid(as_uuid=True), ForeignKey("faq_contents.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)
