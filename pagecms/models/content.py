"""
Shared columns for the versioned content rows of every page kind.

A content row is one version of one page in one language. Rows are never
edited into a new state: superseding content archives the old row
(mode ``Histories``) and inserts a fresh one.
"""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import declared_attr, relationship

from pagecms.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from pagecms.models.enums import PageMode, PublishStatus, WorkflowStatus

# Fields that describe the content itself, as opposed to identity, ownership or audit data
COMMON_CONTENT_FIELDS = (
    "title",
    "language",
    "html_input",
    "mode",
    "workflow_status",
    "publish_status",
    "url",
    "url_alias",
    "authored_at",
    "publish_on",
    "unpublish_on",
    "authored_on",
    "expired_at",
    "approval_email",
)

# Row filters for the per-(page, language) slots: one live version and one preview
CURRENT_MODE_FILTER = "mode IN (" + ", ".join(f"'{mode.value}'" for mode in PageMode.current_modes()) + ")"
PREVIEW_MODE_FILTER = f"mode = '{PageMode.PREVIEW.value}'"


def slot_indexes(table_name: str) -> tuple[Index, Index]:
    """Partial unique indexes so concurrent writers cannot leave two live or two preview rows."""
    current = text(CURRENT_MODE_FILTER)
    preview = text(PREVIEW_MODE_FILTER)
    return (
        Index(
            f"uq_{table_name}_current", "page_id", "language", unique=True, sqlite_where=current, postgresql_where=current
        ),
        Index(
            f"uq_{table_name}_preview", "page_id", "language", unique=True, sqlite_where=preview, postgresql_where=preview
        ),
    )


class ContentMixin(UUIDPrimaryKeyMixin, TimestampMixin):
    @declared_attr.directive
    def __table_args__(cls):
        return slot_indexes(cls.__tablename__)

    title = Column(String(255), nullable=False, default="")
    language = Column(String(10), nullable=False, index=True)
    html_input = Column(Text, nullable=False, default="")
    mode = Column(String(20), nullable=False, default=PageMode.DRAFT.value, index=True)
    workflow_status = Column(String(50), nullable=False, default=WorkflowStatus.DRAFT.value)
    publish_status = Column(String(50), nullable=False, default=PublishStatus.NOT_PUBLISHED.value)
    url = Column(String(255), nullable=False, index=True)
    url_alias = Column(String(255), nullable=False, default="", index=True)
    authored_at = Column(DateTime(timezone=True), nullable=True)
    publish_on = Column(DateTime(timezone=True), nullable=True)
    unpublish_on = Column(DateTime(timezone=True), nullable=True)
    authored_on = Column(DateTime(timezone=True), nullable=True)
    expired_at = Column(DateTime(timezone=True), nullable=True)
    approval_email = Column(JSON, nullable=False, default=list)

    @declared_attr
    def meta_tag_id(cls):
        return Column(Uuid(as_uuid=True), ForeignKey("meta_tags.id", ondelete="SET NULL"), nullable=True, unique=True)

    @declared_attr
    def meta_tag(cls):
        return relationship("MetaTag", cascade="all, delete-orphan", single_parent=True, lazy="selectin")

    @property
    def is_current(self) -> bool:
        return self.mode in PageMode.current_modes()
