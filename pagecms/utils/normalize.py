import enum
from typing import TypeVar

from pagecms.exceptions import InvalidEnumValueError
from pagecms.models.enums import FileType, PageLanguage, PageMode, PublishStatus, WorkflowStatus

E = TypeVar("E", bound=enum.Enum)


def coerce_enum(enum_cls: type[E], value, field: str) -> E:
    """Match ``value`` against an enum's values, ignoring case and surrounding whitespace."""
    if isinstance(value, enum_cls):
        return value
    candidate = str(value or "").strip()
    for member in enum_cls:
        if member.value.lower() == candidate.lower():
            return member
    raise InvalidEnumValueError(field, value, [member.value for member in enum_cls])


def normalize_language(value) -> PageLanguage:
    return coerce_enum(PageLanguage, value, "language")


def normalize_mode(value) -> PageMode:
    return coerce_enum(PageMode, value, "mode")


def normalize_workflow_status(value) -> WorkflowStatus:
    return coerce_enum(WorkflowStatus, value, "workflow_status")


def normalize_publish_status(value) -> PublishStatus:
    return coerce_enum(PublishStatus, value, "publish_status")


def normalize_file_type(value) -> FileType:
    return coerce_enum(FileType, value, "file_type")


def normalize_emails(emails: list[str] | None) -> list[str]:
    seen: list[str] = []
    for email in emails or []:
        email = email.strip()
        if email and email not in seen:
            seen.append(email)
    return seen
