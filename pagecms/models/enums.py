import enum


class PageLanguage(str, enum.Enum):
    TH = "th"
    EN = "en"

    @property
    def other(self) -> "PageLanguage":
        """The complementary language of the two supported ones."""
        return PageLanguage.EN if self is PageLanguage.TH else PageLanguage.TH


class PageMode(str, enum.Enum):
    PUBLISHED = "Published"
    PREVIEW = "Preview"
    HISTORIES = "Histories"
    DRAFT = "Draft"

    @classmethod
    def current_modes(cls) -> tuple["PageMode", ...]:
        # Everything that is neither archived history nor the preview slot is live content
        return (cls.DRAFT, cls.PUBLISHED)

    @property
    def is_current(self) -> bool:
        return self in PageMode.current_modes()


class PublishStatus(str, enum.Enum):
    NOT_PUBLISHED = "UnPublished"
    PUBLISHED = "Published"


class WorkflowStatus(str, enum.Enum):
    DRAFT = "Draft"
    APPROVAL_PENDING = "Approval_Pending"
    WAITING_DESIGN = "Waiting_Design_Approved"
    SCHEDULE = "Schedule"
    PUBLISHED = "Published"
    UNPUBLISHED = "UnPublished"
    WAITING_DELETION = "Waiting_Deletion"
    DELETE = "Delete"


class FileType(str, enum.Enum):
    CSS = "CSS"
    JS = "JS"
