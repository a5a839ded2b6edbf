"""
Tests for enum coercion and value normalisation
"""

import pytest

from pagecms.exceptions import InvalidEnumValueError
from pagecms.models.enums import FileType, PageLanguage, PageMode, PublishStatus, WorkflowStatus
from pagecms.utils.normalize import (
    coerce_enum,
    normalize_emails,
    normalize_file_type,
    normalize_language,
    normalize_mode,
    normalize_publish_status,
    normalize_workflow_status,
)


class TestCoerceEnum:
    """Test case-insensitive enum matching"""

    @pytest.mark.parametrize("value", ["en", "EN", " En "])
    def test_language(self, value):
        assert normalize_language(value) is PageLanguage.EN

    def test_mode(self):
        assert normalize_mode("histories") is PageMode.HISTORIES

    def test_workflow_status(self):
        assert normalize_workflow_status("waiting_design_approved") is WorkflowStatus.WAITING_DESIGN

    def test_publish_status(self):
        assert normalize_publish_status("unpublished") is PublishStatus.NOT_PUBLISHED

    def test_file_type(self):
        assert normalize_file_type("js") is FileType.JS

    def test_member_passes_through(self):
        assert coerce_enum(PageMode, PageMode.DRAFT, "mode") is PageMode.DRAFT

    def test_unknown_value(self):
        with pytest.raises(InvalidEnumValueError) as exc_info:
            normalize_mode("Archived")

        assert exc_info.value.details["allowed"] == ["Published", "Preview", "Histories", "Draft"]
        assert exc_info.value.details["value"] == "Archived"

    def test_empty_value(self):
        with pytest.raises(InvalidEnumValueError):
            normalize_language(None)


class TestEnums:
    """Test enum helpers"""

    def test_language_toggle(self):
        assert PageLanguage.TH.other is PageLanguage.EN
        assert PageLanguage.EN.other is PageLanguage.TH

    def test_current_modes(self):
        assert PageMode.DRAFT.is_current
        assert PageMode.PUBLISHED.is_current
        assert not PageMode.PREVIEW.is_current
        assert not PageMode.HISTORIES.is_current


class TestNormalizeEmails:
    def test_trims_and_deduplicates(self):
        emails = [" a@example.com", "b@example.com", "", "a@example.com ", "  "]

        assert normalize_emails(emails) == ["a@example.com", "b@example.com"]

    def test_none(self):
        assert normalize_emails(None) == []
