"""
Builders for content rows.

Every transition that produces a content version constructs a brand-new
row from content fields: from a request payload (create, update, preview)
or from an existing row (revert, duplicate). Identity, ownership and audit
data are never copied, so the store assigns fresh ids to the row and all
of its owned sub-resources.
"""

import copy
from typing import Any

from pagecms.exceptions import ValidationError
from pagecms.models.component import Component
from pagecms.models.landing import LandingContentFile
from pagecms.models.meta_tag import MetaTag
from pagecms.models.revision import Revision
from pagecms.schemas.page import ComponentIn, ContentIn, LandingFileIn, MetaTagIn, RevisionCreate
from pagecms.services.page_kinds import PageKind
from pagecms.utils.normalize import (
    normalize_emails,
    normalize_file_type,
    normalize_language,
    normalize_mode,
    normalize_publish_status,
    normalize_workflow_status,
)
from pagecms.utils.urls import normalize_path, url_from_title


def normalize_content_fields(kind: PageKind, payload: ContentIn, **overrides: Any) -> dict[str, Any]:
    """Return the column values for ``payload``: trimmed, enum-coerced, with URL forms derived.

    ``overrides`` replace payload values before normalisation, which is how
    callers pin the language of an update or force preview defaults.
    """
    fields = payload.model_dump(include=set(kind.content_fields))
    fields.update(overrides)

    fields["language"] = normalize_language(fields["language"]).value
    fields["mode"] = normalize_mode(fields["mode"]).value
    fields["workflow_status"] = normalize_workflow_status(fields["workflow_status"]).value
    fields["publish_status"] = normalize_publish_status(fields["publish_status"]).value
    fields["title"] = (fields.get("title") or "").strip()
    fields["approval_email"] = normalize_emails(fields.get("approval_email"))

    for name in kind.extra_fields:
        if isinstance(fields.get(name), str):
            fields[name] = fields[name].strip()

    fields["url_alias"] = normalize_path(fields.get("url_alias"))
    fields["url"] = normalize_path(fields.get("url")) or url_from_title(fields["title"])
    if not fields["url"]:
        raise ValidationError("A URL or a title to derive it from is required", field="url")
    if not fields["url_alias"] and not kind.allows_empty_alias:
        raise ValidationError(f"A URL alias is required for {kind.name} pages", field="url_alias")

    return fields


def build_revision(payload: RevisionCreate) -> Revision:
    return Revision(
        author=payload.author.strip(),
        message=payload.message.strip(),
        description=payload.description.strip(),
        publish_status=normalize_publish_status(payload.publish_status).value,
    )


def copy_revision(revision: Revision) -> Revision:
    return Revision(
        author=revision.author,
        message=revision.message,
        description=revision.description,
        publish_status=revision.publish_status,
    )


def build_meta_tag(payload: MetaTagIn | None) -> MetaTag | None:
    if payload is None:
        return None
    return MetaTag(title=payload.title, description=payload.description, cover_image=payload.cover_image)


def build_components(payloads: list[ComponentIn]) -> list[Component]:
    return [
        Component(type=payload.type, props=copy.deepcopy(payload.props), position=position)
        for position, payload in enumerate(payloads)
    ]


def build_files(payloads: list[LandingFileIn]) -> list[LandingContentFile]:
    return [
        LandingContentFile(
            name=payload.name.strip(),
            download_url=payload.download_url.strip(),
            file_type=normalize_file_type(payload.file_type).value,
        )
        for payload in payloads
    ]


def build_content(kind: PageKind, fields: dict[str, Any], payload: ContentIn, categories: list) -> Any:
    """New content row from normalised ``fields`` plus the payload's owned sub-resources."""
    content = kind.content_model(**fields)
    content.meta_tag = build_meta_tag(payload.meta_tag)
    content.components = build_components(payload.components)
    content.categories = list(categories)
    if kind.has_files:
        content.files = build_files(getattr(payload, "files", []))
    return content


def apply_content(kind: PageKind, content: Any, fields: dict[str, Any], payload: ContentIn, categories: list) -> Any:
    """Overwrite every content field and owned sub-resource of an existing row in place."""
    for name, value in fields.items():
        setattr(content, name, value)
    content.meta_tag = build_meta_tag(payload.meta_tag)
    content.components = build_components(payload.components)
    content.categories = list(categories)
    if kind.has_files:
        content.files = build_files(getattr(payload, "files", []))
    return content


def clone_content(kind: PageKind, source: Any, **overrides: Any) -> Any:
    """Copy of ``source`` without ids or revision; categories are linked, not copied."""
    fields = {name: getattr(source, name) for name in kind.content_fields}
    fields["approval_email"] = list(source.approval_email or [])
    fields.update(overrides)

    clone = kind.content_model(**fields)
    if source.meta_tag is not None:
        clone.meta_tag = MetaTag(
            title=source.meta_tag.title,
            description=source.meta_tag.description,
            cover_image=source.meta_tag.cover_image,
        )
    clone.components = [
        Component(type=component.type, props=copy.deepcopy(component.props), position=component.position)
        for component in source.components
    ]
    clone.categories = list(source.categories)
    if kind.has_files:
        clone.files = [
            LandingContentFile(name=file.name, download_url=file.download_url, file_type=file.file_type)
            for file in source.files
        ]
    return clone
