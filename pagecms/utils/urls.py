"""
URL helpers for content versions.

Normalisation of page URLs and aliases, the random suffix used when pages
are cloned, and the preview / editor links handed to front-ends.
"""

import logging
import re
import secrets
import string
from urllib.parse import urlencode, urlsplit, urlunsplit
from uuid import UUID

from pagecms.utils.slugify import slugify

logger = logging.getLogger(__name__)

SUFFIX_ALPHABET = string.ascii_letters + string.digits

_whitespace = re.compile(r"\s+")
_slashes = re.compile(r"/{2,}")


def normalize_path(value: str | None) -> str:
    """Trim a URL path, turn inner whitespace into hyphens and force a single leading slash.

    An empty value stays empty so callers can tell "no alias" apart from "/".
    """
    if value is None:
        return ""
    path = _whitespace.sub("-", value.strip())
    if not path:
        return ""
    path = _slashes.sub("/", "/" + path.lstrip("/"))
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def url_from_title(title: str | None) -> str:
    slug = slugify(title)
    return f"/{slug}" if slug else ""


def random_suffix(length: int = 3) -> str:
    return "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(length))


def with_suffix(path: str, suffix: str) -> str:
    if not path:
        return path
    return f"{path}-{suffix}"


def build_preview_url(base_url: str, language: str, page_kind: str, content_id: UUID) -> str:
    """Build ``{base}/preview/{language}/{kind}?id={content_id}``.

    A missing base yields a relative link.
    """
    if not base_url:
        logger.warning("Preview base URL is not configured. Preview URL will be a relative path.")
    parts = urlsplit(base_url.rstrip("/")) if base_url else urlsplit("")
    path = "/".join([parts.path.rstrip("/"), "preview", language.lower(), page_kind])
    return urlunsplit((parts.scheme, parts.netloc, path, urlencode({"id": str(content_id)}), ""))


def build_cms_edit_url(base_url: str, page_kind: str, page_id: UUID, content_id: UUID, language: str) -> str:
    if not base_url:
        logger.warning("CMS base URL is not configured. CMS URL will be a relative path.")
    base = base_url.rstrip("/") if base_url else ""
    return f"{base}/{page_kind}-pages/{page_id}/content/{content_id}/edit?lang={language.lower()}"
