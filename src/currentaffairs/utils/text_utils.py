"""Text processing utilities."""

import hashlib
import re
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

_TAG_RE = re.compile(r"<[^>]*>")

# "&amp;" goes last so "&amp;lt;" decodes to "&lt;", never to "<"
_ENTITIES = (
    ("&quot;", '"'),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&nbsp;", " "),
    ("&amp;", "&"),
)


def normalize_url(url: str) -> str:
    """Normalize URL by removing tracking parameters and fragments.

    Args:
        url: URL to normalize

    Returns:
        Normalized URL
    """
    parsed = urlparse(url)

    tracking_params = {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "fbclid",
        "gclid",
        "ref",
    }

    query_params = parse_qs(parsed.query)
    clean_params = {
        k: v for k, v in query_params.items() if k.lower() not in tracking_params
    }
    clean_query = urlencode(clean_params, doseq=True) if clean_params else ""

    normalized = urlunparse(
        (
            parsed.scheme,
            parsed.netloc.lower(),
            parsed.path,
            parsed.params,
            clean_query,
            "",
        )
    )

    if normalized.endswith("/"):
        normalized = normalized[:-1]

    return normalized


def content_hash(title: str, body: str) -> str:
    """Fingerprint title+body so identical content maps to one cache key.

    Whitespace runs are collapsed and case is folded before hashing.
    """
    normalized = clean_whitespace(f"{title}\n{body}").lower()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def extract_text_from_html(html: str) -> str:
    """Strip tags from an HTML fragment and decode the common entities.

    Used on RSS descriptions, which feeds ship as entity-encoded HTML.
    """
    text = _TAG_RE.sub("", html or "")
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text.strip()


def truncate_words(text: str, max_words: int) -> str:
    """Keep at most ``max_words`` whitespace-separated words."""
    words = text.split()
    if len(words) <= max_words:
        return text.strip()
    return " ".join(words[:max_words])


def clean_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and strip the ends."""
    return re.sub(r"\s+", " ", text).strip()


def title_prefix(title: str, length: int = 10) -> str:
    """First ``length`` characters of a title with all whitespace removed."""
    return re.sub(r"\s", "", title)[:length]


def extract_domain(url: str) -> str:
    """Extract lowercased host from URL."""
    return urlparse(url).netloc.lower()

