"""
Best-guess MIME type of a response body.

mitmproxy has no "inferred MIME type" on its responses, so this supplies one:
libmagic's answer for the start of the body first, then the extension of the
request path.
"""

import mimetypes
import posixpath
from typing import Optional
from urllib.parse import urlsplit

import magic

UNKNOWN_MIME_TYPE = "Unknown"

# libmagic only needs the head of the body
SNIFF_LENGTH = 4096

# libmagic's answers when it recognised nothing in particular
UNINFORMATIVE_TYPES = frozenset({
    "application/octet-stream",
    "text/plain",
    "inode/x-empty",
    "application/x-empty",
})


def sniff_content(content: bytes) -> Optional[str]:
    """Return the MIME type libmagic reads from the body, or None."""
    # some servers put blank lines before <!DOCTYPE>
    head = (content or b"")[:SNIFF_LENGTH].lstrip()
    if not head:
        return None
    try:
        mime_type = magic.from_buffer(head, mime=True)
    except magic.MagicException:
        return None
    if not mime_type or mime_type in UNINFORMATIVE_TYPES:
        return None
    return mime_type


def guess_from_path(path: str) -> Optional[str]:
    """Guess a MIME type from the extension of a request path."""
    if not path:
        return None
    filename = posixpath.basename(urlsplit(path).path)
    if "." not in filename:
        return None
    mime_type, _ = mimetypes.guess_type(filename, strict=False)
    return mime_type


def infer_mime_type(content: Optional[bytes], path: str = "") -> str:
    """
    Infer the MIME type of a response body.

    Args:
        content: decoded response body
        path: request path, used when the body gives no answer

    Returns:
        A MIME type, or "Unknown" when nothing matched.
    """
    return sniff_content(content or b"") or guess_from_path(path) or UNKNOWN_MIME_TYPE
