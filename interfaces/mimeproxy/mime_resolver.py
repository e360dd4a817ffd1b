"""
Extract the MIME type of an HTTP response.

The Content-Type header wins. When it is missing (or empty once its
parameters are stripped) the inferred type is used instead, and the inferred
placeholder "Unknown" means the type could not be determined.
"""

from collections.abc import Mapping
from typing import Iterable, Optional, Tuple, Union

from mitmproxy.http import Headers

from .flow_utils import safe_response_content
from .mime_sniffer import UNKNOWN_MIME_TYPE, infer_mime_type

CONTENT_TYPE = "Content-Type"

HeaderSet = Union[Headers, Mapping, Iterable[Tuple[str, str]]]


def strip_parameters(value: str) -> str:
    """Keep the part of a media type before the first ';', trimmed."""
    return value.split(";", 1)[0].strip()


def _header_pairs(headers: Optional[HeaderSet]):
    if headers is None:
        return []
    if isinstance(headers, Headers):
        return headers.items(multi=True)
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


def find_content_type(headers: Optional[HeaderSet]) -> Optional[str]:
    """Return the raw value of the first Content-Type header, or None."""
    for name, value in _header_pairs(headers):
        if name.lower() == CONTENT_TYPE.lower():
            return value
    return None


def resolve(headers: Optional[HeaderSet], inferred_type: Optional[str]) -> Optional[str]:
    """
    Resolve the MIME type of a response.

    Args:
        headers: response headers (mitmproxy Headers, a mapping or (name, value) pairs)
        inferred_type: best-guess type used when no usable header is present

    Returns:
        The parameter-less MIME type, or None when it cannot be determined.
        A header value of "Unknown" is returned as-is; only an inferred
        "Unknown" counts as undetermined.
    """
    header_value = find_content_type(headers)
    if header_value is not None:
        mime_type = strip_parameters(header_value)
        if mime_type:
            return mime_type

    mime_type = strip_parameters(inferred_type or "")
    if not mime_type or mime_type.lower() == UNKNOWN_MIME_TYPE.lower():
        return None
    return mime_type


def resolve_response(response, request=None) -> Optional[str]:
    """Resolve the MIME type of a mitmproxy response, sniffing the body as the fallback."""
    if response is None:
        return None
    header_value = find_content_type(response.headers)
    if header_value is not None and strip_parameters(header_value):
        # the body is only sniffed when the header gives nothing
        return resolve(response.headers, UNKNOWN_MIME_TYPE)
    path = request.path if request is not None else ""
    inferred = infer_mime_type(safe_response_content(response), path)
    return resolve(response.headers, inferred)
