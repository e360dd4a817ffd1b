"""
Predefined MIME types offered by the Content-Type picker.
"""

from typing import Iterable, List

MIME_TYPES = (
    # Application types
    "application/atom+xml",
    "application/EDI-X12",
    "application/EDIFACT",
    "application/graphql",
    "application/javascript",
    "application/json",
    "application/ld+json",
    "application/msword",
    "application/octet-stream",
    "application/ogg",
    "application/pdf",
    "application/pkcs8",
    "application/postscript",
    "application/rdf+xml",
    "application/rss+xml",
    "application/rtf",
    "application/soap+xml",
    "application/vnd.api+json",
    "application/vnd.ms-excel",
    "application/vnd.ms-powerpoint",
    "application/vnd.oasis.opendocument.presentation",
    "application/vnd.oasis.opendocument.spreadsheet",
    "application/vnd.oasis.opendocument.text",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/x-7z-compressed",
    "application/x-bzip",
    "application/x-bzip2",
    "application/x-csh",
    "application/x-www-form-urlencoded",
    "application/xhtml+xml",
    "application/xml",
    "application/zip",
    # Audio types
    "audio/aac",
    "audio/midi",
    "audio/mpeg",
    "audio/ogg",
    "audio/opus",
    "audio/wav",
    "audio/webm",
    # Font types
    "font/otf",
    "font/ttf",
    "font/woff",
    "font/woff2",
    # Image types
    "image/apng",
    "image/bmp",
    "image/gif",
    "image/jpeg",
    "image/png",
    "image/svg+xml",
    "image/tiff",
    "image/webp",
    "image/x-icon",
    # Multipart types
    "multipart/form-data",
    "multipart/mixed",
    "multipart/alternative",
    "multipart/related",
    # Text types
    "text/calendar",
    "text/css",
    "text/csv",
    "text/html",
    "text/javascript",  # obsolete, kept for legacy servers
    "text/plain",
    "text/markdown",
    "text/rtf",
    "text/sgml",
    "text/xml",
    "text/yaml",
    # Video types
    "video/mpeg",
    "video/mp4",
    "video/ogg",
    "video/quicktime",
    "video/webm",
    "video/x-msvideo",
)


def filter_catalog(catalog: Iterable[str], term: str) -> List[str]:
    """Entries containing term (case-insensitive), in catalog order. An empty term keeps everything."""
    needle = (term or "").lower()
    return [mime_type for mime_type in catalog if needle in mime_type.lower()]
