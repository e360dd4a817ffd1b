"""
MIME Type Generator Plugin

Tag every response with its resolved MIME type and contribute the
Show & Copy, Search and Set/Insert Content-Type context menu entries.
"""

from .base import InterceptionPlugin
from ..context_menu import MimeContextMenuProvider
from ..mime_resolver import resolve_response

METADATA_KEY = "mime_type"


class MimeTypeGeneratorPlugin(InterceptionPlugin):
    """Plugin exposing the response MIME type utilities"""

    def __init__(self):
        super().__init__(
            "MIME Type Generator",
            "Show, copy and search response MIME types; set request Content-Type",
            enabled=True
        )
        self.config = {
            "tag_responses": True
        }

    def process_response(self, flow):
        if not self.enabled or not self.config.get("tag_responses", True):
            return
        flow.metadata[METADATA_KEY] = resolve_response(flow.response, flow.request)

    def provide_menu_items(self, event, actions, pick=None):
        if not self.enabled:
            return None
        provider = MimeContextMenuProvider(actions, pick or (lambda: None))
        return provider.provide_menu_items(event)
