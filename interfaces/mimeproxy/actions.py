"""
MIME type actions offered on captured HTTP messages.

Each action is independent: it resolves what it needs from the flows it is
given, reports the outcome through the Dialog and never lets an error escape.
"""

import logging
from typing import Callable, Optional, Sequence
from urllib.parse import quote_plus

from .capabilities import BrowserLauncher, Clipboard, Dialog
from .errors import (
    BrowserLaunchError,
    BrowserUnavailableError,
    ClipboardError,
    MimeTypeUndeterminedError,
    NoEditableRequestError,
    NoResponseError,
)
from .flow_utils import first_flow
from .mime_resolver import CONTENT_TYPE, resolve_response

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "https://www.google.com/search?q={query}"


def build_search_url(mime_type: str, template: str = DEFAULT_SEARCH_URL) -> str:
    return template.format(query=quote_plus(mime_type))


def with_header(request, name: str, value: str):
    """Return a copy of request with header name set to value (added or replaced)."""
    new_request = request.copy()
    new_request.headers[name] = value
    return new_request


class MessageEditor:
    """An editable request: the one behind an intercepted or replayed flow"""

    def __init__(self, flow, on_change: Optional[Callable] = None):
        self.flow = flow
        self.on_change = on_change

    @property
    def request(self):
        return self.flow.request if self.flow is not None else None

    def set_request(self, request):
        self.flow.request = request
        if self.on_change:
            self.on_change(self.flow)


class MimeActions:
    """Show/copy, search and set actions bound to a set of host capabilities"""

    def __init__(self, clipboard: Clipboard, browser: BrowserLauncher, dialog: Dialog,
                 search_url: str = DEFAULT_SEARCH_URL):
        self.clipboard = clipboard
        self.browser = browser
        self.dialog = dialog
        self.search_url = search_url

    def resolve_selected(self, flows: Sequence) -> str:
        """
        Resolve the MIME type of the first selected flow's response.

        Raises:
            NoResponseError: nothing selected or the flow has no response
            MimeTypeUndeterminedError: no header and nothing could be inferred
        """
        flow = first_flow(flows)
        if flow is None or flow.response is None:
            raise NoResponseError()
        mime_type = resolve_response(flow.response, flow.request)
        if mime_type is None:
            raise MimeTypeUndeterminedError()
        return mime_type

    def show_copy(self, flows: Sequence) -> Optional[str]:
        """Copy the response MIME type of the first selected flow and show it."""
        try:
            mime_type = self.resolve_selected(flows)
        except NoResponseError as e:
            self.dialog.warning(str(e))
            logger.info("Show/Copy MIME: No response in selected message.")
            return None
        except MimeTypeUndeterminedError as e:
            self.dialog.info(str(e))
            logger.info("Show/Copy MIME: Could not determine MIME type.")
            return None

        try:
            self.clipboard.copy(mime_type)
        except ClipboardError as e:
            logger.error(f"Error copying MIME type to clipboard: {e}")
            self.dialog.error(f"Error copying to clipboard: {e}")
            return None

        self.dialog.info(f"MIME Type copied: {mime_type}")
        logger.info(f"Copied MIME Type: {mime_type}")
        return mime_type

    def search_online(self, flows: Sequence) -> Optional[str]:
        """Open a web search for the response MIME type. Returns the search URL."""
        try:
            mime_type = self.resolve_selected(flows)
        except NoResponseError as e:
            self.dialog.warning(str(e))
            return None
        except MimeTypeUndeterminedError:
            self.dialog.info("Could not find 'Content-Type' header and could not infer MIME type to search.")
            return None

        url = build_search_url(mime_type, self.search_url)
        try:
            self.browser.open(url)
        except BrowserUnavailableError as e:
            self.dialog.warning(str(e))
            logger.info(f"Could not open browser automatically. URL to search: {e.url}")
            return url
        except BrowserLaunchError as e:
            logger.error(f"Error trying to open browser for MIME type search: {e}")
            self.dialog.error(f"Error trying to open browser: {e}")
            return url

        logger.info(f"Opening browser to search for MIME Type: {mime_type}")
        return url

    def set_content_type(self, editor: Optional[MessageEditor], mime_type: Optional[str]):
        """
        Insert or replace the Content-Type header of the editor's request.

        Args:
            editor: the editable request, or None outside an editor
            mime_type: the picked MIME type, None when the picker was cancelled

        Returns:
            The new request, or None when nothing was changed.
        """
        try:
            if editor is None:
                raise NoEditableRequestError("This action requires an editable message editor context.")
            if editor.request is None:
                raise NoEditableRequestError(
                    "Cannot set MIME type: No request is currently available in the editor.")
        except NoEditableRequestError as e:
            self.dialog.warning(str(e))
            logger.info(f"Set Content-Type: {e}")
            return None

        if not mime_type:
            logger.info("Set Content-Type operation cancelled by user.")
            return None

        modified_request = with_header(editor.request, CONTENT_TYPE, mime_type)
        editor.set_request(modified_request)
        logger.info(f"Content-Type set to: {mime_type}")
        return modified_request
