"""
mitmproxy commands for the MIME actions.

Run inside mitmproxy with the `mimeproxy_addon.py` script at the project root:

    mitmproxy -s mimeproxy_addon.py

then, on the focused flow:

    :mime.copy @focus
    :mime.search @focus
    :mime.set @focus application/json
"""

import logging
from collections.abc import Sequence
from typing import List, Optional

from mitmproxy import command, ctx, flow, http, types
from mitmproxy.hooks import UpdateHook
from mitmproxy.log import ALERT

from core.config import Config
from .actions import DEFAULT_SEARCH_URL, MessageEditor, MimeActions
from .capabilities import LogDialog, SystemBrowserLauncher, SystemClipboard
from .errors import MimeProxyError
from .mime_catalog import MIME_TYPES, filter_catalog
from .mime_resolver import resolve_response
from .picker import pick_mime_type

logger = logging.getLogger(__name__)


def _http_flows(flows: Sequence[flow.Flow]) -> List[http.HTTPFlow]:
    return [f for f in flows if isinstance(f, http.HTTPFlow)]


class MimeCommands:
    def __init__(self, actions: Optional[MimeActions] = None, extension_name: Optional[str] = None):
        if actions is None:
            title = extension_name or Config.get_instance().get_config_value_by_path("mime.extension_name")
            actions = MimeActions(SystemClipboard(), SystemBrowserLauncher(), LogDialog(title=title))
        self.actions = actions

    def load(self, loader):
        loader.add_option(
            "mime_search_url", str, DEFAULT_SEARCH_URL,
            "Search URL opened by mime.search; {query} is replaced by the MIME type."
        )

    def configure(self, updated):
        if "mime_search_url" in updated:
            self.actions.search_url = ctx.options.mime_search_url

    @command.command("mime.options")
    def options(self) -> Sequence[str]:
        """The MIME types offered by mime.set."""
        return list(MIME_TYPES)

    @command.command("mime.filter")
    def filter(self, term: str) -> Sequence[str]:
        """MIME types containing term, ignoring case."""
        return filter_catalog(MIME_TYPES, term)

    @command.command("mime.show")
    def show(self, flows: Sequence[flow.Flow]) -> None:
        """Show the response MIME type of each flow."""
        for f in _http_flows(flows):
            if f.response is None:
                logger.log(ALERT, f"{f.request.url}: no response")
                continue
            mime_type = resolve_response(f.response, f.request)
            logger.log(ALERT, f"{f.request.url}: {mime_type or 'undetermined'}")

    @command.command("mime.copy")
    def copy(self, flows: Sequence[flow.Flow]) -> None:
        """Show and copy the response MIME type of the first flow."""
        self.actions.show_copy(_http_flows(flows))

    @command.command("mime.search")
    def search(self, flows: Sequence[flow.Flow]) -> None:
        """Search the web for the response MIME type of the first flow."""
        self.actions.search_online(_http_flows(flows))

    @command.command("mime.set")
    @command.argument("mime_type", type=types.Choice("mime.options"))
    def set(self, flows: Sequence[flow.Flow], mime_type: str) -> None:
        """Insert or replace the request Content-Type of each flow."""
        try:
            mime_type = pick_mime_type("", mime_type)
        except (ValueError, MimeProxyError) as e:
            self.actions.dialog.error(str(e))
            return

        updated = []
        for f in _http_flows(flows):
            if self.actions.set_content_type(MessageEditor(f), mime_type) is not None:
                updated.append(f)
        if updated:
            ctx.master.addons.trigger(UpdateHook(updated))
