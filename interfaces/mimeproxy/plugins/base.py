"""
Interception plugins

A plugin sees every proxied flow and may add entries to the context menu.
Plugins are discovered by the plugin manager in proxy_core.
"""

from typing import Any, Callable, Dict, List, Optional


class InterceptionPlugin:
    """Hooks called by the interceptor addon; the defaults do nothing."""

    def __init__(self, name: str, description: str, enabled: bool = False):
        """
        Args:
            name: unique name, used by the API to address the plugin
            description: one line shown in the plugin list
            enabled: initial state
        """
        self.name = name
        self.description = description
        self.enabled = enabled
        self.config: Dict[str, Any] = {}

    def process_request(self, flow) -> bool:
        """Inspect a request; return True to answer it with a 403 instead of forwarding."""
        return False

    def process_response(self, flow):
        """Inspect or tag a response before it is stored."""

    def provide_menu_items(self, event, actions, pick: Optional[Callable[[], Optional[str]]] = None) -> Optional[List]:
        """
        Context menu entries for a selection.

        Args:
            event: ContextMenuEvent describing the tool, selection and editor
            actions: MimeActions bound to the caller's clipboard, browser and dialog
            pick: asks the user for a MIME type, None when cancelled

        Returns:
            A list of MenuItem, or None when the plugin adds nothing.
        """
        return None

    def on_enable(self):
        pass

    def on_disable(self):
        pass
