"""
Context menu entries for the MIME actions.

Show & Copy and Search work on the selected messages; Set/Insert
Content-Type needs an editable request and is only offered with one.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .actions import MessageEditor, MimeActions

MENU_ITEM_TEXT_SHOW_COPY = "Show & Copy Response MIME Type"
MENU_ITEM_TEXT_SEARCH_ONLINE = "Search this MIME Type Online"
MENU_ITEM_TEXT_SET_MIME = "Set/Insert Content-Type"


class ToolType(Enum):
    PROXY = "proxy"
    REPEATER = "repeater"
    TARGET = "target"
    LOGGER = "logger"
    INTRUDER = "intruder"
    EXTENSIONS = "extensions"
    SCANNER = "scanner"
    DECODER = "decoder"
    COMPARER = "comparer"


SUPPORTED_TOOLS = frozenset({
    ToolType.PROXY,
    ToolType.REPEATER,
    ToolType.TARGET,
    ToolType.LOGGER,
    ToolType.INTRUDER,
    ToolType.EXTENSIONS,
})


@dataclass
class ContextMenuEvent:
    tool_type: ToolType
    selected_flows: list = field(default_factory=list)
    editor: Optional[MessageEditor] = None


@dataclass(frozen=True)
class MenuItem:
    label: str
    action_id: str = ""
    callback: Optional[Callable] = field(default=None, compare=False)

    @property
    def is_separator(self) -> bool:
        return self.callback is None

    def __call__(self):
        if self.callback is not None:
            return self.callback()
        return None


SEPARATOR = MenuItem("-", "separator")


class MimeContextMenuProvider:
    """
    Build the MIME entries of a context menu.

    Args:
        actions: the actions run by the entries
        pick: called by Set/Insert Content-Type to get a MIME type from the
            user; returns None when the user cancels
    """

    def __init__(self, actions: MimeActions, pick: Callable[[], Optional[str]]):
        self.actions = actions
        self.pick = pick

    def provide_menu_items(self, event: ContextMenuEvent) -> Optional[List[MenuItem]]:
        if event.tool_type not in SUPPORTED_TOOLS:
            return None

        items: List[MenuItem] = []
        selected = list(event.selected_flows)

        if selected:
            items.append(MenuItem(
                MENU_ITEM_TEXT_SHOW_COPY, "show_copy",
                lambda: self.actions.show_copy(selected)))
            items.append(MenuItem(
                MENU_ITEM_TEXT_SEARCH_ONLINE, "search_online",
                lambda: self.actions.search_online(selected)))

        if event.editor is not None:
            if items:
                items.append(SEPARATOR)
            editor = event.editor
            items.append(MenuItem(
                MENU_ITEM_TEXT_SET_MIME, "set_content_type",
                lambda: self.actions.set_content_type(editor, self.pick())))

        return items or None
