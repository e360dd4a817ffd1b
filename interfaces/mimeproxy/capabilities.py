"""
Host capabilities used by the MIME actions.

The actions only talk to these interfaces, so they run the same inside
mitmproxy, behind the HTTP API, or in tests.
"""

import logging
import webbrowser
from abc import ABC, abstractmethod
from typing import List, Tuple

import pyperclip
from mitmproxy.log import ALERT

from .errors import BrowserLaunchError, BrowserUnavailableError, ClipboardError

logger = logging.getLogger(__name__)


class Clipboard(ABC):
    @abstractmethod
    def copy(self, text: str):
        """Place text on the clipboard. Raises ClipboardError on failure."""


class BrowserLauncher(ABC):
    @abstractmethod
    def open(self, url: str):
        """Open url in a browser. Raises BrowserLaunchError on failure."""


class Dialog(ABC):
    @abstractmethod
    def info(self, message: str):
        pass

    @abstractmethod
    def warning(self, message: str):
        pass

    @abstractmethod
    def error(self, message: str):
        pass


class SystemClipboard(Clipboard):
    """System clipboard through pyperclip"""

    def copy(self, text: str):
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e


class SystemBrowserLauncher(BrowserLauncher):
    """Default desktop browser through the webbrowser module"""

    def open(self, url: str):
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as e:
            raise BrowserUnavailableError(url) from e
        except OSError as e:
            raise BrowserLaunchError(str(e), url) from e
        if not opened:
            raise BrowserUnavailableError(url)


class LogDialog(Dialog):
    """Report messages through logging; mitmproxy shows ALERT records in its UI"""

    def __init__(self, title: str = "MIME Type Generator"):
        self.title = title

    def info(self, message: str):
        logger.log(ALERT, f"[{self.title}] {message}")

    def warning(self, message: str):
        logger.warning(f"[{self.title}] {message}")

    def error(self, message: str):
        logger.error(f"[{self.title}] {message}")


class RecordingDialog(Dialog):
    """Keep messages so they can be returned to an API client"""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def info(self, message: str):
        self.messages.append(("info", message))

    def warning(self, message: str):
        self.messages.append(("warning", message))

    def error(self, message: str):
        self.messages.append(("error", message))

    def as_dicts(self):
        return [{"level": level, "message": message} for level, message in self.messages]


class MemoryClipboard(Clipboard):
    """Clipboard kept in memory, for headless runs"""

    def __init__(self):
        self.contents = None

    def copy(self, text: str):
        self.contents = text


class RecordingBrowser(BrowserLauncher):
    """Browser launcher that only remembers the URLs it was asked to open"""

    def __init__(self):
        self.opened: List[str] = []

    def open(self, url: str):
        self.opened.append(url)
