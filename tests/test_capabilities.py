"""Tests for the system clipboard and browser capabilities."""

import webbrowser

import pyperclip
import pytest

from interfaces.mimeproxy.capabilities import SystemBrowserLauncher, SystemClipboard
from interfaces.mimeproxy.errors import BrowserLaunchError, BrowserUnavailableError, ClipboardError


def test_system_clipboard_copies(monkeypatch) -> None:
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)
    SystemClipboard().copy("text/html")
    assert copied == ["text/html"]


def test_system_clipboard_failure(monkeypatch) -> None:
    def fail(text):
        raise pyperclip.PyperclipException("no copy/paste mechanism")

    monkeypatch.setattr(pyperclip, "copy", fail)
    with pytest.raises(ClipboardError, match="no copy/paste mechanism"):
        SystemClipboard().copy("text/html")


def test_browser_unavailable(monkeypatch) -> None:
    monkeypatch.setattr(webbrowser, "open", lambda url: False)
    with pytest.raises(BrowserUnavailableError) as excinfo:
        SystemBrowserLauncher().open("https://www.google.com/search?q=text%2Fhtml")
    assert excinfo.value.url == "https://www.google.com/search?q=text%2Fhtml"


def test_browser_os_error(monkeypatch) -> None:
    def fail(url):
        raise OSError("permission denied")

    monkeypatch.setattr(webbrowser, "open", fail)
    with pytest.raises(BrowserLaunchError) as excinfo:
        SystemBrowserLauncher().open("https://example.com")
    assert not isinstance(excinfo.value, BrowserUnavailableError)


def test_browser_opens(monkeypatch) -> None:
    opened = []
    monkeypatch.setattr(webbrowser, "open", lambda url: opened.append(url) or True)
    SystemBrowserLauncher().open("https://example.com")
    assert opened == ["https://example.com"]
