"""Tests for the show/copy, search and set Content-Type actions."""

from interfaces.mimeproxy.actions import (
    MessageEditor,
    MimeActions,
    build_search_url,
    with_header,
)
from interfaces.mimeproxy.capabilities import Clipboard, BrowserLauncher
from interfaces.mimeproxy.errors import BrowserLaunchError, BrowserUnavailableError, ClipboardError


class FailingClipboard(Clipboard):
    def copy(self, text: str):
        raise ClipboardError("no clipboard mechanism")


class NoBrowser(BrowserLauncher):
    def open(self, url: str):
        raise BrowserUnavailableError(url)


class BrokenBrowser(BrowserLauncher):
    def open(self, url: str):
        raise BrowserLaunchError("permission denied", url)


def test_show_copy_copies_stripped_type(actions, clipboard, dialog, flow_factory) -> None:
    flow = flow_factory({"Content-Type": "text/html; charset=utf-8"})
    assert actions.show_copy([flow]) == "text/html"
    assert clipboard.contents == "text/html"
    assert dialog.messages == [("info", "MIME Type copied: text/html")]


def test_show_copy_uses_first_selected_flow(actions, clipboard, flow_factory) -> None:
    first = flow_factory({"Content-Type": "image/png"})
    second = flow_factory({"Content-Type": "text/css"})
    actions.show_copy([first, second])
    assert clipboard.contents == "image/png"


def test_show_copy_without_response(actions, clipboard, dialog, flow_factory) -> None:
    flow = flow_factory(response=False)
    assert actions.show_copy([flow]) is None
    assert clipboard.contents is None
    assert dialog.messages == [("warning", "This message has no response.")]


def test_show_copy_with_empty_selection(actions, dialog) -> None:
    assert actions.show_copy([]) is None
    assert dialog.messages[0][0] == "warning"


def test_show_copy_undetermined(actions, clipboard, dialog, flow_factory) -> None:
    flow = flow_factory({}, b"")
    assert actions.show_copy([flow]) is None
    assert clipboard.contents is None
    assert dialog.messages == [("info", "Could not find or infer MIME type from response.")]


def test_show_copy_clipboard_failure(browser, dialog, flow_factory) -> None:
    actions = MimeActions(FailingClipboard(), browser, dialog)
    flow = flow_factory({"Content-Type": "text/plain"})
    assert actions.show_copy([flow]) is None
    assert dialog.messages == [("error", "Error copying to clipboard: no clipboard mechanism")]


def test_search_online_opens_encoded_url(actions, browser, dialog, flow_factory) -> None:
    flow = flow_factory({"Content-Type": "application/ld+json; profile=x"})
    url = actions.search_online([flow])
    assert url == "https://www.google.com/search?q=application%2Fld%2Bjson"
    assert browser.opened == [url]
    assert dialog.messages == []


def test_search_online_undetermined(actions, browser, dialog, flow_factory) -> None:
    flow = flow_factory({}, b"")
    assert actions.search_online([flow]) is None
    assert browser.opened == []
    assert dialog.messages == [
        ("info", "Could not find 'Content-Type' header and could not infer MIME type to search.")
    ]


def test_search_online_without_response(actions, dialog, flow_factory) -> None:
    assert actions.search_online([flow_factory(response=False)]) is None
    assert dialog.messages == [("warning", "This message has no response.")]


def test_search_online_without_browser_shows_url(clipboard, dialog, flow_factory) -> None:
    actions = MimeActions(clipboard, NoBrowser(), dialog)
    url = actions.search_online([flow_factory({"Content-Type": "text/css"})])
    assert url == "https://www.google.com/search?q=text%2Fcss"
    level, message = dialog.messages[0]
    assert level == "warning"
    assert message.endswith(url)


def test_search_online_browser_error(clipboard, dialog, flow_factory) -> None:
    actions = MimeActions(clipboard, BrokenBrowser(), dialog)
    actions.search_online([flow_factory({"Content-Type": "text/css"})])
    assert dialog.messages == [("error", "Error trying to open browser: permission denied")]


def test_search_url_template() -> None:
    assert build_search_url("text/html", "https://duckduckgo.com/?q={query}") == \
        "https://duckduckgo.com/?q=text%2Fhtml"


def test_with_header_returns_new_request(flow_factory) -> None:
    request = flow_factory().request
    request.headers["content-type"] = "text/plain"
    modified = with_header(request, "Content-Type", "application/json")
    assert modified is not request
    assert modified.headers.get_all("Content-Type") == ["application/json"]
    assert request.headers["Content-Type"] == "text/plain"


def test_with_header_adds_missing_header(flow_factory) -> None:
    request = flow_factory().request
    assert "Content-Type" not in request.headers
    modified = with_header(request, "Content-Type", "text/xml")
    assert modified.headers["Content-Type"] == "text/xml"
    assert "Content-Type" not in request.headers


def test_set_content_type_replaces_editor_request(actions, flow_factory) -> None:
    flow = flow_factory()
    original = flow.request
    changed = []
    editor = MessageEditor(flow, on_change=changed.append)

    new_request = actions.set_content_type(editor, "multipart/form-data")

    assert flow.request is new_request
    assert flow.request is not original
    assert flow.request.headers["Content-Type"] == "multipart/form-data"
    assert "Content-Type" not in original.headers
    assert changed == [flow]


def test_set_content_type_cancelled(actions, dialog, flow_factory) -> None:
    flow = flow_factory()
    original = flow.request
    assert actions.set_content_type(MessageEditor(flow), None) is None
    assert flow.request is original
    assert dialog.messages == []


def test_set_content_type_without_editor(actions, dialog) -> None:
    assert actions.set_content_type(None, "text/html") is None
    assert dialog.messages == [("warning", "This action requires an editable message editor context.")]


def test_set_content_type_without_request(actions, dialog) -> None:
    assert actions.set_content_type(MessageEditor(None), "text/html") is None
    assert dialog.messages == [
        ("warning", "Cannot set MIME type: No request is currently available in the editor.")
    ]
