import pytest
from mitmproxy import http
from mitmproxy.test import tflow, tutils

from interfaces.mimeproxy.actions import MimeActions
from interfaces.mimeproxy.capabilities import MemoryClipboard, RecordingBrowser, RecordingDialog


def make_flow(headers=None, content=b"", path="/path", response=True):
    """An HTTP flow whose response carries the given headers and body."""
    request = tutils.treq(path=path.encode())
    if not response:
        return tflow.tflow(req=request)
    resp = http.Response.make(200, content, headers or {})
    return tflow.tflow(req=request, resp=resp)


@pytest.fixture
def flow_factory():
    return make_flow


@pytest.fixture
def dialog() -> RecordingDialog:
    return RecordingDialog()


@pytest.fixture
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()


@pytest.fixture
def browser() -> RecordingBrowser:
    return RecordingBrowser()


@pytest.fixture
def actions(clipboard, browser, dialog) -> MimeActions:
    return MimeActions(clipboard, browser, dialog)
