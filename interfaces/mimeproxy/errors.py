"""
Exceptions raised by the MIME actions.

Every action catches these at its own boundary and reports them through the
injected Dialog, so none of them ever reaches the proxy.
"""


class MimeProxyError(Exception):
    """Base class for MIME Proxy errors"""


class NoResponseError(MimeProxyError):
    """The selected message has no response"""

    def __init__(self, message: str = "This message has no response."):
        super().__init__(message)


class MimeTypeUndeterminedError(MimeProxyError):
    """Neither a Content-Type header nor the inferred type gave a MIME type"""

    def __init__(self, message: str = "Could not find or infer MIME type from response."):
        super().__init__(message)


class ClipboardError(MimeProxyError):
    """Writing to the clipboard failed"""


class BrowserLaunchError(MimeProxyError):
    """Opening the search URL in a browser failed"""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class BrowserUnavailableError(BrowserLaunchError):
    """No browser can be launched on this system"""

    def __init__(self, url: str):
        super().__init__(f"Could not open browser automatically. Search URL:\n{url}", url)


class NoEditableRequestError(MimeProxyError):
    """The context has no editable request"""


class NoSelectionError(MimeProxyError):
    """The picker was confirmed without a selected MIME type"""

    def __init__(self, message: str = "Please select a MIME type."):
        super().__init__(message)


class PickerClosedError(MimeProxyError):
    """The picker was already confirmed or cancelled"""
