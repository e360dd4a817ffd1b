# Shared helpers for flow/response handling. Use these to avoid BadGzipFile when
# Content-Encoding says gzip but the body is not (e.g. raw HTML).


def safe_response_content(flow_response):
    """Return response body bytes. On ValueError (e.g. BadGzipFile), return raw_content."""
    if not flow_response:
        return b""
    try:
        return flow_response.content or b""
    except ValueError:
        return getattr(flow_response, "raw_content", None) or b""


def safe_response_size(flow_response):
    """Return response body length. Avoids flow.response.content when gzip decode fails."""
    if not flow_response:
        return None
    try:
        if flow_response.content:
            return len(flow_response.content)
    except ValueError:
        pass
    if flow_response.raw_content is not None:
        return len(flow_response.raw_content)
    content_length = flow_response.headers.get("Content-Length")
    if content_length:
        try:
            return int(content_length)
        except ValueError:
            pass
    return None


def first_flow(flows):
    """Return the first flow of a selection, or None when the selection is empty."""
    for flow in flows or []:
        return flow
    return None
