import asyncio
import threading
from typing import List, Dict, Optional, Callable, Tuple
from collections import OrderedDict

from mitmproxy.http import HTTPFlow

from core.output_handler import print_error
from .actions import MessageEditor
from .flow_utils import safe_response_size
from .mime_resolver import find_content_type, resolve_response
from .plugins.mime_type_generator import METADATA_KEY


class FlowManager:
    def __init__(self, max_flows: int = 1000):
        self.flows: OrderedDict[str, HTTPFlow] = OrderedDict()
        self.flow_cache: Dict[str, Dict] = {}  # Cache for serialized flows
        self.max_flows = max_flows
        self.intercept_enabled: bool = False
        self.pending_intercepts: Dict[str, Tuple[HTTPFlow, Optional[asyncio.AbstractEventLoop]]] = {}
        self._lock = threading.RLock()
        self.callbacks: List[Callable[[Dict], None]] = []

    def register_callback(self, callback):
        """Register a callback to be called when a flow is added or updated."""
        self.callbacks.append(callback)

    def add_flow(self, flow):
        """Adds a flow to the store with memory limit and pre-caching."""
        with self._lock:
            self.flows[flow.id] = flow
            self.flows.move_to_end(flow.id)  # newest last

            if len(self.flows) > self.max_flows:
                oldest_id, _ = self.flows.popitem(last=False)
                self.flow_cache.pop(oldest_id, None)

            serialized_flow = self._serialize_flow(flow)
            self.flow_cache[flow.id] = serialized_flow

        # Notify outside the lock
        for callback in self.callbacks:
            try:
                callback(serialized_flow)
            except Exception as e:
                print_error(f"Error in flow callback: {e}")

    def get_flows(self) -> List[Dict]:
        """Returns all serialized flows, newest first."""
        with self._lock:
            return list(reversed(list(self.flow_cache.values())))

    def get_flows_paginated(self, page: int = 1, size: int = 50, search: str = None) -> Dict:
        """Returns a paginated slice of flows."""
        with self._lock:
            all_flows = list(reversed(list(self.flow_cache.values())))

        if search:
            search = search.lower()
            filtered_flows = [
                f for f in all_flows
                if search in f.get('url', '').lower() or
                   search in f.get('method', '').lower() or
                   search in (f.get('mime_type') or '').lower()
            ]
        else:
            filtered_flows = all_flows

        total = len(filtered_flows)
        start_idx = (page - 1) * size
        items = filtered_flows[start_idx:start_idx + size]

        return {
            "items": items,
            "total": total,
            "page": page,
            "size": size,
            "pages": max(1, (total + size - 1) // size)
        }

    def get_flow_object(self, flow_id: str) -> Optional[HTTPFlow]:
        with self._lock:
            return self.flows.get(flow_id)

    def get_flow(self, flow_id: str) -> Optional[Dict]:
        """Returns full details of a specific flow."""
        with self._lock:
            flow = self.flows.get(flow_id)
            if not flow:
                return None
            return self._serialize_flow(flow, detail=True)

    def get_editor(self, flow_id: str) -> Optional[MessageEditor]:
        """Editor over the request of a stored flow; edits refresh the cache."""
        flow = self.get_flow_object(flow_id)
        if flow is None:
            return None
        return MessageEditor(flow, on_change=self.add_flow)

    def toggle_intercept(self, enabled: bool):
        self.intercept_enabled = enabled

    def intercept_request(self, flow) -> bool:
        """Hold the flow at mitmproxy's intercept point if interception is enabled."""
        if not self.intercept_enabled:
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        flow.intercept()
        with self._lock:
            self.pending_intercepts[flow.id] = (flow, loop)
        self.add_flow(flow)
        return True

    def resume_intercept(self, flow_id: str) -> bool:
        """Release an intercepted flow; safe to call from any thread."""
        with self._lock:
            pending = self.pending_intercepts.pop(flow_id, None)
        if pending is None:
            return False

        flow, loop = pending
        # flow.resume() touches an asyncio.Event owned by the proxy loop
        if loop is not None and not loop.is_closed():
            loop.call_soon_threadsafe(flow.resume)
        else:
            flow.resume()
        if flow_id in self.flows:
            self.add_flow(flow)
        return True

    def _serialize_flow(self, flow, detail: bool = False) -> Dict:
        """Helper to convert mitmproxy flow to dict."""
        if METADATA_KEY in flow.metadata:
            mime_type = flow.metadata[METADATA_KEY]
        elif flow.response is not None:
            # resolved once, the body is not sniffed again
            mime_type = flow.metadata[METADATA_KEY] = resolve_response(flow.response, flow.request)
        else:
            mime_type = None

        data = {
            "id": flow.id,
            "method": flow.request.method,
            "scheme": flow.request.scheme,
            "host": flow.request.host,
            "path": flow.request.path,
            "url": flow.request.url,
            "timestamp_start": flow.request.timestamp_start,
            "status_code": flow.response.status_code if flow.response else None,
            "intercepted": flow.id in self.pending_intercepts,
            "request_content_type": find_content_type(flow.request.headers),
            "mime_type": mime_type,
            "response_size": safe_response_size(flow.response),
        }

        if detail:
            data["request"] = {
                "headers": list(flow.request.headers.items(multi=True)),
                "content_length": len(flow.request.raw_content or b""),
            }
            if flow.response:
                data["response"] = {
                    "headers": list(flow.response.headers.items(multi=True)),
                    "content_length": safe_response_size(flow.response),
                    "reason": flow.response.reason or "",
                }
            else:
                data["response"] = None

        return data

    def clear(self):
        for flow_id in list(self.pending_intercepts):
            self.resume_intercept(flow_id)
        with self._lock:
            self.flows.clear()
            self.flow_cache.clear()

# Global instance
flow_manager = FlowManager()
