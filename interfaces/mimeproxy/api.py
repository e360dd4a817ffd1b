from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .actions import DEFAULT_SEARCH_URL, MimeActions
from .capabilities import (
    BrowserLauncher,
    Clipboard,
    RecordingDialog,
    SystemBrowserLauncher,
    SystemClipboard,
)
from .context_menu import ContextMenuEvent, ToolType
from .errors import MimeTypeUndeterminedError, NoResponseError, NoSelectionError, PickerClosedError
from .flow_manager import flow_manager
from .mime_catalog import MIME_TYPES, filter_catalog
from .mime_resolver import find_content_type
from .picker import MimeTypePicker
from .proxy_core import plugin_manager

# Host capabilities, replaced by set_capabilities() (headless runs, tests)
capabilities = {
    "clipboard": SystemClipboard(),
    "browser": SystemBrowserLauncher(),
    "search_url": DEFAULT_SEARCH_URL,
}

def set_capabilities(clipboard: Optional[Clipboard] = None,
                     browser: Optional[BrowserLauncher] = None,
                     search_url: Optional[str] = None):
    """Set the clipboard, browser launcher and search URL used by the actions"""
    if clipboard is not None:
        capabilities["clipboard"] = clipboard
    if browser is not None:
        capabilities["browser"] = browser
    if search_url is not None:
        capabilities["search_url"] = search_url

def _actions(dialog: RecordingDialog) -> MimeActions:
    return MimeActions(
        capabilities["clipboard"],
        capabilities["browser"],
        dialog,
        search_url=capabilities["search_url"],
    )

def _get_flow_or_404(flow_id: str):
    flow = flow_manager.get_flow_object(flow_id)
    if flow is None:
        raise HTTPException(status_code=404, detail="Flow not found")
    return flow

app = FastAPI(title="MIME Proxy")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/api/flows")
def get_flows(page: int = 1, size: int = 50, search: Optional[str] = None):
    return flow_manager.get_flows_paginated(page, size, search)

@app.get("/api/flows/{flow_id}")
def get_flow_detail(flow_id: str):
    flow = flow_manager.get_flow(flow_id)
    if not flow:
        raise HTTPException(status_code=404, detail="Flow not found")
    return flow

@app.post("/api/clear")
def clear_flows():
    flow_manager.clear()
    return {"status": "ok"}

# === MIME TYPE ENDPOINTS ===
@app.get("/api/flows/{flow_id}/mime")
def get_flow_mime_type(flow_id: str):
    """Resolved MIME type of a flow's response"""
    flow = _get_flow_or_404(flow_id)
    actions = _actions(RecordingDialog())
    try:
        mime_type = actions.resolve_selected([flow])
    except (NoResponseError, MimeTypeUndeterminedError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "flow_id": flow_id,
        "mime_type": mime_type,
        "content_type_header": find_content_type(flow.response.headers),
    }

@app.post("/api/flows/{flow_id}/mime/copy")
def copy_flow_mime_type(flow_id: str):
    """Show & Copy Response MIME Type"""
    flow = _get_flow_or_404(flow_id)
    dialog = RecordingDialog()
    mime_type = _actions(dialog).show_copy([flow])
    return {"mime_type": mime_type, "messages": dialog.as_dicts()}

@app.post("/api/flows/{flow_id}/mime/search")
def search_flow_mime_type(flow_id: str):
    """Search this MIME Type Online"""
    flow = _get_flow_or_404(flow_id)
    dialog = RecordingDialog()
    url = _actions(dialog).search_online([flow])
    return {"url": url, "messages": dialog.as_dicts()}

@app.get("/api/mime-types")
def get_mime_types(search: str = ""):
    """Predefined MIME types, filtered like the picker's search field"""
    items = filter_catalog(MIME_TYPES, search)
    return {"items": items, "total": len(items)}

class ContentTypeSelection(BaseModel):
    search: str = ""
    selection: Optional[str] = None
    cancel: bool = False

@app.post("/api/flows/{flow_id}/content-type")
def set_flow_content_type(flow_id: str, body: ContentTypeSelection):
    """Set/Insert Content-Type on the flow's request"""
    editor = flow_manager.get_editor(flow_id)
    if editor is None:
        raise HTTPException(status_code=404, detail="Flow not found")

    picker = MimeTypePicker()
    picker.search(body.search)
    if body.cancel:
        picker.cancel()
        mime_type = None
    else:
        try:
            if body.selection:
                picker.select(body.selection)
            mime_type = picker.confirm()
        except (NoSelectionError, PickerClosedError) as e:
            raise HTTPException(status_code=400, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    dialog = RecordingDialog()
    request = _actions(dialog).set_content_type(editor, mime_type)
    return {
        "mime_type": mime_type if request is not None else None,
        "request_headers": list(editor.request.headers.items(multi=True)),
        "messages": dialog.as_dicts(),
    }

class ContextMenuRequest(BaseModel):
    tool: str = ToolType.PROXY.value
    flow_ids: List[str] = []
    editor_flow_id: Optional[str] = None

@app.post("/api/context-menu")
def get_context_menu(body: ContextMenuRequest):
    """Entries the enabled plugins add to the context menu for a selection"""
    try:
        tool_type = ToolType(body.tool)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown tool: {body.tool}")

    selected = [f for f in (flow_manager.get_flow_object(i) for i in body.flow_ids) if f is not None]
    editor = flow_manager.get_editor(body.editor_flow_id) if body.editor_flow_id else None
    event = ContextMenuEvent(tool_type, selected, editor)
    actions = _actions(RecordingDialog())
    items = []
    for plugin in plugin_manager.plugins.values():
        if plugin.enabled:
            items.extend(plugin.provide_menu_items(event, actions) or [])
    return {"items": [{"label": item.label, "action": item.action_id} for item in items]}

# === INTERCEPT ENDPOINTS ===
class InterceptToggle(BaseModel):
    enabled: bool

@app.post("/api/intercept")
def toggle_intercept(body: InterceptToggle):
    flow_manager.toggle_intercept(body.enabled)
    return {"intercept_enabled": flow_manager.intercept_enabled}

@app.post("/api/intercept/{flow_id}/resume")
def resume_intercept(flow_id: str):
    if not flow_manager.resume_intercept(flow_id):
        raise HTTPException(status_code=404, detail="No intercepted request with this id")
    return {"status": "resumed"}

# === INTERCEPTION PLUGINS ENDPOINTS ===
@app.get("/api/plugins")
def get_plugins():
    """Get all interception plugins"""
    return plugin_manager.get_all_plugins()

@app.post("/api/plugins/{plugin_name}/enable")
def enable_plugin(plugin_name: str):
    """Enable a plugin"""
    if not plugin_manager.enable_plugin(plugin_name):
        raise HTTPException(status_code=404, detail="Plugin not found")
    return {"status": "success", "message": f"Plugin {plugin_name} enabled"}

@app.post("/api/plugins/{plugin_name}/disable")
def disable_plugin(plugin_name: str):
    """Disable a plugin"""
    if not plugin_manager.disable_plugin(plugin_name):
        raise HTTPException(status_code=404, detail="Plugin not found")
    return {"status": "success", "message": f"Plugin {plugin_name} disabled"}

@app.post("/api/plugins/{plugin_name}/config")
def update_plugin_config(plugin_name: str, config: Dict):
    """Update plugin configuration"""
    if not plugin_manager.update_plugin_config(plugin_name, config):
        raise HTTPException(status_code=404, detail="Plugin not found")
    return {"status": "success", "message": f"Plugin {plugin_name} configuration updated"}
