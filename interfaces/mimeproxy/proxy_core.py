import asyncio
import importlib
import inspect
import os
import threading
from typing import Dict, List, Optional

try:
    from mitmproxy import http, options
    from mitmproxy.tools.dump import DumpMaster
except ImportError as exc:
    raise ImportError("mitmproxy must be installed (pip install mitmproxy)") from exc

from core.output_handler import print_debug, print_error, print_status, print_warning
from .flow_manager import flow_manager
from .plugins.base import InterceptionPlugin

PLUGINS_PACKAGE = f"{__package__}.plugins"


class InterceptionPluginManager:
    """Manager for interception plugins"""
    def __init__(self, plugins_dir: Optional[str] = None):
        self.plugins: Dict[str, InterceptionPlugin] = {}
        self.plugins_dir = plugins_dir or os.path.join(os.path.dirname(__file__), 'plugins')
        self._load_plugins()

    def _load_plugins(self):
        """Load all plugins from the plugins package"""
        if not os.path.isdir(self.plugins_dir):
            print_warning(f"Plugins directory not found: {self.plugins_dir}")
            return

        for filename in sorted(os.listdir(self.plugins_dir)):
            if not filename.endswith('.py') or filename.startswith('__'):
                continue
            plugin_name = filename[:-3]
            if plugin_name == 'base':
                continue

            try:
                module = importlib.import_module(f"{PLUGINS_PACKAGE}.{plugin_name}")
            except ImportError as e:
                print_error(f"Failed to load plugin '{plugin_name}': {e}")
                continue

            for _, obj in inspect.getmembers(module, inspect.isclass):
                if issubclass(obj, InterceptionPlugin) and obj is not InterceptionPlugin:
                    plugin_instance = obj()
                    self.register_plugin(plugin_instance)
                    print_debug(f"Loaded plugin: {plugin_instance.name}")

    def register_plugin(self, plugin: InterceptionPlugin):
        """Register a plugin"""
        self.plugins[plugin.name] = plugin

    def get_plugin(self, name: str) -> Optional[InterceptionPlugin]:
        """Get a plugin by name"""
        return self.plugins.get(name)

    def get_all_plugins(self) -> List[Dict]:
        """Get all plugins as dictionaries"""
        return [
            {
                "name": plugin.name,
                "description": plugin.description,
                "enabled": plugin.enabled,
                "config": plugin.config
            }
            for plugin in self.plugins.values()
        ]

    def enable_plugin(self, name: str) -> bool:
        """Enable a plugin"""
        plugin = self.plugins.get(name)
        if plugin is None:
            return False
        if not plugin.enabled:
            plugin.enabled = True
            plugin.on_enable()
        return True

    def disable_plugin(self, name: str) -> bool:
        """Disable a plugin"""
        plugin = self.plugins.get(name)
        if plugin is None:
            return False
        if plugin.enabled:
            plugin.enabled = False
            plugin.on_disable()
        return True

    def update_plugin_config(self, name: str, config: Dict) -> bool:
        """Update plugin configuration"""
        plugin = self.plugins.get(name)
        if plugin is None:
            return False
        plugin.config.update(config)
        return True

# Global plugin manager
plugin_manager = InterceptionPluginManager()


class InterceptorAddon:
    def __init__(self, api_host=None, api_port=None, manager=None, plugins=None):
        """Initialize the interceptor addon with optional API host/port to ignore"""
        self.api_host = api_host
        self.api_port = api_port
        self.flow_manager = manager or flow_manager
        self.plugin_manager = plugins or plugin_manager

    def _is_api_request(self, flow):
        """Check if the request is to the API interface itself"""
        if not self.api_host or not self.api_port:
            return False
        return flow.request.host == self.api_host and flow.request.port == self.api_port

    def request(self, flow):
        if self._is_api_request(flow):
            return

        # Visible before the response arrives
        self.flow_manager.add_flow(flow)

        for plugin in self.plugin_manager.plugins.values():
            if plugin.enabled and plugin.process_request(flow):
                flow.response = http.Response.make(403, b"Blocked by interception plugin")
                return

        self.flow_manager.intercept_request(flow)

    def response(self, flow):
        if self._is_api_request(flow):
            return

        for plugin in self.plugin_manager.plugins.values():
            if plugin.enabled:
                plugin.process_response(flow)

        self.flow_manager.add_flow(flow)


class MitmProxyWrapper:
    def __init__(self, host="127.0.0.1", port=8080, api_host=None, api_port=None, extra_addons=None):
        self.host = host
        self.port = port
        self.api_host = api_host
        self.api_port = api_port
        self.extra_addons = list(extra_addons or [])
        self.master = None
        self.loop = asyncio.new_event_loop()
        self.thread = threading.Thread(target=self._run_loop, daemon=True)

    def _run_loop(self):
        asyncio.set_event_loop(self.loop)
        self.loop.run_until_complete(self._async_run())

    async def _async_run(self):
        opts = options.Options(listen_host=self.host, listen_port=self.port)
        self.master = DumpMaster(opts, with_termlog=False, with_dumper=False)
        self.master.addons.add(InterceptorAddon(api_host=self.api_host, api_port=self.api_port))
        for addon in self.extra_addons:
            self.master.addons.add(addon)
        try:
            await self.master.run()
        except asyncio.CancelledError:
            pass
        except Exception as e:
            print_error(f"Mitmproxy error: {e}")

    def start(self):
        self.thread.start()
        print_status(f"Proxy started on {self.host}:{self.port}")

    def stop(self):
        if not self.loop:
            return

        # Release requests held at the intercept point
        flow_manager.toggle_intercept(False)
        for flow_id in list(flow_manager.pending_intercepts):
            flow_manager.resume_intercept(flow_id)

        async def _graceful_stop():
            if self.master:
                try:
                    shutdown_result = self.master.shutdown()
                    if asyncio.iscoroutine(shutdown_result):
                        await shutdown_result
                except asyncio.CancelledError:
                    pass
            pending = [t for t in asyncio.all_tasks() if not t.done() and t is not asyncio.current_task()]
            for t in pending:
                t.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
            await asyncio.sleep(0)

        try:
            fut = asyncio.run_coroutine_threadsafe(_graceful_stop(), self.loop)
            fut.result(timeout=3)
        except Exception as e:
            print_warning(f"[Proxy] Graceful stop timeout/error: {e}")
        finally:
            if not self.loop.is_closed():
                self.loop.call_soon_threadsafe(self.loop.stop)

        if self.thread.is_alive():
            self.thread.join(timeout=3)
