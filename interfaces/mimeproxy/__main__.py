#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Entry point for MIME Proxy when run as: mimeproxy (pip-installed script).
"""

import sys
import argparse

from core.config import Config
from core.output_handler import print_info, print_success, print_error, print_status, set_debug_mode, set_use_colors
from .api import app, set_capabilities
from .capabilities import MemoryClipboard, RecordingBrowser
from .proxy_core import MitmProxyWrapper, plugin_manager

try:
    import uvicorn
except ImportError:
    print_error("uvicorn is not installed!")
    print_info("Install it with: pip install uvicorn")
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mimeproxy',
        description='MIME Proxy: intercepting proxy with MIME type utilities',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start the proxy with default parameters
  mimeproxy

  # Start on custom ports
  mimeproxy --proxy-port 8081 --api-port 9000

  # Use a configuration file and keep clipboard/browser actions in memory
  mimeproxy --config ./mimeproxy.toml --headless
        """
    )
    parser.add_argument('--config', type=str, default=None,
                        help='Path to a TOML configuration file (default: mimeproxy.toml lookup)')
    parser.add_argument('--proxy-host', type=str, default=None,
                        help='Proxy listen address (default: from config, 127.0.0.1)')
    parser.add_argument('--proxy-port', type=int, default=None,
                        help='Proxy port (default: from config, 8080)')
    parser.add_argument('--api-host', type=str, default=None,
                        help='API server IP address (default: from config, 127.0.0.1)')
    parser.add_argument('--api-port', type=int, default=None,
                        help='API server port (default: from config, 8443)')
    parser.add_argument('--headless', action='store_true',
                        help='Do not touch the system clipboard or browser')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose mode')
    return parser


def resolve_settings(args, config: Config) -> dict:
    """Merge command line arguments over the configuration file"""
    return {
        'proxy_host': args.proxy_host or config.get_config_value_by_path('proxy.host'),
        'proxy_port': args.proxy_port or config.get_config_value_by_path('proxy.port'),
        'api_host': args.api_host or config.get_config_value_by_path('api.host'),
        'api_port': args.api_port or config.get_config_value_by_path('api.port'),
        'search_url': config.get_config_value_by_path('mime.search_url'),
        'extension_name': config.get_config_value_by_path('mime.extension_name'),
    }


def main(argv=None):
    args = build_parser().parse_args(argv)
    set_debug_mode(args.verbose)
    set_use_colors(not args.no_color)

    config = Config(args.config) if args.config else Config.get_instance()
    settings = resolve_settings(args, config)

    if args.headless:
        set_capabilities(MemoryClipboard(), RecordingBrowser(), settings['search_url'])
    else:
        set_capabilities(search_url=settings['search_url'])

    print_success("=" * 60)
    print_success(f"MIME Proxy - {settings['extension_name']}")
    print_success("=" * 60)

    try:
        proxy = MitmProxyWrapper(
            host=settings['proxy_host'],
            port=settings['proxy_port'],
            api_host=settings['api_host'],
            api_port=settings['api_port']
        )
        proxy.start()
    except Exception as e:
        print_error(f"Error starting proxy: {e}")
        return 1

    for plugin in plugin_manager.plugins.values():
        print_status(f"Plugin {plugin.name}: {'enabled' if plugin.enabled else 'disabled'}")
    print_success(f"{settings['extension_name']} loaded successfully.")
    print_info(f"API: http://{settings['api_host']}:{settings['api_port']}")
    print_info(f"Proxy: {settings['proxy_host']}:{settings['proxy_port']}")
    print_info("Press Ctrl+C to stop the server")
    print_success("=" * 60)

    try:
        uvicorn.run(
            app,
            host=settings['api_host'],
            port=settings['api_port'],
            log_level="info" if args.verbose else "warning"
        )
    except KeyboardInterrupt:
        print_info("\nStopping server...")
    finally:
        proxy.stop()

    print_success("Server stopped.")
    return 0


if __name__ == '__main__':
    sys.exit(main() or 0)
