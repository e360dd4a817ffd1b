#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Configuration management for MIME Proxy
Supports TOML configuration files
"""

import copy
from pathlib import Path
from typing import Dict, Any, Optional
from core.output_handler import print_warning
from core.version import VERSION

try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # Fallback for older Python versions
    except ImportError:
        tomllib = None


class Config:
    """Configuration manager for MIME Proxy"""

    VERSION = VERSION

    CONFIG_CANDIDATES = ["mimeproxy.toml", "config/mimeproxy.toml"]

    DEFAULT_PROXY_CONFIG = {
        'host': '127.0.0.1',
        'port': 8080,
    }

    DEFAULT_API_CONFIG = {
        'host': '127.0.0.1',
        'port': 8443,
    }

    DEFAULT_MIME_CONFIG = {
        'extension_name': 'MIME Type Generator',
        'search_url': 'https://www.google.com/search?q={query}',
    }

    # Global instance
    _instance = None

    def __init__(self, config_file: Optional[str] = None):
        """Initialize configuration"""
        if config_file is None:
            config_file = self._find_config_file(Path.cwd())

        self.config_file = config_file
        self.config: Dict[str, Any] = {}
        self.load_config()

    def _find_config_file(self, start_dir: Path) -> Optional[str]:
        """Find config file in current or parent directories"""
        for directory in [start_dir] + list(start_dir.parents):
            for candidate in self.CONFIG_CANDIDATES:
                config_path = directory / candidate
                if config_path.exists():
                    return str(config_path)
        return None

    def load_config(self):
        """Load configuration from file, merged onto the defaults"""
        self.config = self._get_default_config()
        if tomllib is None or not self.config_file:
            return

        config_path = Path(self.config_file)
        if not config_path.exists():
            return
        try:
            with open(config_path, 'rb') as f:
                loaded = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            print_warning(f"Failed to load configuration from {self.config_file}: {e}")
            return

        for section, values in loaded.items():
            section = section.lower()
            if isinstance(values, dict) and isinstance(self.config.get(section), dict):
                self.config[section].update(values)
            else:
                self.config[section] = values

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration"""
        return {
            'version': self.VERSION,
            'proxy': copy.deepcopy(self.DEFAULT_PROXY_CONFIG),
            'api': copy.deepcopy(self.DEFAULT_API_CONFIG),
            'mime': copy.deepcopy(self.DEFAULT_MIME_CONFIG),
        }

    def get_config(self) -> Dict[str, Any]:
        """Get full configuration"""
        return self.config

    def get_config_value(self, key: str) -> Any:
        """Get configuration value by key"""
        return self.config.get(key)

    def get_config_value_by_path(self, path: str) -> Any:
        """Get configuration value by dot-separated path (e.g., 'proxy.port')"""
        keys = path.split('.')
        value = self.config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return None
        return value

    @classmethod
    def get_instance(cls) -> 'Config':
        """Get or create global config instance"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance
