import json
import os
from typing import Dict, Any, Optional

from zxy_tiles.interfaces.tile_server import IConfigLoader
from zxy_tiles.models.tile_server import DownloadConfig
from zxy_tiles.exceptions.tile_downloader_exceptions import ConfigurationError, ValidationError


MAX_ZOOM = 30

DEFAULTS: Dict[str, Any] = {
    'output_dir': '.',
    'start_zoom': 0,
    'x': 0,
    'y': 0,
    'tile_width': 256,
    'tile_height': 256,
    'concurrent_requests': 1,
    'timeout': None,
    'verify_tls': False,
    'dry_run': False,
    'log_level': 'INFO',
    'headers': {},
}

OPTION_KEYS = ('url', 'end_zoom') + tuple(DEFAULTS)


class ConfigService(IConfigLoader):
    """Service for loading and validating configuration"""

    def load_config(self, config_path: Optional[str]) -> Dict[str, Any]:
        """Load configuration from JSON file; no path means an empty config"""
        if not config_path:
            return {}

        if not os.path.exists(config_path):
            raise ConfigurationError(f"Config file {config_path} not found!")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error loading config: {e}")

        if not isinstance(config, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a JSON object")

        unknown = set(config) - set(OPTION_KEYS) - {'logging'}
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        return config

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate merged configuration values"""
        if not config.get('url'):
            raise ValidationError("Missing required option: url")

        if config.get('end_zoom') is None:
            raise ValidationError("Missing required option: end_zoom")

        for key in ('start_zoom', 'end_zoom', 'x', 'y'):
            value = config[key]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValidationError(f"{key} must be a non-negative integer, got {value!r}")

        if config['start_zoom'] > config['end_zoom']:
            raise ValidationError(
                f"start_zoom ({config['start_zoom']}) must not exceed end_zoom ({config['end_zoom']})")

        if config['end_zoom'] > MAX_ZOOM:
            raise ValidationError(f"end_zoom must be at most {MAX_ZOOM}")

        for key in ('tile_width', 'tile_height', 'concurrent_requests'):
            value = config[key]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValidationError(f"{key} must be a positive integer, got {value!r}")

        timeout = config.get('timeout')
        if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
            raise ValidationError(f"timeout must be a positive number, got {timeout!r}")

        for key in ('verify_tls', 'dry_run'):
            if not isinstance(config[key], bool):
                raise ValidationError(f"{key} must be true or false, got {config[key]!r}")

        headers = config['headers']
        if not isinstance(headers, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in headers.items()):
            raise ValidationError(f"headers must map header names to string values, got {headers!r}")

        return True

    def build_download_config(self, file_config: Dict[str, Any],
                              overrides: Optional[Dict[str, Any]] = None) -> DownloadConfig:
        """Merge defaults, file values and command-line overrides (in that order)"""
        merged = dict(DEFAULTS)
        merged.update({k: v for k, v in file_config.items() if k in OPTION_KEYS})
        if overrides:
            merged.update({k: v for k, v in overrides.items() if k in OPTION_KEYS and v is not None})

        merged.setdefault('url', None)
        merged.setdefault('end_zoom', None)
        self.validate_config(merged)
        merged['headers'] = dict(merged['headers'])

        return DownloadConfig(**merged)
