"""Logging configuration"""
import logging
import sys
from typing import Dict, Any, Optional


DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LoggingManager:
    """Manages application logging configuration"""

    @staticmethod
    def setup_logging(config: Dict[str, Any], level_name: Optional[str] = None) -> None:
        """Setup logging from the config 'logging' section; level_name wins if given"""
        logging_config = config.get('logging', {})

        level_name = (level_name or logging_config.get('level', 'INFO')).upper()
        level = getattr(logging, level_name, None)
        if not isinstance(level, int):
            level = logging.INFO
        format_str = logging_config.get('format', DEFAULT_FORMAT)

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stdout,
            force=True
        )

        # Quiet per-connection chatter from the HTTP stack
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('requests').setLevel(logging.WARNING)
