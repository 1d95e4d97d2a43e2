"""
User settings lookup.

Settings live in a flat JSON object keyed by dotted names, for example
{"sync.localBackupDuration": 14}. The file is read on every lookup so
edits take effect on the next cleanup without a restart.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ConfigurationService:
    """Reads values from the user settings file."""

    def __init__(self, settings_file: Optional[Union[str, Path]] = None):
        self.settings_file = Path(settings_file) if settings_file else None

    def get_value(self, key: str, default: Any = None) -> Any:
        """
        Look up a setting.

        Args:
            key: Dotted setting name
            default: Returned when the setting or the file is missing

        Returns:
            The configured value, or default
        """
        settings = self._load()
        return settings.get(key, default)

    def _load(self) -> dict:
        if self.settings_file is None:
            return {}

        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                settings = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read settings from {self.settings_file}: {e}")
            return {}

        if not isinstance(settings, dict):
            logger.warning(f"Ignoring settings in {self.settings_file}: not a JSON object")
            return {}
        return settings
