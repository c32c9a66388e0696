"""
Application settings management.

Settings are read from a JSON file named explicitly on the command line
(``--config PATH``). Without one, the built-in defaults apply; nothing is
looked up implicitly and nothing is written back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from filecopy.services.hashing import HashAlgorithm


@dataclass
class CopySettings:
    """Settings for copy and move operations."""
    buffer_size: int = 65536
    preserve_permissions: bool = True


@dataclass
class HashSettings:
    """Settings for digest calculation."""
    algorithm: HashAlgorithm = HashAlgorithm.XXH128


@dataclass
class FilterSettings:
    """Default patterns offered by the filtered copy."""
    include_patterns: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(default_factory=list)


@dataclass
class UISettings:
    """Terminal interface settings."""
    use_colors: bool = True
    show_progress: bool = True
    browse_start: str = ""


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    copy: CopySettings = field(default_factory=CopySettings)
    hashing: HashSettings = field(default_factory=HashSettings)
    filters: FilterSettings = field(default_factory=FilterSettings)
    ui: UISettings = field(default_factory=UISettings)


class SettingsManager:
    """Manager for loading application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else None
        self._settings: Optional[ApplicationSettings] = None

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from the configured file; defaults if there is none or it is unreadable."""
        if self.settings_path is None:
            return ApplicationSettings()

        if not self.settings_path.exists():
            logging.warning(f"SettingsManager - Settings file {self.settings_path} not found, using defaults")
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logging.warning(f"SettingsManager - Ignoring unreadable settings {self.settings_path}: {e}")
            return ApplicationSettings()

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        def get_enum(enum_class: type, value: Any) -> Enum:
            if isinstance(value, str):
                try:
                    return enum_class[value.upper()]
                except KeyError:
                    logging.warning(f"SettingsManager - Unknown {enum_class.__name__} {value!r}, using default")
                    return list(enum_class)[0]
            return value

        copy_data = data.get('copy', {})
        defaults = CopySettings()
        copy = CopySettings(
            buffer_size=int(copy_data.get('buffer_size', defaults.buffer_size)),
            preserve_permissions=bool(copy_data.get('preserve_permissions', defaults.preserve_permissions)),
        )
        if copy.buffer_size <= 0:
            logging.warning(f"SettingsManager - Invalid buffer_size {copy.buffer_size}, using default")
            copy.buffer_size = defaults.buffer_size

        hashing = HashSettings(
            algorithm=get_enum(HashAlgorithm, data.get('hashing', {}).get('algorithm', 'XXH128')),
        )

        filters = FilterSettings(
            include_patterns=list(data.get('filters', {}).get('include_patterns', [])),
            exclude_patterns=list(data.get('filters', {}).get('exclude_patterns', [])),
        )

        ui = UISettings(
            use_colors=bool(data.get('ui', {}).get('use_colors', True)),
            show_progress=bool(data.get('ui', {}).get('show_progress', True)),
            browse_start=str(data.get('ui', {}).get('browse_start', '')),
        )

        return ApplicationSettings(
            copy=copy,
            hashing=hashing,
            filters=filters,
            ui=ui,
        )
