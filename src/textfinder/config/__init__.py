"""
Settings management package for textfinder.

This package provides settings file parsing, validation, and template
generation for the search engine.
"""

from .parser import (
    SettingsParser,
    SettingsParseResult,
    load_settings,
    validate_settings_file,
    create_settings_template
)
from ..errors import ConfigurationError

__all__ = [
    'SettingsParser',
    'SettingsParseResult',
    'ConfigurationError',
    'load_settings',
    'validate_settings_file',
    'create_settings_template'
]
