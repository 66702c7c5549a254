"""
YAML settings parser for textfinder.

This module loads engine settings from YAML files. It handles settings file
discovery, parsing, and validation, and reports helpful error messages for
invalid files. Searches run with default settings when no file is found.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from ..errors import ConfigurationError
from ..models.settings import EngineSettings


logger = logging.getLogger(__name__)


@dataclass
class SettingsParseResult:
    """
    Result of a settings parsing operation.

    Attributes:
        settings: The parsed and validated settings
        warnings: List of non-fatal warnings
        settings_path: Path to the settings file used
        is_default: Whether default settings were used
    """
    settings: EngineSettings
    warnings: List[str]
    settings_path: Optional[Path]
    is_default: bool


class SettingsParser:
    """
    YAML settings parser with validation and error handling.

    Loads YAML settings files, validates their contents, and converts them to
    EngineSettings objects. Supports settings file discovery and writing a
    commented template.
    """

    DEFAULT_SETTINGS_NAMES = [
        '.textfinder.yaml',
        '.textfinder.yml',
        'textfinder.yaml',
        'textfinder.yml',
    ]

    SECTION_COMMENTS = {
        'worker_count': "Number of worker threads (omit to use the CPU count)",
        'case_sensitive': "Default case sensitivity of searches",
        'encoding': "Text encoding used to read files",
        'encoding_errors': "Codec error handler: replace, ignore or strict",
        'max_bytes_per_file': "Skip files larger than this many bytes (omit for no limit)",
        'frontier_capacity': "Initial capacity of the pending directory stack",
        'default_extensions': "Extensions searched when none are given (empty = all files)",
    }

    def __init__(self, strict_mode: bool = False):
        """
        Initialize the settings parser.

        Args:
            strict_mode: If True, treat warnings as errors
        """
        self.strict_mode = strict_mode
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_settings(self, settings_path: Optional[Union[str, Path]] = None) -> SettingsParseResult:
        """
        Load and parse settings from a file or use defaults.

        Args:
            settings_path: Path to settings file. If None, searches default locations.

        Returns:
            SettingsParseResult containing parsed settings and metadata

        Raises:
            ConfigurationError: If settings are invalid or the file cannot be read
        """
        if settings_path:
            settings_path = Path(settings_path)
            if not settings_path.exists():
                raise ConfigurationError(f"Settings file not found: {settings_path}")
            settings_data = self._load_yaml_file(settings_path)
            is_default = False
        else:
            settings_path, settings_data = self._find_and_load_settings()
            is_default = settings_data is None
            if is_default:
                settings_data = {}

        settings = self._validate_settings_data(settings_data)

        warnings = settings.validate_settings()
        if is_default:
            warnings.append("No settings file found, using default settings")

        if self.strict_mode and warnings:
            raise ConfigurationError(f"Settings warnings in strict mode: {'; '.join(warnings)}")

        self.logger.info(f"Settings loaded successfully from {settings_path or 'defaults'}")

        return SettingsParseResult(
            settings=settings,
            warnings=warnings,
            settings_path=settings_path,
            is_default=is_default
        )

    def _get_search_paths(self) -> List[Path]:
        return [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'textfinder',
        ]

    def _find_and_load_settings(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load a settings file from the default locations.

        Returns:
            Tuple of (settings_path, settings_data) or (None, None) if not found
        """
        for search_path in self._get_search_paths():
            for name in self.DEFAULT_SETTINGS_NAMES:
                settings_file = search_path / name
                if settings_file.exists() and settings_file.is_file():
                    try:
                        settings_data = self._load_yaml_file(settings_file)
                        self.logger.info(f"Found settings file: {settings_file}")
                        return settings_file, settings_data
                    except ConfigurationError as e:
                        self.logger.warning(f"Failed to load {settings_file}: {e}")
                        continue

        self.logger.info("No settings file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse a YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Settings file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)
            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Settings file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read settings file {file_path}: {e}") from e

    def _validate_settings_data(self, settings_data: Dict[str, Any]) -> EngineSettings:
        """
        Validate raw settings data and build an EngineSettings object.

        Raises:
            ConfigurationError: If a key is unknown or a value is invalid
        """
        unknown = sorted(set(settings_data) - set(EngineSettings.model_fields))
        if unknown:
            raise ConfigurationError(f"Unknown settings keys: {', '.join(unknown)}")

        try:
            return EngineSettings.from_dict(settings_data)
        except ValidationError as e:
            raise ConfigurationError(f"Settings validation failed: {e}") from e

    def save_settings(self, settings: EngineSettings, output_path: Union[str, Path]) -> None:
        """
        Save settings to a YAML file.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(self._generate_yaml_with_comments(settings.to_dict()))
            self.logger.info(f"Settings saved to {output_path}")
        except OSError as e:
            raise ConfigurationError(f"Cannot write settings file {output_path}: {e}") from e

    def _generate_yaml_with_comments(self, settings_dict: Dict[str, Any]) -> str:
        """Generate YAML content with one comment line per key."""
        lines = [
            "# textfinder settings",
            "# Engine tuning shared by every search",
            "",
        ]

        for key, comment in self.SECTION_COMMENTS.items():
            if key in settings_dict:
                lines.append(f"# {comment}")
                section_yaml = yaml.dump({key: settings_dict[key]},
                                         default_flow_style=False,
                                         sort_keys=False)
                lines.append(section_yaml.rstrip())
                lines.append("")

        return "\n".join(lines)

    def validate_settings_file(self, settings_path: Union[str, Path]) -> List[str]:
        """
        Validate a settings file.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        settings_path = Path(settings_path)

        if not settings_path.exists():
            errors.append(f"Settings file not found: {settings_path}")
            return errors

        try:
            self._validate_settings_data(self._load_yaml_file(settings_path))
        except ConfigurationError as e:
            errors.append(str(e))

        return errors

    def get_settings_template(self) -> str:
        """Get a template settings file with every option and its comment."""
        template = EngineSettings().to_dict()
        template['worker_count'] = 4
        template['max_bytes_per_file'] = 50_000_000
        template['default_extensions'] = ['.txt', '.md']
        return self._generate_yaml_with_comments(template)


def load_settings(settings_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> SettingsParseResult:
    """
    Convenience function to load settings.

    Raises:
        ConfigurationError: If settings are invalid
    """
    parser = SettingsParser(strict_mode=strict_mode)
    return parser.load_settings(settings_path)


def validate_settings_file(settings_path: Union[str, Path]) -> List[str]:
    """Convenience function to validate a settings file."""
    parser = SettingsParser()
    return parser.validate_settings_file(settings_path)


def create_settings_template(output_path: Union[str, Path]) -> None:
    """
    Create a template settings file.

    Raises:
        ConfigurationError: If the template cannot be written
    """
    parser = SettingsParser()
    template_content = parser.get_settings_template()

    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)
    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
