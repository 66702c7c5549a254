"""
Search configuration data model for textfinder.

This module defines the immutable description of one search: where to look,
what text to look for, and which directory entries are eligible for scanning.
"""

from typing import Any, Dict, FrozenSet, Iterable, Optional
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_extensions(value: Any) -> FrozenSet[str]:
    """
    Normalize an extension filter into a set of lower-case, dot-prefixed suffixes.

    Accepts a comma-separated string (".cs,.js") or any iterable of strings.
    Blank entries are dropped; an empty result means "all extensions".
    """
    if value is None:
        return frozenset()

    if isinstance(value, str):
        items: Iterable[str] = value.split(',')
    else:
        items = value

    normalized = set()
    for ext in items:
        if not isinstance(ext, str):
            raise ValueError(f"Extension must be a string, got {type(ext).__name__}")
        ext = ext.strip()
        if not ext:
            continue
        if not ext.startswith('.'):
            ext = '.' + ext
        normalized.add(ext.lower())

    return frozenset(normalized)


class SearchConfiguration(BaseModel):
    """
    Parameters of a single search. Frozen once constructed.

    Attributes:
        root_path: Directory the search starts from
        target_text: Literal text to look for in every scanned line
        recursive: Whether subdirectories of the root are expanded
        include_hidden: Whether dot-prefixed (or hidden-attribute) entries are visited
        extensions: Allowed file extensions, empty meaning every file is scanned
        case_sensitive: Whether the target must match letter case exactly
    """

    model_config = ConfigDict(frozen=True)

    root_path: str = Field(..., min_length=1, description="Directory the search starts from")
    target_text: str = Field(..., min_length=1, description="Literal text to search for")
    recursive: bool = Field(True, description="Whether subdirectories are expanded")
    include_hidden: bool = Field(False, description="Whether hidden entries are visited")
    extensions: FrozenSet[str] = Field(default_factory=frozenset, description="Allowed file extensions")
    case_sensitive: bool = Field(True, description="Whether matching is case-sensitive")

    @field_validator('root_path')
    @classmethod
    def validate_root_path(cls, v: str) -> str:
        """Expand the user directory; existence is checked when the search starts."""
        if not v.strip():
            raise ValueError("Root path cannot be empty")
        return str(Path(v).expanduser())

    @field_validator('extensions', mode='before')
    @classmethod
    def validate_extensions(cls, v: Any) -> FrozenSet[str]:
        """Normalize extensions to lower-case with a leading dot."""
        return normalize_extensions(v)

    def allows_extension(self, file_name: str) -> bool:
        """Check whether a file name passes the extension filter."""
        if not self.extensions:
            return True
        return Path(file_name).suffix.lower() in self.extensions

    def has_extension_filter(self) -> bool:
        """Check if the search is restricted to specific extensions."""
        return bool(self.extensions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary representation."""
        data = self.model_dump()
        data['extensions'] = sorted(self.extensions)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchConfiguration':
        """Create a SearchConfiguration from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the search configuration."""
        parts = [f"Text: '{self.target_text}'"]
        parts.append(f"Root: {self.root_path}")
        if self.extensions:
            parts.append(f"Extensions: {','.join(sorted(self.extensions))}")
        if not self.recursive:
            parts.append("No subdirectories")
        if self.include_hidden:
            parts.append("Hidden included")
        if not self.case_sensitive:
            parts.append("Case-insensitive")
        return " | ".join(parts)
