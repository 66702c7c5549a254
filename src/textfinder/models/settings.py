"""
Engine settings data model for textfinder.

Settings tune how the engine runs (thread count, decoding, limits) and are
independent of any single search. They are usually loaded from a YAML file by
``textfinder.config.SettingsParser``.
"""

import codecs
import os
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from .search_config import normalize_extensions


class EngineSettings(BaseModel):
    """
    Runtime settings for the search engine.

    Attributes:
        worker_count: Number of worker threads (defaults to the CPU count)
        case_sensitive: Default case sensitivity for searches started without one
        encoding: Text encoding used to decode scanned files
        encoding_errors: Codec error handler applied while decoding
        max_bytes_per_file: Files larger than this are skipped (no limit if None)
        frontier_capacity: Initial slot count of the pending-directory stack
        default_extensions: Extension filter used when a search gives none
    """

    worker_count: Optional[int] = Field(None, gt=0, le=256, description="Number of worker threads")
    case_sensitive: bool = Field(True, description="Default case sensitivity")
    encoding: str = Field("utf-8", description="Text encoding used to decode files")
    encoding_errors: str = Field("replace", description="Codec error handler")
    max_bytes_per_file: Optional[int] = Field(None, gt=0, description="Maximum size of a scanned file")
    frontier_capacity: int = Field(64, ge=0, description="Initial capacity of the directory stack")
    default_extensions: List[str] = Field(default_factory=list, description="Default extension filter")

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to the codec registry."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v

    @field_validator('encoding_errors')
    @classmethod
    def validate_encoding_errors(cls, v: str) -> str:
        """Ensure the error handler is registered."""
        try:
            codecs.lookup_error(v)
        except LookupError:
            raise ValueError(f"Unknown encoding error handler: {v}")
        return v

    @field_validator('default_extensions', mode='before')
    @classmethod
    def validate_default_extensions(cls, v: Any) -> List[str]:
        """Normalize default extensions the same way search extensions are."""
        return sorted(normalize_extensions(v))

    def get_worker_count(self) -> int:
        """Resolve the effective worker count."""
        if self.worker_count:
            return self.worker_count
        return os.cpu_count() or 1

    def validate_settings(self) -> List[str]:
        """Return non-fatal warnings about the settings."""
        warnings = []
        if self.worker_count and self.worker_count > 4 * (os.cpu_count() or 1):
            warnings.append(
                f"worker_count ({self.worker_count}) is far above the CPU count ({os.cpu_count()})"
            )
        if self.encoding_errors == 'strict':
            warnings.append("encoding_errors is 'strict': undecodable files will be reported as errors")
        if self.max_bytes_per_file and self.max_bytes_per_file > 500_000_000:
            warnings.append("Very high max_bytes_per_file limit may make searches slow")
        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EngineSettings':
        """Create EngineSettings from a dictionary."""
        return cls.model_validate(data)
