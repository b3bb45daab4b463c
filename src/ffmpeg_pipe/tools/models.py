"""Data models for ffmpeg capabilities.

This module defines the dataclasses representing what the local ffmpeg
build can decode, as reported by its ``-formats`` and ``-codecs`` listings.
"""

from dataclasses import dataclass, field
from enum import Enum


class CapabilityKind(Enum):
    """Kind of capability listing ffmpeg can report."""

    FORMATS = "formats"  # Container formats (muxers/demuxers)
    CODECS = "codecs"  # Encoding algorithms

    @property
    def flag(self) -> str:
        """Return the ffmpeg listing flag for this kind."""
        return f"-{self.value}"


@dataclass(frozen=True)
class CapabilitySet:
    """Formats and codecs the local ffmpeg can decode.

    Built once by probing ffmpeg and read-only afterwards. An empty set means
    probing failed, so every support check reports unsupported.
    """

    formats: frozenset[str] = field(default_factory=frozenset)
    codecs: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> "CapabilitySet":
        """Return a capability set that supports nothing."""
        return cls()

    def has_format(self, name: str) -> bool:
        """Check if a container format can be decoded."""
        return name in self.formats

    def has_codec(self, name: str) -> bool:
        """Check if an audio codec can be decoded."""
        return name in self.codecs

    def is_empty(self) -> bool:
        """Return True if nothing was detected."""
        return not self.formats and not self.codecs

    def summary(self) -> dict[str, int]:
        """Get capability counts for display."""
        return {
            "formats": len(self.formats),
            "codecs": len(self.codecs),
        }
