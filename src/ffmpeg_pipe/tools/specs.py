"""Pydantic models for stream and track descriptors.

This module contains the caller-facing descriptor models:
- TrackDescriptor: Container format and codec of a media item
- StreamSpec: How an input or output stream should be interpreted
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TrackDescriptor(BaseModel):
    """Describes a media item's container format and codec.

    Tracks usually come from a larger catalogue object, so unknown fields
    are ignored rather than rejected.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    format: str | None = None
    codec: str | None = None
    uri: str | None = None


class StreamSpec(BaseModel):
    """Pydantic model for an input or output stream specification."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    format: str | None = None
    codec: str | None = None
    seek: float = Field(default=0, ge=0)


def normalize_stream_spec(value: Any) -> StreamSpec | None:
    """Normalize a stream specification to its structured form.

    A single string is the format, which is the most important thing when
    reading from a pipe.

    Args:
        value: None, a format string, a mapping or a StreamSpec.

    Returns:
        StreamSpec, or None if value is None or an empty string.

    Raises:
        TypeError: If value is of any other type.
        pydantic.ValidationError: If a mapping has unknown keys or bad values.
    """
    if value is None:
        return None
    if isinstance(value, StreamSpec):
        return value
    if isinstance(value, str):
        return StreamSpec(format=value) if value else None
    if isinstance(value, Mapping):
        return StreamSpec.model_validate(dict(value))
    raise TypeError(
        f"Stream spec must be a string, mapping or StreamSpec, "
        f"got {type(value).__name__}"
    )


def require_stream_spec(value: Any, name: str) -> StreamSpec:
    """Normalize a stream specification that must be structured.

    Args:
        value: A mapping or StreamSpec.
        name: Argument name for error messages.

    Returns:
        StreamSpec.

    Raises:
        TypeError: If value is not a mapping or StreamSpec.
    """
    if isinstance(value, StreamSpec):
        return value
    if not isinstance(value, Mapping):
        raise TypeError(
            f"{name} must be a mapping or StreamSpec, got {type(value).__name__}"
        )
    return StreamSpec.model_validate(dict(value))


def to_track_descriptor(track: Any) -> TrackDescriptor:
    """Coerce a track object into a TrackDescriptor.

    Args:
        track: A TrackDescriptor or a mapping with format/codec/uri keys.

    Returns:
        TrackDescriptor.

    Raises:
        TypeError: If track is not a TrackDescriptor or mapping.
    """
    if isinstance(track, TrackDescriptor):
        return track
    if not isinstance(track, Mapping):
        raise TypeError(
            f"track must be a mapping or TrackDescriptor, got {type(track).__name__}"
        )
    return TrackDescriptor.model_validate(dict(track))
