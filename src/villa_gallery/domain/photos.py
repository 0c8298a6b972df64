"""Domain models for gallery photos."""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel


class UpstreamResource(BaseModel):
    """Image resource record as returned by the media-hosting API."""

    public_id: str
    secure_url: str
    created_at: datetime
    original_filename: str | None = None
    context: object = None

    @property
    def last_segment(self) -> str:
        """Return the final path segment of the public id."""
        return self.public_id.rsplit("/", maxsplit=1)[-1]


@dataclass(frozen=True)
class AbsentContext:
    """Resource without usable context metadata."""


@dataclass(frozen=True)
class DelimitedContext:
    """Context stored as a `key=value|key=value` string."""

    pairs: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class StructuredContext:
    """Context stored as a mapping, optionally with a nested `custom` block."""

    custom: dict[str, str] = field(default_factory=dict)
    flat: dict[str, str] = field(default_factory=dict)


ResourceContext = AbsentContext | DelimitedContext | StructuredContext


@dataclass(frozen=True)
class PhotoRecord:
    """Client-facing photo representation."""

    id: str
    title: str
    category: str
    image_url: str
    upload_date: datetime
    file_name: str
    public_id: str
