"""Normalization of upstream resource metadata into photo records."""

import re

from villa_gallery.domain.photos import (
    AbsentContext,
    DelimitedContext,
    PhotoRecord,
    ResourceContext,
    StructuredContext,
    UpstreamResource,
)

DEFAULT_TITLE = "Villa Photo"
DEFAULT_CATEGORY = "Gallery"
ID_TITLE_LENGTH = 8

_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_SEPARATOR_RE = re.compile(r"[-_]")
_WORD_START_RE = re.compile(r"\b\w", re.ASCII)
_CONTEXT_KEYS = ("title", "category")


def normalize_resource(resource: UpstreamResource) -> PhotoRecord:
    """Build a photo record from an upstream resource.

    Title and category are resolved in increasing order of precedence:
    defaults, the original filename (or the public id when no filename is
    known), delimited context pairs, the nested ``custom`` context block and
    finally flat context fields.
    """
    title = DEFAULT_TITLE
    category = DEFAULT_CATEGORY

    if resource.original_filename:
        title = title_from_filename(resource.original_filename)
    else:
        title = title_from_public_id(resource.public_id)

    context = parse_context(resource.context)
    if isinstance(context, DelimitedContext):
        for key, value in context.pairs:
            if key == "title" and value:
                title = value
            if key == "category" and value:
                category = value
    elif isinstance(context, StructuredContext):
        for source in (context.custom, context.flat):
            title = source.get("title") or title
            category = source.get("category") or category

    return PhotoRecord(
        id=resource.public_id,
        title=title,
        category=category,
        image_url=resource.secure_url,
        upload_date=resource.created_at,
        file_name=resource.original_filename or resource.last_segment,
        public_id=resource.public_id,
    )


def title_from_filename(filename: str) -> str:
    """Turn a file name like ``sunset_view.jpg`` into ``Sunset View``."""
    stem = _EXTENSION_RE.sub("", filename)
    spaced = _SEPARATOR_RE.sub(" ", stem)
    return _WORD_START_RE.sub(lambda match: match.group().upper(), spaced)


def title_from_public_id(public_id: str) -> str:
    """Build a fallback title from the last segment of a public id."""
    segment = public_id.rsplit("/", maxsplit=1)[-1]
    return f"{DEFAULT_TITLE} {segment[:ID_TITLE_LENGTH]}"


def parse_context(raw: object) -> ResourceContext:
    """Classify a raw context value into one of the known context shapes."""
    if isinstance(raw, str):
        if "|" not in raw:
            return AbsentContext()
        return DelimitedContext(pairs=tuple(_split_pairs(raw)))
    if isinstance(raw, dict):
        custom = raw.get("custom")
        return StructuredContext(
            custom=_pick_fields(custom) if isinstance(custom, dict) else {},
            flat=_pick_fields(raw),
        )
    return AbsentContext()


def _split_pairs(raw: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for chunk in raw.split("|"):
        parts = chunk.split("=")
        if len(parts) < 2:  # noqa: PLR2004
            continue
        pairs.append((parts[0], parts[1]))
    return pairs


def _pick_fields(source: dict[str, object]) -> dict[str, str]:
    picked: dict[str, str] = {}
    for key in _CONTEXT_KEYS:
        value = source.get(key)
        if value is None or isinstance(value, dict | list):
            continue
        text = str(value)
        if text:
            picked[key] = text
    return picked
