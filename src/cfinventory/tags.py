"""Conversion between CloudFront tag lists and plain tag mappings."""

from collections.abc import Iterable, Mapping

from cfinventory.errors import MalformedUpstreamError
from cfinventory.models import TagSet


def parse_tag_list(items: Iterable[dict] | None) -> TagSet:
    """Build a TagSet from CloudFront ``Tags.Items`` entries.

    A missing list means the resource has no tags. An entry without a key or
    value raises MalformedUpstreamError.
    """
    pairs = []
    for index, entry in enumerate(items or []):
        key = entry.get("Key")
        value = entry.get("Value")
        if key is None or value is None:
            raise MalformedUpstreamError(f"Tag entry {index} is missing a key or value: {entry!r}")
        pairs.append((key, value))
    return TagSet(pairs=tuple(pairs))


def normalize_tags(tag_set: TagSet | None) -> dict[str, str] | None:
    """Return tags as a dict, or None when tags were never fetched."""
    if tag_set is None:
        return None
    return tag_set.mapping


def to_tag_set(mapping: Mapping[str, str]) -> TagSet:
    """Inverse of normalize_tags for mappings with unique keys."""
    return TagSet(pairs=tuple(mapping.items()))
