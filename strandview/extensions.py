"""Selection of instance extensions, layers and device queue families."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import AbstractSet, Iterable, Optional, Sequence


class RHIError(RuntimeError):
    """Raised when the rendering backend reports a failure."""


class QueueFlags(enum.IntFlag):
    """Capabilities a queue family can offer."""

    NONE = 0
    GRAPHICS = 0x1
    COMPUTE = 0x2
    TRANSFER = 0x4
    SPARSE_BINDING = 0x8
    PROTECTED = 0x10
    VIDEO_DECODE = 0x20
    VIDEO_ENCODE = 0x40
    OPTICAL_FLOW = 0x100


@dataclass(frozen=True)
class QueueFamilyProperties:
    """Description of one queue family of a physical device."""

    queue_flags: QueueFlags
    queue_count: int
    timestamp_valid_bits: int = 0


@dataclass(frozen=True)
class QueueProperties:
    """A chosen queue family together with its index."""

    properties: QueueFamilyProperties
    family_index: int


def _find_name(name: Optional[str], available: Sequence[str]) -> Optional[int]:
    if name is None:
        return None
    return next((index for index, entry in enumerate(available) if entry == name), None)


def find_extension(name: Optional[str], available: Sequence[str]) -> Optional[int]:
    """Index of the named extension in ``available``, or None when absent."""
    return _find_name(name, available)


def find_layer(name: Optional[str], available: Sequence[str]) -> Optional[int]:
    """Index of the named layer in ``available``, or None when absent."""
    return _find_name(name, available)


def _supported(requested: Iterable[str], available: Iterable[str]) -> list[str]:
    offered = set(available)
    unique = dict.fromkeys(requested)
    return [name for name in unique if name in offered]


def supported_extensions(requested: Iterable[str], available: Iterable[str]) -> list[str]:
    """Requested extension names, without duplicates, that are also available."""
    return _supported(requested, available)


def supported_layers(requested: Iterable[str], available: Iterable[str]) -> list[str]:
    """Requested layer names, without duplicates, that are also available."""
    return _supported(requested, available)


def find_queue(
    families: Iterable[QueueFamilyProperties],
    required_flags: QueueFlags,
    excluded_flags: QueueFlags = QueueFlags.NONE,
    excluded_families: AbstractSet[int] = frozenset(),
) -> Optional[QueueProperties]:
    """First queue family having any required flag, no excluded flag and not excluded by index."""
    for index, family in enumerate(families):
        if (
            family.queue_count > 0
            and family.queue_flags & required_flags
            and not family.queue_flags & excluded_flags
            and index not in excluded_families
        ):
            return QueueProperties(family, index)
    return None