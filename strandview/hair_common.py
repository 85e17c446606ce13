"""Shared hair rendering types: rendering modes, strands and GPU-side records."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import Any, ClassVar, Sequence

HAIR_WORKGROUP_SIZE = 32
HAIR_MAX_STRANDLET_SIZE = HAIR_WORKGROUP_SIZE


class HairRenderingMode(enum.IntEnum):
    """How hair geometry is shaded."""

    NORMAL = 0
    DEBUG_QUADS = 1
    DEBUG_STRANDS = 2
    DEBUG_STRANDLETS = 3


_MODE_NAMES = {
    HairRenderingMode.NORMAL: "Normal",
    HairRenderingMode.DEBUG_QUADS: "Debug (Quads)",
    HairRenderingMode.DEBUG_STRANDS: "Debug (Strands)",
    HairRenderingMode.DEBUG_STRANDLETS: "Debug (Strandlets)",
}


def to_string(mode: HairRenderingMode | int) -> str:
    """Display name of a rendering mode; ValueError for unknown values."""
    try:
        return _MODE_NAMES[HairRenderingMode(mode)]
    except ValueError:
        raise ValueError(f"Unknown HairRenderingMode: {mode!r}") from None


@dataclass
class Strand:
    """One hair strand and a view of its vertices."""

    id: int = 0
    point_count: int = 0
    vertices: Sequence[Any] = field(default=(), compare=False)


@dataclass
class Strandlet:
    """A run of at most HAIR_MAX_STRANDLET_SIZE vertices of one strand."""

    strand_id: int = 0
    point_count: int = 0
    vertices: Sequence[Any] = field(default=(), compare=False)


@dataclass(frozen=True)
class StrandDescription:
    """Per-strand record shared with the GPU."""

    FORMAT: ClassVar[str] = "<4i"

    strand_id: int = 0
    point_count: int = 0
    strandlet_count: int = 0
    vertex_offset: int = 0

    def pack(self) -> bytes:
        """Four little-endian signed 32-bit integers."""
        return struct.pack(
            self.FORMAT,
            self.strand_id,
            self.point_count,
            self.strandlet_count,
            self.vertex_offset,
        )


@dataclass(frozen=True)
class HairBufferAddresses:
    """Device addresses of the vertex and strand description buffers."""

    FORMAT: ClassVar[str] = "<2Q"

    vertex_buffer: int = 0
    strand_descriptions_buffer: int = 0

    def pack(self) -> bytes:
        """Two little-endian unsigned 64-bit integers."""
        return struct.pack(self.FORMAT, self.vertex_buffer, self.strand_descriptions_buffer)