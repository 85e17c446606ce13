"""Reading and writing of the binary HAIR strand file format."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from os import PathLike
from typing import ClassVar, Optional, Union

import numpy as np

INFO_SIZE = 88
SIGNATURE = b"HAIR"


class HairArrays(enum.IntFlag):
    """Bits of the header telling which per-strand or per-point arrays are stored."""

    NONE = 0
    SEGMENTS = 1
    POINTS = 2
    THICKNESS = 4
    TRANSPARENCY = 8
    COLORS = 16


class HairFileError(ValueError):
    """Raised when HAIR data is malformed, truncated or inconsistent."""


@dataclass
class HairHeader:
    """Fixed-size header at the start of every HAIR file."""

    FORMAT: ClassVar[str] = f"<4s4I2f3f{INFO_SIZE}s"
    SIZE: ClassVar[int] = struct.calcsize(f"<4s4I2f3f{INFO_SIZE}s")

    signature: bytes = SIGNATURE
    hair_count: int = 0
    point_count: int = 0
    arrays: int = 0
    d_segments: int = 0
    d_thickness: float = 1.0
    d_transparency: float = 0.0
    d_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    info: bytes = bytes(INFO_SIZE)

    def pack(self) -> bytes:
        """Serialise the header into its on-disk little-endian form."""
        return struct.pack(
            self.FORMAT,
            self.signature,
            self.hair_count,
            self.point_count,
            int(self.arrays),
            self.d_segments,
            self.d_thickness,
            self.d_transparency,
            *self.d_color,
            self.info,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "HairHeader":
        """Parse a header from the first bytes of ``data``."""
        if len(data) < cls.SIZE:
            raise HairFileError("cannot read header: data too short")
        (
            signature,
            hair_count,
            point_count,
            arrays,
            d_segments,
            d_thickness,
            d_transparency,
            red,
            green,
            blue,
            info,
        ) = struct.unpack_from(cls.FORMAT, data)
        return cls(
            signature=signature,
            hair_count=hair_count,
            point_count=point_count,
            arrays=arrays,
            d_segments=d_segments,
            d_thickness=d_thickness,
            d_transparency=d_transparency,
            d_color=(red, green, blue),
            info=info,
        )


# Order matters: it is the order in which arrays follow the header on disk.
_ARRAY_SPECS = (
    (HairArrays.SEGMENTS, "segments", "<u2", False, 0),
    (HairArrays.POINTS, "points", "<f4", True, 3),
    (HairArrays.THICKNESS, "thickness", "<f4", True, 0),
    (HairArrays.TRANSPARENCY, "transparency", "<f4", True, 0),
    (HairArrays.COLORS, "colors", "<f4", True, 3),
)

_NATIVE = {"<u2": np.uint16, "<f4": np.float32}


def _normalized(vector: np.ndarray) -> np.ndarray:
    length_sq = float(vector @ vector)
    length = np.sqrt(length_sq) if length_sq > 0 else 1.0
    return vector / length


def _direction_at(
    p0: np.ndarray, p1: np.ndarray, p2: np.ndarray
) -> tuple[np.ndarray, float, float]:
    """Direction at ``p1`` given its neighbours, with the two segment lengths."""
    d0 = p1 - p0
    d0_sq = float(d0 @ d0)
    d0_len = float(np.sqrt(d0_sq)) if d0_sq > 0 else 1.0
    d1 = p2 - p1
    d1_sq = float(d1 @ d1)
    d1_len = float(np.sqrt(d1_sq)) if d1_sq > 0 else 1.0
    d0 = d0 * (d1_len / d0_len)
    return _normalized(d0 + d1), d0_len, d1_len


@dataclass(eq=False)
class HairFile:
    """Header plus the optional arrays of a HAIR file, held as numpy arrays."""

    header: HairHeader = field(default_factory=HairHeader)
    segments: Optional[np.ndarray] = None
    points: Optional[np.ndarray] = None
    thickness: Optional[np.ndarray] = None
    transparency: Optional[np.ndarray] = None
    colors: Optional[np.ndarray] = None

    def _shape(self, per_point: bool, components: int) -> tuple[int, ...]:
        count = self.header.point_count if per_point else self.header.hair_count
        return (count, components) if components else (count,)

    def _allocate(self, per_point: bool, components: int, dtype: str) -> np.ndarray:
        return np.zeros(self._shape(per_point, components), dtype=_NATIVE[dtype])

    def set_hair_count(self, count: int) -> None:
        """Set the strand count, reallocating the segments array if present."""
        self.header.hair_count = count
        if self.segments is not None:
            self.segments = self._allocate(False, 0, "<u2")

    def set_point_count(self, count: int) -> None:
        """Set the point count, reallocating every per-point array that is present."""
        self.header.point_count = count
        for _, attr, dtype, per_point, components in _ARRAY_SPECS:
            if per_point and getattr(self, attr) is not None:
                setattr(self, attr, self._allocate(True, components, dtype))

    def set_arrays(self, arrays: Union[HairArrays, int]) -> None:
        """Choose which arrays exist, allocating new ones and dropping unused ones."""
        self.header.arrays = int(arrays)
        for flag, attr, dtype, per_point, components in _ARRAY_SPECS:
            present = getattr(self, attr) is not None
            if self.header.arrays & flag and not present:
                setattr(self, attr, self._allocate(per_point, components, dtype))
            elif not self.header.arrays & flag and present:
                setattr(self, attr, None)

    @classmethod
    def from_bytes(cls, data: bytes) -> "HairFile":
        """Parse the complete contents of a HAIR file."""
        header = HairHeader.unpack(data)
        if header.signature != SIGNATURE:
            raise HairFileError("wrong signature")
        hair = cls(header=header)
        offset = HairHeader.SIZE
        for flag, attr, dtype, per_point, components in _ARRAY_SPECS:
            if not header.arrays & flag:
                continue
            shape = hair._shape(per_point, components)
            count = int(np.prod(shape))
            needed = count * np.dtype(dtype).itemsize
            if len(data) - offset < needed:
                raise HairFileError(f"failed reading {attr}")
            values = np.frombuffer(data, dtype=dtype, count=count, offset=offset)
            setattr(hair, attr, values.astype(_NATIVE[dtype]).reshape(shape))
            offset += needed
        return hair

    def to_bytes(self) -> bytes:
        """Serialise the header and every array flagged in it."""
        chunks = [self.header.pack()]
        for flag, attr, dtype, per_point, components in _ARRAY_SPECS:
            if not self.header.arrays & flag:
                continue
            values = getattr(self, attr)
            if values is None:
                raise HairFileError(f"{attr} array is flagged but missing")
            values = np.asarray(values)
            shape = self._shape(per_point, components)
            if values.shape != shape:
                raise HairFileError(
                    f"{attr} array has shape {values.shape}, expected {shape}"
                )
            chunks.append(values.astype(dtype).tobytes())
        return b"".join(chunks)

    @classmethod
    def load(cls, path: Union[str, PathLike]) -> "HairFile":
        """Read a HAIR file from disk."""
        with open(path, "rb") as stream:
            return cls.from_bytes(stream.read())

    def save(self, path: Union[str, PathLike]) -> None:
        """Write this HAIR file to disk."""
        data = self.to_bytes()
        with open(path, "wb") as stream:
            stream.write(data)

    def directions(self) -> np.ndarray:
        """Normalised tangent direction at every point, shape (point_count, 3)."""
        if self.points is None:
            raise HairFileError("no points array to compute directions from")
        point_count = self.header.point_count
        result = np.zeros((point_count, 3), dtype=np.float32)
        if point_count <= 0:
            return result
        points = np.asarray(self.points, dtype=np.float64).reshape(-1, 3)
        dirs = np.zeros((point_count, 3), dtype=np.float64)

        p = 0
        for strand in range(self.header.hair_count):
            s = int(self.segments[strand]) if self.segments is not None else self.header.d_segments
            if s > 0 and p + s + 1 > point_count:
                raise HairFileError(f"strand {strand} runs past the end of the points array")
            if s > 1:
                dirs[p + 1], len0, len1 = _direction_at(points[p], points[p + 1], points[p + 2])
                d0 = points[p + 1] - dirs[p + 1] * len0 * 0.3333 - points[p]
                dirs[p] = _normalized(d0)
                p += 2
                for _ in range(2, s):
                    dirs[p], len0, len1 = _direction_at(points[p - 1], points[p], points[p + 1])
                    p += 1
                d0 = -points[p - 1] + dirs[p - 1] * len1 * 0.3333 + points[p]
                dirs[p] = _normalized(d0)
                p += 1
            elif s > 0:
                dirs[p] = _normalized(points[p + 1] - points[p])
                dirs[p + 1] = dirs[p]
                p += 2

        result[:] = dirs
        return result