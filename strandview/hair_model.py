"""Hair geometry prepared for rendering: vertices, strands and strandlets."""

from __future__ import annotations

import math
from os import PathLike
from typing import Union

import numpy as np

from strandview.hair_common import (
    HAIR_MAX_STRANDLET_SIZE,
    HAIR_WORKGROUP_SIZE,
    HairBufferAddresses,
    HairRenderingMode,
    Strand,
    StrandDescription,
    Strandlet,
)
from strandview.hairfile import HairFile, HairFileError
from strandview.transform import Transform


class HairModel:
    """Vertices and strand layout derived from a HAIR file, plus rendering options."""

    def __init__(self, name: str, hair_file: HairFile) -> None:
        self.name = name
        self.hair_file = hair_file

        self.transform = Transform(euler=(-90.0, 0.0, -45.0))
        self.diffuse = np.array([0.32549, 0.23921, 0.20784, 1.0], dtype=np.float32)
        self.specular = np.array([0.41568, 0.30588, 0.21960, 1.0], dtype=np.float32)
        self.group_size_override = 0
        self.enable_override = False
        self.rendering_mode = HairRenderingMode.NORMAL
        self.buffer_addresses = HairBufferAddresses()

        self.vertices = self._process_vertices()
        self.strands: list[Strand] = []
        self.strandlets: list[Strandlet] = []
        self.strand_descriptions: list[StrandDescription] = []
        self._process_strands()

        self.group_size = self.strand_count() // HAIR_WORKGROUP_SIZE

    @classmethod
    def from_hair_file(cls, name: str, hair_file: HairFile) -> "HairModel":
        """Build a model from an already loaded HAIR file."""
        return cls(name, hair_file)

    @classmethod
    def load(cls, path: Union[str, PathLike]) -> "HairModel":
        """Load a HAIR file from disk and build a model named after its path."""
        return cls(str(path), HairFile.load(path))

    def _process_vertices(self) -> np.ndarray:
        header = self.hair_file.header
        points = self.hair_file.points
        if points is None:
            if header.point_count > 0:
                raise HairFileError("hair file has points but no points array")
            return np.zeros((0, 4), dtype=np.float32)
        xyz = np.asarray(points, dtype=np.float32).reshape(-1, 3)[: header.point_count]
        ones = np.ones((len(xyz), 1), dtype=np.float32)
        return np.hstack([xyz, ones])

    def _process_strands(self) -> None:
        header = self.hair_file.header
        segments = self.hair_file.segments
        offset = 0
        for strand_id in range(header.hair_count):
            segment_count = int(segments[strand_id]) if segments is not None else header.d_segments
            point_count = segment_count + 1
            if offset + point_count > len(self.vertices):
                raise HairFileError(
                    f"strand {strand_id} needs {point_count} points beyond offset {offset}, "
                    f"but only {len(self.vertices)} vertices exist"
                )
            strand = Strand(
                id=strand_id,
                point_count=point_count,
                vertices=self.vertices[offset : offset + point_count],
            )
            self.strands.append(strand)

            strandlet_count = math.ceil(point_count / HAIR_MAX_STRANDLET_SIZE)
            for index in range(strandlet_count):
                start = index * HAIR_MAX_STRANDLET_SIZE
                size = HAIR_MAX_STRANDLET_SIZE if index != strandlet_count - 1 else point_count - start
                self.strandlets.append(
                    Strandlet(
                        strand_id=strand_id,
                        point_count=size,
                        vertices=strand.vertices[start : start + size],
                    )
                )

            self.strand_descriptions.append(
                StrandDescription(
                    strand_id=strand_id,
                    point_count=point_count,
                    strandlet_count=strandlet_count,
                    vertex_offset=offset,
                )
            )
            offset += point_count

    def vertex_count(self) -> int:
        """Number of vertices over all strands."""
        return len(self.vertices)

    def strand_count(self) -> int:
        """Number of strands."""
        return len(self.strands)

    def vertex_bytes(self) -> bytes:
        """Vertex positions as little-endian float32 vec4 records."""
        return self.vertices.astype("<f4").tobytes()

    def strand_description_bytes(self) -> bytes:
        """All strand descriptions in their packed GPU layout."""
        return b"".join(description.pack() for description in self.strand_descriptions)