import struct

import pytest

from strandview.hair_common import (
    HairBufferAddresses,
    HairRenderingMode,
    Strand,
    Strandlet,
    StrandDescription,
    to_string,
)


@pytest.mark.parametrize(
    "mode, name",
    [
        (HairRenderingMode.NORMAL, "Normal"),
        (HairRenderingMode.DEBUG_QUADS, "Debug (Quads)"),
        (HairRenderingMode.DEBUG_STRANDS, "Debug (Strands)"),
        (HairRenderingMode.DEBUG_STRANDLETS, "Debug (Strandlets)"),
    ],
)
def test_to_string_names(mode, name):
    assert to_string(mode) == name


def test_to_string_accepts_plain_int():
    assert to_string(2) == "Debug (Strands)"


def test_to_string_unknown_raises():
    with pytest.raises(ValueError):
        to_string(7)


def test_modes_are_distinct_names():
    names = {to_string(mode) for mode in HairRenderingMode}
    assert len(names) == len(HairRenderingMode)


def test_strand_description_pack_round_trip():
    desc = StrandDescription(strand_id=5, point_count=40, strandlet_count=2, vertex_offset=-3)
    packed = desc.pack()
    assert len(packed) == struct.calcsize("<4i")
    assert StrandDescription(*struct.unpack("<4i", packed)) == desc


def test_buffer_addresses_pack_round_trip():
    addresses = HairBufferAddresses(vertex_buffer=2**40 + 7, strand_descriptions_buffer=2**63)
    packed = addresses.pack()
    assert struct.unpack("<2Q", packed) == (2**40 + 7, 2**63)


def test_buffer_addresses_reject_negative():
    with pytest.raises(struct.error):
        HairBufferAddresses(vertex_buffer=-1).pack()


def test_strand_equality_ignores_vertices():
    assert Strand(id=1, point_count=3, vertices=[1, 2, 3]) == Strand(id=1, point_count=3)
    assert Strandlet(strand_id=1, point_count=2) != Strandlet(strand_id=2, point_count=2)