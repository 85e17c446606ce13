import pytest

from strandview.window import (
    Size2D,
    WindowCreateInfo,
    WindowResolutionPreset,
    resolution_preset_to_size,
    ui_scale_factor,
)


@pytest.mark.parametrize(
    "preset, expected",
    [
        (WindowResolutionPreset.W1280_H720, Size2D(1280, 720)),
        (WindowResolutionPreset.W1600_H900, Size2D(1600, 900)),
        (WindowResolutionPreset.W1920_H1080, Size2D(1920, 1080)),
        (WindowResolutionPreset.W2560_H1440, Size2D(2560, 1400)),
    ],
)
def test_preset_sizes(preset, expected):
    assert resolution_preset_to_size(preset) == expected


def test_none_preset_is_invalid():
    with pytest.raises(ValueError):
        resolution_preset_to_size(WindowResolutionPreset.NONE)


@pytest.mark.parametrize(
    "width, height, expected",
    [(1280, 720, 1.0), (2540, 1440, 1.0), (2541, 1440, 1.5), (2540, 1441, 1.5), (3840, 2160, 1.5)],
)
def test_ui_scale_factor(width, height, expected):
    assert ui_scale_factor(width, height) == expected


def test_manual_size_used_by_default():
    assert WindowCreateInfo(width=640, height=480).resolve_size() == Size2D(640, 480)


def test_defaults():
    info = WindowCreateInfo()
    assert info.resolve_size() == Size2D(1280, 720)
    assert info.title == "Unknown Nebula Window"


def test_preset_overrides_manual_size():
    info = WindowCreateInfo(width=640, height=480, resolution_preset=WindowResolutionPreset.W1920_H1080)
    assert info.resolve_size() == Size2D(1920, 1080)


def test_auto_resolution_overrides_preset():
    info = WindowCreateInfo(auto_resolution=True, resolution_preset=WindowResolutionPreset.W1280_H720)
    assert info.resolve_size(Size2D(2560, 1440)) == Size2D(1920, 1080)


def test_auto_resolution_accepts_tuple_and_truncates():
    info = WindowCreateInfo(auto_resolution=True)
    size = info.resolve_size((1001, 1001))
    assert size == Size2D(750, 750)


def test_auto_resolution_without_monitor_raises():
    with pytest.raises(ValueError):
        WindowCreateInfo(auto_resolution=True).resolve_size()