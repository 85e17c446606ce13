"""Window sizing rules: resolution presets, precedence and UI scaling."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Sequence, Union


class WindowResolutionPreset(enum.Enum):
    """Fixed window resolutions."""

    NONE = enum.auto()
    W1280_H720 = enum.auto()
    W1600_H900 = enum.auto()
    W1920_H1080 = enum.auto()
    W2560_H1440 = enum.auto()


@dataclass(frozen=True)
class Size2D:
    """Width and height in pixels."""

    width: int
    height: int


_PRESET_SIZES = {
    WindowResolutionPreset.W1280_H720: Size2D(1280, 720),
    WindowResolutionPreset.W1600_H900: Size2D(1600, 900),
    WindowResolutionPreset.W1920_H1080: Size2D(1920, 1080),
    WindowResolutionPreset.W2560_H1440: Size2D(2560, 1400),
}

_AUTO_SCALE = 0.75


def resolution_preset_to_size(preset: WindowResolutionPreset) -> Size2D:
    """Pixel size of a preset; ValueError for NONE or unknown presets."""
    try:
        return _PRESET_SIZES[preset]
    except KeyError:
        raise ValueError("Invalid resolution preset") from None


def ui_scale_factor(width: int, height: int) -> float:
    """UI scale for a window size: 1.0 up to 2540x1440, 1.5 beyond."""
    if width <= 2540 and height <= 1440:
        return 1.0
    return 1.5


@dataclass
class WindowCreateInfo:
    """Window settings.

    Size precedence: automatic resolution, then the preset, then width and height.
    """

    width: int = 1280
    height: int = 720
    title: str = "Unknown Nebula Window"
    auto_resolution: bool = False
    resolution_preset: WindowResolutionPreset = WindowResolutionPreset.NONE

    def resolve_size(
        self, monitor_size: Optional[Union[Size2D, Sequence[int]]] = None
    ) -> Size2D:
        """The window size these settings produce on a monitor of the given size."""
        if self.auto_resolution:
            if monitor_size is None:
                raise ValueError("automatic resolution needs the monitor size")
            if isinstance(monitor_size, Size2D):
                mon_width, mon_height = monitor_size.width, monitor_size.height
            else:
                mon_width, mon_height = monitor_size
            return Size2D(int(mon_width * _AUTO_SCALE), int(mon_height * _AUTO_SCALE))
        if self.resolution_preset is not WindowResolutionPreset.NONE:
            return resolution_preset_to_size(self.resolution_preset)
        return Size2D(self.width, self.height)