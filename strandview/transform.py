"""Model transform built from translation, scale and Euler angles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


def _vec3(values: object) -> np.ndarray:
    array = np.asarray(values, dtype=np.float64).reshape(3)
    return array.copy()


def _yaw_pitch_roll(yaw: float, pitch: float, roll: float) -> np.ndarray:
    """Rotation about Y (yaw), then X (pitch), then Z (roll), as Ry @ Rx @ Rz."""
    ch, sh = math.cos(yaw), math.sin(yaw)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cb, sb = math.cos(roll), math.sin(roll)
    ry = np.array([[ch, 0.0, sh], [0.0, 1.0, 0.0], [-sh, 0.0, ch]])
    rx = np.array([[1.0, 0.0, 0.0], [0.0, cp, -sp], [0.0, sp, cp]])
    rz = np.array([[cb, -sb, 0.0], [sb, cb, 0.0], [0.0, 0.0, 1.0]])
    rotation = np.eye(4)
    rotation[:3, :3] = ry @ rx @ rz
    return rotation


@dataclass
class Transform:
    """Translation, per-axis scale and Euler angles in degrees (x pitch, y yaw, z roll)."""

    translate: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    euler: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.translate = _vec3(self.translate)
        self.scale = _vec3(self.scale)
        self.euler = _vec3(self.euler)

    def model(self) -> np.ndarray:
        """The 4x4 model matrix T @ R @ S, acting on column vectors."""
        translation = np.eye(4)
        translation[:3, 3] = self.translate
        scaling = np.diag([*self.scale, 1.0])
        pitch, yaw, roll = (math.radians(angle) for angle in self.euler)
        rotation = _yaw_pitch_roll(yaw, pitch, roll)
        return translation @ rotation @ scaling