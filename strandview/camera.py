"""First-person camera with view/projection matrices and input handling."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import AbstractSet, Optional, Sequence

import numpy as np

from strandview.mathutil import acos_safe


class Key(enum.Enum):
    """Keys the camera reacts to."""

    W = "w"
    A = "a"
    S = "s"
    D = "d"
    SPACE = "space"
    LEFT_CONTROL = "left_control"
    ESCAPE = "escape"


@dataclass(frozen=True, eq=False)
class CameraData:
    """Camera matrices and parameters in the layout a shader reads."""

    view: np.ndarray
    proj: np.ndarray
    view_inverse: np.ndarray
    proj_inverse: np.ndarray
    eye: np.ndarray
    near_plane: float
    far_plane: float

    def pack(self) -> bytes:
        """Column-major float32 matrices, then eye, near and far, little-endian."""
        parts = [
            np.asarray(matrix, dtype=np.float64).T.ravel()
            for matrix in (self.view, self.proj, self.view_inverse, self.proj_inverse)
        ]
        parts.append(np.asarray(self.eye, dtype=np.float64).reshape(4))
        parts.append(np.array([self.near_plane, self.far_plane]))
        return np.concatenate(parts).astype("<f4").tobytes()


def _normalize(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


def _rotate(vector: np.ndarray, angle: float, axis: np.ndarray) -> np.ndarray:
    """Rotate ``vector`` by ``angle`` radians about ``axis`` (right-handed)."""
    k = _normalize(axis)
    cos, sin = math.cos(angle), math.sin(angle)
    return vector * cos + np.cross(k, vector) * sin + k * float(k @ vector) * (1.0 - cos)


class FirstPersonCamera:
    """Camera moved with WASD keys and steered by dragging the mouse."""

    def __init__(
        self,
        size: Sequence[int],
        eye: Sequence[float],
        h_fov: float = 75.0,
        near: float = 0.1,
        far: float = 10000.0,
    ) -> None:
        width, height = size
        self.size = (int(width), int(height))
        self.eye = np.asarray(eye, dtype=np.float64).reshape(3).copy()
        self.up = np.array([0.0, 1.0, 0.0])
        self.orientation = np.array([0.0, 0.0, -1.0])
        self.near = float(near)
        self.far = float(far)
        self.fov = float(h_fov)
        self.speed = 0.25
        self.sensitivity = 50.0
        self.click = False

    def _right(self) -> np.ndarray:
        return _normalize(np.cross(self.orientation, self.up))

    def view(self) -> np.ndarray:
        """Right-handed look-at matrix from the eye along the orientation."""
        f = _normalize(self.orientation)
        s = _normalize(np.cross(f, self.up))
        u = np.cross(s, f)
        matrix = np.eye(4)
        matrix[0, :3], matrix[0, 3] = s, -float(s @ self.eye)
        matrix[1, :3], matrix[1, 3] = u, -float(u @ self.eye)
        matrix[2, :3], matrix[2, 3] = -f, float(f @ self.eye)
        return matrix

    def projection(self) -> np.ndarray:
        """Right-handed perspective projection with depth in [0, 1]."""
        width, height = self.size
        aspect = width / height
        tan_half = math.tan(math.radians(self.fov) / 2.0)
        matrix = np.zeros((4, 4))
        matrix[0, 0] = 1.0 / (aspect * tan_half)
        matrix[1, 1] = 1.0 / tan_half
        matrix[2, 2] = self.far / (self.near - self.far)
        matrix[3, 2] = -1.0
        matrix[2, 3] = -(self.far * self.near) / (self.far - self.near)
        return matrix

    def camera_data(self) -> CameraData:
        """Snapshot of matrices, their inverses, the eye and the clip planes."""
        view = self.view()
        proj = self.projection()
        return CameraData(
            view=view,
            proj=proj,
            view_inverse=np.linalg.inv(view),
            proj_inverse=np.linalg.inv(proj),
            eye=np.array([*self.eye, 1.0]),
            near_plane=self.near,
            far_plane=self.far,
        )

    def register_keys(self, pressed: AbstractSet[Key]) -> bool:
        """Move for the pressed keys; return True when the window should close."""
        if Key.W in pressed:
            self.eye = self.eye + self.speed * self.orientation
        if Key.A in pressed:
            self.eye = self.eye + self.speed * -self._right()
        if Key.S in pressed:
            self.eye = self.eye + self.speed * -self.orientation
        if Key.D in pressed:
            self.eye = self.eye + self.speed * self._right()
        if Key.SPACE in pressed:
            self.eye = self.eye + (self.speed / 2.0) * self.up
        if Key.LEFT_CONTROL in pressed:
            self.eye = self.eye - (self.speed / 2.0) * self.up
        return Key.ESCAPE in pressed

    def register_mouse(
        self, left_pressed: bool, cursor: Sequence[float]
    ) -> Optional[tuple[int, int]]:
        """Steer while the left button is held.

        Returns the window centre the cursor should be moved back to while
        steering, or None when the button is released.
        """
        if not left_pressed:
            self.click = True
            return None
        self.click = False

        width, height = self.size
        center_x, center_y = width // 2, height // 2
        mouse_x, mouse_y = cursor
        rot_x = self.sensitivity * (mouse_y - center_y) / height
        rot_y = self.sensitivity * (mouse_x - center_x) / width

        candidate = _rotate(self.orientation, math.radians(-rot_x), self._right())
        angle = acos_safe(float(candidate @ self.up))
        if abs(angle - math.radians(90.0)) <= math.radians(85.0):
            self.orientation = candidate

        self.orientation = _rotate(self.orientation, math.radians(-rot_y), self.up)
        return center_x, center_y