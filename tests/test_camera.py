import math

import numpy as np
import pytest

from strandview.camera import CameraData, FirstPersonCamera, Key


def _camera():
    return FirstPersonCamera((800, 600), (-17.0, 16.0, 144.0))


def test_view_at_origin_looking_down_negative_z_is_identity():
    camera = FirstPersonCamera((800, 600), (0.0, 0.0, 0.0))
    assert np.allclose(camera.view(), np.eye(4))


def test_view_maps_eye_to_origin():
    camera = _camera()
    assert np.allclose(camera.view() @ [*camera.eye, 1.0], [0.0, 0.0, 0.0, 1.0])


def test_view_maps_forward_point_onto_negative_z():
    camera = _camera()
    ahead = camera.eye + 5.0 * camera.orientation
    assert np.allclose(camera.view() @ [*ahead, 1.0], [0.0, 0.0, -5.0, 1.0])


def test_projection_depth_range_is_zero_to_one():
    camera = _camera()
    proj = camera.projection()
    near_clip = proj @ [0.0, 0.0, -camera.near, 1.0]
    far_clip = proj @ [0.0, 0.0, -camera.far, 1.0]
    assert near_clip[2] / near_clip[3] == pytest.approx(0.0, abs=1e-9)
    assert far_clip[2] / far_clip[3] == pytest.approx(1.0)


def test_projection_aspect_ratio():
    camera = _camera()
    proj = camera.projection()
    assert proj[1, 1] / proj[0, 0] == pytest.approx(800 / 600)


def test_camera_data_inverses_and_eye():
    camera = _camera()
    data = camera.camera_data()
    assert np.allclose(data.view_inverse @ data.view, np.eye(4))
    assert np.allclose(data.proj_inverse @ data.proj, np.eye(4))
    assert np.allclose(data.eye, [*camera.eye, 1.0])
    assert data.near_plane == camera.near
    assert data.far_plane == camera.far


def test_camera_data_pack_layout():
    data = _camera().camera_data()
    packed = data.pack()
    assert len(packed) == 280
    floats = np.frombuffer(packed, dtype="<f4")
    assert np.allclose(floats[:16], data.view.T.ravel(), rtol=1e-6)
    assert np.allclose(floats[64:68], data.eye)
    assert floats[68] == pytest.approx(data.near_plane)
    assert floats[69] == pytest.approx(data.far_plane)


def test_pack_accepts_explicit_values():
    identity = np.eye(4)
    data = CameraData(identity, identity, identity, identity, np.array([1.0, 2.0, 3.0, 1.0]), 0.5, 9.0)
    floats = np.frombuffer(data.pack(), dtype="<f4")
    assert floats[:16].tolist() == identity.T.ravel().tolist()
    assert floats[64:].tolist() == [1.0, 2.0, 3.0, 1.0, 0.5, 9.0]


def test_forward_key_moves_along_orientation():
    camera = _camera()
    start = camera.eye.copy()
    assert camera.register_keys({Key.W}) is False
    assert np.allclose(camera.eye, start + camera.speed * camera.orientation)


def test_opposite_keys_cancel():
    camera = _camera()
    start = camera.eye.copy()
    camera.register_keys({Key.W, Key.S, Key.A, Key.D, Key.SPACE, Key.LEFT_CONTROL})
    assert np.allclose(camera.eye, start)


def test_strafe_is_perpendicular_to_orientation():
    camera = _camera()
    start = camera.eye.copy()
    camera.register_keys({Key.D})
    moved = camera.eye - start
    assert float(moved @ camera.orientation) == pytest.approx(0.0)
    assert np.linalg.norm(moved) == pytest.approx(camera.speed)


def test_vertical_moves_half_speed():
    camera = _camera()
    start = camera.eye.copy()
    camera.register_keys({Key.SPACE})
    assert np.allclose(camera.eye - start, camera.up * camera.speed / 2.0)


def test_escape_requests_close():
    assert _camera().register_keys({Key.ESCAPE}) is True


def test_release_sets_click_and_returns_none():
    camera = _camera()
    assert camera.register_mouse(False, (0.0, 0.0)) is None
    assert camera.click is True


def test_press_at_centre_keeps_orientation():
    camera = _camera()
    before = camera.orientation.copy()
    centre = camera.register_mouse(True, (400.0, 300.0))
    assert centre == (400, 300)
    assert camera.click is False
    assert np.allclose(camera.orientation, before)


def test_horizontal_drag_yaws_about_up():
    camera = _camera()
    before = camera.orientation.copy()
    camera.register_mouse(True, (500.0, 300.0))
    assert not np.allclose(camera.orientation, before)
    assert camera.orientation[1] == pytest.approx(before[1])
    assert np.linalg.norm(camera.orientation) == pytest.approx(1.0)


def test_vertical_drag_is_limited_near_the_pole():
    camera = _camera()
    for _ in range(20):
        camera.register_mouse(True, (400.0, 0.0))
    angle = math.acos(float(np.clip(camera.orientation @ camera.up, -1.0, 1.0)))
    assert angle >= math.radians(5.0) - 1e-9
    assert camera.orientation[1] > 0.0