import pytest

from orbital.camera import Viewport
from orbital.constants import MAX_ZOOM, MIN_ZOOM


def test_transforms_are_inverse(viewport):
    viewport.pan((37.0, -12.0))
    viewport.zoom_at(1.7, (100.0, 50.0))
    world = viewport.screen_to_world((321.0, 123.0))
    screen = viewport.world_to_screen(world)
    assert screen.x == pytest.approx(321.0)
    assert screen.y == pytest.approx(123.0)


def test_zoom_at_keeps_focus_point(viewport):
    viewport.zoom_at(2.0, (400.0, 300.0))
    assert viewport.zoom == 2.0
    assert viewport.world_to_screen((400.0, 300.0)) == (400.0, 300.0)
    assert viewport.offset == (-400.0, -300.0)


def test_zoom_is_clamped(viewport):
    viewport.zoom_at(100.0, (0.0, 0.0))
    assert viewport.zoom == MAX_ZOOM
    viewport.zoom_at(1e-6, (0.0, 0.0))
    assert viewport.zoom == MIN_ZOOM
    assert Viewport(zoom=50.0).zoom == MAX_ZOOM


def test_clamped_zoom_still_anchors(viewport):
    viewport.zoom_at(100.0, (200.0, 100.0))
    world = viewport.screen_to_world((200.0, 100.0))
    assert world.x == pytest.approx(200.0)
    assert world.y == pytest.approx(100.0)


def test_pan_is_unbounded(viewport):
    viewport.pan((1e6, -1e6))
    assert viewport.offset == (1e6, -1e6)


def test_zoom_with_anchor_moves_world_point(viewport):
    viewport.zoom_at(1.0, (160.0, 110.0), anchor=(150.0, 100.0))
    assert viewport.world_to_screen((150.0, 100.0)) == (160.0, 110.0)
    assert viewport.zoom == 1.0


def test_resize_keeps_camera(viewport):
    viewport.zoom_at(2.0, (10.0, 10.0))
    offset, zoom = viewport.offset, viewport.zoom
    viewport.set_viewport_size(1920, 1080)
    assert viewport.viewport_size == (1920, 1080)
    assert viewport.offset == offset
    assert viewport.zoom == zoom


def test_default_offset_is_screen_center():
    vp = Viewport(viewport_size=(1000, 600))
    assert vp.offset == (500.0, 300.0)
    assert vp.screen_to_world((500.0, 300.0)) == (0.0, 0.0)


def test_button_zoom_and_reset(viewport):
    viewport.zoom_in()
    assert viewport.zoom == pytest.approx(1.2)
    center = viewport.screen_center()
    assert viewport.screen_to_world(center) == pytest.approx((400.0, 300.0))
    viewport.zoom_out()
    assert viewport.zoom == pytest.approx(1.0)
    viewport.reset()
    assert viewport.offset == (400.0, 300.0)
    assert viewport.zoom == 1.0


def test_center_on(viewport):
    viewport.center_on((100.0, -50.0))
    assert viewport.world_to_screen((100.0, -50.0)) == viewport.screen_center()


def test_frame_bodies_fits_everything(viewport, make_body):
    bodies = [make_body((-500.0, 0.0)), make_body((500.0, 200.0))]
    viewport.frame_bodies(bodies)
    for b in bodies:
        s = viewport.world_to_screen(b.position)
        assert 0 <= s.x <= 800
        assert 0 <= s.y <= 600
