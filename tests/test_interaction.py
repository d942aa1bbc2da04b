import pytest

from orbital.interaction import (
    BodyCreated,
    BodySelected,
    InteractionController,
    InteractionMode,
    InteractionState,
    hit_test,
)


@pytest.fixture
def controller(viewport):
    return InteractionController(viewport)


def test_stationary_press_is_a_click(controller, viewport, make_body):
    body = make_body((100.0, 100.0))
    controller.pointer_down((100, 100))
    controller.pointer_move((100, 100))
    assert controller.state is InteractionState.PANNING
    assert not controller.is_drag
    events = controller.pointer_up((100, 100), [body])
    assert events == [BodySelected(body.id)]
    assert viewport.offset == (0.0, 0.0)
    assert controller.state is InteractionState.IDLE


def test_click_on_empty_space_clears_selection(controller, make_body):
    controller.pointer_down((400, 400))
    assert controller.pointer_up((400, 400), [make_body((0.0, 0.0))]) == [BodySelected(None)]


def test_small_jitter_pans_but_still_clicks(controller, viewport, make_body):
    body = make_body((100.0, 100.0))
    controller.pointer_down((100, 100))
    controller.pointer_move((103, 104))
    assert viewport.offset == (3.0, 4.0)
    assert controller.pointer_up((103, 104), [body]) == [BodySelected(body.id)]


def test_drag_pans_incrementally_without_selecting(controller, viewport, make_body):
    controller.pointer_down((0, 0))
    controller.pointer_move((4, 0))
    controller.pointer_move((10, 0))
    controller.pointer_move((10, 7))
    assert controller.is_drag
    assert viewport.offset == (10.0, 7.0)
    assert controller.pointer_up((10, 7), [make_body((10.0, 7.0))]) == []


def test_hit_test_prefers_topmost(make_body):
    below = make_body((0.0, 0.0))
    above = make_body((5.0, 0.0))
    assert hit_test([below, above], (2.0, 0.0), 1.0) == above.id
    assert hit_test([above, below], (2.0, 0.0), 1.0) == below.id


def test_hit_test_uses_screen_minimum_when_zoomed_out(make_body):
    small = make_body((0.0, 0.0), mass=1.0)  # radius 3
    assert hit_test([small], (20.0, 0.0), 1.0) is None
    assert hit_test([small], (20.0, 0.0), 0.5) == small.id
    # zoomed in, the body radius dominates the screen minimum
    assert hit_test([small], (4.0, 0.0), 5.0) == small.id
    assert hit_test([small], (5.0, 0.0), 5.0) is None


def test_create_drag_emits_launch_velocity(viewport):
    viewport.zoom_at(2.0, (0.0, 0.0))
    controller = InteractionController(viewport, InteractionMode.CREATE)
    controller.pointer_down((100, 100))
    assert controller.state is InteractionState.CREATING
    controller.pointer_move((200, 100))
    assert controller.creation_preview == ((50.0, 50.0), (100.0, 50.0))
    (event,) = controller.pointer_up((200, 100))
    assert isinstance(event, BodyCreated)
    assert event.position == (50.0, 50.0)
    assert event.velocity.x == pytest.approx(2.5)
    assert event.velocity.y == 0.0
    assert controller.creation_preview is None
    assert viewport.offset == (0.0, 0.0)


def test_create_tap_has_zero_velocity(viewport):
    controller = InteractionController(viewport, InteractionMode.CREATE)
    controller.pointer_down((30, 40))
    assert controller.pointer_up((30, 40)) == [BodyCreated((30.0, 40.0), (0.0, 0.0))]


def test_pointer_leave_cancels_silently(controller, viewport):
    controller.pointer_down((0, 0))
    controller.pointer_leave()
    assert controller.state is InteractionState.IDLE
    assert controller.pointer_up((0, 0), []) == []

    controller.set_mode(InteractionMode.CREATE)
    controller.pointer_down((0, 0))
    controller.pointer_leave()
    assert controller.pointer_up((50, 0)) == []


def test_pointer_cancel_resets(controller):
    controller.pointer_down((0, 0))
    controller.pointer_cancel()
    assert controller.state is InteractionState.IDLE


def test_set_mode_clears_selection_and_gesture(controller):
    controller.pointer_down((0, 0))
    assert controller.set_mode(InteractionMode.CREATE) == [BodySelected(None)]
    assert controller.state is InteractionState.IDLE
    assert controller.mode is InteractionMode.CREATE


def test_wheel_zooms_about_cursor(controller, viewport):
    controller.wheel(1, (200, 100))
    assert viewport.zoom == pytest.approx(1.1)
    s = viewport.world_to_screen((200.0, 100.0))
    assert s.x == pytest.approx(200.0)
    assert s.y == pytest.approx(100.0)


def test_pinch_zooms_about_midpoint(controller, viewport):
    controller.touch_start([(100, 100), (200, 100)])
    assert controller.state is InteractionState.PINCHING
    controller.touch_move([(50, 100), (250, 100)])
    assert viewport.zoom == 2.0
    assert viewport.offset == (-150.0, -100.0)
    assert viewport.screen_to_world((150, 100)) == (150.0, 100.0)


def test_pinch_pans_with_midpoint_every_tick(controller, viewport):
    controller.touch_start([(100, 100), (200, 100)])
    controller.touch_move([(50, 100), (250, 100)])
    controller.touch_move([(60, 110), (260, 110)])
    assert viewport.zoom == 2.0
    assert viewport.world_to_screen((150.0, 100.0)) == (160.0, 110.0)


def test_pinch_cancels_creation(viewport):
    controller = InteractionController(viewport, InteractionMode.CREATE)
    controller.touch_start([(10, 10)])
    assert controller.state is InteractionState.CREATING
    controller.touch_start([(10, 10), (50, 10)])
    assert controller.state is InteractionState.PINCHING
    assert controller.creation_preview is None


def test_pinch_to_one_finger_pans_without_jump(controller, viewport, make_body):
    controller.touch_start([(100, 100), (200, 100)])
    controller.touch_end([(200, 100)], (100, 100))
    assert controller.state is InteractionState.PANNING
    offset = viewport.offset
    controller.touch_move([(210, 100)])
    assert viewport.offset == (offset.x + 10.0, offset.y)
    # lifting the last finger after a pinch never counts as a click
    assert controller.touch_end([], (210, 100), [make_body((210.0, 100.0))]) == []
    assert controller.state is InteractionState.IDLE


def test_pinch_in_create_mode_never_creates(viewport):
    controller = InteractionController(viewport, InteractionMode.CREATE)
    controller.touch_start([(100, 100)])
    controller.touch_start([(100, 100), (200, 100)])
    controller.touch_end([(200, 100)], (100, 100))
    assert controller.state is InteractionState.IDLE
    controller.touch_move([(220, 100)])
    assert controller.touch_end([], (220, 100)) == []


def test_single_touch_behaves_like_pointer(controller, make_body):
    body = make_body((50.0, 50.0))
    controller.touch_start([(50, 50)])
    controller.touch_move([(50, 50)])
    assert controller.touch_end([], (50, 50), [body]) == [BodySelected(body.id)]
