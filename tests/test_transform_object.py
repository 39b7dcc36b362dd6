"""
Tests for TransformObject interaction.

Object under test (make_object defaults): centered at (400, 300) on an
800x600 canvas, scale 0.6, no rotation, opacity 200. Handle unit is 10 / 0.6
local units, so handle centers land at:

    Delete    (175, 135)     Opacity  (625, 135)
    Scale     (625, 465)     Rotate   (400, 135)
    Translate (400, 300)
"""
import math
import pytest
import numpy as np

from components.transform_widgets import HandleKind
from models.input import ClickState
from models.pixel_grid import PixelGrid
from models.transform import Vec2
from constants import COLOR_NEUTRAL, COLOR_HOVERABLE, COLOR_HOVERING, COLOR_GRABBING


DELETE = Vec2(175, 135)
OPACITY = Vec2(625, 135)
SCALE = Vec2(625, 465)
ROTATE = Vec2(400, 135)
TRANSLATE = Vec2(400, 300)
EMPTY = Vec2(460, 360)
OUTSIDE = Vec2(10, 10)


def press(obj, cursor):
    return obj.handle_input(cursor, ClickState.PRESSED)


def hold(obj, cursor):
    return obj.handle_input(cursor, ClickState.HELD)


def release(obj, cursor):
    return obj.handle_input(cursor, ClickState.RELEASED)


# ══════════════════════════════════════════════════════════════════════════
# Hover / consumption
# ══════════════════════════════════════════════════════════════════════════

class TestHover:

    def test_outside_not_consumed(self, make_object):
        obj = make_object()
        obj.controls_visible = True
        obj.hovered = HandleKind.SCALE
        assert obj.handle_input(OUTSIDE, ClickState.IDLE) is False
        assert obj.controls_visible is False
        assert obj.hovered is None

    def test_empty_space_consumed(self, make_object):
        obj = make_object()
        assert obj.handle_input(EMPTY, ClickState.IDLE) is True
        assert obj.controls_visible is True
        assert obj.hovered is None

    @pytest.mark.parametrize("cursor, kind", [
        (DELETE, HandleKind.DELETE),
        (OPACITY, HandleKind.OPACITY),
        (SCALE, HandleKind.SCALE),
        (ROTATE, HandleKind.ROTATE),
        (TRANSLATE, HandleKind.TRANSLATE),
    ])
    def test_hover_each_handle(self, make_object, cursor, kind):
        obj = make_object()
        assert obj.handle_input(cursor, ClickState.IDLE) is True
        assert obj.hovered is kind
        assert obj.grabbed is None

    def test_press_on_empty_space_does_not_grab(self, make_object):
        obj = make_object()
        assert press(obj, EMPTY) is True
        assert obj.grabbed is None

    def test_rotated_object_hit_test(self, make_object):
        # Quarter turn: local +y (bottom) maps to buffer -x (left)
        obj = make_object(rotation=math.pi / 2)
        local = obj.local_point(Vec2(400 - 165, 300 + 225))
        assert obj.hit_test(local) is HandleKind.SCALE


# ══════════════════════════════════════════════════════════════════════════
# Grab lifecycle
# ══════════════════════════════════════════════════════════════════════════

class TestGrab:

    def test_press_grabs_hovered_handle(self, make_object):
        obj = make_object()
        press(obj, TRANSLATE)
        assert obj.grabbed is HandleKind.TRANSLATE

    def test_grab_ignores_hit_testing(self, make_object):
        obj = make_object()
        press(obj, TRANSLATE)
        # Far outside the canvas, still consumed while grabbed
        assert hold(obj, Vec2(5000, -5000)) is True
        assert obj.grabbed is HandleKind.TRANSLATE

    def test_release_ends_grab(self, make_object):
        obj = make_object()
        press(obj, TRANSLATE)
        assert release(obj, Vec2(410, 310)) is True
        assert obj.grabbed is None
        # Release applies the final drag position
        assert obj.transform.position == Vec2(410, 310)

    def test_end_grab(self, make_object):
        obj = make_object()
        press(obj, SCALE)
        obj.end_grab()
        assert obj.grabbed is None
        assert obj.scale_anchor is None

    def test_scale_anchor(self, make_object):
        obj = make_object()
        press(obj, SCALE)
        assert obj.scale_anchor == SCALE
        obj.end_grab()
        press(obj, TRANSLATE)
        assert obj.scale_anchor is None


# ══════════════════════════════════════════════════════════════════════════
# Handle effects
# ══════════════════════════════════════════════════════════════════════════

class TestTranslate:

    def test_center_follows_cursor(self, make_object):
        obj = make_object()
        press(obj, TRANSLATE)
        hold(obj, Vec2(450, 300))
        assert obj.transform.position == Vec2(450, 300)
        hold(obj, Vec2(-20, 700))
        assert obj.transform.position == Vec2(-20, 700)

    def test_other_fields_unchanged(self, make_object):
        obj = make_object(rotation=0.3)
        press(obj, obj.transform.position)
        hold(obj, Vec2(100, 100))
        assert obj.transform.rotation == 0.3
        assert obj.transform.scale == 0.6
        assert obj.transform.opacity == 200


class TestScale:

    def test_proportional_to_distance(self, make_object):
        obj = make_object()
        press(obj, SCALE)
        # Grabbed at local (375, 275): scale is buffer distance over that length
        hold(obj, Vec2(400 + 375 * 0.5, 300 + 275 * 0.5))
        assert obj.transform.scale == pytest.approx(0.5)

    def test_no_jump_on_first_drag(self, make_object):
        obj = make_object()
        press(obj, SCALE)
        hold(obj, SCALE)
        assert obj.transform.scale == pytest.approx(0.6)

    def test_clamped_low(self, make_object):
        obj = make_object()
        press(obj, SCALE)
        hold(obj, Vec2(400, 300))
        assert obj.transform.scale == pytest.approx(0.1)

    def test_clamped_high(self, make_object):
        obj = make_object()
        press(obj, SCALE)
        hold(obj, Vec2(3000, 3000))
        assert obj.transform.scale == pytest.approx(1.0)


class TestRotate:

    def test_no_jump_on_press(self, make_object):
        obj = make_object(rotation=0.25)
        cursor = obj.transform.apply(Vec2(0, -275))
        press(obj, cursor)
        assert obj.grabbed is HandleKind.ROTATE
        hold(obj, cursor)
        assert obj.transform.rotation == pytest.approx(0.25)

    def test_quarter_turn_clockwise(self, make_object):
        obj = make_object()
        press(obj, ROTATE)
        # From straight up to straight right
        hold(obj, Vec2(565, 300))
        r = obj.transform.rotation
        assert math.cos(r) == pytest.approx(0.0, abs=1e-9)
        assert math.sin(r) == pytest.approx(1.0)

    def test_position_and_scale_unchanged(self, make_object):
        obj = make_object()
        press(obj, ROTATE)
        hold(obj, Vec2(300, 200))
        assert obj.transform.position == Vec2(400, 300)
        assert obj.transform.scale == 0.6


class TestOpacity:

    def test_drag_up_increases(self, make_object):
        obj = make_object()
        press(obj, OPACITY)
        hold(obj, Vec2(625, 105))
        assert obj.transform.opacity == 230

    def test_drag_down_decreases(self, make_object):
        obj = make_object()
        press(obj, OPACITY)
        hold(obj, Vec2(625, 185))
        assert obj.transform.opacity == 150

    @pytest.mark.parametrize("y, expected", [(-5000, 255), (5000, 0)])
    def test_clamped(self, make_object, y, expected):
        obj = make_object()
        press(obj, OPACITY)
        hold(obj, Vec2(625, y))
        assert obj.transform.opacity == expected


class TestDelete:

    def test_press_marks_dead_without_grab(self, make_object):
        obj = make_object()
        assert press(obj, DELETE) is True
        assert obj.dead is True
        assert obj.grabbed is None

    def test_hover_does_not_delete(self, make_object):
        obj = make_object()
        obj.handle_input(DELETE, ClickState.IDLE)
        obj.handle_input(DELETE, ClickState.HELD)
        assert obj.dead is False


# ══════════════════════════════════════════════════════════════════════════
# Drawing
# ══════════════════════════════════════════════════════════════════════════

class TestDraw:

    @pytest.fixture
    def grid(self):
        buffer = bytearray(800 * 600 * 4)
        return PixelGrid(buffer, 800, 600)

    def test_border_only_when_controls_hidden(self, make_object, grid):
        obj = make_object()
        obj.draw(grid)
        # Canvas corner lands at (400 - 240, 300 - 180)
        assert grid.get_pixel(Vec2(160, 120))[:3] == COLOR_NEUTRAL
        assert grid.get_pixel(TRANSLATE)[:3] != COLOR_HOVERABLE

    def test_handles_drawn_when_visible(self, make_object, grid):
        obj = make_object()
        obj.handle_input(EMPTY, ClickState.IDLE)
        obj.draw(grid)
        assert grid.get_pixel(SCALE)[:3] == COLOR_HOVERABLE
        assert grid.get_pixel(DELETE)[:3] == COLOR_HOVERABLE

    def test_hovered_and_grabbed_colors(self, make_object, grid):
        obj = make_object()
        obj.handle_input(SCALE, ClickState.IDLE)
        obj.draw(grid)
        assert grid.get_pixel(SCALE)[:3] == COLOR_HOVERING

        press(obj, TRANSLATE)
        obj.draw(grid)
        assert grid.get_pixel(Vec2(400, 302))[:3] == COLOR_GRABBING

    def test_draw_is_direct_write(self, make_object, grid):
        grid.fill((1, 2, 3), a=9)
        obj = make_object(opacity=10)
        obj.draw(grid)
        r, g, b, a = grid.get_pixel(Vec2(160, 120))
        assert (r, g, b) == COLOR_NEUTRAL
        assert a == 9
        assert np.count_nonzero(grid.pixels[:, :, 3] != 9) == 0
