"""
Tests for the PointerMapper.

Arena height 800 with 160-pixel control zones: TOP zone is y < 160,
BOTTOM zone is y > 640.

Tests cover:
- Zone lookup and boundaries
- Claiming a zone on press, exclusivity between pointers
- Drag deltas turned into move commands
- Release and cancel
- Events from unknown pointers
- Driving a real GameEngine
"""

import pytest

from paddleball.game import Zone
from paddleball.input import PointerEvent, PointerMapper, PointerPhase
from paddleball.primitives import Vector2D

HEIGHT = 800.0
ZONE_HEIGHT = 160.0


def make_event(pointer_id, x, y, phase):
    return PointerEvent(pointer_id=pointer_id, position=Vector2D(x=x, y=y), phase=phase)


def press(pointer_id, x, y):
    return make_event(pointer_id, x, y, PointerPhase.PRESS)


def move(pointer_id, x, y):
    return make_event(pointer_id, x, y, PointerPhase.MOVE)


def release(pointer_id, x=0.0, y=0.0):
    return make_event(pointer_id, x, y, PointerPhase.RELEASE)


def cancel(pointer_id, x=0.0, y=0.0):
    return make_event(pointer_id, x, y, PointerPhase.CANCEL)


@pytest.fixture
def moves():
    """Records every move command."""
    return []


@pytest.fixture
def mapper(moves):
    return PointerMapper(lambda zone, dx: moves.append((zone, dx)), ZONE_HEIGHT)


# ============================================================================
# Zones
# ============================================================================


class TestZoneLookup:

    @pytest.mark.parametrize('y,zone', [
        (0, Zone.TOP),
        (159.9, Zone.TOP),
        (160, None),
        (400, None),
        (640, None),
        (640.1, Zone.BOTTOM),
        (800, Zone.BOTTOM),
    ])
    def test_zone_at(self, mapper, y, zone):
        assert mapper.zone_at(y, HEIGHT) is zone

    def test_press_outside_zones_is_ignored(self, mapper, moves):
        mapper.handle(press(1, 100, 400), HEIGHT)
        mapper.handle(move(1, 150, 400), HEIGHT)
        assert mapper.assignments == {}
        assert moves == []


# ============================================================================
# Assignment
# ============================================================================


class TestAssignment:

    def test_press_claims_zone(self, mapper):
        mapper.handle(press(1, 100, 50), HEIGHT)
        assignments = mapper.assignments
        assert assignments[1].zone is Zone.TOP
        assert assignments[1].last_x == 100
        assert mapper.owner_of(Zone.TOP) == 1
        assert mapper.owner_of(Zone.BOTTOM) is None

    def test_two_pointers_two_zones(self, mapper):
        mapper.handle_events([press(1, 100, 50), press(2, 300, 700)], HEIGHT)
        assert mapper.owner_of(Zone.TOP) == 1
        assert mapper.owner_of(Zone.BOTTOM) == 2

    def test_second_pointer_cannot_steal_zone(self, mapper, moves):
        mapper.handle_events([press(1, 100, 50), press(2, 300, 60)], HEIGHT)
        assert mapper.owner_of(Zone.TOP) == 1
        assert 2 not in mapper.assignments

        mapper.handle(move(2, 350, 60), HEIGHT)
        assert moves == []

    def test_zone_free_again_after_release(self, mapper):
        mapper.handle_events([press(1, 100, 50), release(1), press(2, 300, 60)], HEIGHT)
        assert mapper.owner_of(Zone.TOP) == 2

    def test_repeated_press_keeps_first_assignment(self, mapper):
        mapper.handle_events([press(1, 100, 50), press(1, 120, 700)], HEIGHT)
        assert mapper.assignments[1].zone is Zone.TOP
        assert mapper.owner_of(Zone.BOTTOM) is None

    def test_assignments_is_a_copy(self, mapper):
        mapper.handle(press(1, 100, 50), HEIGHT)
        mapper.assignments.clear()
        assert mapper.owner_of(Zone.TOP) == 1

    def test_clear(self, mapper):
        mapper.handle_events([press(1, 100, 50), press(2, 300, 700)], HEIGHT)
        mapper.clear()
        assert mapper.assignments == {}


# ============================================================================
# Moves
# ============================================================================


class TestMoves:

    def test_drag_emits_deltas(self, mapper, moves):
        mapper.handle_events([
            press(1, 100, 50),
            move(1, 130, 55),
            move(1, 110, 400),   # leaving the zone keeps the assignment
        ], HEIGHT)
        assert moves == [(Zone.TOP, 30), (Zone.TOP, -20)]

    def test_bottom_zone_drag(self, mapper, moves):
        mapper.handle_events([press(4, 200, 720), move(4, 260, 720)], HEIGHT)
        assert moves == [(Zone.BOTTOM, 60)]

    def test_interleaved_pointers(self, mapper, moves):
        mapper.handle_events([
            press(1, 100, 50),
            press(2, 300, 700),
            move(2, 290, 700),
            move(1, 105, 50),
        ], HEIGHT)
        assert moves == [(Zone.BOTTOM, -10), (Zone.TOP, 5)]

    def test_press_alone_does_not_move(self, mapper, moves):
        mapper.handle(press(1, 100, 50), HEIGHT)
        assert moves == []

    @pytest.mark.parametrize('end', [release, cancel])
    def test_no_moves_after_pointer_ends(self, mapper, moves, end):
        mapper.handle_events([press(1, 100, 50), end(1), move(1, 200, 50)], HEIGHT)
        assert moves == []
        assert mapper.assignments == {}

    def test_unknown_pointer_events_ignored(self, mapper, moves):
        mapper.handle_events([move(9, 100, 50), release(9), cancel(9)], HEIGHT)
        assert moves == []
        assert mapper.assignments == {}


class TestEngineIntegration:

    def test_drag_moves_engine_paddle(self, engine):
        mapper = PointerMapper(engine.move_paddle, engine.geometry.control_zone_height)
        mapper.handle_events([press(1, 200, 50), move(1, 240, 50)], 800)
        assert engine.snapshot().paddle_top.x == pytest.approx(170)
        assert engine.snapshot().paddle_bottom.x == pytest.approx(130)

    def test_drag_past_wall_is_clamped(self, engine):
        mapper = PointerMapper(engine.move_paddle, engine.geometry.control_zone_height)
        mapper.handle_events([press(1, 200, 750), move(1, -500, 750)], 800)
        assert engine.snapshot().paddle_bottom.x == 0
