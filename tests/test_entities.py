"""
Tests for the Ball and Paddle value types.

Tests cover:
- Serve randomization
- Paddle movement clamping
- Shrinking around the centre with a floor
- Advancing toward the centre line within limits
"""

import random
from dataclasses import FrozenInstanceError

import pytest

from paddleball.game import Ball, Paddle, Zone


class TestBall:

    def test_serve_from_center(self):
        ball = Ball.serve((200, 400), 8, 3.0, 6.0, rng=random.Random(1))
        assert ball.position == (200, 400)
        assert ball.radius == 8

    def test_serve_speed_within_jitter(self):
        rng = random.Random(42)
        for _ in range(200):
            ball = Ball.serve((0, 0), 8, 3.0, 6.0, jitter=(0.8, 1.2), rng=rng)
            assert 3.0 * 0.8 <= abs(ball.vx) < 3.0 * 1.2
            assert 6.0 * 0.8 <= abs(ball.vy) < 6.0 * 1.2

    def test_serve_direction_varies(self):
        rng = random.Random(7)
        signs = set()
        for _ in range(100):
            ball = Ball.serve((0, 0), 8, 3.0, 6.0, rng=rng)
            signs.add((ball.vx > 0, ball.vy > 0))
        assert len(signs) == 4

    def test_moved_is_tentative(self):
        ball = Ball(x=10, y=20, radius=5, vx=2, vy=-3)
        assert ball.moved() == (12, 17)
        assert ball.position == (10, 20)

    def test_speed(self):
        assert Ball(x=0, y=0, radius=1, vx=3, vy=4).speed == pytest.approx(5)

    def test_copies(self):
        ball = Ball(x=0, y=0, radius=1, vx=3, vy=4)
        assert ball.at(5, 6).position == (5, 6)
        assert ball.with_velocity(-1, 1).velocity == (-1, 1)
        assert ball.position == (0, 0)

    def test_frozen(self):
        ball = Ball(x=0, y=0, radius=1)
        with pytest.raises(FrozenInstanceError):
            ball.x = 5

    def test_bounds(self):
        assert Ball(x=10, y=20, radius=5).get_bounds() == (5, 15, 15, 25)


class TestPaddle:

    @pytest.fixture
    def top(self):
        return Paddle(Zone.TOP, x=130, y=176, width=140, height=16)

    @pytest.fixture
    def bottom(self):
        return Paddle(Zone.BOTTOM, x=130, y=608, width=140, height=16)

    def test_impact_face_depends_on_zone(self, top, bottom):
        assert top.impact_y == 192
        assert bottom.impact_y == 608

    def test_edges(self, top):
        assert (top.left, top.right, top.top, top.bottom) == (130, 270, 176, 192)
        assert top.center_x == 200

    def test_moved_by(self, top):
        assert top.moved_by(25, 400).x == 155
        assert top.moved_by(-25, 400).x == 105

    def test_moved_by_clamps(self, top):
        assert top.moved_by(1000, 400).x == 260
        assert top.moved_by(-1000, 400).x == 0

    def test_shrunk_keeps_centre(self, top):
        shrunk = top.shrunk(0.98, 60, 400)
        assert shrunk.width == pytest.approx(137.2)
        assert shrunk.x == pytest.approx(131.4)
        assert shrunk.center_x == pytest.approx(200)

    def test_shrunk_floor(self):
        paddle = Paddle(Zone.TOP, x=0, y=0, width=61, height=16)
        assert paddle.shrunk(0.98, 60, 400).width == 60
        assert paddle.shrunk(0.98, 60, 400).shrunk(0.98, 60, 400).width == 60

    def test_shrunk_stays_inside(self):
        paddle = Paddle(Zone.TOP, x=0, y=0, width=100, height=16)
        shrunk = paddle.shrunk(0.5, 10, 400)
        assert shrunk.x >= 0
        assert shrunk.right <= 400

    def test_advance_top_moves_down(self, top):
        assert top.advanced(4, (160, 368)).y == 180

    def test_advance_bottom_moves_up(self, bottom):
        assert bottom.advanced(4, (416, 624)).y == 604

    def test_advance_clamps_at_limit(self):
        top = Paddle(Zone.TOP, x=0, y=366, width=100, height=16)
        bottom = Paddle(Zone.BOTTOM, x=0, y=418, width=100, height=16)
        assert top.advanced(4, (160, 368)).y == 368
        assert bottom.advanced(4, (416, 624)).y == 416

    def test_advance_never_moves_backwards(self):
        top = Paddle(Zone.TOP, x=0, y=370, width=100, height=16)
        bottom = Paddle(Zone.BOTTOM, x=0, y=410, width=100, height=16)
        assert top.advanced(4, (160, 368)).y == 370
        assert bottom.advanced(4, (416, 624)).y == 410
