"""
Test the Vec2 and Rect value types
"""
import dataclasses

import numpy as np
import pytest

from warpgrid.model.geometry_primitives import Rect, Vec2


def test_vec2_arithmetic():
    a = Vec2(1.0, 2.0)
    b = Vec2(3.0, -1.0)

    assert a + b == Vec2(4.0, 1.0)
    assert a - b == Vec2(-2.0, 3.0)
    assert a * 2.0 == Vec2(2.0, 4.0)
    assert 0.5 * a == Vec2(0.5, 1.0)
    assert b / 2.0 == Vec2(1.5, -0.5)
    assert -a == Vec2(-1.0, -2.0)

    with pytest.raises(ZeroDivisionError):
        a / 0.0


def test_vec2_is_immutable():
    a = Vec2(1.0, 2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.x = 5.0


def test_vec2_conversions():
    x, y = Vec2(3.0, 4.0)
    assert (x, y) == (3.0, 4.0)
    assert Vec2(3.0, 4.0).magnitude == 5.0
    assert Vec2.from_iterable(np.array([1, 2])) == Vec2(1.0, 2.0)
    assert np.array_equal(Vec2(1.5, 2.5).to_array(), [1.5, 2.5])
    assert Vec2(0.1 + 0.2, 1.0).is_close(Vec2(0.3, 1.0))


def test_rect_resize_and_move():
    rect = Rect(Vec2(10.0, 20.0), 100, 50)
    assert rect.size == (100, 50)

    rect.resize(40, 30)
    rect.move_to(Vec2(-5.0, 0.0))
    assert rect == Rect(Vec2(-5.0, 0.0), 40, 30)

    rect.set_width(60)
    rect.set_height(70)
    assert rect.size == (60, 70)
    assert rect.contains(Vec2(0.0, 70.0))
    assert not rect.contains(Vec2(56.0, 0.0))
