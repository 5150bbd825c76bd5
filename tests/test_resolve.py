import math

import pytest

from conftest import LETTERS
from spinner import DEFAULT_SEGMENT_SETS, pointer_angle, resolve_segment, target_remainder


def test_zero_rotation_lands_on_first_segment():
    assert resolve_segment(0, LETTERS) == (0, "A")


@pytest.mark.parametrize("index", range(8))
def test_segment_midpoints(index):
    rotation = 360 - (45 * index + 22.5)
    assert resolve_segment(rotation, LETTERS) == (index, LETTERS[index])


@pytest.mark.parametrize("rotation", [-725.5, -10.0, 0.0, 12.25, 359.5, 1282.5, 100000.75])
@pytest.mark.parametrize("turns", [-3, 1, 7])
def test_full_turns_do_not_change_the_segment(rotation, turns):
    index, label = resolve_segment(rotation, LETTERS)
    assert 0 <= index <= 7
    assert resolve_segment(rotation + 360 * turns, LETTERS) == (index, label)


def test_negative_rotations():
    # Turning the wheel back by 90 degrees brings segment 2 under the pointer.
    assert resolve_segment(-90, LETTERS) == (2, "C")
    assert resolve_segment(-22.5, LETTERS) == (0, "A")
    assert resolve_segment(-1e-15, LETTERS) == (0, "A")


def test_pointer_angle_stays_in_range():
    for rotation in (-1e-15, -360, 0, 45, 359.999, 360, 721.5):
        angle = pointer_angle(rotation)
        assert 0 <= angle < 360


def test_clockwise_rotation_moves_earlier_segments_past_pointer():
    # Rotating clockwise by a little less than a segment brings the last segment under the pointer.
    assert resolve_segment(40, LETTERS) == (7, "H")
    assert resolve_segment(50, LETTERS) == (6, "G")


@pytest.mark.parametrize("index", range(8))
def test_target_remainder_resolves_to_its_segment(index):
    assert resolve_segment(target_remainder(index), LETTERS)[0] == index
    assert resolve_segment(target_remainder(index) + 18, LETTERS)[0] == index
    assert resolve_segment(target_remainder(index) - 18, LETTERS)[0] == index


def test_duplicate_labels_resolve_by_index():
    hidden = DEFAULT_SEGMENT_SETS["hidden"]
    assert resolve_segment(360 - 67.5, hidden) == (1, "wave")
    assert resolve_segment(360 - 112.5, hidden) == (2, "penguin")


@pytest.mark.parametrize("rotation", [math.inf, -math.inf, math.nan])
def test_non_finite_rotation_is_rejected(rotation):
    with pytest.raises(ValueError):
        resolve_segment(rotation, LETTERS)
