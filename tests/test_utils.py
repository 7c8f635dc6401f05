import math

from skyline_bird.config import MIN_PLAYFIELD_HEIGHT, MIN_PLAYFIELD_WIDTH
from skyline_bird.utils import (
    clamp,
    finite_or,
    normalize_dt,
    sanitize_viewport,
    scale_color,
    spans_overlap,
    vertical_gradient,
)


def test_clamp_basic() -> None:
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_spans_overlap_excludes_touching_edges() -> None:
    assert spans_overlap(0, 10, 5, 15) is True
    assert spans_overlap(0, 10, 10, 20) is False
    assert spans_overlap(10, 20, 0, 10) is False
    assert spans_overlap(0, 100, 40, 50) is True


def test_finite_or() -> None:
    assert finite_or(3, 0.0) == 3.0
    assert finite_or(None, 7.0) == 7.0
    assert finite_or(float("nan"), 7.0) == 7.0
    assert finite_or(float("inf"), 7.0) == 7.0


def test_sanitize_viewport_clamps_to_minimum() -> None:
    assert sanitize_viewport(400, 600) == (400.0, 600.0)
    assert sanitize_viewport(10, 10) == (MIN_PLAYFIELD_WIDTH, MIN_PLAYFIELD_HEIGHT)
    assert sanitize_viewport(float("nan"), float("-inf")) == (MIN_PLAYFIELD_WIDTH, MIN_PLAYFIELD_HEIGHT)
    assert sanitize_viewport(-50, 2000) == (MIN_PLAYFIELD_WIDTH, 2000.0)


def test_normalize_dt() -> None:
    assert math.isclose(normalize_dt(16.67, 16.67), 1.0)
    assert math.isclose(normalize_dt(50.01, 16.67), 3.0)
    assert normalize_dt(-20, 16.67) == 0.0
    assert normalize_dt(float("nan"), 16.67) == 0.0


def test_scale_color_clamps() -> None:
    assert scale_color((100, 200, 250), 2.0) == (200, 255, 255)
    assert scale_color((100, 200, 250), 0.0) == (0, 0, 0)


def test_vertical_gradient_endpoints() -> None:
    img = vertical_gradient(4, 10, (0, 0, 0), (200, 100, 50))
    assert img.shape == (4, 10, 3)
    assert tuple(img[0, 0]) == (0, 0, 0)
    assert tuple(img[3, 9]) == (200, 100, 50)
