import pytest

pytest.importorskip("tkinter")
pytest.importorskip("PIL.ImageTk")

from spinner import resolve_segment  # noqa: E402
from spinner_window_render import (  # noqa: E402
    DEFAULT_CANVAS_SIZE,
    SpinnerWindowRender,
    canvas_extent,
    ease_out_cubic,
    orbit_position,
    segment_arc_start,
)


def test_ease_out_cubic_endpoints():
    assert ease_out_cubic(0) == 0
    assert ease_out_cubic(1) == 1
    assert ease_out_cubic(0.5) == pytest.approx(0.875)
    assert ease_out_cubic(2) == 1
    assert ease_out_cubic(-1) == 0


def test_first_segment_starts_at_the_top():
    # Clockwise 0..45 from the top is Tk's 45..90.
    assert segment_arc_start(0, 0) == 45
    assert segment_arc_start(2, 0) == 315


def test_rotation_shifts_segments_clockwise():
    assert segment_arc_start(0, 90) == segment_arc_start(2, 0)


def test_orbit_position():
    x, y = orbit_position(0, 100, 100, 10)
    assert (x, y) == pytest.approx((100, 90))
    x, y = orbit_position(90, 100, 100, 10)
    assert (x, y) == pytest.approx((110, 100))


@pytest.mark.parametrize("rotation", [0.5, 10, 100.25, 202.5, 359, 1282.5, 3000.75])
def test_drawn_segment_under_pointer_matches_resolver(rotation):
    index, _ = resolve_segment(rotation, list("ABCDEFGH"))
    start = segment_arc_start(index, rotation % 360)
    # The pointer sits at Tk angle 90.
    assert 0 < (90 - start) % 360 <= 45


def test_canvas_extent_before_and_after_mapping():
    assert canvas_extent(1, 480) == 480
    assert canvas_extent(1, 1) == DEFAULT_CANVAS_SIZE
    assert canvas_extent(820, 480) == 820


class FakeCanvas:
    def __init__(self, width, height):
        self.width = width
        self.height = height

    def winfo_width(self):
        return self.width

    def winfo_height(self):
        return self.height

    def winfo_reqwidth(self):
        return 600

    def winfo_reqheight(self):
        return 600


class FakeController:
    segments = list("ABCDEFGH")


class FakeSettings:
    def __init__(self, image_dir):
        self.image_dir = image_dir
        self.image_ext = ".png"


class RenderHost(SpinnerWindowRender):
    def __init__(self, canvas, image_dir):
        self.canvas = canvas
        self.controller = FakeController()
        self.settings = FakeSettings(image_dir)
        self.segment_images = []
        self.image_cache = {}
        self.missing_images = set()
        self.image_size = 0


def test_unmapped_canvas_uses_requested_size(tmp_path):
    host = RenderHost(FakeCanvas(1, 1), tmp_path)
    assert host._canvas_size() == (600, 600)
    host._load_images()
    assert host.image_size == int(600 * 0.14)


def test_resizing_keeps_only_current_image_size(tmp_path):
    canvas = FakeCanvas(600, 600)
    host = RenderHost(canvas, tmp_path)
    host._load_images()
    canvas.width = canvas.height = 900
    host._load_images()

    assert {size for _, size in host.image_cache} == {host.image_size}
    assert len(host.image_cache) == 8
    assert host.segment_images == [None] * 8
