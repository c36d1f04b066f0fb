import pytest

from fractal_clock.surface import ImageSurface, Point, RecordingSurface, Segment


def test_center_is_middle_of_device_pixels() -> None:
    assert ImageSurface(40, 20).center() == Point(20, 10)
    assert RecordingSurface(0, 0).center() == Point(0, 0)


def test_clear_fills_whole_image() -> None:
    surface = ImageSurface(10, 6)
    surface.clear((32, 32, 32))

    assert surface.image.getcolors() == [(60, (32, 32, 32))]


def test_opaque_line_uses_stroke_color() -> None:
    surface = ImageSurface(20, 20)
    surface.clear((0, 0, 0))
    surface.set_stroke_color((107, 228, 212))
    surface.set_line_width(1)
    surface.draw_line(Point(0, 10), Point(19, 10))

    assert surface.image.getpixel((10, 10)) == (107, 228, 212)
    assert surface.image.getpixel((10, 2)) == (0, 0, 0)


def test_translucent_line_blends_with_background() -> None:
    surface = ImageSurface(20, 20)
    surface.clear((0, 0, 0))
    surface.set_stroke_color((200, 100, 50))
    surface.set_opacity(0.5)
    surface.draw_line(Point(0, 10), Point(19, 10))

    r, g, b = surface.image.getpixel((10, 10))
    assert r == pytest.approx(100, abs=2)
    assert g == pytest.approx(50, abs=2)
    assert b == pytest.approx(25, abs=2)


def test_zero_opacity_draws_nothing() -> None:
    surface = ImageSurface(20, 20)
    surface.clear((5, 5, 5))
    surface.set_stroke_color((255, 255, 255))
    surface.set_opacity(0.0)
    surface.draw_line(Point(0, 10), Point(19, 10))

    assert surface.image.getcolors() == [(400, (5, 5, 5))]


def test_supersampled_surface_downsamples_to_logical_size() -> None:
    surface = ImageSurface.from_logical_size(30, 20, pixel_ratio=2.0)

    assert (surface.width, surface.height) == (60, 40)
    assert surface.logical_size == (30, 20)
    assert surface.to_image().size == (30, 20)


def test_recording_surface_captures_state_with_each_segment() -> None:
    surface = RecordingSurface(10, 10)
    surface.set_stroke_color([1, 2, 3])
    surface.set_line_width(4)
    surface.set_opacity(0.25)
    surface.draw_line((0, 0), (5, 5))

    assert surface.segments == [Segment(Point(0, 0), Point(5, 5), 0.25, (1, 2, 3), 4)]

    surface.reset()
    assert surface.calls == []
