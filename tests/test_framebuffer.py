import numpy as np
from PIL import Image

from managers.framebuffer_manager import FramebufferManager, rgb_to_fb_data


def _fake_framebuffer(tmp_path, width: int, height: int, bpp: int):
    sysfs = tmp_path / "fb0"
    sysfs.mkdir()
    (sysfs / "virtual_size").write_text(f"{width},{height}\n")
    (sysfs / "bits_per_pixel").write_text(f"{bpp}\n")

    device = tmp_path / "fb-device"
    device.write_bytes(b"\x00" * (width * height * bpp // 8))
    return FramebufferManager(fb_device=str(device), sysfs_dir=str(sysfs)), device


def test_rgb565_packing() -> None:
    pixels = np.array([[[255, 255, 255], [255, 0, 0], [0, 255, 0], [0, 0, 255]]], dtype=np.uint8)

    packed = rgb_to_fb_data(pixels, 16)

    assert packed.dtype == np.uint16
    assert packed.tolist() == [[0xFFFF, 0xF800, 0x07E0, 0x001F]]


def test_xrgb8888_packing() -> None:
    pixels = np.array([[[1, 2, 3]]], dtype=np.uint8)

    assert rgb_to_fb_data(pixels, 32).tolist() == [[0xFF010203]]


def test_missing_device_is_reported_unavailable(tmp_path) -> None:
    manager = FramebufferManager(fb_device=str(tmp_path / "missing"), sysfs_dir=str(tmp_path))

    assert manager.initialize() is False
    assert manager.display_frame(Image.new('RGB', (4, 4))) is False
    assert manager.clear_screen() is False


def test_fit_to_size_letterboxes() -> None:
    img = Image.new('RGB', (100, 50), (200, 10, 10))

    fitted = FramebufferManager.fit_to_size(img, 100, 100, border=(1, 2, 3))

    assert fitted.size == (100, 100)
    assert fitted.getpixel((50, 5)) == (1, 2, 3)
    assert fitted.getpixel((50, 50)) == (200, 10, 10)


def test_display_frame_writes_rgb565_pixels(tmp_path) -> None:
    manager, device = _fake_framebuffer(tmp_path, 4, 2, 16)

    assert manager.initialize() is True
    assert manager.display_frame(Image.new('RGB', (4, 2), (255, 0, 0))) is True
    manager.cleanup()

    data = np.frombuffer(device.read_bytes(), dtype=np.uint16)
    assert data.tolist() == [0xF800] * 8
    assert manager.is_available is False


def test_clear_screen_fills_32bit_framebuffer(tmp_path) -> None:
    manager, device = _fake_framebuffer(tmp_path, 3, 3, 32)

    assert manager.initialize() is True
    assert manager.clear_screen((0, 128, 255)) is True
    manager.cleanup()

    data = np.frombuffer(device.read_bytes(), dtype=np.uint32)
    assert data.tolist() == [0xFF0080FF] * 9
