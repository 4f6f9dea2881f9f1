"""Test configuration and fixtures for image_renditions.

This module provides:
- Pytest configuration (markers, dependency checks)
- Image factories writing synthetic JPEG/PNG/GIF files with PIL
- Service, storage and upload fixtures bound to tmp_path
"""

import ctypes.util
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from image_renditions import (
    ImageRenditionService,
    LocalFileStorage,
    RenditionSettings,
    UploadedImage,
)

ImageFactory = Callable[..., Path]


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "requires_libmagic: requires the libmagic shared library",
    )


def pytest_runtest_setup(item):
    """Check dependencies before running tests - FAIL if missing (not skip)."""
    if item.get_closest_marker("requires_libmagic") and not ctypes.util.find_library("magic"):
        pytest.fail(
            "libmagic not installed. "
            "Install: brew install libmagic (macOS) or apt-get install libmagic1 (Linux)\n"
            "Or exclude with: pytest -m 'not requires_libmagic'",
            pytrace=False,
        )


# ============================================================================
# Image Factories
# ============================================================================


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Directory standing in for the web server's upload temp dir."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def make_jpeg(source_dir: Path) -> ImageFactory:
    """Write a patterned RGB JPEG of the given size."""

    def _make(width: int, height: int, name: str = "photo.jpg") -> Path:
        path = source_dir / name
        img = Image.new("RGB", (width, height), color=(73, 109, 137))
        draw = ImageDraw.Draw(img)
        for x in range(0, width, 50):
            draw.line([(x, 0), (x, height)], fill=(255, 255, 255), width=2)
        draw.ellipse([width // 4, height // 4, width * 3 // 4, height * 3 // 4], fill=(200, 100, 100))
        img.save(path, "JPEG", quality=85)
        return path

    return _make


@pytest.fixture
def make_png(source_dir: Path) -> ImageFactory:
    """Write an RGBA PNG whose left half is fully transparent, right half opaque red."""

    def _make(width: int, height: int, name: str = "logo.png") -> Path:
        path = source_dir / name
        img = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(img)
        draw.rectangle([width // 2, 0, width - 1, height - 1], fill=(255, 0, 0, 255))
        img.save(path, "PNG")
        return path

    return _make


@pytest.fixture
def make_gif(source_dir: Path) -> ImageFactory:
    """Write a single-frame GIF."""

    def _make(width: int, height: int, name: str = "anim.gif") -> Path:
        path = source_dir / name
        Image.new("P", (width, height), 1).save(path, "GIF")
        return path

    return _make


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Rendition storage directory (created by the service itself)."""
    return tmp_path / "media" / "images"


@pytest.fixture
def settings(target_dir: Path) -> RenditionSettings:
    return RenditionSettings(
        target_directory=target_dir,
        allowed_mime_types={"image/jpeg", "image/png"},
        default=(800, 800),
        small=(200, 200),
        big=(1200, 1200),
    )


@pytest.fixture
def service(settings: RenditionSettings) -> ImageRenditionService:
    return ImageRenditionService(settings)


@pytest.fixture
def file_storage(tmp_path: Path) -> LocalFileStorage:
    return LocalFileStorage(base_dir=tmp_path / "file_storage")


@pytest.fixture
def jpeg_upload(make_jpeg: ImageFactory) -> UploadedImage:
    """A 2000x1000 JPEG upload."""
    path = make_jpeg(2000, 1000)
    return UploadedImage(path=path, mime_type="image/jpeg", client_name="photo.jpg")


@pytest.fixture
def png_upload(make_png: ImageFactory) -> UploadedImage:
    """A 300x300 transparent PNG upload."""
    path = make_png(300, 300)
    return UploadedImage(path=path, mime_type="image/png", client_name="logo.png")
