"""Tests for MIME helpers, slugs and the timing decorator."""

from pathlib import Path

import pytest
from loguru import logger

from image_renditions.utils.media_types import determine_mime, extension_for_mime
from image_renditions.utils.profiling import timed
from image_renditions.utils.slug import slugify

# ============================================================================
# MEDIA TYPES
# ============================================================================


class TestExtensionForMime:
    def test_known_types(self) -> None:
        assert extension_for_mime("image/jpeg") == "jpeg"
        assert extension_for_mime("IMAGE/PNG") == "png"
        assert extension_for_mime("image/gif") == "gif"

    def test_unknown_types(self) -> None:
        assert extension_for_mime(None) is None
        assert extension_for_mime("") is None
        assert extension_for_mime("application/zip") is None


@pytest.mark.requires_libmagic
class TestDetermineMime:
    def test_jpeg(self, make_jpeg) -> None:
        assert determine_mime(make_jpeg(20, 20, name="noext")) == "image/jpeg"

    def test_png(self, make_png) -> None:
        assert determine_mime(make_png(20, 20, name="noext")) == "image/png"

    def test_missing_file(self, tmp_path: Path) -> None:
        assert determine_mime(tmp_path / "missing") is None

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty"
        path.touch()

        assert determine_mime(path) is None


# ============================================================================
# SLUG
# ============================================================================


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Écharpe rouge (1)", "Echarpe-rouge-1"),
        ("  spaces  everywhere ", "spaces-everywhere"),
        ("already-fine_42", "already-fine-42"),
        ("###", "file"),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected


# ============================================================================
# PROFILING
# ============================================================================


def test_timed_preserves_result_and_errors() -> None:
    @timed
    def add(a: int, b: int) -> int:
        return a + b

    @timed
    def fail() -> None:
        raise RuntimeError("boom")

    assert add(2, 3) == 5
    assert add.__name__ == "add"
    with pytest.raises(RuntimeError):
        fail()


def test_timed_logs_the_rendition_name() -> None:
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")

    @timed
    def step(*, name: str) -> str:
        return name

    @timed
    def anonymous() -> None:
        return None

    try:
        _ = step(name="small_42.jpeg")
        anonymous()
    finally:
        logger.remove(handler_id)

    assert any("step[small_42.jpeg] took" in m for m in messages)
    assert any("anonymous took" in m for m in messages)
