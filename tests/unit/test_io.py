"""Unit tests for the mask and outline I/O layer.

Tests for the segmentation-source adapters, MaskReader and OutlineWriter.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

from bodytrace.domain import OutlinePath, close_path, line_to, move_to
from bodytrace.exceptions import MaskEncodingError, MaskLoadError, MaskShapeError, OutlineSaveError
from bodytrace.io.adapters import (
    Channel,
    extract_channel,
    from_image,
    from_intensity,
    from_probabilities,
    from_rgba,
)
from bodytrace.io.reader import MaskReader
from bodytrace.io.writer import OutlineWriter, render_svg


@pytest.fixture
def triangle_path() -> OutlinePath:
    return OutlinePath(commands=(move_to(0, 0), line_to(10, 0), line_to(5, 10), close_path()))


class TestAdapters:
    """Tests for segmentation-source adapters."""

    def test_from_probabilities(self) -> None:
        spec = from_probabilities(2, 1, [0.1, 0.9], threshold=0.4)
        assert spec.threshold == 0.4
        assert list(spec.data) == [0.1, 0.9]

    def test_from_intensity_scales(self) -> None:
        spec = from_intensity(3, 1, [0, 128, 255])
        assert spec.data == [0.0, 128 / 255, 1.0]
        assert spec.threshold == pytest.approx(128 / 255)

    def test_intensity_cutoff_is_strict(self) -> None:
        from bodytrace.core.normalizer import normalize_mask

        mask = normalize_mask(from_intensity(3, 1, [128, 129, 200]))
        assert mask.cells == bytes([0, 1, 1])

    def test_from_intensity_bad_max(self) -> None:
        with pytest.raises(MaskEncodingError, match="max_value"):
            from_intensity(1, 1, [3], max_value=0)

    def test_from_intensity_non_numeric(self) -> None:
        with pytest.raises(MaskEncodingError):
            from_intensity(1, 1, ["a"])  # type: ignore[list-item]

    @pytest.mark.parametrize("max_value", ["255", None, True])
    def test_from_intensity_non_numeric_max(self, max_value: object) -> None:
        with pytest.raises(MaskEncodingError, match="max_value"):
            from_intensity(1, 1, [3], max_value=max_value)  # type: ignore[arg-type]

    def test_extract_alpha(self) -> None:
        buffer = [10, 0, 0, 200, 20, 0, 0, 0]
        assert extract_channel(2, 1, buffer, Channel.ALPHA) == [200, 0]

    def test_extract_red(self) -> None:
        buffer = [10, 0, 0, 200, 20, 0, 0, 0]
        assert extract_channel(2, 1, buffer, Channel.RED) == [10, 20]

    def test_extract_auto_falls_back_to_red(self) -> None:
        buffer = [10, 0, 0, 200, 20, 0, 0, 0]
        assert extract_channel(2, 1, buffer) == [200, 20]

    def test_extract_short_buffer(self) -> None:
        with pytest.raises(MaskShapeError, match="RGBA"):
            extract_channel(2, 2, [0] * 15)

    def test_from_rgba(self) -> None:
        buffer = bytes([0, 0, 0, 255, 0, 0, 0, 0])
        spec = from_rgba(2, 1, buffer)
        assert spec.data == [1.0, 0.0]

    def test_from_greyscale_image(self) -> None:
        image = Image.new("L", (4, 2), 0)
        image.putpixel((1, 1), 255)
        spec = from_image(image)
        assert (spec.width, spec.height) == (4, 2)
        assert spec.data[5] == 1.0
        assert sum(spec.data) == 1.0

    def test_from_rgb_image_uses_red(self) -> None:
        image = Image.new("RGB", (2, 1), (0, 0, 0))
        image.putpixel((0, 0), (255, 0, 0))
        spec = from_image(image)
        assert spec.data == [1.0, 0.0]

    def test_from_rgba_image_uses_alpha(self) -> None:
        image = Image.new("RGBA", (2, 1), (0, 0, 0, 0))
        image.putpixel((1, 0), (0, 0, 0, 255))
        spec = from_image(image, channel=Channel.ALPHA)
        assert spec.data == [0.0, 1.0]


class TestMaskReader:
    """Tests for MaskReader class."""

    def test_init(self) -> None:
        reader = MaskReader(Path("mask.json"))
        assert reader.path == Path("mask.json")
        assert reader.format == "JSON"
        assert MaskReader(Path("mask.PNG")).format == "Image"

    def test_load_nonexistent_file(self) -> None:
        with pytest.raises(FileNotFoundError):
            MaskReader(Path("nonexistent.json")).load()

    def test_load_json(self, tmp_path: Path) -> None:
        path = tmp_path / "frame.json"
        path.write_text(json.dumps({"width": 2, "height": 1, "data": [0, 0.8]}), encoding="utf-8")
        spec = MaskReader(path, threshold=0.6).load()
        assert (spec.width, spec.height) == (2, 1)
        assert list(spec.data) == [0, 0.8]
        assert spec.threshold == 0.6

    def test_json_threshold_wins(self, tmp_path: Path) -> None:
        path = tmp_path / "frame.json"
        path.write_text(
            json.dumps({"width": 1, "height": 1, "data": [0.3], "threshold": 0.2}),
            encoding="utf-8",
        )
        assert MaskReader(path).load().threshold == 0.2

    def test_json_intensity(self, tmp_path: Path) -> None:
        path = tmp_path / "frame.json"
        path.write_text(
            json.dumps({"width": 2, "height": 1, "data": [0, 255], "max_value": 255}),
            encoding="utf-8",
        )
        assert MaskReader(path).load().data == [0.0, 1.0]

    @pytest.mark.parametrize(
        "payload",
        [
            {"width": 2, "height": 1, "data": [0, 255], "max_value": 0},
            {"width": 2, "height": 1, "data": [0, 255], "max_value": "full"},
            {"width": 2, "height": 1, "data": 5, "max_value": 255},
        ],
    )
    def test_json_bad_intensity(self, tmp_path: Path, payload: dict) -> None:
        path = tmp_path / "frame.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(MaskLoadError, match="frame.json"):
            MaskReader(path).load()

    def test_json_missing_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "frame.json"
        path.write_text(json.dumps({"width": 2}), encoding="utf-8")
        with pytest.raises(MaskLoadError, match="height, data"):
            MaskReader(path).load()

    def test_json_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "frame.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(MaskLoadError, match="object"):
            MaskReader(path).load()

    def test_json_invalid(self, tmp_path: Path) -> None:
        path = tmp_path / "frame.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(MaskLoadError):
            MaskReader(path).load()

    def test_load_png(self, tmp_path: Path) -> None:
        path = tmp_path / "frame.png"
        image = Image.new("L", (3, 3), 0)
        image.putpixel((1, 1), 255)
        image.save(path)

        spec = MaskReader(path).load()
        assert (spec.width, spec.height) == (3, 3)
        assert spec.data[4] == 1.0

    def test_load_garbage_image(self, tmp_path: Path) -> None:
        path = tmp_path / "frame.png"
        path.write_bytes(b"definitely not a png")
        with pytest.raises(MaskLoadError):
            MaskReader(path).load()


class TestOutlineWriter:
    """Tests for OutlineWriter and render_svg."""

    def test_render_svg(self, triangle_path: OutlinePath) -> None:
        svg = render_svg(triangle_path, 640, 480)
        assert svg.startswith("<?xml")
        assert 'viewBox="0 0 640 480"' in svg
        assert 'width="640"' in svg
        assert 'fill="none"' in svg
        assert f'd="{triangle_path.to_svg_path()}"' in svg

    def test_render_empty_path(self) -> None:
        svg = render_svg(OutlinePath(), 10, 10)
        assert 'd=""' in svg

    def test_write(self, tmp_path: Path, triangle_path: OutlinePath) -> None:
        target = tmp_path / "frame-outline.svg"
        writer = OutlineWriter(target, stroke="#ff0000")
        writer.write(triangle_path, 20, 20)

        text = target.read_text(encoding="utf-8")
        assert 'stroke="#ff0000"' in text
        assert writer.output_path == target

    def test_write_failure(self, tmp_path: Path, triangle_path: OutlinePath) -> None:
        writer = OutlineWriter(tmp_path / "out.svg")
        with patch.object(Path, "write_text", side_effect=PermissionError("denied")):
            with pytest.raises(OutlineSaveError, match="denied"):
                writer.write(triangle_path, 20, 20)

    def test_get_outline_path(self) -> None:
        assert OutlineWriter.get_outline_path(Path("masks/0001.json")) == Path("masks/0001-outline.svg")
        assert OutlineWriter.get_outline_path(Path("a/frame.png"), Path("out")) == Path("out/frame-outline.svg")
