"""End-to-end tests: image masks on disk to SVG outlines."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from fontTools.pens.boundsPen import BoundsPen
from PIL import Image, ImageDraw

from bodytrace.config import BodytraceSettings
from bodytrace.core.pipeline import OutlinePipeline
from bodytrace.core.processor import FrameProcessor
from bodytrace.io import MaskReader, from_rgba

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def keep_settings() -> BodytraceSettings:
    return BodytraceSettings.model_validate({"dedup": {"singleton_policy": "keep"}})


@pytest.fixture
def disc_png(tmp_path: Path) -> Path:
    """64x48 greyscale mask with a filled disc."""
    image = Image.new("L", (64, 48), 0)
    ImageDraw.Draw(image).ellipse((16, 8, 47, 39), fill=255)
    path = tmp_path / "disc.png"
    image.save(path)
    return path


def path_bounds(result) -> tuple[float, float, float, float]:
    pen = BoundsPen(None)
    result.path.draw(pen)
    return pen.bounds


class TestImageToOutline:
    """Image file through the full pipeline."""

    def test_disc_outline_matches_disc(self, disc_png: Path, keep_settings: BodytraceSettings) -> None:
        spec = MaskReader(disc_png).load()
        result = OutlinePipeline(keep_settings).run(spec)

        assert result.ok
        assert result.contours
        assert result.stats.points_after < result.stats.points_before

        x_min, y_min, x_max, y_max = path_bounds(result)
        assert 14 <= x_min <= 19
        assert 6 <= y_min <= 11
        assert 44 <= x_max <= 49
        assert 36 <= y_max <= 41

    def test_disc_touching_frame_edge_is_clipped(self, tmp_path: Path, keep_settings: BodytraceSettings) -> None:
        image = Image.new("L", (40, 40), 0)
        ImageDraw.Draw(image).ellipse((-10, 5, 20, 35), fill=255)
        path = tmp_path / "edge.png"
        image.save(path)

        result = OutlinePipeline(keep_settings).run(MaskReader(path).load())
        assert result.contours
        for contour in result.contours:
            assert min(p.x for p in contour) >= 1

    def test_rgba_canvas_buffer(self, keep_settings: BodytraceSettings) -> None:
        image = Image.new("RGBA", (32, 32), (0, 0, 0, 0))
        ImageDraw.Draw(image).rectangle((8, 8, 23, 23), fill=(255, 255, 255, 255))
        spec = from_rgba(32, 32, image.tobytes())

        result = OutlinePipeline(keep_settings).run(spec)
        assert result.path.contour_count == 1
        assert path_bounds(result) == pytest.approx((8, 8, 23, 23), abs=1)


class TestBatchToSvg:
    """Batch processing writes valid SVG documents."""

    def test_svg_documents(self, disc_png: Path, tmp_path: Path, keep_settings: BodytraceSettings) -> None:
        processor = FrameProcessor(keep_settings, quiet=True)
        out_dir = tmp_path / "out"
        out_dir.mkdir()

        stats, written = processor.process_files([disc_png], output_dir=out_dir, max_workers=1)
        assert stats.error_count == 0
        assert written == [out_dir / "disc-outline.svg"]

        root = ET.parse(written[0]).getroot()
        assert root.tag == f"{SVG_NS}svg"
        assert root.attrib["viewBox"] == "0 0 64 48"

        path_el = root.find(f"{SVG_NS}path")
        assert path_el is not None
        d = path_el.attrib["d"]
        assert d.startswith("M")
        assert d.endswith("Z")
        assert "Q" in d

    def test_parallel_matches_sequential(self, disc_png: Path, keep_settings: BodytraceSettings) -> None:
        spec = MaskReader(disc_png).load()
        processor = FrameProcessor(keep_settings, quiet=True)

        sequential, _ = processor.process([spec, spec], max_workers=1)
        parallel, _ = processor.process([spec, spec], max_workers=2)
        assert {i: r.path for i, r in sequential.items()} == {i: r.path for i, r in parallel.items()}
