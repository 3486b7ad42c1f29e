"""SVG writer for traced outlines.

This module provides the OutlineWriter class, which wraps an OutlinePath
in a standalone SVG document sized to the source mask.
"""

from pathlib import Path
from xml.sax.saxutils import quoteattr

from bodytrace.domain import OutlinePath
from bodytrace.exceptions import OutlineSaveError

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def render_svg(
    path: OutlinePath,
    width: int,
    height: int,
    stroke: str = "#000000",
    stroke_width: float = 2.0,
    fill: str = "none",
    precision: int = 2,
) -> str:
    """Render an outline as an SVG document string.

    Args:
        path: Outline to draw
        width: Canvas width (mask width in pixels)
        height: Canvas height (mask height in pixels)
        stroke: Stroke colour
        stroke_width: Stroke width in pixels
        fill: Fill colour ("none" for an outline only)
        precision: Maximum decimal places per coordinate

    Returns:
        SVG document text
    """
    d = path.to_svg_path(precision=precision)
    svg_parts = [
        '<?xml version="1.0" encoding="UTF-8" standalone="no"?>',
        f'<svg xmlns="{SVG_NAMESPACE}" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">',
        f"  <path d={quoteattr(d)} stroke={quoteattr(stroke)} "
        f'stroke-width="{stroke_width:g}" fill={quoteattr(fill)} '
        'stroke-linejoin="round" stroke-linecap="round"/>',
        "</svg>",
    ]
    return "\n".join(svg_parts) + "\n"


class OutlineWriter:
    """Writes outlines as SVG files.

    Example:
        writer = OutlineWriter(Path("frame-outline.svg"))
        writer.write(result.path, width=640, height=480)
    """

    def __init__(
        self,
        output_path: Path,
        stroke: str = "#000000",
        stroke_width: float = 2.0,
        fill: str = "none",
        precision: int = 2,
    ) -> None:
        """Initialize the outline writer.

        Args:
            output_path: Path where the SVG will be saved
            stroke: Stroke colour
            stroke_width: Stroke width in pixels
            fill: Fill colour
            precision: Maximum decimal places per coordinate
        """
        self._output_path = Path(output_path)
        self._stroke = stroke
        self._stroke_width = stroke_width
        self._fill = fill
        self._precision = precision

    @property
    def output_path(self) -> Path:
        return self._output_path

    def render(self, path: OutlinePath, width: int, height: int) -> str:
        """Render the outline without writing it."""
        return render_svg(
            path,
            width,
            height,
            stroke=self._stroke,
            stroke_width=self._stroke_width,
            fill=self._fill,
            precision=self._precision,
        )

    def write(self, path: OutlinePath, width: int, height: int) -> None:
        """Write the outline to the output path.

        Raises:
            OutlineSaveError: If the file cannot be written
        """
        try:
            self._output_path.write_text(self.render(path, width, height), encoding="utf-8")
        except OSError as e:
            raise OutlineSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_outline_path(input_path: Path, output_dir: Path | None = None) -> Path:
        """Generate output path with the outline naming convention.

        Converts: frame.png -> frame-outline.svg
                  masks/0001.json -> masks/0001-outline.svg

        Args:
            input_path: Mask file path
            output_dir: Directory for the SVG (defaults to the mask's directory)

        Returns:
            Path with -outline suffix and .svg extension
        """
        parent = output_dir if output_dir is not None else input_path.parent
        return parent / f"{input_path.stem}-outline.svg"
