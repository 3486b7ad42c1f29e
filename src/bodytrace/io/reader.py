"""Mask reader for loading segmentation masks from disk.

This module provides the MaskReader class for loading mask files and
turning them into MaskSpec inputs for the pipeline.

Supported formats:
- .json: {"width": W, "height": H, "data": [...], "threshold"?: T,
  "max_value"?: M}; with max_value the data is treated as intensity
- anything Pillow can open (PNG, WebP, BMP, ...), read via the
  segmentation-source adapters
"""

import json
from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError

from bodytrace.domain import MaskSpec
from bodytrace.exceptions import MaskError, MaskLoadError
from bodytrace.io.adapters import Channel, from_image, from_intensity

JSON_SUFFIXES = (".json",)


class MaskReader:
    """Loads masks from JSON or image files.

    Example:
        reader = MaskReader(Path("frame-0001.png"))
        spec = reader.load()
        print(spec.width, spec.height)
    """

    def __init__(
        self,
        mask_path: Path,
        threshold: float = 0.5,
        channel: Channel = Channel.AUTO,
    ) -> None:
        """Initialize the mask reader.

        Args:
            mask_path: Path to the mask file
            threshold: Threshold for JSON masks that do not carry their own
            channel: Channel holding the mask in colour images
        """
        self._mask_path = Path(mask_path)
        self._threshold = threshold
        self._channel = Channel(channel)

    @property
    def path(self) -> Path:
        return self._mask_path

    @property
    def format(self) -> str:
        """Return mask file format ('JSON' or 'Image')."""
        if self._mask_path.suffix.lower() in JSON_SUFFIXES:
            return "JSON"
        return "Image"

    def load(self) -> MaskSpec:
        """Load the mask file.

        Returns:
            MaskSpec ready for the pipeline

        Raises:
            FileNotFoundError: If the mask file does not exist
            MaskLoadError: If the file cannot be parsed as a mask
        """
        if not self._mask_path.exists():
            raise FileNotFoundError(f"Mask file not found: {self._mask_path}")

        if self.format == "JSON":
            return self._load_json()
        return self._load_image()

    def _load_json(self) -> MaskSpec:
        try:
            with self._mask_path.open(encoding="utf-8") as f:
                payload: Any = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise MaskLoadError(str(self._mask_path), str(e)) from e

        if not isinstance(payload, dict):
            raise MaskLoadError(str(self._mask_path), "top-level JSON value must be an object")

        missing = [key for key in ("width", "height", "data") if key not in payload]
        if missing:
            raise MaskLoadError(str(self._mask_path), f"missing keys: {', '.join(missing)}")

        width, height, data = payload["width"], payload["height"], payload["data"]
        if "max_value" in payload:
            try:
                return from_intensity(width, height, data, max_value=payload["max_value"])
            except MaskError as e:
                raise MaskLoadError(str(self._mask_path), str(e)) from e

        return MaskSpec(
            width=width,
            height=height,
            data=data,
            threshold=payload.get("threshold", self._threshold),
        )

    def _load_image(self) -> MaskSpec:
        try:
            with Image.open(self._mask_path) as image:
                image.load()
                return from_image(image, channel=self._channel)
        except (UnidentifiedImageError, OSError) as e:
            raise MaskLoadError(str(self._mask_path), str(e)) from e
