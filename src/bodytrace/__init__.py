"""Bodytrace - Turn segmentation masks into smooth vector outlines.

Bodytrace takes a per-pixel foreground/background mask of a video frame
(binary, probability or channel-extracted intensity) and traces the
foreground boundary into closed, simplified contours rendered as path
commands (straight segments or quadratic curves).

Example:
    $ bodytrace frame-0001.png

This will create frame-0001-outline.svg containing the traced silhouette.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
