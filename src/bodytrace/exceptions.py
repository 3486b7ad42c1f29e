"""Exception hierarchy for Bodytrace."""


class BodytraceError(Exception):
    """Base exception for all Bodytrace errors."""

    pass


class MaskError(BodytraceError):
    """Errors related to mask input."""

    pass


class MaskShapeError(MaskError):
    """Mask dimensions do not match the supplied data."""

    def __init__(self, width: object, height: object, length: int | None, reason: str) -> None:
        self.width = width
        self.height = height
        self.length = length
        self.reason = reason
        super().__init__(f"Invalid mask shape {width}x{height} (data length {length}): {reason}")


class MaskEncodingError(MaskError):
    """Mask data is not a recognised numeric encoding."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Unsupported mask encoding: {details}")


class MaskLoadError(MaskError):
    """Error loading a mask file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load mask '{path}': {reason}")


class GeometryError(BodytraceError):
    """Errors in geometric calculations."""

    pass


class ContourError(GeometryError):
    """Error with contour data or operations."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class OutputError(BodytraceError):
    """Errors related to writing outlines."""

    pass


class OutlineSaveError(OutputError):
    """Error saving an outline file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save outline '{path}': {reason}")
