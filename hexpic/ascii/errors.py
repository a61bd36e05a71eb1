"""Error kinds raised by the hexpic conversion core and acquisition layer."""


class HexPicError(ValueError):
    """Base class for every input-validation failure in hexpic."""


class InvalidDimensions(HexPicError):
    """Requested or source width/height is zero, negative or not an integer."""


class EmptyCharset(HexPicError):
    """The charset has no glyphs."""


class DimensionMismatch(HexPicError):
    """Pixel buffer shape differs from the planned effective dimensions."""


class InvalidColor(HexPicError):
    """Background color could not be parsed."""


class ImageLoadError(HexPicError):
    """The source image could not be read, fetched or decoded."""


class ImageTooLarge(ImageLoadError):
    """The source image exceeds the configured pixel limit."""
