"""Character ramps ordered from darkest to lightest glyph."""

DEFAULT_CHARSET = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
CHARSET_STANDARD = "@%#*+=-:. "
CHARSET_BLOCKS = "█▓▒░ "
CHARSET_MINIMAL = "@Oo. "

CHARSETS = {
    "default": DEFAULT_CHARSET,
    "standard": CHARSET_STANDARD,
    "blocks": CHARSET_BLOCKS,
    "minimal": CHARSET_MINIMAL,
}


def get_charset(name: str) -> str:
    """Look up a named charset, raising KeyError with the available names."""
    try:
        return CHARSETS[name]
    except KeyError:
        raise KeyError(f"Unknown charset {name!r}. Available: {sorted(CHARSETS)}") from None
