"""README markdown snippet and the placeholder avatar served for empty slots."""

import struct
import zlib

MARKDOWN_SLOTS = 100
AVATAR_WIDTH = 35

# Neutral gray, close to GitHub's README background
PLACEHOLDER_RGBA = (0xF8, 0xF9, 0xFA, 0xFF)

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def render_markdown(base_url: str, slots: int = MARKDOWN_SLOTS) -> str:
    """Markdown avatar links to copy/paste into a README.

    Always `slots` lines, no matter how many sponsors exist; unused slots
    render as the placeholder pixel.
    """
    base = base_url.rstrip("/")
    lines = [
        f'[<img src="{base}/sponsor/avatar/{i}" width="{AVATAR_WIDTH}">]({base}/sponsor/profile/{i})\n'
        for i in range(slots)
    ]
    return "".join(lines)


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(kind + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)


def make_pixel_png(rgba: tuple[int, int, int, int] = PLACEHOLDER_RGBA) -> bytes:
    """Encode a single 1x1 RGBA pixel as a PNG."""
    ihdr = struct.pack(">IIBBBBB", 1, 1, 8, 6, 0, 0, 0)
    # One scanline: filter byte 0 followed by the pixel
    idat = zlib.compress(b"\x00" + bytes(rgba))
    return (
        _PNG_SIGNATURE
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", idat)
        + _png_chunk(b"IEND", b"")
    )


PLACEHOLDER_PNG = make_pixel_png()
