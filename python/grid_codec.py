"""
Grid serialization formats.

Provides two formats:
1. Judge text: "H W" header line followed by H rows of W characters
2. Compact encoding: URL-safe base64 of the row-major characters, used in
   share links as h=<H>&w=<W>&data=<encoded>

The compact encoding base64-encodes the UTF-8 bytes of the characters. For
ASCII grids this is the same as the browser's btoa/atob, which treat each
character as one Latin-1 byte. Links holding non-ASCII cells such as "é" are
not interchangeable with btoa-based encoders.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from urllib.parse import parse_qs, urlencode, urlsplit

from grid_model import parse_dimension
from grid_types import DecodeError, Grid, InvalidDimension, ParseError, Snapshot

__all__ = [
    "decode_compact",
    "encode_compact",
    "from_judge_text",
    "from_share_query",
    "to_judge_text",
    "to_share_query",
]

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"([0-9]+) ([0-9]+)")


# =============================================================================
# Judge Text
# =============================================================================


def to_judge_text(height: int, width: int, grid: Grid) -> str:
    """
    Format a grid in judge input format.

    Example:
        to_judge_text(2, 4, grid) -> "2 4\\n####\\n.#.#\\n"
    """
    lines = [f"{height} {width}"]
    lines.extend("".join(row) for row in grid)
    return "\n".join(lines) + "\n"


def from_judge_text(text: str) -> Snapshot:
    """
    Parse judge input format into a grid.

    Format:
    - Line 1: height and width, two positive integers separated by one space
    - Following non-empty lines: grid rows, each exactly width characters

    Surrounding whitespace of the whole input is ignored.

    Args:
        text: The judge text to parse

    Returns:
        Snapshot with the parsed grid and its dimensions

    Raises:
        ParseError: If the header, row count, or any row width is wrong
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError("Input is empty")

    lines = [line.removesuffix("\r") for line in stripped.split("\n")]
    header = lines[0].strip()
    match = _HEADER_RE.fullmatch(header)
    if match is None:
        raise ParseError(
            f"Invalid header line: '{header}'\n"
            f"  Expected two positive integers separated by a space, e.g. '6 8'"
        )

    height, width = int(match.group(1)), int(match.group(2))
    if height <= 0 or width <= 0:
        raise ParseError(
            f"Invalid header line: '{header}'\n"
            f"  Height and width must be positive"
        )

    rows = [line for line in lines[1:] if line]
    if len(rows) != height:
        raise ParseError(
            f"Row count mismatch\n"
            f"  Declared height: {height}\n"
            f"  Actual rows: {len(rows)}"
        )

    for row_idx, row in enumerate(rows):
        if len(row) != width:
            raise ParseError(
                f"Row width mismatch on row {row_idx + 1}: \"{row}\"\n"
                f"  Declared width: {width}\n"
                f"  Actual characters: {len(row)}"
            )

    return Snapshot(grid=tuple(tuple(row) for row in rows), height=height, width=width)


# =============================================================================
# Compact Encoding
# =============================================================================


def encode_compact(grid: Grid) -> str:
    """Encode a grid's row-major characters as URL-safe base64."""
    data = "".join("".join(row) for row in grid)
    encoded = base64.b64encode(data.encode("utf-8")).decode("ascii")
    return encoded.replace("+", "-").replace("/", "_")


def decode_compact(height: int, width: int, encoded: str) -> Grid:
    """
    Decode a compact encoding into a height x width grid.

    Row i is characters [i * width, (i + 1) * width) of the decoded string.
    Characters beyond height * width are ignored.

    Raises:
        InvalidDimension: If height or width is not a positive integer
        DecodeError: If the data is not valid base64 or holds fewer than height * width characters
    """
    height = parse_dimension(height, "height")
    width = parse_dimension(width, "width")

    data = encoded.strip().replace("-", "+").replace("_", "/").rstrip("=")
    data += "=" * (-len(data) % 4)
    try:
        decoded = base64.b64decode(data, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as err:
        raise DecodeError(f"Invalid compact encoding: {err}") from err

    needed = height * width
    if len(decoded) < needed:
        raise DecodeError(
            f"Insufficient grid data\n"
            f"  Expected: {needed} characters ({height}x{width})\n"
            f"  Decoded: {len(decoded)} characters"
        )

    return tuple(tuple(decoded[i * width:(i + 1) * width]) for i in range(height))


# =============================================================================
# Share Links
# =============================================================================


def to_share_query(height: int, width: int, grid: Grid) -> str:
    """Build the h/w/data query string for a share link."""
    return urlencode({"h": height, "w": width, "data": encode_compact(grid)})


def from_share_query(query: str) -> Snapshot:
    """
    Parse a share link query string (or a full URL) into a grid.

    Raises:
        DecodeError: If a parameter is missing, the dimensions are invalid,
            or the data cannot be decoded
    """
    if "://" in query or query.startswith("/"):
        query = urlsplit(query).query
    params = parse_qs(query.lstrip("?"))

    missing = [name for name in ("h", "w", "data") if not params.get(name)]
    if missing:
        raise DecodeError(f"Share query is missing parameters: {', '.join(missing)}")

    try:
        height = parse_dimension(params["h"][0], "h")
        width = parse_dimension(params["w"][0], "w")
    except InvalidDimension as err:
        raise DecodeError(f"Invalid share query dimensions: {err}") from err

    grid = decode_compact(height, width, params["data"][0])
    logger.debug("Decoded %dx%d grid from share query", height, width)
    return Snapshot(grid=grid, height=height, width=width)

