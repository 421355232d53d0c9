# topmark:header:start
#
#   project      : NTKit
#   file         : reader.py
#   file_relpath : src/ntkit/reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decode raw input into the text lines consumed by the tokenizer.

Decoding is strict and complete before tokenization starts: malformed bytes raise
`DecodeError` with the offset of the first bad byte, and no line of a partially
decoded document ever reaches the tokenizer.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Union

from ntkit.config.logging import get_logger
from ntkit.constants import DEFAULT_ENCODING, UTF8_BOM
from ntkit.errors import DecodeError
from ntkit.syntax.scanner import split_lines

if TYPE_CHECKING:
    from ntkit.config.logging import NtkitLogger

logger: NtkitLogger = get_logger(__name__)

Source = Union[bytes, bytearray, str, Path]


def decode_bytes(data: bytes | bytearray, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode bytes strictly, dropping a leading byte order mark.

    Args:
        data (bytes | bytearray): Encoded document.
        encoding (str): Codec name.

    Returns:
        str: The decoded text.

    Raises:
        DecodeError: If the bytes are not valid in ``encoding``.
    """
    try:
        text: str = bytes(data).decode(encoding, errors="strict")
    except UnicodeDecodeError as exc:
        raise DecodeError(
            f"cannot decode input as {encoding} at byte offset {exc.start}: {exc.reason}",
            offset=exc.start,
            encoding=encoding,
        ) from exc
    except LookupError as exc:
        raise DecodeError(f"unknown encoding: {encoding}", offset=0, encoding=encoding) from exc
    if text.startswith(UTF8_BOM):
        text = text[len(UTF8_BOM) :]
    return text


def read_lines(source: Source, encoding: str = DEFAULT_ENCODING) -> list[str]:
    """Return the lines of a document.

    Args:
        source (Source): Encoded bytes, decoded text, or a path to read.
        encoding (str): Codec used for bytes and files.

    Returns:
        list[str]: Lines without their terminators.

    Raises:
        DecodeError: If bytes cannot be decoded.
        OSError: If the file cannot be read.
        TypeError: For unsupported source types.
    """
    if isinstance(source, Path):
        logger.debug("reading %s", source)
        text: str = decode_bytes(source.read_bytes(), encoding)
    elif isinstance(source, (bytes, bytearray)):
        text = decode_bytes(source, encoding)
    elif isinstance(source, str):
        text = source[len(UTF8_BOM) :] if source.startswith(UTF8_BOM) else source
    else:
        raise TypeError(f"cannot read NestedText from {type(source).__name__}")
    return split_lines(text)
