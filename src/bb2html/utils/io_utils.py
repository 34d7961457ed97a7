#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bb2html/utils/io_utils.py
"""I/O utilities for reading BBCode input and writing rendered output.

The core parser and renderers only ever see strings. These helpers sit at
the edges (API file helpers and the CLI) and deal with paths, binary
streams, text streams and byte decoding.

"""

from __future__ import annotations

import io
import logging
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

import chardet

from bb2html.exceptions import FileError, FileNotFoundError, OutputWriteError

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ["utf-8-sig", "latin-1"]
DEFAULT_CHARDET_SAMPLE_SIZE = 8192
DEFAULT_CHARDET_CONFIDENCE = 0.7


def detect_encoding(
    data: bytes,
    sample_size: int = DEFAULT_CHARDET_SAMPLE_SIZE,
    confidence_threshold: float = DEFAULT_CHARDET_CONFIDENCE,
) -> str | None:
    """Detect the character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of leading bytes passed to chardet
    confidence_threshold : float, default 0.7
        Minimum confidence (0.0-1.0) required to trust the detection

    Returns
    -------
    str or None
        Detected encoding name, or None if nothing was detected or the
        confidence is below the threshold

    """
    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: no encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)
    if confidence < confidence_threshold:
        logger.debug("chardet confidence %.2f below threshold %s", confidence, confidence_threshold)
        return None
    return encoding


def decode_text(
    data: bytes,
    fallback_encodings: list[str] | None = None,
    use_chardet: bool = True,
    confidence_threshold: float = DEFAULT_CHARDET_CONFIDENCE,
) -> str:
    """Decode BBCode source bytes with automatic encoding detection.

    Strategies, in order:

    1. strict UTF-8 (a byte order mark is removed)
    2. the encoding chardet reports, when its confidence is high enough
    3. each fallback encoding
    4. UTF-8 with invalid bytes replaced

    Valid UTF-8 is accepted before detection because chardet tends to report
    a single-byte charset for short UTF-8 text with few non-ASCII characters.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : list[str] or None, default None
        Encodings to try after detection. Defaults to utf-8 (BOM stripped), then latin-1.
    use_chardet : bool, default True
        Whether to ask chardet before the fallback encodings
    confidence_threshold : float, default 0.7
        Minimum chardet confidence

    Returns
    -------
    str
        Decoded text

    Examples
    --------
        >>> decode_text("日本語のテキストです。".encode("shift_jis") * 4)[:11]
        '日本語のテキストです。'

    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    if use_chardet:
        detected = detect_encoding(data, confidence_threshold=confidence_threshold)
        if detected:
            try:
                text = data.decode(detected)
                logger.debug("Decoded input with detected encoding %s", detected)
                return text
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug("Failed to decode with detected encoding %s: %s", detected, e)

    for encoding in fallback_encodings or DEFAULT_FALLBACK_ENCODINGS:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue

    logger.warning("Could not decode input with any fallback encoding, replacing invalid bytes")
    return data.decode("utf-8", errors="replace")


def read_text_input(input_data: Union[str, Path, IO[bytes], IO[str], bytes]) -> str:
    """Read BBCode source from a path, stream or raw bytes.

    Parameters
    ----------
    input_data : str, Path, IO[bytes], IO[str], or bytes
        A filesystem path (``str`` or ``Path``), an open stream, or raw bytes

    Returns
    -------
    str
        Source text

    Raises
    ------
    FileNotFoundError
        If a path does not exist
    FileError
        If the file cannot be read

    """
    if isinstance(input_data, bytes):
        return decode_text(input_data)

    if isinstance(input_data, (str, Path)):
        path = Path(input_data)
        if not path.is_file():
            raise FileNotFoundError(str(path))
        try:
            return decode_text(path.read_bytes())
        except OSError as e:
            raise FileError(f"Cannot read file: {path}", file_path=str(path), original_error=e) from e

    if hasattr(input_data, "read"):
        content = input_data.read()
        if isinstance(content, bytes):
            return decode_text(content)
        return cast(str, content)

    raise TypeError(f"Unsupported input type: {type(input_data)}")


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write rendered text to a path or a file-like object.

    Parameters
    ----------
    content : str
        Content to write
    output : str, Path, IO[bytes], or IO[str]
        Output destination. Paths are written as UTF-8; binary streams
        receive UTF-8 bytes; text streams receive the string unchanged.

    Raises
    ------
    OutputWriteError
        If writing to a path fails
    TypeError
        If the output type is not supported

    Examples
    --------
        >>> buffer = BytesIO()
        >>> write_content("<strong>x</strong>", buffer)
        >>> buffer.getvalue()
        b'<strong>x</strong>'

    """
    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(output_path), original_error=e) from e
        return

    if hasattr(output, "write"):
        if isinstance(output, BytesIO):
            is_binary_mode = True
        elif isinstance(output, StringIO):
            is_binary_mode = False
        elif isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        elif hasattr(output, "mode"):
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode
        else:
            is_binary_mode = False

        if is_binary_mode:
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["detect_encoding", "decode_text", "read_text_input", "write_content"]
