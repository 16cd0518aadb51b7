# explorer/upload.py

import io
import csv
import logging
from pathlib import Path
from typing import IO, Tuple, Union

import pandas as pd

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
ENCODINGS = ("utf-8", "cp1250", "latin1")
DELIMITERS = ",;|\t"

CsvSource = Union[str, Path, bytes, IO[bytes]]


class UploadError(ValueError):
    """Raised when an upload is rejected; the message is shown to the user."""


def validate_upload(filename: str, size: int, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """Reject non-.csv names, then files over ``max_bytes`` (never more than 10 MB)."""
    max_bytes = min(max_bytes, MAX_UPLOAD_BYTES)
    if not filename or not filename.lower().endswith(".csv"):
        raise UploadError("Please upload a CSV file")
    if size > max_bytes:
        raise UploadError(f"File size must be less than {max_bytes // (1024 * 1024)}MB")


def _read_bytes(source: CsvSource) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    # file-like (e.g. streamlit's UploadedFile)
    if hasattr(source, "seek"):
        source.seek(0)
    return source.read()


def detect_encoding(raw: bytes) -> Tuple[str, str]:
    """Return (decoded_text, encoding) using the first encoding that decodes cleanly."""
    for enc in ENCODINGS:
        try:
            return raw.decode(enc), enc
        except UnicodeDecodeError:
            continue
    # latin1 maps every byte, so this is only reached if ENCODINGS changes
    raise UnicodeDecodeError("unknown", raw, 0, len(raw), "no candidate encoding matched")


def detect_delimiter(sample: str, default: str = ",") -> str:
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=DELIMITERS)
        return dialect.delimiter
    except csv.Error:
        return default


def robust_read_csv(source: CsvSource) -> Tuple[pd.DataFrame, str, str]:
    """
    Read a CSV with every cell kept as a string.

    Returns
    -------
    (DataFrame, encoding, delimiter)
    """
    raw = _read_bytes(source)
    text, encoding = detect_encoding(raw)
    if not text.strip():
        raise UploadError("The CSV file contains no data rows")

    delimiter = detect_delimiter(text[:4096])

    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logging.warning(f"CSV parse failed: {e}")
        raise UploadError(
            "Could not read your file. Please make sure it's saved as a CSV (not Excel)."
        ) from e

    if df.empty:
        raise UploadError("The CSV file contains no data rows")

    logging.info(f"Read CSV: {len(df)} rows, {df.shape[1]} cols (encoding={encoding}, delimiter={delimiter!r})")
    return df, encoding, delimiter


def load_upload(uploaded: IO[bytes], max_bytes: int = MAX_UPLOAD_BYTES) -> Tuple[pd.DataFrame, str, str]:
    """Validate an uploaded file (needs ``name`` and ``size``), then read it."""
    validate_upload(uploaded.name, uploaded.size, max_bytes)
    return robust_read_csv(uploaded)
