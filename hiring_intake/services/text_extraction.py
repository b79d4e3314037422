"""Text extraction from uploaded resume documents.

``extract_text`` turns the bytes of an upload into plain text according to
its declared format.  Unsupported formats soft-fail to an empty string so the
rest of the pipeline still runs; only unreadable input raises.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from pathlib import PurePosixPath
from typing import BinaryIO

import docx
from PyPDF2 import PdfReader
from PyPDF2.errors import PyPdfError

from hiring_intake.core.constants import CONTENT_TYPE_FORMATS, SUPPORTED_FORMATS
from hiring_intake.core.errors import ExtractionIOError, UnsupportedFormatError

logger = logging.getLogger(__name__)


def resolve_format(filename: str | None, content_type: str | None = None) -> str:
    """Return the declared format of an upload, lower-cased without a dot.

    The filename extension wins; the MIME type is the fallback.  Returns
    ``"bin"`` when neither says anything.
    """
    suffix = PurePosixPath(filename or "").suffix.lower().lstrip(".")
    if suffix:
        return suffix
    if content_type:
        mime = content_type.split(";", 1)[0].strip().lower()
        if mime in CONTENT_TYPE_FORMATS:
            return CONTENT_TYPE_FORMATS[mime]
    return "bin"


def _read_source(source: bytes | bytearray | BinaryIO) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    try:
        return source.read()
    except (OSError, ValueError) as exc:
        raise ExtractionIOError(f"Could not read uploaded document: {exc}") from exc


def _extract_pdf(data: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PyPdfError, ValueError, KeyError, TypeError) as exc:
        raise ExtractionIOError(f"Could not decode PDF document: {exc}") from exc
    return "\n\n".join(p.strip() for p in pages if p.strip())


def _extract_docx(data: bytes) -> str:
    try:
        document = docx.Document(io.BytesIO(data))
    except Exception as exc:
        # python-docx surfaces zip, xml and package errors with unrelated types
        raise ExtractionIOError(f"Could not decode DOCX document: {exc}") from exc
    return "\n".join(p.text for p in document.paragraphs if p.text.strip())


def _extract_plain(data: bytes) -> str:
    return data.decode("utf-8", errors="replace").replace("\r\n", "\n")


_EXTRACTORS: dict[str, Callable[[bytes], str]] = {
    "pdf": _extract_pdf,
    "docx": _extract_docx,
    "txt": _extract_plain,
    "md": _extract_plain,
}


def _extractor_for(declared_format: str) -> Callable[[bytes], str]:
    if declared_format not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(declared_format)
    return _EXTRACTORS[declared_format]


def extract_text(source: bytes | bytearray | BinaryIO, declared_format: str) -> str:
    """Return the plain text of a document.

    Parameters
    ----------
    source:
        The uploaded bytes, or a binary file object to read them from.
    declared_format:
        Format name as returned by ``resolve_format`` (``pdf``, ``docx``,
        ``txt``, ``md``; anything else is unsupported).

    Returns
    -------
    The extracted text, stripped.  ``""`` for unsupported formats.

    Raises
    ------
    ExtractionIOError
        The source could not be read, or a supported document is corrupt.
    """
    data = _read_source(source)
    fmt = declared_format.lower().lstrip(".")

    try:
        extractor = _extractor_for(fmt)
    except UnsupportedFormatError as exc:
        logger.info(
            "text_extraction_unsupported_format",
            extra={"declared_format": exc.declared_format, "size_bytes": len(data)},
        )
        return ""

    text = extractor(data).strip()
    logger.info(
        "text_extraction_complete",
        extra={
            "declared_format": fmt,
            "size_bytes": len(data),
            "text_length": len(text),
        },
    )
    return text
