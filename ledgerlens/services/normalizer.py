"""Convert uploaded artifacts into content parts the model can consume."""

from __future__ import annotations

import base64
import csv
import io
import logging
from datetime import date, datetime, time
from enum import Enum
from pathlib import PurePath
from typing import Any, Iterable, List, Optional, Sequence

import openpyxl
import xlrd

from ledgerlens.core.config import AnalysisSettings
from ledgerlens.core.errors import FileTooLargeError, UnsupportedFormatError
from ledgerlens.schemas import ContentPart, InlineBinary, InlineText, UploadedFile

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n...[truncated: content exceeded the maximum length]"

SPREADSHEET_LABEL = "Data from Excel file (converted to CSV):\n"
FILE_LABEL = "Data from file:\n"
UNKNOWN_FILE_LABEL = "File data:\n"
USER_INPUT_LABEL = "Additional data (user input):\n"

ACCEPTED_FORMATS_HINT = "Supported formats: PDF, Excel (.xlsx, .xls), CSV, TXT, JPG, PNG, WEBP, HEIC."

_GENERIC_MIME_TYPES = frozenset(
    {
        "",
        "application/octet-stream",
        "binary/octet-stream",
        "application/zip",
        "application/x-zip-compressed",
    }
)

_IMAGE_MIME_BY_EXTENSION = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".heic": "image/heic",
}


class ArtifactKind(str, Enum):
    PDF = "pdf"
    IMAGE = "image"
    SPREADSHEET = "spreadsheet"
    TEXT = "text"
    UNKNOWN = "unknown"


_KIND_BY_EXTENSION = {
    ".pdf": ArtifactKind.PDF,
    **{suffix: ArtifactKind.IMAGE for suffix in _IMAGE_MIME_BY_EXTENSION},
    ".xlsx": ArtifactKind.SPREADSHEET,
    ".xls": ArtifactKind.SPREADSHEET,
    ".csv": ArtifactKind.TEXT,
    ".txt": ArtifactKind.TEXT,
}

_ZIP_SIGNATURE = b"PK"
_OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0"


def _extension(filename: str) -> str:
    return PurePath(filename or "").suffix.lower()


def _kind_from_mime(mime_type: str) -> Optional[ArtifactKind]:
    if mime_type in _GENERIC_MIME_TYPES:
        return None
    if mime_type == "application/pdf":
        return ArtifactKind.PDF
    if mime_type.startswith("image/"):
        return ArtifactKind.IMAGE
    if "sheet" in mime_type or "excel" in mime_type:
        return ArtifactKind.SPREADSHEET
    if "csv" in mime_type or mime_type.startswith("text/"):
        return ArtifactKind.TEXT
    return None


def classify(filename: str, mime_type: str = "") -> ArtifactKind:
    """Classify a file by its declared MIME type, falling back to its extension."""
    normalized_mime = (mime_type or "").split(";", 1)[0].strip().lower()
    kind = _kind_from_mime(normalized_mime)
    by_extension = _KIND_BY_EXTENSION.get(_extension(filename), ArtifactKind.UNKNOWN)
    # Windows browsers report .csv as application/vnd.ms-excel when Excel is installed.
    if kind is ArtifactKind.SPREADSHEET and by_extension is ArtifactKind.TEXT:
        return ArtifactKind.TEXT
    if kind is not None:
        return kind
    return by_extension


def encode_base64(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


def truncate_text(text: str, max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` characters and flag that it happened."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + TRUNCATION_MARKER


def decode_text(content: bytes) -> str:
    """Decode file bytes as UTF-8, tolerating a byte-order mark."""
    if b"\x00" in content:
        raise UnsupportedFormatError(
            f"The file appears to be binary and cannot be read as text. {ACCEPTED_FORMATS_HINT}"
        )
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UnsupportedFormatError(
            f"The file could not be read as UTF-8 text. {ACCEPTED_FORMATS_HINT}"
        ) from exc


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def rows_to_csv(rows: Iterable[Sequence[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow([_format_cell(value) for value in row])
    return buffer.getvalue()


def _xlsx_first_sheet_rows(content: bytes) -> List[Sequence[Any]]:
    workbook = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        return [row for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _xls_first_sheet_rows(content: bytes) -> List[Sequence[Any]]:
    workbook = xlrd.open_workbook(file_contents=content, on_demand=True)
    try:
        sheet = workbook.sheet_by_index(0)
        rows: List[Sequence[Any]] = []
        for index in range(sheet.nrows):
            row = []
            for cell in sheet.row(index):
                if cell.ctype == xlrd.XL_CELL_DATE:
                    row.append(xlrd.xldate.xldate_as_datetime(cell.value, workbook.datemode))
                elif cell.ctype == xlrd.XL_CELL_BOOLEAN:
                    row.append(bool(cell.value))
                else:
                    row.append(cell.value)
            rows.append(row)
        return rows
    finally:
        workbook.release_resources()


def workbook_to_csv(content: bytes) -> str:
    """Render the first sheet of a workbook as comma-separated text.

    ZIP-based workbooks (``.xlsx``) are read with openpyxl and OLE2 files
    (legacy ``.xls``) with xlrd. Content with neither signature is a CSV
    export under a spreadsheet name and is read as text.
    """
    if not content.startswith((_ZIP_SIGNATURE, _OLE2_SIGNATURE)):
        logger.debug("Workbook has no ZIP or OLE2 signature; reading as text")
        return decode_text(content)
    try:
        if content.startswith(_ZIP_SIGNATURE):
            rows = _xlsx_first_sheet_rows(content)
        else:
            rows = _xls_first_sheet_rows(content)
    except Exception as exc:
        logger.warning("Failed to read workbook: %s", exc)
        raise UnsupportedFormatError(
            f"The spreadsheet could not be read ({exc}). {ACCEPTED_FORMATS_HINT}"
        ) from exc
    return rows_to_csv(rows)


class FormatNormalizer:
    """Turn an uploaded file or pasted text into request content parts."""

    def __init__(self, settings: AnalysisSettings) -> None:
        self._max_bytes = settings.max_file_size_bytes
        self._max_chars = settings.max_text_chars

    def check_size(self, file: UploadedFile) -> None:
        if file.size > self._max_bytes:
            raise FileTooLargeError(size_bytes=file.size, max_bytes=self._max_bytes)

    def normalize(self, file: Optional[UploadedFile]) -> List[ContentPart]:
        """Return the content parts derived from ``file`` (none when absent or empty)."""
        if file is None:
            return []
        self.check_size(file)
        if file.size == 0:
            logger.debug("Skipping empty file %r", file.filename)
            return []

        kind = classify(file.filename, file.mime_type)
        logger.debug("Classified %r as %s", file.filename, kind.value)

        if kind is ArtifactKind.PDF:
            return [InlineBinary(mime_type="application/pdf", data=encode_base64(file.content))]
        if kind is ArtifactKind.IMAGE:
            return [InlineBinary(mime_type=self._image_mime_type(file), data=encode_base64(file.content))]
        if kind is ArtifactKind.SPREADSHEET:
            return [self._text_part(SPREADSHEET_LABEL, workbook_to_csv(file.content))]
        if kind is ArtifactKind.TEXT:
            return [self._text_part(FILE_LABEL, decode_text(file.content))]
        return [self._text_part(UNKNOWN_FILE_LABEL, decode_text(file.content))]

    def normalize_text(self, text: Optional[str]) -> Optional[InlineText]:
        """Wrap pasted text as the trailing user-input part."""
        if not text or not text.strip():
            return None
        return self._text_part(USER_INPUT_LABEL, text.strip())

    def _text_part(self, label: str, text: str) -> InlineText:
        return InlineText(text=label + truncate_text(text, self._max_chars))

    @staticmethod
    def _image_mime_type(file: UploadedFile) -> str:
        declared = (file.mime_type or "").split(";", 1)[0].strip().lower()
        if declared.startswith("image/"):
            return declared
        return _IMAGE_MIME_BY_EXTENSION.get(_extension(file.filename), "image/jpeg")


__all__ = [
    "ACCEPTED_FORMATS_HINT",
    "ArtifactKind",
    "FormatNormalizer",
    "TRUNCATION_MARKER",
    "classify",
    "decode_text",
    "encode_base64",
    "truncate_text",
    "workbook_to_csv",
]
