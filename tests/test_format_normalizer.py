try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import base64
import io

import openpyxl
import pytest

from ledgerlens.core.config import AnalysisSettings
from ledgerlens.core.errors import FileTooLargeError, UnsupportedFormatError
from ledgerlens.schemas import InlineBinary, InlineText, UploadedFile
from ledgerlens.services import normalizer as normalizer_module
from ledgerlens.services.normalizer import (
    FILE_LABEL,
    SPREADSHEET_LABEL,
    TRUNCATION_MARKER,
    UNKNOWN_FILE_LABEL,
    USER_INPUT_LABEL,
    ArtifactKind,
    FormatNormalizer,
    classify,
    truncate_text,
)


def _workbook_bytes() -> bytes:
    workbook = openpyxl.Workbook()
    first = workbook.active
    first.title = "Income"
    first.append(["Item", "2023", "2024"])
    first.append(["Revenue", 80, 100])
    first.append(["Expense", 35.5, 40])
    second = workbook.create_sheet("Hidden notes")
    second.append(["SECRET-SECOND-SHEET", 999])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def normalizer(analysis_settings: AnalysisSettings) -> FormatNormalizer:
    return FormatNormalizer(analysis_settings)


@pytest.mark.parametrize(
    ("filename", "mime_type", "expected"),
    [
        ("report.pdf", "application/pdf", ArtifactKind.PDF),
        ("scan", "image/png", ArtifactKind.IMAGE),
        (
            "book.bin",
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            ArtifactKind.SPREADSHEET,
        ),
        ("legacy.bin", "application/vnd.ms-excel", ArtifactKind.SPREADSHEET),
        ("data.bin", "text/csv", ArtifactKind.TEXT),
        ("notes", "text/plain; charset=utf-8", ArtifactKind.TEXT),
    ],
)
def test_classify_prefers_declared_mime_type(filename, mime_type, expected):
    assert classify(filename, mime_type) is expected


@pytest.mark.parametrize(
    ("filename", "mime_type", "expected"),
    [
        ("statement.PDF", "", ArtifactKind.PDF),
        ("photo.heic", "application/octet-stream", ArtifactKind.IMAGE),
        ("photo.webp", "", ArtifactKind.IMAGE),
        ("budget.xlsx", "application/zip", ArtifactKind.SPREADSHEET),
        ("budget.xls", "", ArtifactKind.SPREADSHEET),
        ("ledger.csv", "", ArtifactKind.TEXT),
        ("ledger.txt", "application/x-unknown", ArtifactKind.TEXT),
        ("archive.7z", "", ArtifactKind.UNKNOWN),
    ],
)
def test_classify_falls_back_to_extension(filename, mime_type, expected):
    assert classify(filename, mime_type) is expected


@pytest.mark.parametrize("filename", ["ledger.csv", "ledger.TXT"])
def test_text_extension_wins_over_excel_mime_type(filename):
    assert classify(filename, "application/vnd.ms-excel") is ArtifactKind.TEXT


def test_csv_reported_as_excel_is_read_as_text(normalizer):
    parts = normalizer.normalize(
        UploadedFile(
            filename="ledger.csv",
            mime_type="application/vnd.ms-excel",
            content=b"Revenue,100\nExpense,40",
        )
    )

    assert parts == [InlineText(text=FILE_LABEL + "Revenue,100\nExpense,40")]


def test_spreadsheet_without_workbook_signature_is_read_as_text(normalizer):
    parts = normalizer.normalize(
        UploadedFile(filename="export.xls", mime_type="", content=b"Revenue,100\nExpense,40")
    )

    assert parts == [InlineText(text=SPREADSHEET_LABEL + "Revenue,100\nExpense,40")]


def test_oversized_file_rejected_before_parsing(monkeypatch):
    settings = AnalysisSettings(max_file_size_mb=1)
    normalizer = FormatNormalizer(settings)

    def _fail(_: bytes) -> str:  # pragma: no cover - must not run
        raise AssertionError("workbook parsed despite size limit")

    monkeypatch.setattr(normalizer_module, "workbook_to_csv", _fail)
    oversized = UploadedFile(
        filename="big.xlsx",
        mime_type="",
        content=b"PK" + b"\x00" * (1024 * 1024),
    )

    with pytest.raises(FileTooLargeError) as exc_info:
        normalizer.normalize(oversized)

    assert "1.00 MB" in exc_info.value.message
    assert exc_info.value.size_bytes == 1024 * 1024 + 2


def test_pdf_is_forwarded_as_base64(normalizer):
    content = b"%PDF-1.7\n\x00\xffbinary"
    parts = normalizer.normalize(
        UploadedFile(filename="annual.pdf", mime_type="application/pdf", content=content)
    )

    assert len(parts) == 1
    part = parts[0]
    assert isinstance(part, InlineBinary)
    assert part.mime_type == "application/pdf"
    assert base64.b64decode(part.data) == content


def test_image_without_mime_uses_extension_type(normalizer):
    parts = normalizer.normalize(
        UploadedFile(filename="receipt.HEIC", mime_type="", content=b"\x00\x01heic")
    )

    assert parts == [
        InlineBinary(mime_type="image/heic", data=base64.b64encode(b"\x00\x01heic").decode())
    ]


def test_workbook_uses_first_sheet_only(normalizer):
    parts = normalizer.normalize(
        UploadedFile(filename="statement.xlsx", mime_type="", content=_workbook_bytes())
    )

    assert len(parts) == 1
    part = parts[0]
    assert isinstance(part, InlineText)
    assert part.text == SPREADSHEET_LABEL + "Item,2023,2024\nRevenue,80,100\nExpense,35.5,40\n"
    assert "SECRET-SECOND-SHEET" not in part.text


def test_corrupt_workbook_is_unsupported(normalizer):
    with pytest.raises(UnsupportedFormatError):
        normalizer.normalize(
            UploadedFile(filename="broken.xlsx", mime_type="", content=b"PK\x03\x04garbage")
        )


def test_csv_read_verbatim(normalizer):
    csv_text = "Revenue,100\nExpense,40"
    parts = normalizer.normalize(
        UploadedFile(filename="data.csv", mime_type="text/csv", content=csv_text.encode("utf-8"))
    )

    assert parts == [InlineText(text=FILE_LABEL + csv_text)]


def test_text_file_with_bom_decodes(normalizer):
    parts = normalizer.normalize(
        UploadedFile(filename="notes.txt", mime_type="", content="\ufeffรายได้,100".encode("utf-8"))
    )

    assert parts == [InlineText(text=FILE_LABEL + "รายได้,100")]


def test_long_text_is_truncated_with_marker(normalizer):
    text = "a" * 50_000 + "b" * 10
    parts = normalizer.normalize(
        UploadedFile(filename="big.csv", mime_type="text/csv", content=text.encode())
    )

    body = parts[0].text[len(FILE_LABEL):]
    assert body == "a" * 50_000 + TRUNCATION_MARKER
    assert len(body) <= 50_000 + len(TRUNCATION_MARKER)


def test_long_spreadsheet_is_truncated_with_marker(normalizer):
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    for _ in range(6_000):
        sheet.append(["abcdefghij"])
    buffer = io.BytesIO()
    workbook.save(buffer)

    parts = normalizer.normalize(
        UploadedFile(filename="long.xlsx", mime_type="", content=buffer.getvalue())
    )

    body = parts[0].text[len(SPREADSHEET_LABEL):]
    assert body == ("abcdefghij\n" * 6_000)[:50_000] + TRUNCATION_MARKER


def test_long_pasted_text_is_truncated_with_marker(normalizer):
    part = normalizer.normalize_text("c" * 50_001)

    assert part == InlineText(text=USER_INPUT_LABEL + "c" * 50_000 + TRUNCATION_MARKER)


def test_truncate_text_keeps_text_at_limit():
    assert truncate_text("x" * 10, 10) == "x" * 10
    assert truncate_text("x" * 11, 10) == "x" * 10 + TRUNCATION_MARKER


def test_unknown_type_falls_back_to_text(normalizer):
    parts = normalizer.normalize(
        UploadedFile(filename="export.dat", mime_type="", content=b"Cash,12")
    )

    assert parts == [InlineText(text=UNKNOWN_FILE_LABEL + "Cash,12")]


def test_unknown_binary_type_is_unsupported(normalizer):
    with pytest.raises(UnsupportedFormatError) as exc_info:
        normalizer.normalize(
            UploadedFile(filename="model.bin", mime_type="", content=b"\x00\x01\x02\x03")
        )

    assert "Supported formats" in exc_info.value.message


def test_normalize_without_file_yields_nothing(normalizer):
    assert normalizer.normalize(None) == []


@pytest.mark.parametrize(
    ("filename", "mime_type"),
    [("x.pdf", "application/pdf"), ("scan.png", "image/png"), ("empty.csv", "text/csv")],
)
def test_empty_file_yields_no_parts(normalizer, filename, mime_type):
    assert normalizer.normalize(UploadedFile(filename=filename, mime_type=mime_type, content=b"")) == []


def test_normalize_is_deterministic(normalizer):
    upload = UploadedFile(filename="statement.xlsx", mime_type="", content=_workbook_bytes())

    first = normalizer.normalize(upload)
    second = normalizer.normalize(upload)

    assert [part.model_dump() for part in first] == [part.model_dump() for part in second]


def test_pasted_text_becomes_user_input_part(normalizer):
    assert normalizer.normalize_text("   ") is None
    part = normalizer.normalize_text("  Revenue,100\n")
    assert part == InlineText(text=USER_INPUT_LABEL + "Revenue,100")
