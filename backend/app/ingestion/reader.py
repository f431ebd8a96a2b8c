"""CSV payload → lazy stream of raw rows."""
import csv
import io
from collections.abc import Iterator

from app.ingestion.errors import MalformedInputError

RawRow = dict[str, str]


def _decode(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"File is not valid UTF-8: {exc}") from exc


def _check_header(header: list[str]) -> list[str]:
    if any(not name for name in header):
        raise MalformedInputError("Header contains an empty column name")
    seen: set[str] = set()
    for name in header:
        if name in seen:
            raise MalformedInputError(f"Duplicate column '{name}' in header")
        seen.add(name)
    return header


def _records(text: str) -> Iterator[list[str]]:
    reader = csv.reader(io.StringIO(text, newline=""))
    try:
        for record in reader:
            if not record:
                continue  # blank line
            yield record
    except csv.Error as exc:
        raise MalformedInputError(f"CSV error at line {reader.line_num}: {exc}") from exc


def read_header(content: bytes) -> list[str]:
    """Return the header row without consuming any data rows."""
    for record in _records(_decode(content)):
        return _check_header(record)
    raise MalformedInputError("File is empty: a header row is required")


def read_rows(content: bytes) -> Iterator[RawRow]:
    """Yield one ``{column: raw text}`` dict per data line, in file order.

    The header is validated before the first row is produced. A data row whose
    column count differs from the header raises ``MalformedInputError`` at the
    point it is reached; rows before it have already been yielded.
    """
    records = _records(_decode(content))
    header = None
    for record in records:
        header = _check_header(record)
        break
    if header is None:
        raise MalformedInputError("File is empty: a header row is required")

    for line_no, record in enumerate(records, start=2):
        if len(record) != len(header):
            raise MalformedInputError(
                f"Row {line_no}: expected {len(header)} columns, found {len(record)}"
            )
        yield dict(zip(header, record))
