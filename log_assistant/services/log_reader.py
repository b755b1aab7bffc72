"""
Datalog reader.

Decodes an uploaded datalog, finds the real header row among any metadata
preamble and parses the table below it into string rows. Nothing here
interprets values; cells stay raw strings until the channel stages.
"""

import csv
import io
from types import MappingProxyType
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from ..config.logging_config import get_logger
from ..config.settings import AnalysisSettings
from ..models.analysis import HeaderLocation, ParsedLog
from .numeric import to_number

logger = get_logger(__name__)

# Candidate field delimiters, in tie-break order
DELIMITERS: Tuple[str, ...] = (",", ";", "\t", "|")

_SNIFF_LINES = 20


class LogParseError(Exception):
    """Base exception for datalogs that cannot be parsed reliably."""
    pass


class HeaderNotFoundError(LogParseError):
    """No line in the scan window looks like a table header."""
    pass


class NoUsableRowsError(LogParseError):
    """A header was found but no data rows survived parsing."""
    pass


def decode_bytes(data: bytes) -> str:
    """Decode raw upload bytes (UTF-16 with BOM, UTF-8, then Latin-1)."""
    if data.startswith((b"\xff\xfe", b"\xfe\xff")):
        return data.decode("utf-16", errors="replace")
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def split_lines(text: str) -> List[str]:
    """Canonicalize line endings and split into lines."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def detect_delimiter(line: str) -> str:
    """Most frequent candidate delimiter in the line; comma when none occurs."""
    return max(DELIMITERS, key=line.count)


def tokenize(line: str, delimiter: str) -> List[str]:
    """Split a line and trim quotes/whitespace, dropping empty tokens."""
    tokens = (token.strip().strip("\"'").strip() for token in line.split(delimiter))
    return [token for token in tokens if token]


def is_header_like(
    tokens: Sequence[str],
    min_tokens: int = 3,
    text_ratio: float = 0.4,
    min_text_tokens: int = 2
) -> bool:
    """
    A header has enough tokens and enough of them are not numbers.

    Args:
        tokens: Non-empty tokens of one line
        min_tokens: Minimum token count for a header
        text_ratio: Share of tokens that must fail numeric coercion
        min_text_tokens: Floor for the required non-numeric count
    """
    if len(tokens) < min_tokens:
        return False
    text_count = sum(1 for token in tokens if to_number(token) is None)
    return text_count >= max(min_text_tokens, int(text_ratio * len(tokens)))


def locate_header(
    lines: Sequence[str],
    scan_lines: int = 50,
    min_tokens: int = 3,
    text_ratio: float = 0.4,
    min_text_tokens: int = 2
) -> HeaderLocation:
    """
    Find the header row within the first ``scan_lines`` non-empty lines.

    The header-like line with the most tokens wins; ties go to the earliest.

    Raises:
        HeaderNotFoundError: If no line in the window qualifies
    """
    best: Optional[HeaderLocation] = None
    best_count = 0
    scanned = 0

    for index, line in enumerate(lines):
        if not line.strip():
            continue
        scanned += 1
        if scanned > scan_lines:
            break

        delimiter = detect_delimiter(line)
        tokens = tokenize(line, delimiter)
        if not is_header_like(tokens, min_tokens, text_ratio, min_text_tokens):
            continue
        if best is None or len(tokens) > best_count:
            best = HeaderLocation(line_index=index, delimiter=delimiter)
            best_count = len(tokens)

    if best is None:
        raise HeaderNotFoundError(
            f"No header-like line in the first {scan_lines} non-empty lines"
        )

    logger.debug(
        f"Header at line {best.line_index} ({best_count} fields, delimiter {best.delimiter!r})"
    )
    return best


def sniff_delimiter(text: str, fallback: str) -> str:
    """Infer the delimiter from the first lines of the data region."""
    sample = "\n".join(text.split("\n")[:_SNIFF_LINES])
    try:
        return csv.Sniffer().sniff(sample, delimiters="".join(DELIMITERS)).delimiter
    except csv.Error:
        return fallback


def _read_frame(text: str, delimiter: str, permissive: bool = False) -> pd.DataFrame:
    """Read the data region with every cell kept as a string."""
    frame = pd.read_csv(
        io.StringIO(text),
        sep=delimiter,
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        skip_blank_lines=True,
        index_col=False,
        engine="c",
        on_bad_lines="skip" if permissive else "error",
    )
    frame = frame.fillna("")
    if frame.empty:
        return frame

    # Rows made only of delimiters carry no data
    has_data = frame.apply(lambda column: column.astype(str).str.strip().ne("")).any(axis=1)
    return frame[has_data]


def parse_table(lines: Sequence[str], location: HeaderLocation) -> ParsedLog:
    """
    Parse the header line and everything after it.

    Strict parsing uses the located delimiter. On a structural error the
    region is parsed once more with an inferred delimiter, skipping rows
    that still do not fit.

    Raises:
        NoUsableRowsError: If no data rows survive
    """
    region = "\n".join(lines[location.line_index:])
    delimiter = location.delimiter

    try:
        frame = _read_frame(region, delimiter)
    except pd.errors.ParserError as e:
        delimiter = sniff_delimiter(region, fallback=location.delimiter)
        logger.info(f"Strict parse failed ({e}); retrying with delimiter {delimiter!r}")
        try:
            frame = _read_frame(region, delimiter, permissive=True)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as retry_error:
            raise NoUsableRowsError(f"Table could not be parsed: {retry_error}") from retry_error
    except pd.errors.EmptyDataError as e:
        raise NoUsableRowsError("Data region is empty") from e

    if frame.empty:
        raise NoUsableRowsError("No data rows below the header")

    fields = tuple(str(column) for column in frame.columns)
    frame.columns = list(fields)
    rows = tuple(MappingProxyType(record) for record in frame.to_dict(orient="records"))

    logger.debug(f"Parsed {len(rows)} rows x {len(fields)} fields")
    return ParsedLog(header=location, fields=fields, rows=rows, delimiter=delimiter)


def read_log(data: bytes, settings: Optional[AnalysisSettings] = None) -> ParsedLog:
    """Decode, locate the header and parse a raw datalog."""
    settings = settings or AnalysisSettings()
    lines = split_lines(decode_bytes(data))
    location = locate_header(
        lines,
        scan_lines=settings.header_scan_lines,
        min_tokens=settings.header_min_tokens,
        text_ratio=settings.header_text_ratio,
        min_text_tokens=settings.header_min_text_tokens,
    )
    return parse_table(lines, location)
