"""
Upload analysis service.

Boundary between the upload endpoint and the analysis pipeline: validates
the upload, runs the analyzer and turns parse failures into one polite,
bilingual advisory instead of an exception.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from ..config.logging_config import get_logger, log_with_context
from ..config.settings import Settings, get_settings
from ..utils.helpers import truncate_text
from ..utils.validators import InputSanitizer, Validators
from .log_analyzer import LogAnalyzer
from .log_reader import LogParseError

logger = get_logger(__name__)


class AdvisoryMessages:
    """Fixed user-facing messages (English first, then German)."""

    PARSE_FAILED = (
        "Could not parse this file reliably. Please export as CSV with a single "
        "header row and consistent delimiter.\n"
        "Konnte die Datei nicht zuverlässig einlesen. Bitte als CSV mit einer "
        "einzigen Header-Zeile und konsistentem Trennzeichen exportieren."
    )
    NO_FILE = (
        "No CSV file received.\n"
        "Keine CSV-Datei erhalten."
    )
    TOO_LARGE = (
        "The file is too large. Please upload a shorter log.\n"
        "Die Datei ist zu groß. Bitte ein kürzeres Log hochladen."
    )


@dataclass(frozen=True)
class AnalysisResponse:
    """Structured data, or an advisory message when there is none."""
    data: Optional[Dict[str, Any]]
    message: Optional[str]
    note: str = ""

    @property
    def ok(self) -> bool:
        return self.data is not None

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "message": self.message, "note": self.note}


class AnalysisService:
    """
    Service that analyzes uploaded datalogs.

    Usage:
        response = AnalysisService().analyze_upload(file_bytes, note="stage 2, 98 RON")
        if response.ok:
            render(response.data)
        else:
            show(response.message)
    """

    def __init__(self, settings: Optional[Settings] = None, analyzer: Optional[LogAnalyzer] = None):
        self.settings = settings or get_settings()
        self.analyzer = analyzer or LogAnalyzer(self.settings.analysis)

    def analyze_upload(
        self,
        data: Optional[bytes],
        note: Optional[str] = None,
        filename: Optional[str] = None,
        include_sample: Optional[bool] = None
    ) -> AnalysisResponse:
        """
        Analyze one uploaded datalog.

        Args:
            data: Raw file content
            note: Optional free-text note from the user
            filename: Original file name (logging only)
            include_sample: Override the configured sample setting

        Returns:
            AnalysisResponse with either data or an advisory message
        """
        clean_note = InputSanitizer.sanitize_note(note, self.settings.note_max_length)
        ctx = log_with_context(
            logger,
            filename=InputSanitizer.sanitize_filename(filename) or None,
            note=truncate_text(clean_note, 80) if clean_note else None,
        )

        is_valid, reason = Validators.validate_upload(data, self.settings.max_upload_bytes)
        if not is_valid:
            ctx.warning(f"Upload rejected: {reason}")
            message = AdvisoryMessages.NO_FILE if not data else AdvisoryMessages.TOO_LARGE
            return AnalysisResponse(data=None, message=message, note=clean_note)

        try:
            result = self.analyzer.analyze(data, include_sample=include_sample)
        except LogParseError as e:
            ctx.warning(f"Datalog could not be parsed: {type(e).__name__}: {e}")
            return AnalysisResponse(
                data=None, message=AdvisoryMessages.PARSE_FAILED, note=clean_note
            )

        return AnalysisResponse(data=result.to_dict(), message=None, note=clean_note)
