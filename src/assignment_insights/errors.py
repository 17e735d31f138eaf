"""Error codes, structured error model, and raisable failures for assignment-insights.

``ErrorCode`` lists every fatal error and non-fatal warning the analyzer can
report.  ``AnalysisErrorDetail`` is the Pydantic data model;
``AnalysisError`` wraps it so failures can be raised and caught, and its
three subclasses name the failure kinds callers are expected to handle.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes for workbook analysis.

    Values equal their names so they are stable strings suitable for
    metrics and alerting.  ``E_`` prefix = fatal, ``W_`` prefix = warning.
    """

    # Read
    E_READ_FAILED = "E_READ_FAILED"

    # Source
    E_SOURCE_EMPTY = "E_SOURCE_EMPTY"
    E_SOURCE_TOO_LARGE = "E_SOURCE_TOO_LARGE"
    E_SOURCE_UNSUPPORTED = "E_SOURCE_UNSUPPORTED"
    E_SOURCE_BAD_EXTENSION = "E_SOURCE_BAD_EXTENSION"
    E_SOURCE_CORRUPT = "E_SOURCE_CORRUPT"
    E_SHEET_NOT_FOUND = "E_SHEET_NOT_FOUND"
    E_PARSER_UNAVAILABLE = "E_PARSER_UNAVAILABLE"

    # Analysis
    E_ACTION_COLUMN_EMPTY = "E_ACTION_COLUMN_EMPTY"

    # Warnings (non-fatal)
    W_DUE_DATE_COLUMN_EMPTY = "W_DUE_DATE_COLUMN_EMPTY"
    W_DUE_DATE_UNPARSEABLE = "W_DUE_DATE_UNPARSEABLE"
    W_NO_DATA_ROWS = "W_NO_DATA_ROWS"


class AnalysisErrorDetail(BaseModel):
    """Structured error with code, message, and the stage that produced it.

    Note: This is a Pydantic model (data structure), not a Python Exception.
    To raise errors, use ``AnalysisError`` or one of its subclasses, which
    wrap this model.
    """

    code: ErrorCode
    message: str
    stage: str | None = None
    recoverable: bool = False


class AnalysisError(Exception):
    """Raisable exception wrapping an :class:`AnalysisErrorDetail`.

    The structured detail is available as ``.error`` for inspection and
    serialization; ``code``, ``message`` and ``stage`` delegate to it.
    """

    def __init__(self, **kwargs: object) -> None:
        self.error = AnalysisErrorDetail(**kwargs)  # type: ignore[arg-type]
        super().__init__(self.error.message)

    @classmethod
    def from_detail(cls, detail: AnalysisErrorDetail) -> AnalysisError:
        return cls(**detail.model_dump())

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def stage(self) -> str | None:
        return self.error.stage


class ReadFailure(AnalysisError):
    """The file's bytes could not be obtained from their source."""


class SourceUnavailable(AnalysisError):
    """The bytes are not a readable workbook, or the target sheet is missing."""


class MissingRequiredColumn(AnalysisError):
    """The resolved action column holds no value in any data row."""
