"""Input validation for workbook bytes.

Checks extension (when a filename is known), size, emptiness and container
magic bytes before any parser touches the data.  All checks are fail-fast:
the first fatal error stops further checks.
"""

from __future__ import annotations

import pathlib
from typing import TYPE_CHECKING

from assignment_insights.errors import AnalysisErrorDetail, ErrorCode

if TYPE_CHECKING:
    from assignment_insights.config import AnalyzerConfig

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ZIP_MAGIC = b"PK\x03\x04"  # OOXML container (.xlsx / .xlsm)
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"  # legacy .xls

CONTAINER_OOXML = "ooxml"
CONTAINER_OLE2 = "ole2"


def detect_container(data: bytes) -> str | None:
    """Return ``"ooxml"``, ``"ole2"`` or ``None`` from the leading bytes."""
    if data.startswith(ZIP_MAGIC):
        return CONTAINER_OOXML
    if data.startswith(OLE2_MAGIC):
        return CONTAINER_OLE2
    return None


# ---------------------------------------------------------------------------
# SourceScanner
# ---------------------------------------------------------------------------


class SourceScanner:
    """Byte-level scanner run before workbook parsing."""

    def __init__(self, config: AnalyzerConfig) -> None:
        self._config = config

    def scan(self, data: bytes, filename: str | None = None) -> list[AnalysisErrorDetail]:
        """Run all checks on *data*.

        Returns a list of errors (empty if all checks pass).
        """
        errors: list[AnalysisErrorDetail] = []

        # 1. Extension whitelist (only when the caller knows a name)
        if filename is not None:
            suffix = pathlib.Path(filename).suffix.lower()
            allowed = self._config.allowed_extensions
            if suffix not in allowed:
                errors.append(
                    AnalysisErrorDetail(
                        code=ErrorCode.E_SOURCE_BAD_EXTENSION,
                        message=(
                            f"File extension '{suffix}' is not allowed. "
                            f"Allowed: {sorted(allowed)}"
                        ),
                        stage="security",
                    )
                )
                return errors

        # 2. Empty input
        if not data:
            errors.append(
                AnalysisErrorDetail(
                    code=ErrorCode.E_SOURCE_EMPTY,
                    message="File is empty (0 bytes)",
                    stage="security",
                )
            )
            return errors

        # 3. Size limit
        max_bytes = self._config.max_file_size_mb * 1024 * 1024
        if len(data) > max_bytes:
            errors.append(
                AnalysisErrorDetail(
                    code=ErrorCode.E_SOURCE_TOO_LARGE,
                    message=(
                        f"File size {len(data)} bytes exceeds limit of "
                        f"{self._config.max_file_size_mb} MB"
                    ),
                    stage="security",
                )
            )
            return errors

        # 4. Container magic bytes
        if detect_container(data) is None:
            errors.append(
                AnalysisErrorDetail(
                    code=ErrorCode.E_SOURCE_UNSUPPORTED,
                    message=(
                        "Unrecognized file header "
                        f"{data[:8]!r}; expected an .xlsx or .xls workbook"
                    ),
                    stage="security",
                )
            )
            return errors

        return errors
