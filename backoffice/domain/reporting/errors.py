from __future__ import annotations


class ReportDataError(RuntimeError):
    """A read the report cannot do without failed; no partial result is returned."""
