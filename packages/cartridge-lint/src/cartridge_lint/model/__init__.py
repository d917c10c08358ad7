"""Finding and report models."""

from .findings import Finding, FindingLog, Report, Severity

__all__ = ["Finding", "FindingLog", "Report", "Severity"]
