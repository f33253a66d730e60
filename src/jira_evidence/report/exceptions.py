"""Custom exceptions for report generation."""


class ReportError(Exception):
    """Report could not be serialized or written."""
