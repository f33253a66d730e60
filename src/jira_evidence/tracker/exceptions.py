"""Custom exceptions for the Jira tracker client."""


class TrackerError(Exception):
    """Base exception for tracker errors."""


class TicketNotFoundError(TrackerError):
    """Ticket with given key does not exist or is not visible."""


class TrackerAuthError(TrackerError):
    """Tracker rejected the configured credentials."""
