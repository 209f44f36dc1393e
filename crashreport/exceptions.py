class CrashReportError(Exception):
    """Base exception for every failure that should abort a report run."""


class ConfigurationError(CrashReportError):
    """Raised when the configuration cannot produce a correct report for the run."""
