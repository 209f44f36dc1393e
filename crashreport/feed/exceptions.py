from crashreport.exceptions import CrashReportError


class FetchError(CrashReportError):
    """Raised when the incident feed cannot be retrieved or is malformed."""
