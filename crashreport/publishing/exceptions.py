from crashreport.exceptions import CrashReportError


class PublishError(CrashReportError):
    """Raised when the publisher rejects or cannot receive the artifact."""
