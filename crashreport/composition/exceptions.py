from crashreport.exceptions import CrashReportError


class CompositionError(CrashReportError):
    """Raised when the report artifact cannot be composed."""


class ContentTooLongError(CompositionError):
    """Raised when the message exceeds the platform length ceiling."""


class RenderError(CompositionError):
    """Raised when the report image cannot be rendered."""
