from crashreport.exceptions import CrashReportError


class NormalizationError(CrashReportError):
    """Raised when raw feed records cannot be normalized."""


class ParseError(NormalizationError):
    """Raised when a date or numeric field is malformed."""


class SchemaMismatchError(NormalizationError):
    """Raised when the two feed encodings cannot be merged by position."""
