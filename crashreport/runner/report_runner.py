from datetime import date

from crashreport.exceptions import CrashReportError
from crashreport.logging.logger import Log
from crashreport.processor.processor import Processor

EXIT_OK = 0
EXIT_FAILED = 1


class ReportRunner:
    """Run one report and translate the outcome into a process exit status.

    There is no retry: a failed run publishes nothing and the scheduler
    reports the non-zero status for a human to investigate.
    """

    def __init__(self, processor: Processor) -> None:
        self._processor = processor

    def run(self, reference_date: date) -> int:
        try:
            context = self._processor.process(reference_date)
        except CrashReportError as exc:
            Log.error(f"Crash report for {reference_date} failed: {type(exc).__name__}: {exc}")
            return EXIT_FAILED
        if context.receipt is None:
            Log.info(f"Crash report for {reference_date} composed, not published")
        return EXIT_OK
