import argparse
import sys
from datetime import date

from crashreport.config.settings import Settings
from crashreport.logging.logger import Log
from crashreport.processor.processor import build_processor
from crashreport.runner.report_runner import ReportRunner


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="crashreport",
        description="Build and publish the weekly traffic crash report.",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Reference date as YYYY-MM-DD (default: today).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compose the report without publishing it.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build pipeline -> run once."""
    args = _parse_args(argv)
    settings = Settings()
    if args.dry_run:
        settings = settings.model_copy(update={"dry_run": True})
    Log.configure(settings.log_level)

    processor = build_processor(settings)
    runner = ReportRunner(processor)
    return runner.run(args.date or date.today())


if __name__ == "__main__":
    sys.exit(main())
