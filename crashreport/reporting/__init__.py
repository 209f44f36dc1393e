from crashreport.reporting.aggregator import aggregate
from crashreport.reporting.models import AggregateStats, ReportingWindow
from crashreport.reporting.window import reporting_window

__all__ = ["AggregateStats", "ReportingWindow", "aggregate", "reporting_window"]
