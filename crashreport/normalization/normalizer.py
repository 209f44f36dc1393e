"""Merges the two feed encodings into canonical incident records.

Processing flow:
1. Require both encodings to hold the same number of records.
2. Parse each geometry record's date with the feed's day/month/year format.
3. Coerce fatality and injury counts to non-negative integers.
4. Take ``flags`` from the flat record at the same position.
5. Keep only records for the configured municipality.

Any malformed date or count fails the whole batch: a silently skipped
record would bias the weekly totals without any signal.
"""

import re
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any, ClassVar

from crashreport.logging.logger import Log
from crashreport.normalization.exceptions import ParseError, SchemaMismatchError
from crashreport.normalization.models import FLAG_BITS, NormalizedIncidentRecord

DATE_FIELD = "date"
FATALITIES_FIELD = "totalFatalities"
INJURIES_FIELD = "totalInjuries"
MUNICIPALITY_FIELD = "municipality"
FLAGS_FIELD = "flags"


class RecordNormalizer:
    """Deterministic positional merge of geometry and flat feed records."""

    DEFAULT_DATE_FORMAT: ClassVar[str] = "%d/%m/%Y"

    _FLAG_SEPARATOR_RE: ClassVar[re.Pattern[str]] = re.compile(r"[,;|]")
    _DIGITS_RE: ClassVar[re.Pattern[str]] = re.compile(r"\d+")

    def __init__(self, *, municipality: str, date_format: str = DEFAULT_DATE_FORMAT) -> None:
        self._municipality = municipality
        self._date_format = date_format

    def normalize(
        self,
        geo_records: Sequence[dict[str, Any]],
        flat_records: Sequence[dict[str, Any]],
    ) -> list[NormalizedIncidentRecord]:
        """Merge, repair and filter one feed batch.

        Raises:
            SchemaMismatchError: if the encodings differ in length.
            ParseError: on any unparseable date or count.
        """
        if len(geo_records) != len(flat_records):
            raise SchemaMismatchError(
                f"Cannot merge feed encodings by position: {len(geo_records)} geometry "
                f"records vs {len(flat_records)} flat records"
            )

        merged = [
            self._build_record(geo, flat, index)
            for index, (geo, flat) in enumerate(zip(geo_records, flat_records))
        ]
        records = [r for r in merged if r.municipality == self._municipality]
        Log.info(
            f"Normalized {len(merged)} incidents, {len(records)} in {self._municipality}"
        )
        return records

    def _build_record(
        self,
        geo: dict[str, Any],
        flat: dict[str, Any],
        index: int,
    ) -> NormalizedIncidentRecord:
        municipality = geo.get(MUNICIPALITY_FIELD)
        return NormalizedIncidentRecord(
            date=self._parse_date(geo.get(DATE_FIELD), index),
            fatality_count=self._parse_count(geo.get(FATALITIES_FIELD), FATALITIES_FIELD, index),
            injury_count=self._parse_count(geo.get(INJURIES_FIELD), INJURIES_FIELD, index),
            municipality=municipality if isinstance(municipality, str) else "",
            flags=self._parse_flags(flat.get(FLAGS_FIELD), index),
        )

    def _parse_date(self, raw: Any, index: int) -> date:
        if not isinstance(raw, str) or not raw.strip():
            raise ParseError(f"Record at index {index}: '{DATE_FIELD}' is missing")
        try:
            return datetime.strptime(raw.strip(), self._date_format).date()
        except ValueError as exc:
            raise ParseError(
                f"Record at index {index}: '{DATE_FIELD}' {raw!r} does not match "
                f"{self._date_format!r}"
            ) from exc

    def _parse_count(self, raw: Any, field_name: str, index: int) -> int:
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return 0
        if isinstance(raw, bool):
            raise ParseError(f"Record at index {index}: '{field_name}' must be numeric")
        if isinstance(raw, int):
            value = raw
        elif isinstance(raw, float) and raw.is_integer():
            value = int(raw)
        elif isinstance(raw, str) and self._DIGITS_RE.fullmatch(raw.strip()):
            value = int(raw.strip())
        else:
            raise ParseError(
                f"Record at index {index}: '{field_name}' must be a non-negative "
                f"integer, got {raw!r}"
            )
        if value < 0:
            raise ParseError(
                f"Record at index {index}: '{field_name}' must be non-negative, got {value}"
            )
        return value

    def _parse_flags(self, raw: Any, index: int) -> frozenset[str]:
        if raw is None:
            return frozenset()
        if isinstance(raw, bool):
            raise ParseError(f"Record at index {index}: '{FLAGS_FIELD}' has unsupported type")
        if isinstance(raw, int):
            return self._decode_bitset(raw, index)
        if isinstance(raw, str):
            codes: list[Any] = self._FLAG_SEPARATOR_RE.split(raw)
        elif isinstance(raw, list):
            codes = raw
        else:
            raise ParseError(f"Record at index {index}: '{FLAGS_FIELD}' has unsupported type")

        flags: set[str] = set()
        for code in codes:
            if not isinstance(code, str):
                raise ParseError(
                    f"Record at index {index}: '{FLAGS_FIELD}' entries must be strings"
                )
            if code.strip():
                flags.add(code.strip().upper())
        return frozenset(flags)

    @staticmethod
    def _decode_bitset(raw: int, index: int) -> frozenset[str]:
        known_mask = sum(FLAG_BITS.values())
        if raw < 0 or raw & ~known_mask:
            raise ParseError(
                f"Record at index {index}: '{FLAGS_FIELD}' bitset {raw} has unknown bits"
            )
        return frozenset(flag.value for flag, bit in FLAG_BITS.items() if raw & bit)
