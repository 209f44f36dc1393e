from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class IncidentFlag(str, Enum):
    """Incident characteristic codes with their bit in the feed's bitset form."""

    IMPAIRED = "IMPAIRED"
    SPEEDING = "SPEEDING"
    PEDESTRIAN = "PEDESTRIAN"
    BICYCLE = "BICYCLE"
    ANIMAL = "ANIMAL"

    @property
    def bit(self) -> int:
        return FLAG_BITS[self]


FLAG_BITS: dict[IncidentFlag, int] = {
    IncidentFlag.IMPAIRED: 1,
    IncidentFlag.SPEEDING: 2,
    IncidentFlag.PEDESTRIAN: 4,
    IncidentFlag.BICYCLE: 8,
    IncidentFlag.ANIMAL: 16,
}


@dataclass(frozen=True)
class NormalizedIncidentRecord:
    """One incident after both feed encodings have been merged."""

    date: date
    fatality_count: int
    injury_count: int
    municipality: str
    flags: frozenset[str] = field(default_factory=frozenset)

    def has_flag(self, flag: IncidentFlag | str) -> bool:
        code = flag.value if isinstance(flag, IncidentFlag) else flag.upper()
        return code in self.flags
