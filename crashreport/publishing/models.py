from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PublishReceipt:
    """Proof of hand-off returned by a publisher."""

    publisher: str
    reference: str
    published_at: datetime
