from crashreport.normalization.models import IncidentFlag, NormalizedIncidentRecord
from crashreport.normalization.normalizer import RecordNormalizer

__all__ = ["IncidentFlag", "NormalizedIncidentRecord", "RecordNormalizer"]
