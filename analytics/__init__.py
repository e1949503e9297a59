from .config import AnalyticsConfig
from .prepare import STATUSES, progress_frame
from .metrics import breakdown_by_type
from .export import export_ndjson, export_parquet

__all__ = [
    "AnalyticsConfig",
    "STATUSES",
    "progress_frame",
    "breakdown_by_type",
    "export_ndjson",
    "export_parquet",
]
