"""Translation orchestration services."""

from .cache import QueryCache
from .selection import SelectionMatrix, MatrixStats
from .dispatcher import BulkDispatcher
from .manager import TranslationManager, ManagerState, JobStatus, Notice

__all__ = [
    "QueryCache",
    "SelectionMatrix",
    "MatrixStats",
    "BulkDispatcher",
    "TranslationManager",
    "ManagerState",
    "JobStatus",
    "Notice",
]
