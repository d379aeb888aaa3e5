"""Data models for the translation orchestrator."""

from .translation_unit import (
    UnitStatus,
    TranslationUnit,
    TranslationJob,
    DispatchProgress,
    BulkResult,
)
from .content import (
    ContentSummary,
    TranslationRecord,
    LocaleStatus,
    TranslationStatusReport,
    TranslateAllResponse,
    CancelResponse,
)

__all__ = [
    "UnitStatus",
    "TranslationUnit",
    "TranslationJob",
    "DispatchProgress",
    "BulkResult",
    "ContentSummary",
    "TranslationRecord",
    "LocaleStatus",
    "TranslationStatusReport",
    "TranslateAllResponse",
    "CancelResponse",
]
