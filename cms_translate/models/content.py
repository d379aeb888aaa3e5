"""Wire models for CMS API payloads (camelCase JSON)."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .translation_unit import UnitStatus


class CMSModel(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ContentSummary(CMSModel):
    """A content item as listed by the CMS."""
    id: str
    title: str = ""
    type: str = ""
    status: str = ""
    slug: Optional[str] = None

    @field_validator("title", "type", "status", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_published(self) -> bool:
        return self.status == "published"


class TranslationRecord(CMSModel):
    """A stored translation of one content item into one locale."""
    id: Optional[str] = None
    content_id: str
    locale: str
    status: UnitStatus = UnitStatus.PENDING
    title: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    blocks: List[Any] = Field(default_factory=list)
    updated_at: Optional[str] = None

    @field_validator("blocks", mode="before")
    @classmethod
    def _null_blocks(cls, value: Any) -> Any:
        # nullable column on the server
        return [] if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, value: Any) -> Any:
        return UnitStatus.PENDING if value is None else value


class LocaleStatus(CMSModel):
    locale: str
    status: UnitStatus
    updated_at: Optional[str] = None


class TranslationStatusReport(CMSModel):
    """Server-reported translation aggregate for one content item."""
    content_id: str
    total_locales: int
    completed_count: int
    pending_count: int = 0
    percentage: int = 0
    completed_locales: List[str] = Field(default_factory=list)
    pending_locales: List[str] = Field(default_factory=list)
    translations: List[LocaleStatus] = Field(default_factory=list)

    @field_validator("completed_locales", "pending_locales", "translations", mode="before")
    @classmethod
    def _null_lists(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_complete(self) -> bool:
        return self.percentage >= 100

    def status_of(self, locale: str) -> UnitStatus:
        for item in self.translations:
            if item.locale == locale:
                return item.status
        if locale in self.completed_locales:
            return UnitStatus.COMPLETED
        if locale in self.pending_locales:
            return UnitStatus.PENDING
        return UnitStatus.MISSING


class TranslateRequest(CMSModel):
    locales: List[str]


class TranslateAllRequest(CMSModel):
    # None means every supported locale
    tiers: Optional[List[int]] = None


class TranslateAllResponse(CMSModel):
    message: str = ""
    job_id: Optional[str] = None
    content_id: str
    target_languages: int = 0


class CancelResponse(CMSModel):
    message: str = ""
    cancelled_count: int = 0
    content_id: Optional[str] = None
