"""Selection matrix of content items x locales for bulk translation."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..locales import Locale, target_locales
from ..models.content import ContentSummary, TranslationRecord
from ..models.translation_unit import TranslationUnit, UnitStatus

ALL_TYPES = "all"


@dataclass
class MatrixStats:
    """Coverage of the filtered view across all target locales."""
    total: int
    translated: int
    missing: int
    percentage: int


class SelectionMatrix:
    """
    Tracks which (content item, locale) pairs are selected for translation.

    Selections are ordered sets (dicts keyed by id) so that dispatch follows
    the order in which items were selected.
    """

    def __init__(
        self,
        contents: Iterable[ContentSummary],
        translations: Iterable[TranslationRecord] = (),
        locales: Optional[Iterable[Locale]] = None,
        content_type_filter: str = ALL_TYPES,
    ):
        """
        Build the matrix.

        Args:
            contents: Published content items offered for translation
            translations: Known translation records (absent pairs are "missing")
            locales: Target locales; defaults to every locale except English
            content_type_filter: Content type shown in the view, or "all"
        """
        self.contents: List[ContentSummary] = list(contents)
        self.locales: List[Locale] = list(locales) if locales is not None else target_locales()
        self.content_type_filter = content_type_filter
        self._statuses: Dict[str, Dict[str, UnitStatus]] = {}
        self.load_translations(translations)

        self._selected_contents: Dict[str, None] = {}
        self._selected_locales: Dict[str, None] = {}

    def load_translations(self, translations: Iterable[TranslationRecord]) -> None:
        """Replace the known statuses with a fresh server snapshot."""
        self._statuses = {}
        for record in translations:
            self._statuses.setdefault(record.content_id, {})[record.locale] = record.status

    # Derived views

    @property
    def locale_codes(self) -> List[str]:
        return [locale.code for locale in self.locales]

    @property
    def filtered_contents(self) -> List[ContentSummary]:
        if self.content_type_filter == ALL_TYPES:
            return list(self.contents)
        return [c for c in self.contents if c.type == self.content_type_filter]

    @property
    def selected_content_ids(self) -> List[str]:
        return list(self._selected_contents)

    @property
    def selected_locales(self) -> List[str]:
        return list(self._selected_locales)

    @property
    def has_selection(self) -> bool:
        return bool(self._selected_contents) or bool(self._selected_locales)

    def status_of(self, content_id: str, locale: str) -> UnitStatus:
        return self._statuses.get(content_id, {}).get(locale, UnitStatus.MISSING)

    def stats(self) -> MatrixStats:
        total = 0
        translated = 0
        for content in self.filtered_contents:
            for code in self.locale_codes:
                total += 1
                if self.status_of(content.id, code).is_completed:
                    translated += 1
        return MatrixStats(
            total=total,
            translated=translated,
            missing=total - translated,
            percentage=round(translated / total * 100) if total > 0 else 0,
        )

    # Selection operations

    def toggle_content(self, content_id: str) -> None:
        if content_id in self._selected_contents:
            del self._selected_contents[content_id]
        else:
            self._selected_contents[content_id] = None

    def toggle_locale(self, code: str) -> None:
        if code in self._selected_locales:
            del self._selected_locales[code]
        else:
            self._selected_locales[code] = None

    def select_all_content(self) -> None:
        """Select every visible content item, or clear if all are already selected."""
        visible = [c.id for c in self.filtered_contents]
        if all(content_id in self._selected_contents for content_id in visible):
            self._selected_contents = {}
        else:
            self._selected_contents = dict.fromkeys(visible)

    def select_all_locales(self) -> None:
        """Select every target locale, or clear if all are already selected."""
        codes = self.locale_codes
        if all(code in self._selected_locales for code in codes):
            self._selected_locales = {}
        else:
            self._selected_locales = dict.fromkeys(codes)

    def select_missing_only(self) -> None:
        """
        Replace the selection with everything that still needs translation.

        Only the filtered view is considered. Prior selection is discarded.
        """
        contents: Dict[str, None] = {}
        locales: Dict[str, None] = {}
        for content in self.filtered_contents:
            for code in self.locale_codes:
                if not self.status_of(content.id, code).is_completed:
                    contents[content.id] = None
                    locales[code] = None
        # keep locales in supported order rather than discovery order
        self._selected_contents = contents
        self._selected_locales = {code: None for code in self.locale_codes if code in locales}

    def clear_selection(self) -> None:
        self._selected_contents = {}
        self._selected_locales = {}

    # Work list

    def locales_to_translate(self, content_id: str) -> List[str]:
        """Selected locales still not completed for one content item."""
        return [
            code for code in self._selected_locales
            if not self.status_of(content_id, code).is_completed
        ]

    def compute_work_list(self) -> List[TranslationUnit]:
        """Selected contents x selected locales, minus completed units."""
        units = []
        for content_id in self._selected_contents:
            for code in self._selected_locales:
                status = self.status_of(content_id, code)
                if not status.is_completed:
                    units.append(TranslationUnit(content_id, code, status))
        return units
