"""
Single-selection MIME type picker with a live search filter.

A picker starts OPEN and ends either CONFIRMED (with a value) or CANCELLED.
It cannot be reopened; build a new one for every invocation.
"""

from enum import Enum
from typing import List, Optional, Sequence

from .errors import NoSelectionError, PickerClosedError
from .mime_catalog import MIME_TYPES, filter_catalog


class PickerState(Enum):
    OPEN = "open"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class MimeTypePicker:
    """Filterable list of MIME types from which exactly one can be confirmed"""

    def __init__(self, catalog: Sequence[str] = MIME_TYPES):
        self.catalog = tuple(catalog)
        self.state = PickerState.OPEN
        self.search_term = ""
        self.visible: List[str] = list(self.catalog)
        self.selected: Optional[str] = None
        self.value: Optional[str] = None

    def _ensure_open(self):
        if self.state is not PickerState.OPEN:
            raise PickerClosedError(f"Picker is already {self.state.value}")

    def search(self, term: str) -> List[str]:
        """Update the filter term and return the visible entries."""
        self._ensure_open()
        self.search_term = term or ""
        self.visible = filter_catalog(self.catalog, self.search_term)
        if self.selected not in self.visible:
            self.selected = None
        return list(self.visible)

    def select(self, mime_type: str):
        self._ensure_open()
        if mime_type not in self.visible:
            raise ValueError(f"'{mime_type}' is not in the current list")
        self.selected = mime_type

    def clear_selection(self):
        self._ensure_open()
        self.selected = None

    def confirm(self) -> str:
        """
        Confirm the current selection.

        Raises:
            NoSelectionError: nothing is selected; the picker stays open.
        """
        self._ensure_open()
        if self.selected is None:
            raise NoSelectionError()
        self.value = self.selected
        self.state = PickerState.CONFIRMED
        return self.value

    def cancel(self):
        self._ensure_open()
        self.selected = None
        self.state = PickerState.CANCELLED

    @property
    def is_open(self) -> bool:
        return self.state is PickerState.OPEN


def pick_mime_type(term: str, selection: Optional[str], catalog: Sequence[str] = MIME_TYPES) -> str:
    """Run a picker non-interactively: filter with term, select, confirm."""
    picker = MimeTypePicker(catalog)
    picker.search(term)
    if selection:
        picker.select(selection)
    return picker.confirm()
