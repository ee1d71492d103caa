"""Best-effort local persistence: saved calculations, the draft slot, preferences."""

from sipcalc.storage.drafts import DraftCache
from sipcalc.storage.history import HistoryImportError, HistoryStore
from sipcalc.storage.preferences import PreferenceStore

__all__ = ["DraftCache", "HistoryImportError", "HistoryStore", "PreferenceStore"]
