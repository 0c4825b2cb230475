"""Merging translation tables contributed by device types."""

import copy
from typing import Iterable

from devicehub.errors import TranslationConflictError

Translations = dict[str, dict[str, str]]

BASE_TRANSLATIONS: Translations = {
    "de": {
        "Name": "Name",
        "ID": "ID",
        "Status": "Status",
        "Error: Cloud connection is not active!": "Fehler: Cloud-Verbindung ist nicht aktiv!",
        "Status: Cloud connection is OK!": "Status: Cloud-Verbindung ist OK!",
        "If you added/updated/removed devices press this button to notify the assistant": (
            "Wenn Sie Geräte hinzugefügt, aktualisiert oder entfernt haben, "
            "betätigen Sie diesen Button um den Assistenten zu informieren"
        ),
        "Request device update": "Geräteupdate anfragen",
    }
}


def merge_translations(base: Translations, contributions: Iterable[Translations]) -> Translations:
    """Merge translation tables into a copy of ``base``.

    The same phrase may be contributed several times as long as the
    translation is identical.

    Raises:
        TranslationConflictError: If a phrase is translated differently
    """
    merged = copy.deepcopy(base)
    for contribution in contributions:
        for language, phrases in contribution.items():
            target = merged.setdefault(language, {})
            for phrase, translated in phrases.items():
                existing = target.get(phrase)
                if existing is None:
                    target[phrase] = translated
                elif existing != translated:
                    raise TranslationConflictError(language, phrase, existing, translated)
    return merged
