"""Localized caller-facing messages for service results.

Lookup falls back from the requested locale (``vi-VN``) to its language
(``vi``), then to the catalog's default locale, then to English.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recordkit.config.models import MessagesConfig

DATA_INVALID = "data_invalid"
SERVER_ERROR = "server_error"

FALLBACK_LOCALE = "en"

BUILTIN_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        DATA_INVALID: "Data is invalid.",
        SERVER_ERROR: "A server error occurred. Please try again later.",
    },
    "vi": {
        DATA_INVALID: "Dữ liệu không hợp lệ.",
        SERVER_ERROR: "Có lỗi xảy ra, vui lòng thử lại sau.",
    },
}


def normalize_locale(locale: str) -> str:
    """``vi_VN`` / ``VI-vn`` -> ``vi-vn``."""
    return locale.strip().replace("_", "-").lower()


class MessageCatalog:
    """In-process message source seeded with the built-in translations."""

    def __init__(
        self,
        messages: Mapping[str, Mapping[str, str]] | None = None,
        *,
        default_locale: str = FALLBACK_LOCALE,
    ) -> None:
        self._messages: dict[str, dict[str, str]] = {
            locale: dict(table) for locale, table in BUILTIN_MESSAGES.items()
        }
        for locale, table in (messages or {}).items():
            self._messages.setdefault(normalize_locale(locale), {}).update(table)
        self.default_locale = normalize_locale(default_locale)

    @classmethod
    def from_config(cls, config: MessagesConfig) -> MessageCatalog:
        return cls(config.overrides, default_locale=config.locale)

    def get(self, key: str, locale: str | None = None) -> str:
        """Look up *key*, walking the locale fallback chain.

        Raises:
            KeyError: If no locale in the chain defines *key*.
        """
        for candidate in self._candidates(locale):
            table = self._messages.get(candidate)
            if table and key in table:
                return table[key]
        raise KeyError(key)

    def _candidates(self, locale: str | None) -> Iterator[str]:
        seen: set[str] = set()
        requested = normalize_locale(locale) if locale else self.default_locale
        for candidate in (
            requested,
            requested.split("-", 1)[0],
            self.default_locale,
            self.default_locale.split("-", 1)[0],
            FALLBACK_LOCALE,
        ):
            if candidate not in seen:
                seen.add(candidate)
                yield candidate
