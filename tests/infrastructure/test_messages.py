"""Tests for the localized message catalog."""

from __future__ import annotations

import pytest

from recordkit.config.models import MessagesConfig
from recordkit.infrastructure.messages import (
    DATA_INVALID,
    SERVER_ERROR,
    MessageCatalog,
    normalize_locale,
)


class TestMessageCatalog:
    def test_english_default(self) -> None:
        catalog = MessageCatalog()
        assert catalog.get(DATA_INVALID) == "Data is invalid."
        assert catalog.get(SERVER_ERROR) == "A server error occurred. Please try again later."

    def test_vietnamese(self) -> None:
        assert MessageCatalog().get(DATA_INVALID, "vi") == "Dữ liệu không hợp lệ."

    def test_region_falls_back_to_language(self) -> None:
        assert MessageCatalog().get(SERVER_ERROR, "vi_VN") == "Có lỗi xảy ra, vui lòng thử lại sau."

    def test_unknown_locale_falls_back_to_default(self) -> None:
        catalog = MessageCatalog(default_locale="vi")
        assert catalog.get(DATA_INVALID, "fr-FR") == "Dữ liệu không hợp lệ."

    def test_overrides_win(self) -> None:
        catalog = MessageCatalog({"en": {DATA_INVALID: "Check the form."}})
        assert catalog.get(DATA_INVALID) == "Check the form."
        assert catalog.get(SERVER_ERROR) == "A server error occurred. Please try again later."

    def test_new_locale_partial(self) -> None:
        catalog = MessageCatalog({"de": {DATA_INVALID: "Ungültige Daten."}})
        assert catalog.get(DATA_INVALID, "de") == "Ungültige Daten."
        assert catalog.get(SERVER_ERROR, "de") == "A server error occurred. Please try again later."

    def test_unknown_key(self) -> None:
        with pytest.raises(KeyError):
            MessageCatalog().get("no_such_key")

    def test_from_config(self) -> None:
        config = MessagesConfig(locale="vi", overrides={"vi": {SERVER_ERROR: "Lỗi máy chủ."}})
        catalog = MessageCatalog.from_config(config)
        assert catalog.get(SERVER_ERROR) == "Lỗi máy chủ."
        assert catalog.get(DATA_INVALID) == "Dữ liệu không hợp lệ."


class TestNormalizeLocale:
    @pytest.mark.parametrize(("raw", "expected"), [("vi_VN", "vi-vn"), (" EN ", "en"), ("en-US", "en-us")])
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_locale(raw) == expected
