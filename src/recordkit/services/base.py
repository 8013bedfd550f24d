"""BaseService — shared foundation for record services.

Every service receives its settings and message source at construction
time. Defaults are built from environment variables when none are given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recordkit.config.settings import RecordkitSettings
from recordkit.infrastructure.messages import MessageCatalog

if TYPE_CHECKING:
    from recordkit.services.contracts import MessageSource


class BaseService:
    """Base for service-layer classes.

    Subclasses reach configuration through ``self._settings`` and
    localized text through :meth:`_message`.
    """

    def __init__(
        self,
        *,
        settings: RecordkitSettings | None = None,
        messages: MessageSource | None = None,
    ) -> None:
        self._settings = settings if settings is not None else RecordkitSettings()
        if messages is None:
            messages = MessageCatalog.from_config(self._settings.messages)
        self._messages = messages

    def _message(self, key: str, locale: str | None = None) -> str:
        return self._messages.get(key, locale)
