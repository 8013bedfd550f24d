"""ServiceContext — shared wiring for applications embedding recordkit.

Created once at application startup. Configures structured logging and
telemetry from settings, then builds record services that share the same
settings and message catalog.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from recordkit.config.logging import configure_logging
from recordkit.config.settings import RecordkitSettings
from recordkit.domain.records import Record
from recordkit.infrastructure.messages import MessageCatalog
from recordkit.services.record import RecordService
from recordkit.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from recordkit.services.contracts import MessageSource, RecordStorage, RecordValidator


class ServiceContext:
    """Settings, message source and service factory for one application.

    Telemetry is enabled for the current context when ``verbose`` is set;
    worker threads started afterwards must call ``enable_telemetry()``
    themselves.
    """

    def __init__(
        self,
        settings: RecordkitSettings | None = None,
        *,
        messages: MessageSource | None = None,
    ) -> None:
        self.settings = settings if settings is not None else RecordkitSettings.load()
        self.messages = (
            messages if messages is not None else MessageCatalog.from_config(self.settings.messages)
        )

        configure_logging(verbose=self.settings.verbose, log_json=self.settings.log_json)
        if self.settings.verbose:
            enable_telemetry()

    def record_service[R: Record](
        self,
        storage: RecordStorage[R],
        *,
        validators: Sequence[RecordValidator[Any]] = (),
    ) -> RecordService[R]:
        """Build a RecordService bound to this context's settings and messages."""
        return RecordService(
            storage,
            validators=validators,
            settings=self.settings,
            messages=self.messages,
        )
