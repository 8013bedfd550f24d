"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, recordkit.toml only contains
overrides.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, Field, model_validator


class PagingConfig(BaseModel):
    """[paging] section."""

    model_config = {"frozen": True}

    default_page_size: int = Field(default=20, gt=0)
    max_page_size: int = Field(default=500, gt=0)

    @model_validator(mode="after")
    def _default_within_max(self) -> Self:
        if self.default_page_size > self.max_page_size:
            msg = (
                f"default_page_size ({self.default_page_size}) exceeds "
                f"max_page_size ({self.max_page_size})"
            )
            raise ValueError(msg)
        return self


class MessagesConfig(BaseModel):
    """[messages] section.

    ``overrides`` maps locale -> message key -> text, e.g.::

        [messages.overrides.en]
        data_invalid = "Please check the highlighted fields."
    """

    model_config = {"frozen": True}

    locale: str = "en"
    overrides: dict[str, dict[str, str]] = Field(default_factory=dict)
