"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, polycalc.toml only contains
overrides, e.g.::

    [input]
    comment_prefix = ";"
    skip_blank = false
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class InputConfig(BaseModel):
    """[input] section -- which raw lines the reader hands to the parser."""

    model_config = {"frozen": True}

    comment_prefix: str = "#"
    skip_blank: bool = True

    @field_validator("comment_prefix")
    @classmethod
    def _no_letter_prefix(cls, value: str) -> str:
        # A letter prefix would swallow command lines.
        if value[:1].isalpha():
            msg = "comment_prefix must not start with a letter"
            raise ValueError(msg)
        return value


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    show_skipped: bool = False
