"""Shared configuration for persisted records."""

from __future__ import annotations

import secrets
import time
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def new_id(prefix: str) -> str:
    """Return an opaque identifier such as ``post-1718000000000-1f3a9c2b``."""
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(4)}"


class RecordModel(BaseModel):
    """Base model whose stored JSON form uses camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-compatible dictionary written to the store."""
        return self.model_dump(mode="json", by_alias=True)
