"""Shared pydantic base for Huawei Cloud response payloads."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

log = logging.getLogger(__name__)


class HuaweiCloudModel(BaseModel):
    """Tolerates new response keys, warning once per model about each of them."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        qualified = {f"{type(self).__name__}.{key}" for key in extras}
        new_keys = qualified.difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug("Unmodeled response keys: %s", ", ".join(sorted(new_keys)))


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str | None = None
    message: str | None = None


class ErrorResponse(BaseModel):
    """Both error shapes in use: flat ``error_code``/``error_msg`` and nested ``error``."""

    model_config = ConfigDict(extra="ignore")

    error_code: str | None = None
    error_msg: str | None = None
    error: ErrorBody | None = None

    @property
    def code(self) -> str | None:
        if self.error_code:
            return self.error_code
        return self.error.code if self.error else None

    @property
    def message(self) -> str | None:
        if self.error_msg:
            return self.error_msg
        return self.error.message if self.error else None


def epoch_millis_to_datetime(value: float | None) -> datetime | None:
    if value is None or value <= 0:
        return None
    return datetime.fromtimestamp(int(value) // 1000, tz=UTC)
