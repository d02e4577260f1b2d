"""Render API vocabulary and the few typed records the adapter handles.

Services, deploys and custom domains themselves stay plain dicts: they are
passed through to the caller exactly as Render returned them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ServiceType(str, Enum):
    WEB_SERVICE = "web_service"
    STATIC_SITE = "static_site"
    PRIVATE_SERVICE = "private_service"
    BACKGROUND_WORKER = "background_worker"
    CRON_JOB = "cron_job"


class ServicePlan(str, Enum):
    FREE = "free"
    STARTER = "starter"
    STARTER_PLUS = "starter_plus"
    STANDARD = "standard"
    STANDARD_PLUS = "standard_plus"
    PRO = "pro"
    PRO_PLUS = "pro_plus"


class DeployStatus(str, Enum):
    CREATED = "created"
    BUILD_IN_PROGRESS = "build_in_progress"
    UPDATE_IN_PROGRESS = "update_in_progress"
    LIVE = "live"
    DEACTIVATED = "deactivated"
    BUILD_FAILED = "build_failed"
    UPDATE_FAILED = "update_failed"
    CANCELED = "canceled"


@dataclass(frozen=True)
class EnvVar:
    """One entry of a service's environment; updates always send the full set."""

    key: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}


@dataclass(frozen=True)
class Page:
    """One page of a list endpoint, in upstream order, with its opaque continuation cursor."""

    items: list[dict[str, Any]] = field(default_factory=list)
    cursor: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"data": self.items}
        if self.cursor is not None:
            out["cursor"] = self.cursor
        return out
