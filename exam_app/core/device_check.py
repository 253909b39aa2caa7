"""Heuristic that keeps the exam off phones, tablets and tiny windows."""

from __future__ import annotations

import re
from dataclasses import dataclass

from exam_app.constants.exam_constants import (
    MIN_VIEWPORT_HEIGHT,
    MIN_VIEWPORT_WIDTH,
    MOBILE_USER_AGENT_PATTERN,
)

_MOBILE_UA = re.compile(MOBILE_USER_AGENT_PATTERN, re.IGNORECASE)


@dataclass(slots=True, frozen=True)
class DeviceProfile:
    """What the client knows about the device it runs on."""

    user_agent: str
    viewport_width: int
    viewport_height: int


def is_mobile_user_agent(user_agent: str) -> bool:
    return bool(_MOBILE_UA.search(user_agent or ""))


def is_viewport_too_small(width: int, height: int) -> bool:
    return width < MIN_VIEWPORT_WIDTH or height < MIN_VIEWPORT_HEIGHT


def is_supported_device(profile: DeviceProfile) -> bool:
    """Fail closed: a mobile user agent or a small viewport blocks the exam."""
    if is_mobile_user_agent(profile.user_agent):
        return False
    return not is_viewport_too_small(profile.viewport_width, profile.viewport_height)
