"""Platform (OS) adapters used by the Picture-in-Picture coordinator.

The coordinator only issues fire-and-forget commands; whatever hosts the
shell (a native wrapper around the web view) decides whether they take
effect. `CommandQueuePlatform` buffers commands so the host can drain
them over HTTP via ``GET /lifecycle/commands``.
"""
from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Any, Deque, Dict, List, Optional, Tuple

from cofi.utils.logging import get_logger

LOG = get_logger("cofi.platform")

SQUARE: Tuple[int, int] = (1, 1)


@dataclass(frozen=True)
class PiPParameters:
    """Parameters pushed to the platform; None means "not sent"."""

    aspect_ratio: Tuple[int, int] = SQUARE
    auto_enter: Optional[bool] = None
    seamless_resize: Optional[bool] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"aspect_ratio": list(self.aspect_ratio)}
        if self.auto_enter is not None:
            payload["auto_enter"] = self.auto_enter
        if self.seamless_resize is not None:
            payload["seamless_resize"] = self.seamless_resize
        return payload


@dataclass(frozen=True)
class PlatformCommand:
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)
    issued_at: float = field(default_factory=time.time)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PlatformAdapter:
    """Base adapter: no capabilities, every command is a no-op."""

    supports_pip: bool = False
    supports_auto_enter: bool = False

    def set_pip_parameters(self, params: PiPParameters) -> None:
        return None

    def enter_pip(self, params: PiPParameters) -> None:
        return None

    def set_keep_screen_on(self, enabled: bool) -> None:
        return None


class CommandQueuePlatform(PlatformAdapter):
    """Adapter that records commands for the host shell to execute.

    The queue is bounded; when full the oldest command is dropped.
    """

    def __init__(
        self,
        *,
        supports_pip: bool = True,
        supports_auto_enter: bool = True,
        max_commands: int = 100,
    ) -> None:
        self.supports_pip = supports_pip
        self.supports_auto_enter = supports_auto_enter
        self._commands: Deque[PlatformCommand] = deque(maxlen=max_commands)
        self._lock = threading.Lock()
        self.keep_screen_on = False

    def _push(self, name: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            if len(self._commands) == self._commands.maxlen:
                LOG.warning("Platform command queue full; dropping oldest command")
            self._commands.append(PlatformCommand(name=name, payload=payload))
        LOG.debug("Queued platform command %s %s", name, payload)

    def set_pip_parameters(self, params: PiPParameters) -> None:
        self._push("set_pip_parameters", params.as_dict())

    def enter_pip(self, params: PiPParameters) -> None:
        self._push("enter_pip", params.as_dict())

    def set_keep_screen_on(self, enabled: bool) -> None:
        self.keep_screen_on = bool(enabled)
        self._push("set_keep_screen_on", {"enabled": bool(enabled)})

    def pending(self) -> List[PlatformCommand]:
        with self._lock:
            return list(self._commands)

    def drain(self) -> List[PlatformCommand]:
        with self._lock:
            commands = list(self._commands)
            self._commands.clear()
        return commands


__all__ = [
    "SQUARE",
    "PiPParameters",
    "PlatformCommand",
    "PlatformAdapter",
    "CommandQueuePlatform",
]
