"""Picture-in-Picture coordination for running brew timers.

Tracks two independent flags:

* ``can_enter_pip``: a timer is running, so PiP may be requested.
* ``is_in_pip``: the platform reports the app is shown in PiP.

The timer page reports start/stop through `on_timer_running_changed`; the
platform drives `on_user_leaving_foreground` and `on_pip_mode_changed`.
All three operations are total: missing platform capabilities turn the
corresponding side effect into a no-op.
"""
from __future__ import annotations

from typing import Callable, Optional

from cofi.platform import SQUARE, PiPParameters, PlatformAdapter
from cofi.utils.logging import get_logger
from cofi.utils.observable import ObservableValue, ReadOnlyObservable

LOG = get_logger("cofi.pip")


class PiPCoordinator:
    def __init__(
        self,
        platform: PlatformAdapter,
        pip_enabled: Callable[[], bool],
    ) -> None:
        self._platform = platform
        self._pip_enabled = pip_enabled
        self._can_enter_pip: ObservableValue[bool] = ObservableValue(False)
        self._is_in_pip: ObservableValue[bool] = ObservableValue(False)
        self._parameters: Optional[PiPParameters] = None
        self.can_enter_pip: ReadOnlyObservable[bool] = self._can_enter_pip.read_only()
        self.is_in_pip: ReadOnlyObservable[bool] = self._is_in_pip.read_only()

    @property
    def parameters(self) -> Optional[PiPParameters]:
        """Parameters most recently computed for the platform."""
        return self._parameters

    def _build_parameters(self, is_running: bool) -> PiPParameters:
        if self._platform.supports_auto_enter:
            return PiPParameters(aspect_ratio=SQUARE, auto_enter=is_running, seamless_resize=is_running)
        return PiPParameters(aspect_ratio=SQUARE)

    def on_timer_running_changed(self, is_running: bool) -> None:
        is_running = bool(is_running)
        self._can_enter_pip.set(is_running)
        self._parameters = self._build_parameters(is_running)
        if self._platform.supports_pip:
            self._platform.set_pip_parameters(self._parameters)
        self._platform.set_keep_screen_on(is_running)
        LOG.debug("Timer running=%s parameters=%s", is_running, self._parameters)

    def on_user_leaving_foreground(self) -> bool:
        """Request PiP if a timer runs and the user allows it.

        Returns True when an entry request was issued.
        """
        if not self._platform.supports_pip or not self._can_enter_pip.value:
            return False
        if not self._pip_enabled():
            LOG.debug("PiP disabled in settings; staying windowed")
            return False
        self._platform.enter_pip(PiPParameters(aspect_ratio=SQUARE))
        LOG.info("Requested Picture-in-Picture entry")
        return True

    def on_pip_mode_changed(self, is_in_pip: bool) -> None:
        if self._is_in_pip.set(bool(is_in_pip)):
            LOG.info("Picture-in-Picture mode changed in_pip=%s", bool(is_in_pip))

    def state(self) -> dict:
        return {
            "can_enter_pip": self._can_enter_pip.value,
            "is_in_pip": self._is_in_pip.value,
            "parameters": self._parameters.as_dict() if self._parameters else None,
        }


__all__ = ["PiPCoordinator"]
