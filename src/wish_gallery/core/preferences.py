"""Reduced-motion preference tracking.

A MotionPreferenceSource is the platform side (desktop setting, config
override). A ReducedMotionObserver wraps one source for one consumer context:
it holds a single platform listener, caches the current value and fans it out
to its own subscribers.
"""

import os
import shutil
from collections.abc import Callable, Sequence
from typing import Optional, Protocol

from PySide6.QtCore import QObject, QProcess, QTimer

from wish_gallery.utils.logging_config import log_function, logger

PreferenceListener = Callable[[bool], None]

REDUCE_MOTION_ENV = "WISH_GALLERY_REDUCE_MOTION"
GSETTINGS_SCHEMA = "org.gnome.desktop.interface"
GSETTINGS_KEY = "enable-animations"
GSETTINGS_COMMAND = ("gsettings", "get", GSETTINGS_SCHEMA, GSETTINGS_KEY)


class MotionPreferenceSource(Protocol):
    def matches(self) -> bool:
        ...

    def add_listener(self, listener: PreferenceListener) -> None:
        ...

    def remove_listener(self, listener: PreferenceListener) -> None:
        ...


class _ListenerMixin:
    """Listener bookkeeping shared by the concrete sources."""

    def _init_listeners(self) -> None:
        self._listeners: list[PreferenceListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: PreferenceListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: PreferenceListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _notify(self, value: bool) -> None:
        for listener in list(self._listeners):
            listener(value)


# ----------------------------- Sources -----------------------------


class StaticMotionPreference(_ListenerMixin):
    """A source whose value is set explicitly (config override, tests)."""

    def __init__(self, reduced: bool = False) -> None:
        self._init_listeners()
        self._reduced: bool = reduced

    def matches(self) -> bool:
        return self._reduced

    def set_matches(self, reduced: bool) -> None:
        if reduced == self._reduced:
            return
        self._reduced = reduced
        self._notify(reduced)


def _env_flag(value: str) -> Optional[bool]:
    value = value.strip().lower()
    if value in ("1", "true", "yes", "on", "reduce"):
        return True
    if value in ("0", "false", "no", "off", "no-preference"):
        return False
    return None


def env_reduced_motion() -> Optional[bool]:
    """The override from the environment, or None when unset or unrecognised."""
    return _env_flag(os.environ.get(REDUCE_MOTION_ENV, ""))


def parse_enable_animations(output: str) -> Optional[bool]:
    """Turn ``gsettings get`` output for enable-animations into a reduced-motion flag."""
    value = output.strip().lower()
    if value == "false":
        return True
    if value == "true":
        return False
    return None


class SystemMotionPreference(QObject, _ListenerMixin):
    """Source backed by the desktop setting.

    The setting is read by a QProcess, so the event loop never waits on
    gsettings: refresh() only starts a query and the result is applied when
    the process finishes. Until the first answer arrives motion is allowed.
    Queries repeat every ``poll_interval_ms`` while at least one listener is
    registered, one at a time. A value in WISH_GALLERY_REDUCE_MOTION replaces
    the query entirely.
    """

    def __init__(
        self,
        poll_interval_ms: int = 2000,
        command: Sequence[str] = GSETTINGS_COMMAND,
        parent: Optional[QObject] = None,
    ) -> None:
        QObject.__init__(self, parent)
        self._init_listeners()
        self._command: list[str] = list(command)

        override = env_reduced_motion()
        self._reduced: bool = bool(override)
        self._program: Optional[str] = None
        if override is None:
            self._program = shutil.which(self._command[0])
            if self._program is None:
                logger.debug(f"{self._command[0]} not found, assuming motion is allowed")

        self._process: QProcess = QProcess(self)
        _ = self._process.finished.connect(self._on_query_finished)
        _ = self._process.errorOccurred.connect(self._on_query_error)

        self._poll_timer: QTimer = QTimer(self)
        self._poll_timer.setInterval(poll_interval_ms)
        _ = self._poll_timer.timeout.connect(self.refresh)

        self.refresh()

    @property
    def polling(self) -> bool:
        return self._poll_timer.isActive()

    @property
    def query_running(self) -> bool:
        return self._process.state() != QProcess.ProcessState.NotRunning

    def matches(self) -> bool:
        return self._reduced

    def add_listener(self, listener: PreferenceListener) -> None:
        super().add_listener(listener)
        if self._program is not None and not self._poll_timer.isActive():
            self._poll_timer.start()

    def remove_listener(self, listener: PreferenceListener) -> None:
        super().remove_listener(listener)
        if not self._listeners:
            self._poll_timer.stop()

    def refresh(self) -> None:
        """Start a query of the desktop setting unless one is already running."""
        if self._program is None or self.query_running:
            return
        self._process.start(self._program, self._command[1:])

    def _on_query_finished(self, exit_code: int, exit_status: QProcess.ExitStatus) -> None:
        output = self._process.readAllStandardOutput().data().decode("utf-8", errors="replace")
        if exit_status != QProcess.ExitStatus.NormalExit or exit_code != 0:
            logger.debug(f"{self._command[0]} exited with code {exit_code}")
            return
        reduced = parse_enable_animations(output)
        if reduced is None:
            logger.debug(f"Unexpected {GSETTINGS_KEY} value: {output.strip()!r}")
            return
        if reduced != self._reduced:
            self._reduced = reduced
            logger.info(f"System reduced-motion preference changed: {reduced}")
            self._notify(reduced)

    def _on_query_error(self, error: QProcess.ProcessError) -> None:
        logger.debug(f"Reduced-motion query failed: {error}")


@log_function
def create_motion_source(mode: str = "system") -> MotionPreferenceSource:
    """Build the source for a config reduce_motion mode ("system", "on", "off")."""
    if mode == "on":
        return StaticMotionPreference(reduced=True)
    if mode == "off":
        return StaticMotionPreference(reduced=False)
    return SystemMotionPreference()


# ----------------------------- Observer -----------------------------


class ReducedMotionObserver:
    """Cached reduced-motion value with independent subscribers.

    Registers exactly one listener on its source for its whole lifetime;
    close() removes it.
    """

    def __init__(self, source: MotionPreferenceSource) -> None:
        self._source: MotionPreferenceSource = source
        self._value: bool = source.matches()
        self._subscribers: list[PreferenceListener] = []
        self._closed: bool = False
        source.add_listener(self._on_platform_change)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def closed(self) -> bool:
        return self._closed

    def current_value(self) -> bool:
        return self._value

    def subscribe(self, callback: PreferenceListener) -> Callable[[], None]:
        """Register callback for changes. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)
        active = True

        def unsubscribe() -> None:
            nonlocal active
            if active and callback in self._subscribers:
                self._subscribers.remove(callback)
            active = False

        return unsubscribe

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._source.remove_listener(self._on_platform_change)
        self._subscribers.clear()

    def _on_platform_change(self, reduced: bool) -> None:
        if reduced == self._value:
            return
        self._value = reduced
        for callback in list(self._subscribers):
            callback(reduced)
