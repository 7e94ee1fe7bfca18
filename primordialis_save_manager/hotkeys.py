"""
Global F5 hotkey: ask for an autosave check on the next poll.

The listener runs on pynput's own thread and only raises a flag; the
supervisor consumes it from its polling loop.
"""

import logging
import threading

try:
    from pynput import keyboard as pynput_keyboard
    PYNPUT_AVAILABLE = True
except Exception:   # not installed, or no usable input backend (headless X)
    PYNPUT_AVAILABLE = False

logger = logging.getLogger(__name__)


class QuickCheckHotkey:

    def __init__(self):
        self._lock      = threading.Lock()
        self._requested = False
        self._listener  = None

    def request(self):
        with self._lock:
            self._requested = True

    def consume(self) -> bool:
        """True once per request."""
        with self._lock:
            requested, self._requested = self._requested, False
        return requested

    def _on_press(self, key):
        if key == pynput_keyboard.Key.f5:
            self.request()

    def start(self) -> bool:
        if not PYNPUT_AVAILABLE:
            logger.info("pynput not found; F5 autosave check disabled.")
            return False
        try:
            listener = pynput_keyboard.Listener(on_press=self._on_press, suppress=False)
            listener.daemon = True
            listener.start()
        except Exception as exc:
            logger.warning("Global hotkeys unavailable (%s)", exc)
            return False
        self._listener = listener
        logger.info("F5: check for changes and autosave now")
        return True

    def stop(self):
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
