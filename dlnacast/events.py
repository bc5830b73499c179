import threading
from functools import partial
from concurrent.futures import ThreadPoolExecutor

from .util import _getLogger


class DeviceListener(object):
    """
    Receiver for discovery and playback events. Subclass and override the
    callbacks you're interested in; the defaults do nothing.
    """

    def on_device_found(self, device):
        pass

    def on_device_removed(self, device):
        pass

    def on_playback_started(self, device):
        pass

    def on_playback_error(self, message):
        pass


class EventDispatcher(object):
    """
    Delivers events to a single listener on one execution context.

    `context` is a callable that runs a zero-argument function on the caller's
    thread of choice, e.g. `loop.call_soon_threadsafe`. Without one, events
    are delivered in order on a private single thread.

    Once closed, nothing further reaches the listener, including events that
    were already queued on the context.
    """

    def __init__(self, context=None, listener=None):
        self._executor = None
        if context is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="dlnacast-events")
            context = self._executor.submit
        self._context = context
        self._listener = listener
        self._alive = True
        self._lock = threading.Lock()
        self._log = _getLogger("Events")

    @property
    def alive(self):
        return self._alive

    def set_listener(self, listener):
        """
        Replace the current listener. Pass None to stop receiving events.
        """
        with self._lock:
            self._listener = listener

    def device_found(self, device):
        self._post("on_device_found", device)

    def device_removed(self, device):
        self._post("on_device_removed", device)

    def playback_started(self, device):
        self._post("on_playback_started", device)

    def playback_error(self, message):
        self._post("on_playback_error", message)

    def call(self, fn, *args):
        """
        Run `fn(*args)` on the event context, unless the dispatcher is closed
        by the time it gets there.
        """
        return self._schedule(partial(self._run, fn, args))

    def _post(self, method_name, *args):
        self._schedule(partial(self._deliver, method_name, args))

    def _schedule(self, fn):
        if not self._alive:
            return False
        try:
            self._context(fn)
        except RuntimeError as exc:
            # Context was shut down underneath us.
            self._log.debug("Event dropped: %s", exc)
            return False
        return True

    def _deliver(self, method_name, args):
        with self._lock:
            listener = self._listener
        if listener is None:
            return
        self._run(getattr(listener, method_name), args)

    def _run(self, fn, args):
        if not self._alive:
            return
        try:
            fn(*args)
        except Exception:
            self._log.exception("Error in event callback %r", fn)

    def close(self):
        self._alive = False
        with self._lock:
            self._listener = None
        if self._executor is not None:
            self._executor.shutdown(wait=False)
