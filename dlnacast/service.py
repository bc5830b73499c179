import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor

import requests

from .util import _getLogger
from .const import (
    DISCOVER_WINDOW, HTTP_TIMEOUT, MAX_WORKERS, PICKER_DELAY, PICKER_RETRY_DELAY,
    SSDP_RECV_TIMEOUT)
from .device import fetch_device
from .errors import PreconditionError
from .events import EventDispatcher
from .registry import DeviceRegistry
from .soap import AVTransport
from .ssdp import MulticastLock, SSDPDiscovery, multicast_socket


class _Refresh(object):
    def __repr__(self):
        return "REFRESH"


#: Returned by a picker chooser to search again instead of selecting a device.
REFRESH = _Refresh()


class ControlTarget(object):
    """
    The device currently selected for playback and the media URL sent to it.
    """

    def __init__(self, device, media_url):
        self.device = device
        self.media_url = media_url

    def __repr__(self):
        return "<ControlTarget %r %s>" % (self.device, self.media_url)


class DLNAService(object):
    """
    Discovers renderers and plays media on them.

    Every dependency with side effects can be injected: `executor` is the
    worker pool running all blocking network I/O, `event_context` is where
    listener callbacks run (see EventDispatcher), `http` is anything with
    requests' `get`/`post`, `multicast_lock`, `socket_factory` and `clock`
    are handed to SSDPDiscovery and `timer_factory` is used like
    `threading.Timer` for the device picker.

    Only one control target is tracked. Selecting another device, or the same
    device with another URL, replaces it: the last selection wins, and a
    later `stop_playback()` or `destroy()` addresses that one only.

    After `destroy()`, every method may still be called. None of them raise,
    start network traffic or deliver events; they return False, an empty
    list or a future already resolved to False.
    """

    def __init__(
        self,
        listener=None,
        executor=None,
        event_context=None,
        http=requests,
        multicast_lock=None,
        socket_factory=multicast_socket,
        clock=time.monotonic,
        timer_factory=threading.Timer,
        discover_window=DISCOVER_WINDOW,
        recv_timeout=SSDP_RECV_TIMEOUT,
        http_timeout=HTTP_TIMEOUT,
        picker_delay=PICKER_DELAY,
        picker_retry_delay=PICKER_RETRY_DELAY,
    ):
        self.events = EventDispatcher(event_context, listener)
        self.registry = DeviceRegistry()
        self.multicast_lock = MulticastLock() if multicast_lock is None else multicast_lock
        self.discovery = None
        self.control = None

        self._executor = executor
        self._http = http
        self._socket_factory = socket_factory
        self._clock = clock
        self._timer_factory = timer_factory
        self.discover_window = discover_window
        self.recv_timeout = recv_timeout
        self.http_timeout = http_timeout
        self.picker_delay = picker_delay
        self.picker_retry_delay = picker_retry_delay

        self._target = None
        self._timer = None
        self._started = False
        self._destroyed = False
        self._lock = threading.RLock()
        self._log = _getLogger("DLNAService")

    def __repr__(self):
        return "<DLNAService running=%s devices=%d>" % (self.running, len(self.registry))

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.destroy()

    @property
    def running(self):
        return self._started and not self._destroyed

    def start(self):
        """
        Create the worker pool and wire up discovery and control. Returns
        False if the service was already destroyed.
        """
        with self._lock:
            if self._destroyed:
                self._log.warning("Service was destroyed, not starting")
                return False
            if self._started:
                return True
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=MAX_WORKERS, thread_name_prefix="dlnacast")
            self.control = AVTransport(http=self._http, timeout=self.http_timeout)
            self.discovery = SSDPDiscovery(
                self._executor,
                self._on_location,
                multicast_lock=self.multicast_lock,
                socket_factory=self._socket_factory,
                clock=self._clock,
                window=self.discover_window,
                recv_timeout=self.recv_timeout,
            )
            self._started = True
        self._log.debug("Service started")
        return True

    def set_listener(self, listener):
        self.events.set_listener(listener)

    # Discovery

    def start_discovery(self):
        if not self.running:
            self._log.warning("Service not running, ignoring discovery request")
            return False
        return self.discovery.start()

    def stop_discovery(self):
        if self.discovery is None:
            return False
        return self.discovery.stop()

    @property
    def is_discovering(self):
        return self.discovery is not None and self.discovery.is_discovering

    @property
    def devices(self):
        return self.registry.snapshot()

    def refresh(self):
        """
        Forget every known device and search again. Listeners get a
        `on_device_removed` for each device forgotten.
        """
        if not self.running:
            return False
        for device in self.registry.clear():
            self.events.device_removed(device)
        return self.start_discovery()

    def _on_location(self, location):
        if not self.running:
            return
        try:
            self._executor.submit(self._fetch, location)
        except RuntimeError as exc:
            self._log.debug("Not fetching %s: %s", location, exc)

    def _fetch(self, location):
        if not self.running:
            return
        device = fetch_device(location, http=self._http, timeout=self.http_timeout)
        if device is None or not self.running:
            return
        if self.registry.try_insert(device):
            self._log.info("DLNA device found: %s", device.name)
            self.events.device_found(device)

    # Playback

    @property
    def selected_device(self):
        target = self._target
        return None if target is None else target.device

    @property
    def is_device_selected(self):
        return self.selected_device is not None

    @property
    def selected_device_name(self):
        device = self.selected_device
        return None if device is None else device.name

    def play_on_device(self, device, media_url):
        """
        Hand `media_url` to `device` and start playback.

        Returns a Future resolving to True once playback started. The outcome
        is also reported to the listener as exactly one `on_playback_started`
        or `on_playback_error`.
        """
        future = Future()
        try:
            self._check_playable(device, media_url)
        except PreconditionError as exc:
            self._reject(future, str(exc))
            return future

        try:
            self._executor.submit(self._play, device, media_url, future)
        except RuntimeError:
            self._reject(future, "DLNA service is shutting down")
        return future

    def _check_playable(self, device, media_url):
        if not self.running:
            raise PreconditionError("DLNA service is not running")
        with self._lock:
            self._target = ControlTarget(device, media_url)
        if not device.controllable:
            raise PreconditionError("Device control URL not found")
        if not media_url:
            raise PreconditionError("Media URL is required")

    def _reject(self, future, message):
        self._log.warning("Playback rejected: %s", message)
        self.events.playback_error(message)
        future.set_result(False)

    def _play(self, device, media_url, future):
        control_url = device.control_url
        try:
            if not self.control.set_uri(control_url, media_url):
                message = "Failed to set media URI"
            elif not self.control.play(control_url):
                message = "Failed to start playback"
            else:
                message = None
        except Exception as exc:
            self._log.exception("Playback error on %r", device)
            message = str(exc) or exc.__class__.__name__

        if message is None:
            self._log.info("Playback started on %r", device)
            self.events.playback_started(device)
            future.set_result(True)
        else:
            self._log.error("Playback on %r failed: %s", device, message)
            self.events.playback_error(message)
            future.set_result(False)

    def stop_playback(self):
        """
        Ask the selected device to stop, in the background. Returns False if
        there was nothing to stop.
        """
        if not self.running:
            return False
        return self._send_stop(self._target)

    def _send_stop(self, target):
        if target is None or not target.device.controllable:
            return False
        try:
            self._executor.submit(self.control.stop, target.device.control_url)
        except RuntimeError as exc:
            self._log.debug("Not stopping %r: %s", target.device, exc)
            return False
        return True

    # Picker

    def show_device_picker(self, media_url, chooser, delay=None):
        """
        Search afresh and, after `delay` seconds, call `chooser(devices)` on
        the event context with the devices found so far. If it returns one of
        them, `media_url` is played on it; if it returns REFRESH the whole
        thing starts over shortly after. Anything else cancels.
        """
        if not self.running:
            return False
        self.refresh()
        self._schedule(
            self.picker_delay if delay is None else delay,
            self.events.call, self._pick, media_url, chooser)
        return True

    def _schedule(self, delay, fn, *args):
        with self._lock:
            if self._destroyed:
                return
            if self._timer is not None:
                self._timer.cancel()
            timer = self._timer_factory(delay, fn, args=args)
            timer.daemon = True
            self._timer = timer
        timer.start()

    def _pick(self, media_url, chooser):
        if not self.running:
            return
        choice = chooser(self.registry.snapshot())
        if choice is REFRESH:
            self._schedule(self.picker_retry_delay, self.show_device_picker, media_url, chooser)
        elif choice is not None:
            self.play_on_device(choice, media_url)

    # Teardown

    def destroy(self):
        """
        Stop everything and release all resources. Safe to call repeatedly.
        """
        with self._lock:
            if self._destroyed:
                return
            self._destroyed = True
            timer, self._timer = self._timer, None
            target, self._target = self._target, None

        if timer is not None:
            timer.cancel()
        if self.discovery is not None:
            self.discovery.stop()
        self.events.close()
        if self._executor is not None:
            self._send_stop(target)
            self._executor.shutdown(wait=False)
        self.multicast_lock.release()
        self.registry.clear()
        self._log.debug("Service destroyed")
