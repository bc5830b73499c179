import socket
from concurrent.futures import Future

import mock
import requests

import dlnacast


def immediate(fn):
    """Event context which runs callbacks straight away on the calling thread."""
    fn()


class ImmediateExecutor(object):
    """Worker pool stand-in which runs every task inside `submit`."""
    def __init__(self):
        self.submitted = []
        self.is_shutdown = False

    def submit(self, fn, *args, **kwargs):
        if self.is_shutdown:
            raise RuntimeError("cannot schedule new futures after shutdown")
        self.submitted.append(fn)
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future

    def shutdown(self, wait=True):
        self.is_shutdown = True


class RecordingExecutor(ImmediateExecutor):
    """Worker pool stand-in which only runs tasks when told to."""
    def __init__(self):
        super(RecordingExecutor, self).__init__()
        self.pending = []

    def submit(self, fn, *args, **kwargs):
        if self.is_shutdown:
            raise RuntimeError("cannot schedule new futures after shutdown")
        self.submitted.append(fn)
        self.pending.append((fn, args, kwargs))
        return Future()

    def run_pending(self):
        while self.pending:
            fn, args, kwargs = self.pending.pop(0)
            fn(*args, **kwargs)


class FakeClock(object):
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeSocket(object):
    """
    UDP socket stand-in. Each item of `responses` is either the bytes of a
    datagram or an exception to raise from `recvfrom`. Once they run out,
    every receive times out. Every receive moves `clock` forward.
    """
    def __init__(self, responses=(), clock=None, send_error=None, step=0.1):
        self.responses = list(responses)
        self.clock = clock
        self.send_error = send_error
        self.step = step
        self.sent = []
        self.timeout = None
        self.closed = False
        self.receives = 0

    def settimeout(self, timeout):
        self.timeout = timeout

    def sendto(self, data, address):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((data, address))

    def recvfrom(self, bufsize):
        self.receives += 1
        if not self.responses:
            if self.clock is not None:
                self.clock.advance(self.timeout)
            raise socket.timeout("timed out")
        if self.clock is not None:
            self.clock.advance(self.step)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item, ("192.168.1.20", 1900)

    def close(self):
        self.closed = True


class FakeTimer(object):
    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if self.started and not self.cancelled:
            self.function(*self.args, **self.kwargs)


class TimerFactory(object):
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function, args=None, kwargs=None):
        timer = FakeTimer(interval, function, args=args, kwargs=kwargs)
        self.timers.append(timer)
        return timer


class RecordingListener(dlnacast.DeviceListener):
    def __init__(self):
        self.events = []

    def on_device_found(self, device):
        self.events.append(("found", device))

    def on_device_removed(self, device):
        self.events.append(("removed", device))

    def on_playback_started(self, device):
        self.events.append(("started", device))

    def on_playback_error(self, message):
        self.events.append(("error", message))

    def of_kind(self, kind):
        return [e[1] for e in self.events if e[0] == kind]


def ssdp_response(location, header="LOCATION"):
    return "\r\n".join([
        "HTTP/1.1 200 OK",
        "CACHE-CONTROL: max-age=1800",
        "EXT:",
        "%s: %s" % (header, location),
        "SERVER: Linux/4.9 UPnP/1.0 Renderer/1.0",
        "ST: urn:schemas-upnp-org:service:AVTransport:1",
        "USN: uuid:5f9ec1b3-ed59-79bb-4530-745b5d6e8fb8::urn:schemas-upnp-org:service:AVTransport:1",
        "",
        "",
    ]).encode("utf-8")


def http_response(status_code=200, text=""):
    """Minimal stand-in for a `requests.Response`."""
    resp = mock.Mock()
    resp.status_code = status_code
    resp.text = text

    def raise_for_status():
        if status_code >= 400:
            raise requests.HTTPError("%s Error" % status_code, response=resp)
    resp.raise_for_status.side_effect = raise_for_status
    return resp
