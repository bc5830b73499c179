import socket
import threading
import time

import ifaddr

from .util import _getLogger
from .const import (
    DISCOVER_WINDOW, SEARCH_TARGET, SSDP_MX, SSDP_RECV_BUFSIZE, SSDP_RECV_TIMEOUT,
    SSDP_TARGET, SSDP_TTL)
from .errors import ResourceError, TransientNetworkError


def ssdp_request(ssdp_st=SEARCH_TARGET, ssdp_mx=SSDP_MX):
    """Return request bytes for given st and mx."""
    return "\r\n".join(
        [
            "M-SEARCH * HTTP/1.1",
            "HOST: {}:{}".format(*SSDP_TARGET),
            'MAN: "ssdp:discover"',
            "MX: {:d}".format(ssdp_mx),
            "ST: {}".format(ssdp_st),
            "",
            "",
        ]
    ).encode("utf-8")


def parse_location(data):
    """
    Return the LOCATION header value of an SSDP response, or None. The header
    name is matched case-insensitively and the value is everything after the
    first colon, stripped.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8", "ignore")
    for line in data.splitlines():
        name, sep, value = line.partition(":")
        if sep and name.strip().lower() == "location":
            return value.strip() or None
    return None


def get_addresses_ipv4():
    # Get all adapters on current machine
    adapters = ifaddr.get_adapters()
    # Get the ip from the found adapters
    # Ignore localhost und IPv6 addresses
    return list(
        set(
            addr.ip
            for iface in adapters
            for addr in iface.ips
            if addr.is_IPv4 and addr.ip != "127.0.0.1"
        )
    )


def multicast_socket(interface=None):
    """
    Create the UDP socket a discovery round sends and receives on. When
    `interface` is given, multicast traffic leaves through that address.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    try:
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, SSDP_TTL)
        if interface is not None:
            sock.setsockopt(
                socket.IPPROTO_IP, socket.IP_MULTICAST_IF, socket.inet_aton(interface))
            sock.bind((interface, 0))
    except socket.error:
        sock.close()
        raise
    return sock


class MulticastLock(object):
    """
    Claim on the host's multicast capability. Acquiring checks that at least
    one IPv4 interface is up. Discovery then searches on the system's default
    multicast route, or on `interface` when one was given explicitly.

    Acquiring a lock that is already held does nothing, and so does releasing
    one that isn't.
    """

    def __init__(self, interface=None, addresses=get_addresses_ipv4):
        self._interface = interface
        self._addresses = addresses
        self._held = False
        self.interface = None
        self.addresses = []
        self._lock = threading.Lock()
        self._log = _getLogger("SSDP")

    @property
    def held(self):
        return self._held

    def acquire(self):
        """
        Take the lock. Returns the interface address discovery should send
        through, None meaning the default route.
        """
        with self._lock:
            if self._held:
                return self.interface
            if self._interface is not None:
                addresses = [self._interface]
            else:
                try:
                    addresses = sorted(self._addresses())
                except OSError as exc:
                    raise ResourceError("Unable to list network interfaces: %s" % exc)
            if not addresses:
                raise ResourceError("No IPv4 interface available for multicast")
            self.addresses = addresses
            self.interface = self._interface
            self._held = True
            self._log.debug(
                "Multicast lock acquired (interfaces: %s)", ", ".join(addresses))
            return self.interface

    def release(self):
        with self._lock:
            if not self._held:
                return
            self._log.debug("Multicast lock released")
            self._held = False
            self.interface = None
            self.addresses = []


class DiscoverySession(object):
    """
    State of one discovery round: a deadline and a cancellation token.
    Cancellation is cooperative; the round notices it between two receives.
    """

    def __init__(self, deadline):
        self.deadline = deadline
        self._cancelled = threading.Event()

    @property
    def active(self):
        return not self._cancelled.is_set()

    def cancel(self):
        self._cancelled.set()

    def wait(self, timeout):
        """
        Sleep for up to `timeout` seconds, waking early on cancellation.
        Returns True if the session was cancelled.
        """
        return self._cancelled.wait(timeout)


class SSDPDiscovery(object):
    """
    Runs SSDP search rounds on a worker pool and hands every LOCATION found to
    `on_location`.

    `executor` needs a `submit(fn, *args)` method. `socket_factory` is called
    with the interface address configured on the multicast lock (or None) and
    must return a socket-like object. `clock` returns monotonic seconds.
    """

    def __init__(
        self,
        executor,
        on_location,
        multicast_lock=None,
        socket_factory=multicast_socket,
        clock=time.monotonic,
        window=DISCOVER_WINDOW,
        recv_timeout=SSDP_RECV_TIMEOUT,
        search_target=SEARCH_TARGET,
    ):
        self._executor = executor
        self._on_location = on_location
        self.multicast_lock = multicast_lock
        self._socket_factory = socket_factory
        self._clock = clock
        self.window = window
        self.recv_timeout = recv_timeout
        self.search_target = search_target

        self._session = None
        self._lock = threading.Lock()
        self._log = _getLogger("SSDP")

    @property
    def is_discovering(self):
        session = self._session
        return session is not None and session.active

    def start(self):
        """
        Start a discovery round unless one is already running. Returns True if
        a round was started.
        """
        with self._lock:
            if self._session is not None and self._session.active:
                return False
            self._acquire_multicast()
            session = DiscoverySession(self._clock() + self.window)
            self._session = session

        try:
            self._executor.submit(self._run_round, session)
        except RuntimeError as exc:
            self._log.error("Unable to start discovery: %s", exc)
            self._finish(session)
            return False
        return True

    def stop(self):
        """
        Cancel the running round, if any. Returns True if one was running.
        """
        with self._lock:
            session = self._session
            if session is None or not session.active:
                return False
            session.cancel()
            self._session = None
            self._release_multicast()
        self._log.debug("Discovery stopped")
        return True

    def _acquire_multicast(self):
        if self.multicast_lock is None:
            return
        try:
            self.multicast_lock.acquire()
        except ResourceError as exc:
            self._log.warning("Discovering without multicast lock: %s", exc)

    def _release_multicast(self):
        if self.multicast_lock is not None:
            self.multicast_lock.release()

    def _finish(self, session):
        session.cancel()
        with self._lock:
            if self._session is session:
                self._session = None
                self._release_multicast()

    def _interface(self):
        lock = self.multicast_lock
        if lock is not None and lock.held:
            return lock.interface
        return None

    def _send(self, sock):
        try:
            sock.sendto(ssdp_request(self.search_target), SSDP_TARGET)
        except socket.error as exc:
            raise TransientNetworkError("Unable to send M-SEARCH: %s" % exc)

    def _receive(self, sock):
        """
        Return a (data, address) pair, or None if nothing arrived in time.
        """
        try:
            return sock.recvfrom(SSDP_RECV_BUFSIZE)
        except socket.timeout:
            return None
        except socket.error as exc:
            raise TransientNetworkError("Error while receiving: %s" % exc)

    def _run_round(self, session):
        sock = None
        try:
            if not session.active:
                return
            sock = self._socket_factory(self._interface())
            sock.settimeout(self.recv_timeout)
            try:
                self._send(sock)
            except TransientNetworkError as exc:
                self._log.error("Discovery round aborted: %s", exc)
                return
            self._log.debug("Sent SSDP M-SEARCH for %s", self.search_target)

            while session.active and self._clock() < session.deadline:
                try:
                    received = self._receive(sock)
                except TransientNetworkError as exc:
                    self._log.debug("%s", exc)
                    # Errors come back at once, unlike timeouts.
                    session.wait(self.recv_timeout)
                    continue
                if received is None:
                    continue
                data, address = received
                location = parse_location(data)
                if location:
                    self._log.debug("%s: LOCATION %s", address, location)
                    self._on_location(location)
        except socket.error as exc:
            self._log.error("SSDP discovery error: %s", exc)
        finally:
            if sock is not None:
                sock.close()
            self._finish(session)
            self._log.debug("Discovery round finished")
