import threading

from .util import _getLogger


class DeviceRegistry(object):
    """
    Ordered collection of discovered devices. A device whose non-empty UDN is
    already present is rejected; devices without a UDN are always kept.
    """

    def __init__(self):
        self._devices = []
        self._lock = threading.Lock()
        self._log = _getLogger("Registry")

    def __len__(self):
        with self._lock:
            return len(self._devices)

    def try_insert(self, device):
        with self._lock:
            if device.udn:
                for known in self._devices:
                    if known.udn == device.udn:
                        self._log.debug("Ignoring duplicate %r (%s)", device, device.udn)
                        return False
            self._devices.append(device)
            return True

    def snapshot(self):
        with self._lock:
            return list(self._devices)

    def clear(self):
        """
        Remove every device and return what was removed.
        """
        with self._lock:
            removed, self._devices = self._devices, []
        return removed
