import requests

from .util import _getLogger, extract_tag, resolve_url
from .const import HTTP_TIMEOUT, UNKNOWN_DEVICE, UNKNOWN_MANUFACTURER
from .errors import FetchError


_log = _getLogger("Device")


class Device(object):
    """
    A discovered media renderer.

    `location` is the URL of the device description document, as given in the
    LOCATION header of an SSDP response. `control_url` is the absolute
    AVTransport control endpoint, or None if the description didn't list one,
    in which case the device can't be played on. `udn` is the Unique Device
    Name used to recognise the same device across responses.
    """

    def __init__(self, location, name=UNKNOWN_DEVICE, manufacturer=None,
                 control_url=None, udn=None):
        self.location = location
        self.name = name
        self.manufacturer = manufacturer
        self.control_url = control_url
        self.udn = udn

    def __repr__(self):
        return "<Device '%s'>" % (self.name)

    def __str__(self):
        return self.name

    @property
    def display_manufacturer(self):
        return self.manufacturer or UNKNOWN_MANUFACTURER

    @property
    def controllable(self):
        return bool(self.control_url)


def parse_description(xml, location):
    """
    Build a Device from the text of a device description document.

    Only `friendlyName`, `manufacturer`, `UDN` and `controlURL` are read, and
    for each the first occurrence in the document wins. Descriptions which
    list several services (RenderingControl, ConnectionManager, ...) may
    therefore yield the control URL of a service other than AVTransport.
    """
    try:
        name = extract_tag(xml, "friendlyName")
        control_url = extract_tag(xml, "controlURL")
        if control_url:
            control_url = resolve_url(location, control_url)
        return Device(
            location,
            name=name or UNKNOWN_DEVICE,
            manufacturer=extract_tag(xml, "manufacturer"),
            control_url=control_url or None,
            udn=extract_tag(xml, "UDN"),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise FetchError("Unable to parse description at %s: %s" % (location, exc))


def fetch_description(location, http=requests, timeout=HTTP_TIMEOUT):
    """
    Retrieve the device description at `location`. Raises FetchError.
    """
    try:
        resp = http.get(location, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError("Unable to fetch %s: %s" % (location, exc))
    return resp.text


def fetch_device(location, http=requests, timeout=HTTP_TIMEOUT):
    """
    Fetch and parse the description at `location`. Returns a Device, or None
    if the candidate had to be dropped.
    """
    try:
        device = parse_description(fetch_description(location, http, timeout), location)
    except FetchError as exc:
        _log.warning("Dropping candidate: %s", exc)
        return None
    _log.debug("%s: %r at %s (control %s)", location, device, device.udn, device.control_url)
    return device
