# Copyright (c) 2012-2016, Ferry Boender <ferry.boender@gmail.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
This module provides a small UPnP/DLNA control point for media renderers. It
finds renderers with SSDP (Simple Service Discovery Protocol), reads the few
fields it needs from their device descriptions and drives playback through
the AVTransport service using SOAP (Simple Object Access Protocol).

The usual flow is:

- Discover renderers using SSDP.

  An M-SEARCH request for the AVTransport service is multicast on the local
  network and every answer's LOCATION header points at a device description.
  Each description is fetched in the background; its friendlyName,
  manufacturer, UDN and controlURL become a Device, and new Devices are
  reported to the listener.

- Play a media URL on a Device.

  SetAVTransportURI hands the URL to the renderer and, only if that
  succeeded, Play starts it. The listener hears about exactly one outcome.

Classes:

* DLNAService: Owns discovery, the device registry, playback and teardown.
* DeviceListener: Override its callbacks to receive events.
* Device: A discovered renderer.
* SSDPDiscovery, DeviceRegistry, AVTransport, EventDispatcher: The parts
  DLNAService is made of, usable on their own.

Example:

------------------------------------------------------------------------------
import time
import dlnacast

class Printer(dlnacast.DeviceListener):
    def on_device_found(self, device):
        print("%s (%s)" % (device.name, device.display_manufacturer))

with dlnacast.DLNAService(listener=Printer()) as service:
    service.start_discovery()
    time.sleep(5)
    renderer = service.devices[0]
    service.play_on_device(renderer, "http://192.168.1.10:8000/movie.mp4").result()
------------------------------------------------------------------------------

Useful Links:

* http://upnp.org/specs/arch/UPnP-arch-DeviceArchitecture-v1.1.pdf
* http://upnp.org/specs/av/UPnP-av-AVTransport-v1-Service.pdf
"""
from dlnacast import const, errors, util  # noqa: F401
from .device import Device, fetch_device, parse_description
from .errors import (
    DLNAError, TransientNetworkError, FetchError, ControlProtocolError, PreconditionError,
    ResourceError)
from .events import DeviceListener, EventDispatcher
from .registry import DeviceRegistry
from .service import DLNAService, ControlTarget, REFRESH
from .soap import AVTransport, SOAP, soap_envelope
from .ssdp import MulticastLock, SSDPDiscovery, ssdp_request, parse_location

__all__ = [
    "DLNAService", "DeviceListener", "Device", "ControlTarget", "REFRESH",
    "SSDPDiscovery", "MulticastLock", "DeviceRegistry", "EventDispatcher", "AVTransport", "SOAP",
    "fetch_device", "parse_description", "soap_envelope", "ssdp_request", "parse_location",
    "DLNAError", "TransientNetworkError", "FetchError", "ControlProtocolError",
    "PreconditionError", "ResourceError",
]
