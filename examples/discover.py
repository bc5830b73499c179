#!/usr/bin/env python
#
# Demonstrate a simple renderer discovery.
#

import logging
import time

import dlnacast


class Printer(dlnacast.DeviceListener):
    def on_device_found(self, device):
        print("%s (%s) @ %s" % (device.name, device.display_manufacturer, device.location))
        print("    control: %s" % (device.control_url or "-"))


logging.basicConfig(level=logging.INFO)

# A discovery round lasts five seconds; devices are printed as they turn up.
with dlnacast.DLNAService(listener=Printer()) as service:
    service.start_discovery()
    time.sleep(service.discover_window + 1)
    if not service.devices:
        print("No renderers discovered on your network. Is the TV switched on and")
        print("connected to the same network?")
