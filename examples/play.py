#!/usr/bin/env python
#
# Pick a renderer interactively and play a media URL on it.
#
#   python play.py http://192.168.1.10:8000/movie.mp4
#

import sys
import threading

import dlnacast


done = threading.Event()


class Reporter(dlnacast.DeviceListener):
    def on_playback_started(self, device):
        print("Playing on %s" % device.name)
        done.set()

    def on_playback_error(self, message):
        print("DLNA Error: %s" % message)
        done.set()


def choose(devices):
    if not devices:
        answer = input("No renderers found yet. Search again? [Y/n] ")
        if answer.strip().lower() in ("", "y", "yes"):
            return dlnacast.REFRESH
        done.set()
        return None
    for index, device in enumerate(devices):
        print("%d) %s (%s)" % (index, device.name, device.display_manufacturer))
    answer = input("Renderer number (blank to cancel): ").strip()
    if not answer.isdigit() or int(answer) >= len(devices):
        done.set()
        return None
    return devices[int(answer)]


with dlnacast.DLNAService(listener=Reporter()) as service:
    service.show_device_picker(sys.argv[1], choose)
    done.wait()
