SSDP_ADDRESS = "239.255.255.250"
SSDP_PORT = 1900
SSDP_TARGET = (SSDP_ADDRESS, SSDP_PORT)
SSDP_MX = 3
SSDP_TTL = 2
AVTRANSPORT_URN = "urn:schemas-upnp-org:service:AVTransport:1"
SEARCH_TARGET = AVTRANSPORT_URN

# Seconds.
DISCOVER_WINDOW = 5
SSDP_RECV_TIMEOUT = 0.5
SSDP_RECV_BUFSIZE = 8192

# (connect, read) in seconds, as accepted by requests.
HTTP_TIMEOUT = (5, 5)

UNKNOWN_DEVICE = "Unknown Device"
UNKNOWN_MANUFACTURER = "Unknown"

PICKER_DELAY = 3
PICKER_RETRY_DELAY = 1

MAX_WORKERS = 32
