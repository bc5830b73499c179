LOCALHOST = "127.0.0.1"
HTTP_LOCALHOST = "http://%s" % LOCALHOST

LOCATION = "http://192.168.1.20:49152/dev/description.xml"
MEDIA_URL = "http://192.168.1.10:8000/live/stream.m3u8?token=a&b=<c>"
CONTROL_URL = "http://192.168.1.20:49152/upnp/control/AVTransport1"

TEST_DESCRIPTION = """
<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <specVersion><major>1</major><minor>0</minor></specVersion>
    <device>
        <deviceType>urn:schemas-upnp-org:device:MediaRenderer:1</deviceType>
        <friendlyName> Living Room TV </friendlyName>
        <manufacturer>Samsung Electronics</manufacturer>
        <modelName>UE55</modelName>
        <UDN>uuid:5f9ec1b3-ed59-79bb-4530-745b5d6e8fb8</UDN>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
                <serviceId>urn:upnp-org:serviceId:AVTransport</serviceId>
                <controlURL>/upnp/control/AVTransport1</controlURL>
                <eventSubURL>/upnp/event/AVTransport1</eventSubURL>
                <SCPDURL>/AVTransport.xml</SCPDURL>
            </service>
        </serviceList>
    </device>
</root>
""".strip()

TEST_DESCRIPTION_NO_NAME = """
<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <device>
        <UDN>uuid:00000000-0000-0000-0000-000000000001</UDN>
        <serviceList>
            <service>
                <controlURL>http://192.168.1.30/ctl</controlURL>
            </service>
        </serviceList>
    </device>
</root>
""".strip()

TEST_DESCRIPTION_EMPTY_NAME = """
<root><device><friendlyName></friendlyName><UDN>uuid:1</UDN></device></root>
"""

TEST_DESCRIPTION_NO_CONTROL = """
<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <device>
        <friendlyName>Bedroom Speaker</friendlyName>
        <UDN>uuid:00000000-0000-0000-0000-000000000002</UDN>
    </device>
</root>
""".strip()

# RenderingControl is listed before AVTransport, so the first controlURL found
# is the RenderingControl one.
TEST_DESCRIPTION_MULTI_SERVICE = """
<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0">
    <device>
        <friendlyName>Kitchen Receiver</friendlyName>
        <manufacturer>Denon</manufacturer>
        <UDN>uuid:00000000-0000-0000-0000-000000000003</UDN>
        <serviceList>
            <service>
                <serviceType>urn:schemas-upnp-org:service:RenderingControl:1</serviceType>
                <controlURL>/RenderingControl/ctrl</controlURL>
            </service>
            <service>
                <serviceType>urn:schemas-upnp-org:service:ConnectionManager:1</serviceType>
                <controlURL>/ConnectionManager/ctrl</controlURL>
            </service>
            <service>
                <serviceType>urn:schemas-upnp-org:service:AVTransport:1</serviceType>
                <controlURL>/AVTransport/ctrl</controlURL>
            </service>
        </serviceList>
    </device>
</root>
""".strip()

TEST_DESCRIPTION_NAMESPACED = """
<?xml version="1.0"?>
<root xmlns="urn:schemas-upnp-org:device-1-0" xmlns:dlna="urn:schemas-dlna-org:device-1-0">
    <device>
        <dlna:friendlyName>Prefixed</dlna:friendlyName>
        <UDN>uuid:00000000-0000-0000-0000-000000000004</UDN>
        <controlURL>ctl</controlURL>
    </device>
</root>
""".strip()

TEST_SETURI_ENVELOPE = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
    ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
    '<s:Body>'
    '<u:SetAVTransportURI xmlns:u="urn:schemas-upnp-org:service:AVTransport:1">'
    '<InstanceID>0</InstanceID>'
    '<CurrentURI>http://192.168.1.10:8000/live/stream.m3u8?token=a&amp;b=&lt;c&gt;</CurrentURI>'
    '<CurrentURIMetaData></CurrentURIMetaData>'
    '</u:SetAVTransportURI>'
    '</s:Body>'
    '</s:Envelope>'
)

TEST_PLAY_ENVELOPE = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
    ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
    '<s:Body>'
    '<u:Play xmlns:u="urn:schemas-upnp-org:service:AVTransport:1">'
    '<InstanceID>0</InstanceID>'
    '<Speed>1</Speed>'
    '</u:Play>'
    '</s:Body>'
    '</s:Envelope>'
)

TEST_STOP_ENVELOPE = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
    ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
    '<s:Body>'
    '<u:Stop xmlns:u="urn:schemas-upnp-org:service:AVTransport:1">'
    '<InstanceID>0</InstanceID>'
    '</u:Stop>'
    '</s:Body>'
    '</s:Envelope>'
)
