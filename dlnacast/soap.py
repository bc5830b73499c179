import requests

from .util import _getLogger, escape_xml
from .const import AVTRANSPORT_URN, HTTP_TIMEOUT
from .errors import ControlProtocolError


ENVELOPE = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
    ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
    '<s:Body>'
    '<u:{action_name} xmlns:u="{service_type}">'
    '{arg_values}'
    '</u:{action_name}>'
    '</s:Body>'
    '</s:Envelope>'
)


def soap_envelope(action_name, args=(), service_type=AVTRANSPORT_URN):
    """
    Return the SOAP 1.1 request body for `action_name`. `args` is a sequence
    of (name, value) pairs, written in order. Values must already be escaped.
    """
    arg_values = "".join(["<%s>%s</%s>" % (k, v, k) for k, v in args])
    return ENVELOPE.format(
        action_name=action_name,
        service_type=service_type,
        arg_values=arg_values,
    )


class SOAP(object):
    """SOAP (Simple Object Access Protocol) implementation
    This class defines a simple SOAP client for a single control URL.
    """
    def __init__(self, url, service_type=AVTRANSPORT_URN, http=requests, timeout=HTTP_TIMEOUT):
        self.url = url
        self.service_type = service_type
        self._http = http
        self._timeout = timeout
        self._log = _getLogger('SOAP')

    def call(self, action_name, args=()):
        """
        POST `action_name` to the control URL. Anything but an HTTP 200 raises
        ControlProtocolError.
        """
        body = soap_envelope(action_name, args, self.service_type)
        headers = {
            'Content-Type': 'text/xml; charset=utf-8',
            'SOAPAction': '"%s#%s"' % (self.service_type, action_name),
        }

        self._log.debug(">> %s %s", action_name, self.url)
        try:
            resp = self._http.post(
                self.url, data=body.encode('utf-8'), headers=headers, timeout=self._timeout)
        except requests.RequestException as exc:
            raise ControlProtocolError(action_name, str(exc))

        self._log.debug("<< %s %s", action_name, resp.status_code)
        if resp.status_code != 200:
            raise ControlProtocolError(
                action_name, "HTTP status %s" % resp.status_code, status=resp.status_code)
        return resp


class AVTransport(object):
    """
    The three AVTransport actions needed to hand a media URL to a renderer.
    All of them address InstanceID 0.
    """
    def __init__(self, http=requests, timeout=HTTP_TIMEOUT):
        self._http = http
        self._timeout = timeout
        self._log = _getLogger('AVTransport')

    def _soap(self, control_url):
        return SOAP(control_url, AVTRANSPORT_URN, http=self._http, timeout=self._timeout)

    def _call(self, control_url, action_name, args):
        try:
            self._soap(control_url).call(action_name, args)
        except ControlProtocolError as exc:
            self._log.error("%s: %s", control_url, exc)
            return False
        return True

    def set_uri(self, control_url, media_url):
        return self._call(control_url, "SetAVTransportURI", [
            ("InstanceID", 0),
            ("CurrentURI", escape_xml(media_url)),
            ("CurrentURIMetaData", ""),
        ])

    def play(self, control_url):
        return self._call(control_url, "Play", [("InstanceID", 0), ("Speed", 1)])

    def stop(self, control_url):
        """
        Best effort. Failures are logged and otherwise ignored.
        """
        self._call(control_url, "Stop", [("InstanceID", 0)])
