class DLNAError(Exception):
    """
    Base class for all errors raised by dlnacast.
    """

    pass


class TransientNetworkError(DLNAError):
    """
    A UDP send or receive failed. Discovery carries on or ends quietly.
    """

    pass


class FetchError(DLNAError):
    """
    A device description couldn't be retrieved or understood.
    """

    pass


class ControlProtocolError(DLNAError):
    """
    An AVTransport action failed, either in transport or with a non-200 status.
    """

    def __init__(self, action, reason, status=None):
        super(ControlProtocolError, self).__init__(
            "%s failed: %s" % (action, reason)
        )
        self.action = action
        self.reason = reason
        self.status = status


class PreconditionError(DLNAError):
    """
    A request was rejected before any network traffic took place.
    """

    pass


class ResourceError(DLNAError):
    """
    The multicast capability couldn't be acquired.
    """

    pass
