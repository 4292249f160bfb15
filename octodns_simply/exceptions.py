#
#
#

from octodns.provider import ProviderException


class SimplyClientException(ProviderException):
    pass


class SimplyTransportError(SimplyClientException):
    """The HTTP exchange did not complete (connection, TLS, timeout)."""

    def __init__(self, method, url, reason):
        super().__init__(f'{method} {url} failed: {reason}')
        self.method = method
        self.url = url


class SimplyDecodeError(SimplyClientException):
    """A response body was received but did not have the expected shape."""

    def __init__(self, what, reason):
        super().__init__(f'Unable to decode {what}: {reason}')


class SimplyApiError(SimplyClientException):
    def __init__(self, code, message=''):
        super().__init__(f'API error: {code} ({message})')
        self.code = code
        self.message = message
