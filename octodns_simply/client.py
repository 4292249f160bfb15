#
#
#

import logging
from typing import List, Optional

from pydantic import ValidationError
from requests import Session
from requests.exceptions import RequestException

from octodns import __VERSION__ as octodns_version

from . import __version__ as package_version
from .exceptions import SimplyApiError, SimplyDecodeError, SimplyTransportError
from .models import (
    CreateRequest,
    CreateResponse,
    ListResponse,
    Record,
    RecordId,
    UpdateRequest,
    error_message_from_payload,
)


class SimplyClient(object):
    """Client for the DNS record endpoints of the Simply.com API.

    The list and create endpoints only signal success through a decodable
    body, while update and delete signal it through the HTTP status. Both
    behaviors are preserved as the service exposes them.
    """

    BASE_URL = 'https://api.simply.com/2/'

    def __init__(self, account, api_key, base_url=None, timeout=None):
        self.log = logging.getLogger('SimplyClient')
        session = Session()
        session.auth = (account, api_key)
        session.headers.update(
            {
                'User-Agent': f'octodns/{octodns_version} octodns-simply/{package_version}'
            }
        )
        self._session = session
        self._base_url = (base_url or self.BASE_URL).rstrip('/')
        self._timeout = timeout

    def _records_url(
        self, domain: str, record_id: Optional[RecordId] = None
    ) -> str:
        url = f'{self._base_url}/my/products/{domain}/dns/records'
        if record_id is not None:
            url = f'{url}/{record_id.value}'
        return url

    def _do(self, method, url, data=None):
        self.log.debug('_do: method=%s, url=%s', method, url)
        try:
            # a followed redirect would turn PUT/DELETE into a GET
            return self._session.request(
                method,
                url,
                json=data,
                timeout=self._timeout,
                allow_redirects=False,
            )
        except RequestException as e:
            raise SimplyTransportError(method, url, e) from e

    def _decode(self, response, what, model):
        try:
            return model.model_validate(response.json())
        except (ValidationError, ValueError) as e:
            raise SimplyDecodeError(what, e) from e

    def _check_status(self, response):
        if 200 <= response.status_code < 300:
            return
        try:
            message = error_message_from_payload(response.json())
        except ValueError:
            message = ''
        raise SimplyApiError(response.status_code, message)

    def list_records(self, domain: str) -> List[Record]:
        response = self._do('GET', self._records_url(domain))
        decoded = self._decode(response, 'record list', ListResponse)
        return decoded.records or []

    def create_record(
        self, domain: str, request: CreateRequest
    ) -> List[RecordId]:
        response = self._do(
            'POST', self._records_url(domain), data=request.to_payload()
        )
        decoded = self._decode(response, 'create response', CreateResponse)
        ids = decoded.record_ids
        # HTTP status is authoritative, the embedded pair is informational
        self.log.debug(
            'create_record: status=%s, message=%s, ids=%s',
            decoded.status,
            decoded.message,
            [i.value for i in ids],
        )
        return ids

    def update_record(
        self, domain: str, record_id: RecordId, request: UpdateRequest
    ) -> None:
        response = self._do(
            'PUT',
            self._records_url(domain, record_id),
            data=request.to_payload(),
        )
        self._check_status(response)

    def delete_record(self, domain: str, record_id: RecordId) -> None:
        response = self._do('DELETE', self._records_url(domain, record_id))
        self._check_status(response)
