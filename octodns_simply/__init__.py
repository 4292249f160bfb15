#
#
#

import logging
import shlex
from collections import defaultdict

from octodns.provider.base import BaseProvider
from octodns.record import Record

from .exceptions import (
    SimplyApiError,
    SimplyClientException,
    SimplyDecodeError,
    SimplyTransportError,
)
from .models import CreateRequest, RecordId, UpdateRequest

__version__ = __VERSION__ = '0.0.1'

# Imported after __version__, the client reads it for its User-Agent
from .client import SimplyClient  # noqa: E402

__all__ = [
    'SimplyProvider',
    'SimplyClient',
    'SimplyClientException',
    'SimplyApiError',
    'SimplyDecodeError',
    'SimplyTransportError',
    'CreateRequest',
    'RecordId',
    'UpdateRequest',
]


class SimplyProvider(BaseProvider):
    SUPPORTS_GEO = False
    SUPPORTS_DYNAMIC = False
    SUPPORTS_ROOT_NS = True
    SUPPORTS = set(('A', 'AAAA', 'CAA', 'CNAME', 'MX', 'NS', 'SRV', 'TXT'))

    def __init__(self, id, account, api_key, *args, **kwargs):
        self.log = logging.getLogger(f'SimplyProvider[{id}]')
        base_url = kwargs.pop('base_url', None)
        timeout = kwargs.pop('timeout', None)
        self.log.debug(
            '__init__: id=%s, account=%s, api_key=***, base_url=%s',
            id,
            account,
            base_url,
        )
        super().__init__(id, *args, **kwargs)
        self._client = SimplyClient(
            account, api_key, base_url=base_url, timeout=timeout
        )

        self._zone_records = {}

    def _append_dot(self, value):
        if value == '@' or value[-1] == '.':
            return value
        return f'{value}.'

    def _record_name(self, record):
        return '' if record.name == '@' else record.name

    def _data_for_multiple(self, _type, records):
        return {
            'ttl': records[0].ttl,
            'type': _type,
            'values': [record.data for record in records],
        }

    _data_for_A = _data_for_multiple
    _data_for_AAAA = _data_for_multiple

    def _data_for_TXT(self, _type, records):
        values = [record.data.replace(';', '\\;') for record in records]
        return {'ttl': records[0].ttl, 'type': _type, 'values': values}

    def _data_for_CAA(self, _type, records):
        values = []
        for record in records:
            raw = record.data
            try:
                parts = shlex.split(raw)
                if len(parts) < 3:
                    raise ValueError('CAA data must have at least 3 tokens')
                values.append(
                    {'flags': int(parts[0]), 'tag': parts[1], 'value': parts[2]}
                )
            except ValueError as e:
                self.log.warning(
                    '_data_for_CAA: failed to parse CAA record %r: %s, '
                    'using fallback values (flags=0, tag=issue)',
                    raw,
                    e,
                )
                values.append({'flags': 0, 'tag': 'issue', 'value': raw})
        return {'ttl': records[0].ttl, 'type': _type, 'values': values}

    def _data_for_CNAME(self, _type, records):
        record = records[0]
        return {
            'ttl': record.ttl,
            'type': _type,
            'value': self._append_dot(record.data),
        }

    def _data_for_MX(self, _type, records):
        values = []
        for record in records:
            values.append(
                {
                    'preference': record.priority or 0,
                    'exchange': self._append_dot(record.data.strip()),
                }
            )
        return {'ttl': records[0].ttl, 'type': _type, 'values': values}

    def _data_for_NS(self, _type, records):
        values = [self._append_dot(record.data) for record in records]
        return {'ttl': records[0].ttl, 'type': _type, 'values': values}

    def _data_for_SRV(self, _type, records):
        values = []
        for record in records:
            # priority travels in its own field, data is "weight port target"
            value_stripped = record.data.strip()
            weight = value_stripped.split(' ')[0]
            target = value_stripped.split(' ')[-1]
            port = value_stripped[: -len(target)].strip().split(' ')[-1]
            try:
                values.append(
                    {
                        'port': int(port),
                        'priority': record.priority or 0,
                        'target': self._append_dot(target),
                        'weight': int(weight),
                    }
                )
            except (IndexError, ValueError) as e:
                self.log.warning(
                    '_data_for_SRV: skipping unparsable SRV record %r: %s',
                    record.data,
                    e,
                )
        if not values:
            return None
        return {'ttl': records[0].ttl, 'type': _type, 'values': values}

    def zone_records(self, zone):
        if zone.name not in self._zone_records:
            self._zone_records[zone.name] = self._client.list_records(
                zone.name[:-1]
            )

        return self._zone_records[zone.name]

    def populate(self, zone, target=False, lenient=False):
        self.log.debug(
            'populate: name=%s, target=%s, lenient=%s',
            zone.name,
            target,
            lenient,
        )

        values = defaultdict(lambda: defaultdict(list))
        for record in self.zone_records(zone):
            _type = record.record_type
            if _type not in self.SUPPORTS:
                self.log.warning(
                    'populate: skipping unsupported %s record', _type
                )
                continue
            values[self._record_name(record)][_type].append(record)

        before = len(zone.records)
        for name, types in values.items():
            for _type, records in types.items():
                data = getattr(self, f'_data_for_{_type}')(_type, records)
                if data is None:
                    continue
                record = Record.new(
                    zone, name, data, source=self, lenient=lenient
                )
                zone.add_record(record, lenient=lenient)

        self.log.info(
            'populate:   found %s records', len(zone.records) - before
        )
        return True

    def _params(self, record, data, priority=None):
        return {
            'record_type': record._type,
            'name': record.name or '@',
            'data': data,
            'priority': priority,
            'ttl': record.ttl,
        }

    def _params_for_multiple(self, record):
        for value in record.values:
            yield self._params(record, value)

    _params_for_A = _params_for_multiple
    _params_for_AAAA = _params_for_multiple
    _params_for_NS = _params_for_multiple

    def _params_for_TXT(self, record):
        for value in record.values:
            yield self._params(record, value.replace('\\;', ';'))

    def _params_for_CAA(self, record):
        for value in record.values:
            data = f'{value.flags} {value.tag} "{value.value}"'
            yield self._params(record, data)

    def _params_for_CNAME(self, record):
        yield self._params(record, record.value)

    def _params_for_MX(self, record):
        for value in record.values:
            yield self._params(record, value.exchange, value.preference)

    def _params_for_SRV(self, record):
        for value in record.values:
            data = f'{value.weight} {value.port} {value.target}'
            yield self._params(record, data, value.priority)

    def _existing_records(self, zone, name, _type):
        return [
            r
            for r in self.zone_records(zone)
            if self._record_name(r) == name and r.record_type == _type
        ]

    def _apply_Create(self, domain, change):
        new = change.new
        for params in getattr(self, f'_params_for_{new._type}')(new):
            self._client.create_record(domain, CreateRequest(**params))

    def _apply_Update(self, domain, change):
        existing = change.existing
        new = change.new
        current = self._existing_records(
            existing.zone, existing.name, existing._type
        )
        desired = list(getattr(self, f'_params_for_{new._type}')(new))
        # Reuse record ids in service order, then create or delete the rest
        for record, params in zip(current, desired):
            self._client.update_record(
                domain, record.record_id, UpdateRequest(**params)
            )
        for params in desired[len(current) :]:
            self._client.create_record(domain, CreateRequest(**params))
        for record in current[len(desired) :]:
            self._client.delete_record(domain, record.record_id)

    def _apply_Delete(self, domain, change):
        existing = change.existing
        for record in self._existing_records(
            existing.zone, existing.name, existing._type
        ):
            self._client.delete_record(domain, record.record_id)

    def _apply(self, plan):
        desired = plan.desired
        changes = plan.changes
        self.log.debug(
            '_apply: zone=%s, len(changes)=%d', desired.name, len(changes)
        )

        domain = desired.name[:-1]
        for change in changes:
            class_name = change.__class__.__name__
            getattr(self, f'_apply_{class_name}')(domain, change)

        # Clear out the cache if any
        self._zone_records.pop(desired.name, None)
