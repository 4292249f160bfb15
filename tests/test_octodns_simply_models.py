#
# Tests for the Simply.com wire mapping
#

from unittest import TestCase

from pydantic import ValidationError

from octodns_simply.models import (
    CreateRequest,
    CreateResponse,
    ListResponse,
    Record,
    RecordId,
    UpdateRequest,
    error_message_from_payload,
)


class TestRecordId(TestCase):
    def test_renders_decimal(self):
        self.assertEqual('42', str(RecordId(42)))

    def test_value_semantics(self):
        self.assertEqual(RecordId(7), RecordId(7))
        self.assertNotEqual(RecordId(7), RecordId(8))
        self.assertNotEqual(RecordId(7), 7)
        self.assertEqual(1, len({RecordId(7), RecordId(7)}))

    def test_rejects_non_integers(self):
        for value in ('7', True, 7.5, None):
            with self.assertRaises(ValidationError):
                RecordId(value)


class TestRecord(TestCase):
    def test_validate_full(self):
        record = Record.model_validate(
            {
                'record_id': 11,
                'name': '@',
                'ttl': 3600,
                'data': 'mx.unit.tests',
                'type': 'MX',
                'priority': 10,
                'comment': 'primary mail',
            }
        )
        self.assertEqual(RecordId(11), record.record_id)
        self.assertEqual('@', record.name)
        self.assertEqual('MX', record.record_type)
        self.assertEqual(3600, record.ttl)
        self.assertEqual('mx.unit.tests', record.data)
        self.assertEqual(10, record.priority)
        self.assertEqual('primary mail', record.comment)

    def test_validate_optional_fields(self):
        record = Record.model_validate(
            {
                'record_id': 1,
                'name': 'www',
                'ttl': 300,
                'data': '1.2.3.4',
                'type': 'A',
                'priority': None,
            }
        )
        self.assertIsNone(record.priority)
        self.assertIsNone(record.comment)

    def test_validate_rejects_bad_shapes(self):
        valid = {
            'record_id': 1,
            'name': 'www',
            'ttl': 300,
            'data': '1.2.3.4',
            'type': 'A',
        }
        broken = dict(valid)
        del broken['data']
        for payload in (
            broken,
            dict(valid, record_id='1'),
            dict(valid, ttl=True),
            dict(valid, ttl='300'),
            dict(valid, type=''),
            dict(valid, ttl=-1),
            ['not', 'an', 'object'],
        ):
            with self.assertRaises(ValidationError):
                Record.model_validate(payload)

    def test_direct_construction_enforces_invariants(self):
        with self.assertRaises(ValidationError):
            Record(
                record_id=RecordId(1),
                name='www',
                record_type='',
                ttl=300,
                data='1.2.3.4',
            )
        with self.assertRaises(ValidationError):
            Record(
                record_id=RecordId(1),
                name='www',
                record_type='A',
                ttl=-5,
                data='1.2.3.4',
            )


class TestRequests(TestCase):
    def test_create_payload(self):
        request = CreateRequest(
            record_type='A', name='www', data='1.2.3.4', ttl=3600
        )
        self.assertEqual(
            {
                'type': 'A',
                'name': 'www',
                'data': '1.2.3.4',
                'priority': None,
                'ttl': 3600,
                'comment': None,
            },
            request.to_payload(),
        )

    def test_create_echoed_back_through_list(self):
        request = CreateRequest(
            record_type='A', name='www', data='1.2.3.4', ttl=3600
        )
        echoed = dict(request.to_payload(), record_id=99)
        record = Record.model_validate(echoed)
        self.assertEqual(
            Record(
                record_id=RecordId(99),
                name='www',
                record_type='A',
                ttl=3600,
                data='1.2.3.4',
            ),
            record,
        )

    def test_update_payload_has_no_comment(self):
        request = UpdateRequest(
            record_type='MX', name='@', data='mx.unit.tests', priority=10
        )
        self.assertEqual(
            {
                'type': 'MX',
                'name': '@',
                'data': 'mx.unit.tests',
                'priority': 10,
                'ttl': None,
            },
            request.to_payload(),
        )

    def test_requests_require_type(self):
        with self.assertRaises(ValidationError):
            CreateRequest(record_type='', name='www', data='1.2.3.4')
        with self.assertRaises(ValidationError):
            UpdateRequest(record_type='', name='www', data='1.2.3.4')


class TestResponses(TestCase):
    def test_records_empty(self):
        empty = ListResponse.model_validate({'records': []})
        self.assertEqual([], empty.records)
        null = ListResponse.model_validate({'records': None})
        self.assertIsNone(null.records)

    def test_records_preserve_order_and_duplicates(self):
        entry = {'name': 'a', 'ttl': 60, 'data': '1.1.1.1', 'type': 'A'}
        decoded = ListResponse.model_validate(
            {
                'records': [
                    dict(entry, record_id=3),
                    dict(entry, record_id=1),
                    dict(entry, record_id=3),
                ]
            }
        )
        self.assertEqual(
            [3, 1, 3], [r.record_id.value for r in decoded.records]
        )

    def test_records_bad_shape(self):
        for payload in (
            {'status': 401, 'message': 'nope'},
            {'records': 'nope'},
            [],
        ):
            with self.assertRaises(ValidationError):
                ListResponse.model_validate(payload)

    def test_record_ids(self):
        self.assertEqual(
            [], CreateResponse.model_validate({'record': None}).record_ids
        )
        self.assertEqual(
            [],
            CreateResponse.model_validate(
                {'status': 200, 'message': 'ok'}
            ).record_ids,
        )
        self.assertEqual(
            [RecordId(5), RecordId(6)],
            CreateResponse.model_validate(
                {'record': [{'id': 5}, {'id': 6}]}
            ).record_ids,
        )
        for payload in ({'record': {'id': 5}}, {'record': [{}]}, []):
            with self.assertRaises(ValidationError):
                CreateResponse.model_validate(payload)

    def test_error_message(self):
        self.assertEqual(
            'invalid record',
            error_message_from_payload({'message': 'invalid record'}),
        )
        self.assertEqual('', error_message_from_payload({}))
        self.assertEqual('', error_message_from_payload({'message': None}))
        self.assertEqual('', error_message_from_payload({'message': 12}))
        self.assertEqual('', error_message_from_payload(['message']))
        self.assertEqual('', error_message_from_payload(None))
