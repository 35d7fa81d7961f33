# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
from cefevent.extensions import CATEGORIES, EPOCH, FIELDS, FIELDS_BY_KEY
from cefevent.extensions import Extensions
from datetime import datetime, timedelta, timezone
from urllib.parse import urlsplit
import ipaddress
import pytest
import unittest


class TestFieldTable(unittest.TestCase):
    def test_keys_are_unique(self):
        keys = [field.key for field in FIELDS]
        self.assertEqual(len(keys), len(set(keys)))
        attrs = [field.attr for field in FIELDS]
        self.assertEqual(len(attrs), len(set(attrs)))

    def test_categories_are_contiguous_and_ordered(self):
        seen = []
        for field in FIELDS:
            if not seen or seen[-1] != field.category:
                seen.append(field.category)
        self.assertEqual(tuple(seen), CATEGORIES)

    def test_well_known_keys(self):
        self.assertEqual(FIELDS_BY_KEY['act'].attr, 'device_action')
        self.assertEqual(FIELDS_BY_KEY['dpt'].attr, 'destination_port')
        self.assertEqual(FIELDS_BY_KEY['src'].attr, 'source_address')
        self.assertEqual(FIELDS_BY_KEY['request'].attr, 'request_url')


class TestExtensionsEncode(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(Extensions().encode(), '')
        self.assertEqual(str(Extensions()), '')

    def test_unknown_field(self):
        self.assertRaises(TypeError, Extensions, no_such_field='x')

    def test_custom_extensions(self):
        ext = Extensions(custom_extensions={
            'extra': 'value', 'escaped': 'value\nwithnewline'})
        encoded = ext.encode()
        # custom extension order is not part of the format
        self.assertEqual(set(encoded.split(' ')),
                         set(['extra=value', 'escaped=value\\nwithnewline']))
        self.assertEqual(len(encoded.split(' ')), 2)

    def test_custom_key_is_escaped(self):
        ext = Extensions(custom_extensions={'odd=key': 'a\\b'})
        self.assertEqual(ext.encode(), 'odd\\=key=a\\\\b')

    def test_ip_port_value(self):
        ext = Extensions(destination_translated_port=22,
                         destination_translated_address='192.168.0.1')
        self.assertEqual(ext.encode(),
                         'destinationTranslatedAddress=192.168.0.1 '
                         'destinationTranslatedPort=22')

    def test_category_order(self):
        ext = Extensions(source_user_name='alice',
                         file_name='passwd',
                         device_host_name='fw1',
                         destination_port=443,
                         device_action='blocked')
        self.assertEqual(ext.encode(),
                         'act=blocked dpt=443 dvchost=fw1 fname=passwd '
                         'suser=alice')

    def test_known_fields_precede_custom(self):
        ext = Extensions(custom_extensions={'zzz': '1'}, message='hi')
        self.assertEqual(ext.encode(), 'msg=hi zzz=1')

    def test_deterministic(self):
        def build():
            return Extensions(device_action='a', source_port=1, bytes_in=3,
                              source_address='10.0.0.1', message='m=1')
        self.assertEqual(build().encode(), build().encode())

    def test_strings_escaped_and_empty_omitted(self):
        ext = Extensions(message='a=b\nc', reason='', device_action=None)
        self.assertEqual(ext.encode(), 'msg=a\\=b\\nc')

    def test_header_characters_pass_through(self):
        ext = Extensions(message='pipe|here')
        self.assertEqual(ext.encode(), 'msg=pipe|here')

    def test_ints(self):
        ext = Extensions(source_port=0, bytes_out=1024)
        self.assertEqual(ext.encode(), 'out=1024 spt=0')

    def test_ints_reject_fractions_and_negatives(self):
        for bad in (22.9, -1, True, '22'):
            self.assertRaises(ValueError,
                              Extensions(destination_port=bad).encode)
        self.assertRaises(ValueError, Extensions(source_port=-1).encode)
        self.assertRaises(ValueError, Extensions(base_event_count=-3).encode)
        self.assertRaises(ValueError, Extensions(base_event_count=2.5).encode)
        self.assertRaises(ValueError, Extensions(type=-1).encode)
        self.assertRaises(ValueError, Extensions(device_direction=1.0).encode)

    def test_custom_numbers_are_signed(self):
        self.assertEqual(Extensions(device_custom_number1=-7).encode(),
                         'cn1=-7')
        self.assertRaises(ValueError,
                          Extensions(device_custom_number1=1.5).encode)

    def test_base_event_count(self):
        self.assertEqual(Extensions(base_event_count=0).encode(), '')
        self.assertEqual(Extensions(base_event_count=1).encode(), '')
        self.assertEqual(Extensions(base_event_count=2).encode(), 'cnt=2')

    def test_type(self):
        self.assertEqual(Extensions(type=0).encode(), '')
        self.assertEqual(Extensions(type=2).encode(), 'type=2')

    def test_direction(self):
        self.assertEqual(Extensions(device_direction=0).encode(),
                         'deviceDirection=0')
        self.assertEqual(Extensions(device_direction=1).encode(),
                         'deviceDirection=1')

    def test_timestamps(self):
        moment = datetime(2023, 11, 9, 11, 45, 20, 123456,
                          tzinfo=timezone.utc)
        self.assertEqual(Extensions(device_receipt_time=moment).encode(),
                         'rt=1699530320123')
        # naive datetimes are UTC
        naive = datetime(2023, 11, 9, 11, 45, 20)
        self.assertEqual(Extensions(start_time=naive).encode(),
                         'start=1699530320000')
        # aware datetimes are converted
        offset = timezone(timedelta(hours=2))
        local = datetime(2023, 11, 9, 13, 45, 20, tzinfo=offset)
        self.assertEqual(Extensions(end_time=local).encode(),
                         'end=1699530320000')

    def test_epoch_is_emitted(self):
        self.assertEqual(Extensions(start_time=EPOCH).encode(), 'start=0')

    def test_ip_addresses(self):
        self.assertEqual(Extensions(source_address='0.0.0.0').encode(),
                         'src=0.0.0.0')
        self.assertEqual(
            Extensions(source_address=ipaddress.ip_address('10.1.2.3')
                       ).encode(), 'src=10.1.2.3')
        self.assertEqual(
            Extensions(device_custom_ipv6_address1='2001:DB8:0:0::1'
                       ).encode(), 'c6a1=2001:db8::1')
        self.assertEqual(
            Extensions(destination_address=b'\xc0\xa8\x00\x01').encode(),
            'dst=192.168.0.1')
        self.assertEqual(Extensions(source_address='').encode(), '')
        self.assertEqual(Extensions(source_address=b'').encode(), '')

    def test_invalid_ip(self):
        self.assertRaises(ValueError,
                          Extensions(source_address='300.1.1.1').encode)

    def test_mac_addresses(self):
        self.assertEqual(
            Extensions(source_mac_address=b'\x00\x1a\x2b\x3c\x4d\x5e'
                       ).encode(), 'smac=00:1a:2b:3c:4d:5e')
        self.assertEqual(
            Extensions(destination_mac_address='00-1A-2B-3C-4D-5E'
                       ).encode(), 'dmac=00:1a:2b:3c:4d:5e')
        self.assertEqual(Extensions(device_mac_address=b'').encode(), '')
        self.assertEqual(Extensions(device_mac_address='').encode(), '')

    def test_invalid_mac(self):
        self.assertRaises(ValueError,
                          Extensions(source_mac_address='00:1a:2b').encode)
        self.assertRaises(ValueError,
                          Extensions(source_mac_address='zz:zz').encode)

    def test_url(self):
        self.assertEqual(Extensions(request_url='').encode(), '')
        url = 'https://example.com/login?user=bob'
        self.assertEqual(Extensions(request_url=url).encode(),
                         'request=https://example.com/login?user\\=bob')
        self.assertEqual(Extensions(request_url=urlsplit(url)).encode(),
                         'request=https://example.com/login?user\\=bob')

    def test_custom_labels(self):
        ext = Extensions(device_custom_string1='abc',
                         device_custom_string1_label='thing',
                         device_custom_number2=-4,
                         device_custom_floating_point1=1.5)
        self.assertEqual(ext.encode(),
                         'cfp1=1.5 cn2=-4 cs1=abc cs1Label=thing')


class TestExtensionsFromDict(unittest.TestCase):
    def test_keys_and_attrs(self):
        ext = Extensions.from_dict({'dpt': '22', 'source_address': '1.2.3.4',
                                    'cnt': '3', 'vendorThing': 'x'})
        self.assertEqual(ext.destination_port, 22)
        self.assertEqual(ext.source_address, '1.2.3.4')
        self.assertEqual(ext.base_event_count, 3)
        self.assertEqual(ext.custom_extensions, {'vendorThing': 'x'})
        self.assertEqual(ext.encode(),
                         'cnt=3 dpt=22 src=1.2.3.4 vendorThing=x')

    def test_timestamps(self):
        ext = Extensions.from_dict({'rt': '1699530320123',
                                    'start': '2023-11-09T11:45:20+00:00'})
        self.assertEqual(ext.encode(), 'rt=1699530320123 start=1699530320000')

    def test_non_string_values_untouched(self):
        ext = Extensions.from_dict({'spt': 80})
        self.assertEqual(ext.source_port, 80)

    def test_bad_number(self):
        self.assertRaises(ValueError, Extensions.from_dict, {'dpt': 'http'})


def test_repr_lists_set_fields():
    ext = Extensions(custom_extensions={'a': 'b'}, message='hi')
    assert repr(ext) == \
        "Extensions(message='hi', custom_extensions={'a': 'b'})"


@pytest.mark.parametrize('attr', [field.attr for field in FIELDS])
def test_every_field_defaults_to_absent(attr):
    assert getattr(Extensions(), attr) is None
