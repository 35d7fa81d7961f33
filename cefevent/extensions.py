# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
"""
The variable ``key=value`` tail of a CEF line.

`FIELDS` is the table of known extension fields. Its order is part of the
output format: fields are grouped by category (general, destination, device,
file, old file, request, source, flex) and appear in declared order inside
each category. Every field has a *kind* that decides both how the value is
rendered and when it is considered empty and left out of the line.

Anything not covered by the table goes in `Extensions.custom_extensions`.
Those entries follow the known fields and their relative order is not part
of the format; consumers must not depend on it.
"""
from cefevent.escape import escape_extension_field
from datetime import datetime, timedelta, timezone
import ipaddress
import re

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_MAC_SEPARATORS = re.compile(r'[:.\-]')
_HEX = re.compile(r'^[0-9a-fA-F]+$')
_DIGITS = re.compile(r'^-?[0-9]+$')
# EUI-48, EUI-64 and 20 octet InfiniBand addresses
_MAC_LENGTHS = (6, 8, 20)

GENERAL = 'general'
DESTINATION = 'destination'
DEVICE = 'device'
FILE = 'file'
OLD_FILE = 'old_file'
REQUEST = 'request'
SOURCE = 'source'
FLEX = 'flex'

CATEGORIES = (GENERAL, DESTINATION, DEVICE, FILE, OLD_FILE, REQUEST, SOURCE,
              FLEX)


def format_string(value):
    if value is None or value == '':
        return None
    return escape_extension_field(str(value))


def _unsigned(value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError('not an integer: %r' % (value,))
    if value < 0:
        raise ValueError('negative value: %r' % (value,))
    return value


def format_int(value):
    if value is None:
        return None
    return '%d' % _unsigned(value)


def format_signed_int(value):
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError('not an integer: %r' % (value,))
    return '%d' % value


def format_float(value):
    if value is None:
        return None
    return repr(float(value))


def format_timestamp(value):
    """Milliseconds since the Unix epoch. Naive datetimes are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return '%d' % ((value - EPOCH) // timedelta(milliseconds=1))


def format_ip(value):
    """
    Canonical text form of an IPv4 or IPv6 address. Only a missing or zero
    length value counts as unset, ``0.0.0.0`` is a real address.
    """
    if value is None:
        return None
    if isinstance(value, (str, bytes, bytearray)) and len(value) == 0:
        return None
    if isinstance(value, bytearray):
        value = bytes(value)
    return str(ipaddress.ip_address(value))


def format_mac(value):
    """Lower case, colon separated hex."""
    if value is None or len(value) == 0:
        return None
    if isinstance(value, (bytes, bytearray)):
        octets = bytearray(value)
    else:
        digits = _MAC_SEPARATORS.sub('', value.strip())
        if not _HEX.match(digits) or len(digits) % 2:
            raise ValueError('invalid MAC address: %r' % (value,))
        octets = bytearray.fromhex(digits)
        if len(octets) not in _MAC_LENGTHS:
            raise ValueError('invalid MAC address: %r' % (value,))
    return ':'.join('%02x' % octet for octet in octets)


def format_count(value):
    # a count of one is implied by the event itself
    if value is None or _unsigned(value) <= 1:
        return None
    return '%d' % value


def format_type(value):
    # 0 is the "base" event type
    if value is None or not _unsigned(value):
        return None
    return '%d' % value


def format_url(value):
    if value is None:
        return None
    if hasattr(value, 'geturl'):
        value = value.geturl()
    return format_string(value)


def parse_int(value):
    return int(value, 10)


def parse_timestamp(value):
    """Epoch milliseconds or an ISO 8601 string."""
    if _DIGITS.match(value):
        return EPOCH + timedelta(milliseconds=int(value))
    return datetime.fromisoformat(value)


def _identity(value):
    return value


class Kind(object):
    """Rendering and string coercion rules shared by a group of fields."""

    def __init__(self, name, formatter, parser=_identity):
        self.name = name
        self.format = formatter
        self.parse = parser

    def __repr__(self):
        return '<Kind %s>' % self.name


STRING = Kind('string', format_string)
INT = Kind('int', format_int, parse_int)
SIGNED_INT = Kind('signed_int', format_signed_int, parse_int)
FLOAT = Kind('float', format_float, float)
TIMESTAMP = Kind('timestamp', format_timestamp, parse_timestamp)
IP = Kind('ip', format_ip)
MAC = Kind('mac', format_mac)
COUNT = Kind('count', format_count, parse_int)
TYPE = Kind('type', format_type, parse_int)
DIRECTION = Kind('direction', format_int, parse_int)
URL = Kind('url', format_url)


class Field(object):
    """
    A known extension field.

    :param category: One of `CATEGORIES`.
    :param attr: Python attribute name on `Extensions`.
    :param key: Key written to the CEF line.
    :param kind: `Kind` used to render the value.
    """

    def __init__(self, category, attr, key, kind=STRING):
        self.category = category
        self.attr = attr
        self.key = key
        self.kind = kind

    def render(self, value):
        """Return ``key=value`` or None when the value counts as empty."""
        formatted = self.kind.format(value)
        if formatted is None:
            return None
        return '%s=%s' % (self.key, formatted)

    def __repr__(self):
        return '<Field %s (%s)>' % (self.key, self.attr)


def _numbered(category, attr, key, kind, numbers):
    fields = []
    for num in numbers:
        fields.append(Field(category, attr % num, key % num, kind))
        fields.append(Field(category, (attr % num) + '_label',
                            (key % num) + 'Label'))
    return fields


FIELDS = [
    Field(GENERAL, 'device_action', 'act'),
    Field(GENERAL, 'application_protocol', 'app'),
    Field(GENERAL, 'base_event_count', 'cnt', COUNT),
    Field(GENERAL, 'bytes_in', 'in', INT),
    Field(GENERAL, 'bytes_out', 'out', INT),
    Field(GENERAL, 'device_event_category', 'cat'),
    Field(GENERAL, 'end_time', 'end', TIMESTAMP),
    Field(GENERAL, 'external_id', 'externalId'),
    Field(GENERAL, 'message', 'msg'),
    Field(GENERAL, 'event_outcome', 'outcome'),
    Field(GENERAL, 'transport_protocol', 'proto'),
    Field(GENERAL, 'reason', 'reason'),
    Field(GENERAL, 'device_receipt_time', 'rt', TIMESTAMP),
    Field(GENERAL, 'start_time', 'start', TIMESTAMP),
    Field(GENERAL, 'type', 'type', TYPE),

    Field(DESTINATION, 'destination_dns_domain', 'destinationDnsDomain'),
    Field(DESTINATION, 'destination_service_name',
          'destinationServiceName'),
    Field(DESTINATION, 'destination_translated_address',
          'destinationTranslatedAddress', IP),
    Field(DESTINATION, 'destination_translated_port',
          'destinationTranslatedPort', INT),
    Field(DESTINATION, 'destination_host_name', 'dhost'),
    Field(DESTINATION, 'destination_mac_address', 'dmac', MAC),
    Field(DESTINATION, 'destination_nt_domain', 'dntdom'),
    Field(DESTINATION, 'destination_process_id', 'dpid', INT),
    Field(DESTINATION, 'destination_user_privileges', 'dpriv'),
    Field(DESTINATION, 'destination_process_name', 'dproc'),
    Field(DESTINATION, 'destination_port', 'dpt', INT),
    Field(DESTINATION, 'destination_address', 'dst', IP),
    Field(DESTINATION, 'destination_user_id', 'duid'),
    Field(DESTINATION, 'destination_user_name', 'duser'),
]

FIELDS += _numbered(DEVICE, 'device_custom_ipv6_address%d', 'c6a%d', IP,
                    (1, 3, 4))
FIELDS += _numbered(DEVICE, 'device_custom_floating_point%d', 'cfp%d', FLOAT,
                    (1, 2, 3, 4))
FIELDS += _numbered(DEVICE, 'device_custom_number%d', 'cn%d', SIGNED_INT,
                    (1, 2, 3))
FIELDS += _numbered(DEVICE, 'device_custom_string%d', 'cs%d', STRING,
                    (1, 2, 3, 4, 5, 6))
FIELDS += _numbered(DEVICE, 'device_custom_date%d', 'deviceCustomDate%d',
                    TIMESTAMP, (1, 2))

FIELDS += [
    Field(DEVICE, 'device_direction', 'deviceDirection', DIRECTION),
    Field(DEVICE, 'device_dns_domain', 'deviceDnsDomain'),
    Field(DEVICE, 'device_external_id', 'deviceExternalId'),
    Field(DEVICE, 'device_facility', 'deviceFacility'),
    Field(DEVICE, 'device_inbound_interface', 'deviceInboundInterface'),
    Field(DEVICE, 'device_nt_domain', 'deviceNtDomain'),
    Field(DEVICE, 'device_outbound_interface', 'deviceOutboundInterface'),
    Field(DEVICE, 'device_payload_id', 'devicePayloadId'),
    Field(DEVICE, 'device_process_name', 'deviceProcessName'),
    Field(DEVICE, 'device_translated_address', 'deviceTranslatedAddress',
          IP),
    Field(DEVICE, 'device_time_zone', 'dtz'),
    Field(DEVICE, 'device_address', 'dvc', IP),
    Field(DEVICE, 'device_host_name', 'dvchost'),
    Field(DEVICE, 'device_mac_address', 'dvcmac', MAC),
    Field(DEVICE, 'device_process_id', 'dvcpid', INT),

    Field(FILE, 'file_create_time', 'fileCreateTime', TIMESTAMP),
    Field(FILE, 'file_hash', 'fileHash'),
    Field(FILE, 'file_id', 'fileId'),
    Field(FILE, 'file_modification_time', 'fileModificationTime', TIMESTAMP),
    Field(FILE, 'file_path', 'filePath'),
    Field(FILE, 'file_permission', 'filePermission'),
    Field(FILE, 'file_type', 'fileType'),
    Field(FILE, 'file_name', 'fname'),
    Field(FILE, 'file_size', 'fsize', INT),

    Field(OLD_FILE, 'old_file_create_time', 'oldFileCreateTime', TIMESTAMP),
    Field(OLD_FILE, 'old_file_hash', 'oldFileHash'),
    Field(OLD_FILE, 'old_file_id', 'oldFileId'),
    Field(OLD_FILE, 'old_file_modification_time', 'oldFileModificationTime',
          TIMESTAMP),
    Field(OLD_FILE, 'old_file_name', 'oldFileName'),
    Field(OLD_FILE, 'old_file_path', 'oldFilePath'),
    Field(OLD_FILE, 'old_file_permission', 'oldFilePermission'),
    Field(OLD_FILE, 'old_file_size', 'oldFileSize', INT),
    Field(OLD_FILE, 'old_file_type', 'oldFileType'),

    Field(REQUEST, 'request_url', 'request', URL),
    Field(REQUEST, 'request_client_application', 'requestClientApplication'),
    Field(REQUEST, 'request_context', 'requestContext'),
    Field(REQUEST, 'request_cookies', 'requestCookies'),
    Field(REQUEST, 'request_method', 'requestMethod'),

    Field(SOURCE, 'source_dns_domain', 'sourceDnsDomain'),
    Field(SOURCE, 'source_service_name', 'sourceServiceName'),
    Field(SOURCE, 'source_translated_address', 'sourceTranslatedAddress', IP),
    Field(SOURCE, 'source_translated_port', 'sourceTranslatedPort', INT),
    Field(SOURCE, 'source_host_name', 'shost'),
    Field(SOURCE, 'source_mac_address', 'smac', MAC),
    Field(SOURCE, 'source_nt_domain', 'sntdom'),
    Field(SOURCE, 'source_process_id', 'spid', INT),
    Field(SOURCE, 'source_user_privileges', 'spriv'),
    Field(SOURCE, 'source_process_name', 'sproc'),
    Field(SOURCE, 'source_port', 'spt', INT),
    Field(SOURCE, 'source_address', 'src', IP),
    Field(SOURCE, 'source_user_id', 'suid'),
    Field(SOURCE, 'source_user_name', 'suser'),
]

FIELDS += _numbered(FLEX, 'flex_date%d', 'flexDate%d', TIMESTAMP, (1,))
FIELDS += _numbered(FLEX, 'flex_string%d', 'flexString%d', STRING, (1, 2))

FIELDS_BY_ATTR = dict((field.attr, field) for field in FIELDS)
FIELDS_BY_KEY = dict((field.key, field) for field in FIELDS)


class Extensions(object):
    """
    The extension part of one CEF event.

    Known fields are passed as keyword arguments named after the `attr` of
    an entry in `FIELDS` (e.g. ``source_address``, ``destination_port``) and
    default to None, i.e. absent. Unknown keyword arguments raise
    `TypeError`.

    :param custom_extensions: Mapping of extra key/value strings for data
                              the known fields don't cover. Keys must not
                              collide with the CEF keys in `FIELDS`; this is
                              not checked.
    """

    def __init__(self, custom_extensions=None, **fields):
        for name, value in fields.items():
            if name not in FIELDS_BY_ATTR:
                raise TypeError('Extensions() got an unexpected keyword '
                                'argument %r' % name)
            setattr(self, name, value)
        self.custom_extensions = dict(custom_extensions or {})

    @classmethod
    def from_dict(cls, mapping):
        """
        Build an `Extensions` from a flat mapping such as a parsed config
        section or command line arguments.

        Keys may be either attribute names or CEF keys. String values are
        coerced to the field's type (integers, floats, epoch milliseconds or
        ISO 8601 for timestamps); other values are used as given. Keys that
        are not known fields become custom extensions.
        """
        fields = {}
        custom = {}
        for key, value in mapping.items():
            field = FIELDS_BY_ATTR.get(key) or FIELDS_BY_KEY.get(key)
            if field is None:
                custom[key] = value
                continue
            if isinstance(value, str):
                value = field.kind.parse(value)
            fields[field.attr] = value
        return cls(custom_extensions=custom, **fields)

    def tokens(self):
        """
        Yield the ``key=value`` tokens: known fields in `FIELDS` order,
        then the custom extensions.
        """
        for field in FIELDS:
            token = field.render(getattr(self, field.attr))
            if token is not None:
                yield token
        for key, value in self.custom_extensions.items():
            yield '%s=%s' % (escape_extension_field(str(key)),
                             escape_extension_field(str(value)))

    def encode(self):
        """Space joined extension string, '' if nothing is set."""
        return ' '.join(self.tokens()).strip()

    __str__ = encode

    def __repr__(self):
        parts = ['%s=%r' % (field.attr, getattr(self, field.attr))
                 for field in FIELDS
                 if getattr(self, field.attr) is not None]
        if self.custom_extensions:
            parts.append('custom_extensions=%r' % (self.custom_extensions,))
        return 'Extensions(%s)' % ', '.join(parts)


# every known field is absent unless set on the instance
for _field in FIELDS:
    setattr(Extensions, _field.attr, None)
del _field
