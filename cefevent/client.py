# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
import socket

from datetime import datetime
from cefevent.escape import escape_header_field
from cefevent.exceptions import HostnameUnavailableError
from cefevent.exceptions import InvalidCefVersionError
from cefevent.exceptions import SinkWriteError
from cefevent.extensions import Extensions
from cefevent.senders import NoSendSender
from cefevent.severity import SEVERITY, validate_severity

CEF_VERSIONS = (0, 1)

# fixed so the syslog header doesn't depend on the process locale
MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
          'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def check_cef_version(cef_version):
    """Raise `InvalidCefVersionError` unless `cef_version` is 0 or 1."""
    if cef_version not in CEF_VERSIONS or isinstance(cef_version, bool):
        raise InvalidCefVersionError(cef_version)


def syslog_timestamp(moment):
    """
    Render `moment` as the ``Mon D HH:MM:SS`` stamp used in the syslog
    header, e.g. ``Nov 9 11:45:20``. No time zone conversion is applied.

    A single-digit day is not space padded (``Nov 9``, not ``Nov  9``), which
    keeps the output identical to the documented example lines.
    """
    return '%s %d %02d:%02d:%02d' % (MONTHS[moment.month - 1], moment.day,
                                     moment.hour, moment.minute,
                                     moment.second)


class CEFLogger(object):
    """
    Encodes CEF events and hands each finished line to a sender.

    The device identity and formatting options are shared by every event
    logged through the instance. A logger holds no locks; if its sender is not
    safe for concurrent writes, callers sharing the logger between threads
    must serialize access themselves.
    """

    def __init__(self, sender, vendor, product, version, cef_version=1,
                 syslog_header=True, strict=False, clock=None,
                 hostname_source=None):
        """
        :param sender: A sender object used for actual message delivery.
        :param vendor: Device vendor header field.
        :param product: Device product header field. Together with `vendor`
                        it identifies the class of device emitting events.
        :param version: Device version header field.
        :param cef_version: CEF format version, 0 or 1.
        :param syslog_header: Prefix every line with a syslog style
                              timestamp and hostname. Turn off when writing to
                              a file or to an existing syslog pipeline.
        :param strict: Run `validate_severity` before emitting each event.
        :param clock: Callable returning the current `datetime`.
        :param hostname_source: Callable returning the local hostname.
        """
        self.setup(sender, vendor, product, version, cef_version,
                   syslog_header, strict, clock, hostname_source)

    def setup(self, sender=None, vendor='', product='', version='',
              cef_version=1, syslog_header=True, strict=False, clock=None,
              hostname_source=None):
        """
        Apply configuration, see `__init__` for the parameters. Raises
        `InvalidCefVersionError` before touching the instance if
        `cef_version` is not supported.
        """
        check_cef_version(cef_version)
        if sender is None:
            sender = NoSendSender()
        self.sender = sender
        self.vendor = vendor
        self.product = product
        self.version = version
        self.cef_version = cef_version
        self.syslog_header = syslog_header
        self.strict = strict
        self.clock = clock if clock is not None else datetime.now
        self.hostname_source = (hostname_source if hostname_source is not None
                                else socket.gethostname)

    @property
    def is_active(self):
        """
        Is this logger ready to deliver events? For now we assume that if the
        default sender (i.e. `NoSendSender`) has been replaced then we're good
        to go.
        """
        return not isinstance(self.sender, NoSendSender)

    def _syslog_prefix(self):
        stamp = syslog_timestamp(self.clock())
        try:
            hostname = self.hostname_source()
        except Exception as exc:
            raise HostnameUnavailableError(exc) from exc
        return '%s %s ' % (stamp, hostname)

    def format_event(self, signature_id, name, severity, extensions=None):
        """
        Build a complete CEF line without sending it.

        :param signature_id: Device event class id, identifies the event type.
        :param name: Human readable description of the event.
        :param severity: One of the `SEVERITY` keywords or an integer string
                         from 0 to 10. Not checked unless `strict` is set.
        :param extensions: `Extensions` instance, a mapping accepted by
                           `Extensions.from_dict`, or None.
        """
        if extensions is None:
            extensions = Extensions()
        elif not isinstance(extensions, Extensions):
            extensions = Extensions.from_dict(extensions)

        prefix = self._syslog_prefix() if self.syslog_header else ''
        header = '|'.join(escape_header_field(str(field)) for field in
                          (self.vendor, self.product, self.version,
                           signature_id, name, severity))
        return '%sCEF:%d|%s|%s' % (prefix, self.cef_version, header,
                                   extensions.encode())

    def log(self, signature_id, name, severity, extensions=None):
        """
        Encode one event and pass it to the sender as UTF-8 bytes in a single
        call. No newline is added, framing is up to the sender.

        Raises `HostnameUnavailableError` if the syslog header is on and the
        hostname can't be fetched, and `SinkWriteError` wrapping whatever the
        sender raised. In both cases nothing is retried. Returns the line
        that was sent.
        """
        if self.strict:
            validate_severity(str(severity))
        line = self.format_event(signature_id, name, severity, extensions)
        try:
            self.sender.send_message(line.encode('utf-8'))
        except Exception as exc:
            raise SinkWriteError(exc) from exc
        return line

    def log_unknown(self, signature_id, name, extensions=None):
        """ Log an event with Unknown severity """
        return self.log(signature_id, name, SEVERITY.UNKNOWN, extensions)

    def log_low(self, signature_id, name, extensions=None):
        """ Log an event with Low severity """
        return self.log(signature_id, name, SEVERITY.LOW, extensions)

    def log_medium(self, signature_id, name, extensions=None):
        """ Log an event with Medium severity """
        return self.log(signature_id, name, SEVERITY.MEDIUM, extensions)

    def log_high(self, signature_id, name, extensions=None):
        """ Log an event with High severity """
        return self.log(signature_id, name, SEVERITY.HIGH, extensions)

    def log_very_high(self, signature_id, name, extensions=None):
        """ Log an event with Very-High severity """
        return self.log(signature_id, name, SEVERITY.VERY_HIGH, extensions)
