# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
import collections
import io
import sys

from cefevent.path import resolve_name


def newline_formatter(msg):
    """One event per line."""
    return msg + b'\n'


def octet_counting_formatter(msg):
    """RFC 6587 octet counting framing: ``<length> <line>``."""
    return b'%d %s' % (len(msg), msg)


class StreamSender(object):
    """
    Emits CEF lines to a provided stream object.
    """
    def __init__(self, stream, formatter=None):
        """
        :param stream: Stream object to which the lines should be written.
                       Text streams get the line decoded as UTF-8, anything
                       else is handed the raw bytes.
        :param formatter: Optional callable (or dotted name identifier) that
                          accepts the encoded line and returns the bytes to
                          write. Defaults to `newline_formatter`.
        """
        self.stream = stream
        if formatter is None:
            self.formatter = newline_formatter
        else:
            if not callable(formatter):
                formatter = resolve_name(formatter)
            self.formatter = formatter

    def send_message(self, msg):
        """Deliver the line to the stream object."""
        output = self.formatter(msg)
        if isinstance(self.stream, io.TextIOBase):
            output = output.decode('utf-8')
        self.stream.write(output)
        self.stream.flush()


class StdOutSender(StreamSender):
    """
    Emits CEF lines to stdout.
    """
    def __init__(self, *args, **kwargs):
        super(StdOutSender, self).__init__(sys.stdout, *args, **kwargs)


class FileSender(StreamSender):
    """
    Appends CEF lines to a filesystem file.
    """
    def __init__(self, filepath, *args, **kwargs):
        filestream = open(filepath, 'ab')
        super(FileSender, self).__init__(filestream, *args, **kwargs)

    def close(self):
        self.stream.close()


class DebugCaptureSender(object):
    """
    Capture up to 100 CEF lines in a circular buffer for inspection later.
    This is only for DEBUGGING.  Do not use this for anything except
    development.
    """
    def __init__(self, **kwargs):
        self.msgs = collections.deque(maxlen=100)
        for k, v in kwargs.items():
            # set arbitrary attributes, useful for testing
            setattr(self, k, v)

    def send_message(self, msg):
        """Decode and append to the circular buffer."""
        self.msgs.append(msg.decode('utf-8'))
