# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
from cefevent.senders import DebugCaptureSender
from cefevent.senders import FileSender
from cefevent.senders import NoSendSender
from cefevent.senders import StdLibLoggingSender
from cefevent.senders import StdOutSender
from cefevent.senders import StreamSender
from cefevent.senders.dev import octet_counting_formatter
from mock import Mock, patch

import io
import logging
import os
import pytest
import shutil
import tempfile
import unittest

LINE = b'CEF:0|cyberdyne|skynet|0.9.1|1001|testeventtofile|Low|'


def formatter(msg):
    return b'<<' + msg + b'>>'


@patch('sys.stdout')
class TestStdOutSender(unittest.TestCase):
    def _make_one(self, formatter=None):
        return StdOutSender(formatter=formatter)

    def test_default_formatter(self, mock_stdout):
        sender = self._make_one()
        sender.send_message(LINE)
        self.assertEqual(mock_stdout.write.call_count, 1)
        self.assertEqual(mock_stdout.flush.call_count, 1)
        mock_stdout.write.assert_called_with(LINE + b'\n')

    def test_custom_formatter(self, mock_stdout):
        sender = self._make_one(formatter=formatter)
        sender.send_message(LINE)
        mock_stdout.write.assert_called_with(formatter(LINE))

    def test_custom_formatter_dotted(self, mock_stdout):
        dotted = 'cefevent.tests.test_senders.formatter'
        sender = self._make_one(formatter=dotted)
        sender.send_message(LINE)
        mock_stdout.write.assert_called_with(formatter(LINE))


class TestStreamSender(unittest.TestCase):
    def test_text_stream(self):
        stream = io.StringIO()
        StreamSender(stream).send_message('café'.encode('utf-8'))
        self.assertEqual(stream.getvalue(), 'café\n')

    def test_binary_stream(self):
        stream = io.BytesIO()
        sender = StreamSender(stream, formatter=octet_counting_formatter)
        sender.send_message(LINE)
        sender.send_message(b'x')
        self.assertEqual(stream.getvalue(),
                         b'%d %s1 x' % (len(LINE), LINE))

    def test_write_errors_propagate(self):
        stream = Mock()
        stream.write.side_effect = IOError('disk full')
        self.assertRaises(IOError, StreamSender(stream).send_message, LINE)


class TestFileSender(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, 'cef.log')

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_appends_lines(self):
        sender = FileSender(self.path)
        sender.send_message(LINE)
        sender.send_message(LINE)
        sender.close()
        with open(self.path, 'rb') as logfile:
            self.assertEqual(logfile.read(), (LINE + b'\n') * 2)


class TestDebugCaptureSender(unittest.TestCase):
    def test_capture(self):
        sender = DebugCaptureSender(foo='bar')
        self.assertEqual(sender.foo, 'bar')
        for num in range(105):
            sender.send_message(b'%d' % num)
        self.assertEqual(len(sender.msgs), 100)
        self.assertEqual(sender.msgs[0], '5')
        self.assertEqual(sender.msgs[-1], '104')


def test_no_send_sender():
    with pytest.raises(NotImplementedError):
        NoSendSender().send_message(LINE)


@patch('cefevent.senders.logging.logging')
class TestLoggingSender(unittest.TestCase):
    def test_defaults(self, mock_logging):
        sender = StdLibLoggingSender()
        sender.send_message(LINE)
        log = mock_logging.getLogger().log
        self.assertEqual(log.call_count, 1)
        log.assert_called_with(logging.INFO, LINE.decode('utf-8'))

    def test_alternate_logger_name(self, mock_logging):
        sender = StdLibLoggingSender('cef', level=logging.WARNING)
        sender.send_message(LINE)
        mock_logging.getLogger.assert_called_with('cef')
        log = mock_logging.getLogger('cef').log
        log.assert_called_with(logging.WARNING, LINE.decode('utf-8'))


def test_logging_sender_level_names():
    assert StdLibLoggingSender(level='warning').level == logging.WARNING
    with pytest.raises(ValueError):
        StdLibLoggingSender(level='LOUD')
