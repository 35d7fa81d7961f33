#!/usr/bin/env python
# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
from docopt import docopt
from cefevent.config import logger_from_dict_config, logger_from_stream_config
from cefevent.exceptions import CEFError
from cefevent.extensions import Extensions
from cefevent.severity import is_valid_severity
import sys

cefevent_doc = """cefevent: emit Common Event Format records.

Usage:
  cefevent emit [options] SIGNATURE NAME SEVERITY [EXT...]
  cefevent validate SEVERITY
  cefevent (-h | --help)

Arguments:
  SIGNATURE        Device event class id
  NAME             Human readable event name
  SEVERITY         Unknown, Low, Medium, High, Very-High or 0 to 10
  EXT              Extension field as key=value. Known CEF keys (dpt, src,
                   ...) and attribute names (destination_port, ...) are
                   typed, anything else becomes a custom extension

Options:
  -h --help                  Show this screen.
  --config=<ini_file>        Path to cefevent logger config file
  --section=<name>           INI section to read [default: cefevent]
  --vendor=<vendor>          Device vendor [default: cefevent]
  --product=<product>        Device product [default: cefevent]
  --device-version=<ver>     Device version [default: 0]
  --cef-version=<ver>        CEF version, 0 or 1 [default: 1]
  --no-syslog-header         Omit the syslog timestamp and hostname
  --strict                   Validate the severity before emitting
"""


def parse_extensions(items):
    """Turn ``key=value`` command line items into an `Extensions`."""
    pairs = {}
    for item in items:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise ValueError('extension %r is not in key=value form' % item)
        pairs[key] = value
    return Extensions.from_dict(pairs)


def _make_logger(arguments):
    if arguments.get('--config'):
        with open(arguments['--config']) as cfgfile:
            logger = logger_from_stream_config(cfgfile,
                                               arguments['--section'])
        if arguments.get('--strict'):
            logger.strict = True
        return logger
    config = {'vendor': arguments['--vendor'],
              'product': arguments['--product'],
              'device_version': arguments['--device-version'],
              'cef_version': int(arguments['--cef-version']),
              'syslog_header': not arguments['--no-syslog-header'],
              'strict': arguments['--strict'],
              'sender': {'class': 'cefevent.senders.StdOutSender'},
              }
    return logger_from_dict_config(config)


def main(argv=None):
    arguments = docopt(cefevent_doc, argv=argv)

    if arguments.get('validate'):
        severity = arguments['SEVERITY']
        if is_valid_severity(severity):
            return 0
        sys.stderr.write('invalid severity: %r\n' % severity)
        return 1

    try:
        logger = _make_logger(arguments)
        logger.log(arguments['SIGNATURE'], arguments['NAME'],
                   arguments['SEVERITY'], parse_extensions(arguments['EXT']))
    except (CEFError, ValueError, OSError) as exc:
        sys.stderr.write('cefevent: %s\n' % exc)
        return 1
    return 0


def run():
    sys.exit(main())
