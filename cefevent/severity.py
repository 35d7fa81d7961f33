# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
from cefevent.exceptions import InvalidSeverityError
import re


class SEVERITY:
    '''
    Put a namespace around the CEF severity keywords
    '''
    UNKNOWN = 'Unknown'
    LOW = 'Low'
    MEDIUM = 'Medium'
    HIGH = 'High'
    VERY_HIGH = 'Very-High'


KEYWORDS = frozenset([SEVERITY.UNKNOWN, SEVERITY.LOW, SEVERITY.MEDIUM,
                      SEVERITY.HIGH, SEVERITY.VERY_HIGH])

MIN_SEVERITY = 0
MAX_SEVERITY = 10

_IS_INTEGER = re.compile(r'[+-]?[0-9]+')


def validate_severity(severity):
    """
    Raise `InvalidSeverityError` unless `severity` is one of the keywords in
    `SEVERITY` (exact, case-sensitive match) or a base 10 integer string
    between 0 and 10 inclusive.

    `CEFLogger.log` does not call this on its own; callers that want strict
    checking either call it first or construct the logger with `strict=True`.
    """
    if severity in KEYWORDS:
        return
    if not isinstance(severity, str) or not _IS_INTEGER.fullmatch(severity):
        raise InvalidSeverityError(severity)
    if not MIN_SEVERITY <= int(severity) <= MAX_SEVERITY:
        raise InvalidSeverityError(severity)


def is_valid_severity(severity):
    """Boolean flavour of `validate_severity`."""
    try:
        validate_severity(severity)
    except InvalidSeverityError:
        return False
    return True
