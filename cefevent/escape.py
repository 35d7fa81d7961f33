# ***** BEGIN LICENSE BLOCK *****
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
# ***** END LICENSE BLOCK *****
"""
Escaping rules for the two parts of a CEF line.

Header fields (between the ``|`` separators) and extension values (the
``key=value`` tail) use different grammars. Each function walks the original
characters once, so an escaped result must never be passed through again.
"""

_HEADER_ESCAPES = {
    '\\': '\\\\',
    '|': '\\|',
}

_EXTENSION_ESCAPES = {
    '\n': '\\n',
    '\r': '\\r',
    '=': '\\=',
    '\\': '\\\\',
}


def escape_header_field(field):
    """
    Escape backslashes and pipes in a header field.

    :param field: Text of one of the pipe delimited header slots.
    """
    return ''.join(_HEADER_ESCAPES.get(char, char) for char in field)


def escape_extension_field(field):
    """
    Escape newlines, carriage returns, equals signs and backslashes in an
    extension key or value. Pipes are legal here and pass through untouched.

    :param field: Extension key or value text.
    """
    return ''.join(_EXTENSION_ESCAPES.get(char, char) for char in field)
