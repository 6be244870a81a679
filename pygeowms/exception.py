# =================================================================
#
# Authors: Tom Kralidis <tomkralidis@gmail.com>
#
# Copyright (c) 2025 Tom Kralidis
#
# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation
# files (the "Software"), to deal in the Software without
# restriction, including without limitation the rights to use,
# copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following
# conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES
# OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT
# HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY,
# WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
# FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR
# OTHER DEALINGS IN THE SOFTWARE.
#
# =================================================================

"""
Defining exceptions that signal early termination of a CQL filter
evaluation over a feature row

These never leave :func:`pygeowms.cql.cql_filter`: a malformed filter
stops being evaluated instead of failing the request.
"""


class CQLException(Exception):
    """CQL filter generic exception"""
    pass


class CQLExceptionIncomplete(CQLException):
    """CQL filter ends in the middle of a clause"""
    pass


class CQLExceptionAttribute(CQLException):
    """CQL filter referencing a column missing from the row"""
    pass


class CQLExceptionComparator(CQLException):
    """CQL filter having invalid comparison operator exception"""
    pass


class CQLExceptionIn(CQLException):
    """CQL filter having an unterminated IN list"""
    pass


class CQLExceptionLiteral(CQLException):
    """CQL filter having a literal not convertible to a number"""
    pass


class CQLExceptionComparison(CQLException):
    """CQL filter comparing a row value not convertible to a number"""
    pass
