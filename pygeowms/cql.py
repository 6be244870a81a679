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
Evaluation of CQL_FILTER expressions against feature rows.

The filter language is a small space-delimited subset of CQL::

    <column> <comparator> <operand> [AND|OR|NOT <column> ...]

Comparators are ``== != < > <= >= BETWEEN LIKE IN``. Expressions are not
parsed into a tree: clauses are folded left to right into a single boolean.

* ``AND`` (or no keyword) replaces the result with the clause result
* ``OR`` sets the result when the clause holds
* ``NOT`` clears the result when the clause holds

Once the result is false, an ``AND`` or ``NOT`` clause ends the evaluation.
An unknown column or comparator, a missing token or a value that cannot
be compared also ends the evaluation, and the result so far is returned.
``LIKE`` is accepted but always holds.
"""

import logging
import operator
import re
from typing import Any, Iterable, Iterator, Optional

from pygeowms.exception import (
    CQLException, CQLExceptionAttribute, CQLExceptionComparator,
    CQLExceptionComparison, CQLExceptionIn, CQLExceptionIncomplete,
    CQLExceptionLiteral
)
from pygeowms.models.feature import ColumnType, FeatureRow
from pygeowms.util import parse_double, to_text

LOGGER = logging.getLogger(__name__)

COMPARATORS = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '>': operator.gt,
    '<=': operator.le,
    '>=': operator.ge,
    'BETWEEN': None,
    'LIKE': None,
    'IN': None
}

#: Delimiters of quoted items in an IN list, e.g. ('A', 'B','C')
IN_LIST_DELIMITERS = re.compile(r"\('|', '|','|'\)")

AND = 'AND'
OR = 'OR'
NOT = 'NOT'


class Tokens:
    """Cursor over the space-separated tokens of a filter expression"""

    def __init__(self, cql_expression: str):
        self._tokens = [t for t in cql_expression.split(' ') if t]
        self._position = 0

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._tokens)

    def peek(self) -> Optional[str]:
        if self.exhausted:
            return None
        return self._tokens[self._position]

    def next(self) -> str:
        """
        Consume the current token

        :raises `CQLExceptionIncomplete`: if no token is left

        :returns: `str` of token
        """

        if self.exhausted:
            raise CQLExceptionIncomplete('filter ends mid-clause')
        token = self._tokens[self._position]
        self._position += 1
        return token

    def skip(self) -> None:
        self._position += 1


def to_double(value: Any, error=CQLExceptionComparison) -> float:
    """
    Convert a row value or literal to a float

    :param value: value to convert
    :param error: exception class raised on failure

    :returns: `float` of value
    """

    if isinstance(value, (int, float)):
        return float(value)

    value2 = parse_double(to_text(value)) if value is not None else None
    if value2 is None:
        raise error(f'{value!r} is not a number')

    return value2


def read_combinator(tokens: Tokens) -> str:
    """
    Consume the AND/OR/NOT keyword opening a clause, if any

    :param tokens: `Tokens` of filter expression

    :returns: `str` of combinator, `AND` if none is given
    """

    token = tokens.peek()
    if token in (AND, OR, NOT):
        tokens.skip()
        return token
    return AND


def combine(result: bool, clause: bool, combinator: str) -> bool:
    """
    Fold a clause result into the running result

    :param result: `bool` of result so far
    :param clause: `bool` of clause result
    :param combinator: `str` of AND, OR or NOT

    :returns: `bool` of new result
    """

    if combinator == AND:
        return clause
    if combinator == OR and clause:
        return True
    if combinator == NOT and clause and result:
        return False
    return result


def contains(tokens: Tokens, value: Any) -> bool:
    """
    Evaluate an IN clause. The list is read up to the token holding
    the closing parenthesis, since quoted items may contain spaces.

    :param tokens: `Tokens` positioned after `IN`
    :param value: row value

    :returns: `bool` of whether the value is a list item
    """

    parts = []
    try:
        token = tokens.next()
        while ')' not in token:
            parts.append(token)
            token = tokens.next()
    except CQLExceptionIncomplete:
        raise CQLExceptionIn('IN list not closed')
    parts.append(token)

    in_list = ' ' + ' '.join(parts)
    items = [item for item in IN_LIST_DELIMITERS.split(in_list) if item]
    LOGGER.debug(f'IN items: {items}')

    return to_text(value) in items


def between(tokens: Tokens, value: Any, type_: ColumnType) -> bool:
    """
    Evaluate a BETWEEN clause, exclusive on both bounds

    :param tokens: `Tokens` positioned after `BETWEEN`
    :param value: row value
    :param type_: `ColumnType` of the column

    :returns: `bool` of whether lower < value < upper
    """

    lower = tokens.next()
    tokens.next()  # AND of BETWEEN
    upper = tokens.next()

    if type_ == ColumnType.string:
        return lower < to_text(value) < upper
    elif type_.is_numeric:
        lower2 = to_double(lower, CQLExceptionLiteral)
        upper2 = to_double(upper, CQLExceptionLiteral)
        return lower2 < to_double(value) < upper2

    return True


def compare(tokens: Tokens, value: Any, type_: ColumnType,
            comparator: str) -> bool:
    """
    Evaluate a comparison clause: ordinal for string columns,
    numeric (exact) for any other column

    :param tokens: `Tokens` positioned after the comparator
    :param value: row value
    :param type_: `ColumnType` of the column
    :param comparator: `str` of comparator

    :returns: `bool` of comparison
    """

    literal = tokens.next()
    op = COMPARATORS[comparator]

    if type_ == ColumnType.string:
        return op(to_text(value), literal)

    literal2 = to_double(literal, CQLExceptionLiteral)
    return op(to_double(value), literal2)


def evaluate_clause(row: FeatureRow, tokens: Tokens) -> bool:
    """
    Evaluate one `<column> <comparator> <operand>` clause

    :param row: `FeatureRow` to test
    :param tokens: `Tokens` positioned on the column name

    :returns: `bool` of clause result
    """

    column = tokens.next()
    index = row.index_of(column)
    if index < 0:
        raise CQLExceptionAttribute(f'unknown column {column}')

    comparator = tokens.next()
    if comparator not in COMPARATORS:
        raise CQLExceptionComparator(f'invalid comparator {comparator}')

    type_ = row.column_type(index)
    value = row[index]

    if comparator == 'IN':
        return contains(tokens, value)
    elif comparator == 'LIKE':
        # pattern matching is not supported
        tokens.skip()
        return True
    elif comparator == 'BETWEEN':
        return between(tokens, value, type_)

    return compare(tokens, value, type_, comparator)


def cql_filter(row: FeatureRow, cql_expression: Optional[str]) -> bool:
    """
    Tests a feature row against a CQL filter expression

    :param row: `FeatureRow` to test
    :param cql_expression: `str` of CQL filter (`None` or empty
                           lets the row through)

    :returns: `bool` of whether the row passes the filter
    """

    tokens = Tokens(cql_expression or '')
    result = True

    try:
        while not tokens.exhausted:
            combinator = read_combinator(tokens)
            if combinator in (AND, NOT) and not result:
                break
            clause = evaluate_clause(row, tokens)
            result = combine(result, clause, combinator)
    except CQLException as err:
        LOGGER.debug(f'CQL filter evaluation stopped: {err}')

    return result


def filter_rows(rows: Iterable[FeatureRow],
                cql_expression: Optional[str]) -> Iterator[FeatureRow]:
    """
    Filters feature rows by a CQL filter expression

    :param rows: iterable of `FeatureRow`
    :param cql_expression: `str` of CQL filter (`None` or empty
                           lets every row through)

    :returns: iterator of matching `FeatureRow`
    """

    if not cql_expression:
        yield from rows
        return

    for row in rows:
        if cql_filter(row, cql_expression):
            yield row
