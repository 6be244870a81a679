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

from enum import Enum
from typing import Any, Iterator, List, Optional, Sequence, Tuple


class ColumnType(Enum):
    """Declared scalar type of a feature row column"""
    string = 'string'
    integer = 'integer'
    number = 'number'
    other = 'other'

    @classmethod
    def from_json_type(cls, type_: Optional[str]) -> 'ColumnType':
        """
        Map a JSON Schema type name to a column type

        :param type_: JSON Schema type (`string`, `integer`, `number`, ...)

        :returns: `ColumnType` (`other` for anything not scalar)
        """

        try:
            return cls(type_)
        except ValueError:
            return cls.other

    @classmethod
    def from_value(cls, value: Any) -> 'ColumnType':
        """
        Infer a column type from a Python value

        :param value: row value

        :returns: `ColumnType`
        """

        if isinstance(value, bool):
            return cls.other
        elif isinstance(value, str):
            return cls.string
        elif isinstance(value, int):
            return cls.integer
        elif isinstance(value, float):
            return cls.number
        return cls.other

    @property
    def is_numeric(self) -> bool:
        return self in (ColumnType.integer, ColumnType.number)


class FeatureRow:
    """
    One tabular record with named, typed columns.

    Columns are looked up by name (:meth:`index_of`), typed by index
    (:meth:`column_type`) and read by index (``row[index]``).
    """

    def __init__(self, columns: Sequence[Tuple[str, ColumnType]],
                 values: Sequence[Any]):
        """
        Initialize object

        :param columns: sequence of (name, `ColumnType`) pairs
        :param values: sequence of values, one per column

        :returns: pygeowms.models.feature.FeatureRow
        """

        if len(columns) != len(values):
            raise ValueError(
                f'{len(columns)} columns but {len(values)} values')

        self._names = tuple(name for name, _ in columns)
        self._types = tuple(type_ for _, type_ in columns)
        self._values = tuple(values)

    @classmethod
    def from_dict(cls, properties: dict,
                  fields: Optional[dict] = None) -> 'FeatureRow':
        """
        Build a row from a dict of properties

        :param properties: `dict` of column name to value
        :param fields: `dict` of field names and their JSON Schema types,
                       as providers describe them
                       (e.g. `{'name': {'type': 'string'}}`).
                       Types of columns not listed are inferred from values.

        :returns: `FeatureRow`
        """

        fields = fields or {}
        columns = []
        for name, value in properties.items():
            if name in fields:
                type_ = ColumnType.from_json_type(fields[name].get('type'))
            else:
                type_ = ColumnType.from_value(value)
            columns.append((name, type_))

        return cls(columns, list(properties.values()))

    @classmethod
    def from_feature(cls, feature: dict,
                     fields: Optional[dict] = None) -> 'FeatureRow':
        """
        Build a row from the properties of a GeoJSON feature

        :param feature: `dict` of GeoJSON feature
        :param fields: `dict` of field names and types (see :meth:`from_dict`)

        :returns: `FeatureRow`
        """

        return cls.from_dict(feature.get('properties') or {}, fields)

    @property
    def columns(self) -> List[str]:
        return list(self._names)

    def index_of(self, name: str) -> int:
        """
        Find a column by name; an exact match wins over a
        case-insensitive one

        :param name: column name

        :returns: `int` of column index, -1 if not found
        """

        try:
            return self._names.index(name)
        except ValueError:
            pass

        lowered = name.lower()
        for index, name2 in enumerate(self._names):
            if name2.lower() == lowered:
                return index

        return -1

    def column_type(self, index: int) -> ColumnType:
        return self._types[index]

    def as_dict(self) -> dict:
        return dict(zip(self._names, self._values))

    def __getitem__(self, index: int) -> Any:
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __repr__(self):
        return f'<FeatureRow> {self.as_dict()}'
