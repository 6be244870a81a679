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

"""Generic util functions used in the code"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
import json
import logging
import math
import os
import pathlib
from pathlib import Path
import re
from typing import Any, IO, Mapping, Optional, Union
from urllib.parse import parse_qsl

from pydantic import BaseModel
from requests.structures import CaseInsensitiveDict
import yaml

LOGGER = logging.getLogger(__name__)

THISDIR = Path(__file__).parent.resolve()

#: Invariant float notation: optional sign, period decimal separator,
#: optional exponent, no group separators, ASCII digits only
FLOAT_PATTERN = re.compile(
    r'^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$', re.ASCII)

#: Integer notation: optional sign, ASCII decimal digits only
INTEGER_PATTERN = re.compile(r'^\s*[+-]?\d+\s*$', re.ASCII)

INT16_MIN = -32768
INT16_MAX = 32767


def get_typed_value(value: str) -> Union[bool, float, int, str]:
    """
    Derive true type from data value

    :param value: value

    :returns: value as a native Python data type
    """

    try:
        if '.' in value:  # float?
            value2 = float(value)
        elif len(value) > 1 and value.startswith('0'):
            value2 = value
        elif value.lower() in ['true', 'false']:
            value2 = str2bool(value)
        else:  # int?
            value2 = int(value)
    except ValueError:  # string (default)?
        value2 = value

    return value2


def yaml_load(fh: IO) -> dict:
    """
    serializes a YAML files into a pyyaml object

    :param fh: file handle

    :returns: `dict` representation of YAML
    """

    # support environment variables in config
    # https://stackoverflow.com/a/55301129

    env_matcher = re.compile(
        r'.*?\$\{(?P<varname>\w+)(:-(?P<default>[^}]*))?\}')

    def env_constructor(loader, node):
        result = ''
        current_index = 0
        raw_value = node.value
        for match_obj in env_matcher.finditer(raw_value):
            groups = match_obj.groupdict()
            varname_start = match_obj.span('varname')[0]
            result += raw_value[current_index:(varname_start-2)]
            if (var_value := os.getenv(groups['varname'])) is not None:
                result += var_value
            elif (default_value := groups.get('default')) is not None:
                result += default_value
            else:
                raise EnvironmentError(
                    f'Could not find the {groups["varname"]!r} environment '
                    f'variable'
                )
            current_index = match_obj.end()
        else:
            result += raw_value[current_index:]
        return get_typed_value(result)

    class EnvVarLoader(yaml.SafeLoader):
        pass

    EnvVarLoader.add_implicit_resolver('!env', env_matcher, None)
    EnvVarLoader.add_constructor('!env', env_constructor)
    return yaml.load(fh, Loader=EnvVarLoader)


def str2bool(value: Union[bool, str]) -> bool:
    """
    helper function to return Python boolean
    type (source: https://stackoverflow.com/a/715468)

    :param value: value to be evaluated

    :returns: `bool` of whether the value is boolean-ish
    """

    value2 = False

    if isinstance(value, bool):
        value2 = value
    else:
        value2 = value.lower() in ('yes', 'true', 't', '1', 'on')

    return value2


def to_json(dict_: Union[dict, BaseModel], pretty: bool = False) -> str:
    """
    Serialize dict (or pydantic model) to json

    :param dict_: `dict` of JSON representation
    :param pretty: `bool` of whether to prettify JSON (default is `False`)

    :returns: JSON string representation
    """

    if isinstance(dict_, BaseModel):
        dict_ = dict_.model_dump(mode='json')

    if pretty:
        indent = 4
    else:
        indent = None

    return json.dumps(dict_, default=json_serial, indent=indent,
                      separators=(',', ':'))


def json_serial(obj: Any) -> str:
    """
    helper function to convert to JSON non-default
    types (source: https://stackoverflow.com/a/22238613)

    :param obj: `object` to be evaluated

    :returns: JSON non-default type to `str`
    """

    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    elif isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, (pathlib.PurePath, Path)):
        return str(obj)
    elif isinstance(obj, Enum):
        return obj.value
    else:
        msg = f'{obj} type {type(obj)} not serializable'
        LOGGER.error(msg)
        raise TypeError(msg)


def parse_kvp(params: Union[str, Mapping[str, str]]) -> CaseInsensitiveDict:
    """
    Build a key-value-pair parameter lookup from a query string
    or mapping. Keys are case-insensitive, a blank value is kept
    (and is distinct from a missing key).

    :param params: `str` of query string or `dict` of parameters

    :returns: `requests.structures.CaseInsensitiveDict` of parameters
    """

    if isinstance(params, str):
        params = parse_qsl(params.lstrip('?'), keep_blank_values=True)
    elif isinstance(params, Mapping):
        params = params.items()

    return CaseInsensitiveDict(params)


def parse_double(value: str) -> Optional[float]:
    """
    Parse a number in invariant notation (period decimal separator)

    :param value: `str` of candidate number

    :returns: `float` or `None` if not a finite number
    """

    if value is None or FLOAT_PATTERN.match(value) is None:
        return None

    value2 = float(value)
    if not math.isfinite(value2):
        LOGGER.debug(f'{value} overflows a double')
        return None

    return value2


def parse_int16(value: str) -> Optional[int]:
    """
    Parse a 16-bit signed integer

    :param value: `str` of candidate integer

    :returns: `int` or `None` if not an integer within -32768..32767
    """

    if value is None or INTEGER_PATTERN.match(value) is None:
        return None

    value2 = int(value)
    if not INT16_MIN <= value2 <= INT16_MAX:
        return None

    return value2


def to_text(value: Any) -> str:
    """
    Render a row value the way the filter compares it as text

    :param value: row value

    :returns: `str` of value (`None` is the empty string,
              integral floats have no fractional part)
    """

    if value is None:
        return ''
    elif isinstance(value, bool):
        return str(value)
    elif isinstance(value, float):
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    elif isinstance(value, Decimal):
        return format(value.normalize(), 'f')

    return str(value)
