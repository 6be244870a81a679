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

import pytest

from pygeowms.handlers.getfeatureinfo import GetFeatureInfoHandler
from pygeowms.handlers.getmap import GetMapHandler
from pygeowms.models.feature import ColumnType, FeatureRow
from pygeowms.util import yaml_load

from tests.util import get_test_file_path


@pytest.fixture()
def config():
    with open(get_test_file_path('data/pygeowms-test-config.yml')) as fh:
        return yaml_load(fh)


@pytest.fixture()
def map_def(config):
    return config['map']


@pytest.fixture()
def getmap_handler(map_def):
    return GetMapHandler({'name': 'GetMap', 'map': map_def})


@pytest.fixture()
def getfeatureinfo_handler(map_def):
    return GetFeatureInfoHandler({'name': 'GetFeatureInfo', 'map': map_def})


@pytest.fixture()
def getmap_params():
    """Well-formed GetMap parameters for a map in EPSG:4326"""
    return {
        'REQUEST': 'GetMap',
        'VERSION': '1.3.0',
        'LAYERS': 'countries,lakes',
        'STYLES': '',
        'CRS': 'EPSG:4326',
        'BBOX': '-90,-180,90,180',
        'WIDTH': '800',
        'HEIGHT': '400',
        'FORMAT': 'image/png'
    }


@pytest.fixture()
def getfeatureinfo_params(getmap_params):
    """Well-formed GetFeatureInfo parameters"""
    params = dict(getmap_params)
    params.update({
        'REQUEST': 'GetFeatureInfo',
        'QUERY_LAYERS': 'countries',
        'INFO_FORMAT': 'application/json',
        'I': '400',
        'J': '100'
    })
    return params


@pytest.fixture()
def row():
    """Feature row {name: 'A', score: 5}"""
    return FeatureRow(
        [('name', ColumnType.string), ('score', ColumnType.integer)],
        ['A', 5]
    )


@pytest.fixture()
def make_row():
    """Factory of feature rows with a string, integer and number column"""
    def _make_row(name='A', score=5, ratio=0.5):
        return FeatureRow(
            [
                ('name', ColumnType.string),
                ('score', ColumnType.integer),
                ('ratio', ColumnType.number)
            ],
            [name, score, ratio]
        )

    return _make_row
