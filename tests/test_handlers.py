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

from pygeowms.error import MapConfigurationError, WMSException
from pygeowms.handlers import handler_for
from pygeowms.handlers.base import BaseHandler, parse_bbox
from pygeowms.handlers.getfeatureinfo import (
    GetFeatureInfoHandler, split_layers
)
from pygeowms.handlers.getmap import GetMapHandler
from pygeowms.models.request import (
    Envelope, GetFeatureInfoParams, WMSExceptionCode, WMSFailure, WMSParams
)
from pygeowms.util import parse_kvp

from tests.util import mock_params


def test_parse_bbox():
    envelope = parse_bbox('1,2,3,4', False)
    assert envelope == Envelope(minx=1, miny=2, maxx=3, maxy=4)

    envelope = parse_bbox('1,2,3,4', True)
    assert envelope.minx == 2
    assert envelope.miny == 1
    assert envelope.maxx == 4
    assert envelope.maxy == 3

    envelope = parse_bbox('-180.5, -90.25, 180.5, 90.25', False)
    assert envelope.minx == -180.5
    assert envelope.maxy == 90.25

    envelope = parse_bbox('1e2,2E1,3e2,4e1', False)
    assert envelope.minx == 100
    assert envelope.maxy == 40


def test_parse_bbox_degenerate():
    envelope = parse_bbox('5,5,5,5', False)
    assert envelope is not None
    assert envelope.width == 0
    assert envelope.height == 0


@pytest.mark.parametrize('bbox', [
    '',
    '1,2,3',
    '1,2,3,4,5',
    '1;2;3;4',
    'a,2,3,4',
    '1,2,3,',
    '1,2,3,4a',
    '1,000.5,2,3,4',
    '1_0,2,3,4',
    'nan,2,3,4',
    'inf,2,3,4',
    '3,2,1,4',
    '1,4,3,2',
    '0,0,1e400,1',
    '-1e400,0,0,1',
    '\u0661,2,3,4'
])
def test_parse_bbox_invalid(bbox):
    assert parse_bbox(bbox, False) is None
    assert parse_bbox(bbox, True) is None


def test_handler_for(map_def):
    handler = handler_for('GetMap', map_def)
    assert isinstance(handler, GetMapHandler)
    assert handler.name == 'GetMap'

    handler = handler_for('getfeatureinfo', map_def)
    assert isinstance(handler, GetFeatureInfoHandler)
    assert handler.name == 'GetFeatureInfo'

    assert handler_for('GetCapabilities', map_def) is None
    assert handler_for('foo', map_def) is None
    assert handler_for(None, map_def) is None


def test_base_handler():
    with pytest.raises(RuntimeError):
        BaseHandler({})

    handler = BaseHandler({'name': 'foo', 'map': None})
    with pytest.raises(NotImplementedError):
        handler.validate_params({}, 4326)


def test_target_srid(getmap_handler):
    assert getmap_handler.target_srid() == 4326

    handler = GetMapHandler({'name': 'GetMap', 'map': {'layers': []}})
    with pytest.raises(MapConfigurationError):
        handler.target_srid()
    with pytest.raises(MapConfigurationError):
        handler.validate({'VERSION': '1.3.0'})


def test_validate_getmap(getmap_handler, getmap_params):
    result = getmap_handler.validate(getmap_params)

    assert isinstance(result, WMSParams)
    assert result.layers == 'countries,lakes'
    assert result.styles == ''
    assert result.crs == 'EPSG:4326'
    assert result.width == 800
    assert result.height == 400
    assert result.format == 'image/png'
    assert result.cql_filter is None
    # EPSG:4326 bboxes are latitude first
    assert result.bbox == Envelope(minx=-180, maxx=180, miny=-90, maxy=90)


def test_validate_projected(getmap_params):
    handler = GetMapHandler({
        'name': 'GetMap',
        'map': {'layers': [{'name': 'countries', 'crs': 'EPSG:3857'}]}
    })
    params = mock_params(getmap_params, CRS='EPSG:3857',
                         BBOX='-20037508,-10000000,20037508,10000000')

    result = handler.validate(params)
    assert isinstance(result, WMSParams)
    assert result.bbox.minx == -20037508
    assert result.bbox.maxy == 10000000


def test_validate_cql_filter(getmap_handler, getmap_params):
    params = mock_params(getmap_params, CQL_FILTER='name == Brazil')
    result = getmap_handler.validate(params)
    assert result.cql_filter == 'name == Brazil'

    params = mock_params(getmap_params, CQL_FILTER='')
    result = getmap_handler.validate(params)
    assert isinstance(result, WMSParams)
    assert result.cql_filter == ''


def test_validate_version(getmap_handler, getmap_params):
    params = mock_params(getmap_params, VERSION=None)
    result = getmap_handler.validate(params)
    assert result == WMSFailure(message='VERSION parameter not supplied')
    assert result.code == WMSExceptionCode.NoApplicableCode

    for version in ['1.1.1', '1.3', '']:
        params = mock_params(getmap_params, VERSION=version)
        result = getmap_handler.validate(params)
        assert isinstance(result, WMSFailure)
        assert result.message == 'Only version 1.3.0 supported'


@pytest.mark.parametrize('missing, code', [
    ('VERSION', WMSExceptionCode.NoApplicableCode),
    ('LAYERS', WMSExceptionCode.NoApplicableCode),
    ('STYLES', WMSExceptionCode.NoApplicableCode),
    ('CRS', WMSExceptionCode.NoApplicableCode),
    ('BBOX', WMSExceptionCode.InvalidDimensionValue),
    ('WIDTH', WMSExceptionCode.InvalidDimensionValue),
    ('HEIGHT', WMSExceptionCode.InvalidDimensionValue),
    ('FORMAT', WMSExceptionCode.NoApplicableCode)
])
def test_validate_missing_parameter(getmap_handler, getmap_params,
                                    missing, code):
    params = mock_params(getmap_params, **{missing: None})
    result = getmap_handler.validate(params)

    assert isinstance(result, WMSFailure)
    assert result.code == code
    assert missing in result.message


def test_validate_crs_mismatch(getmap_handler, getmap_params):
    for crs in ['EPSG:3857', 'epsg:4326', 'EPSG:4326 ', 'CRS:84', '']:
        params = mock_params(getmap_params, CRS=crs)
        result = getmap_handler.validate(params)
        assert isinstance(result, WMSFailure)
        assert result.code == WMSExceptionCode.InvalidCRS
        assert result.message == 'CRS not supported'


def test_validate_order(getmap_handler, getmap_params):
    # only the first failing check is reported
    params = mock_params(getmap_params, CRS='EPSG:3857', BBOX=None,
                         WIDTH='foo')
    result = getmap_handler.validate(params)
    assert result.code == WMSExceptionCode.InvalidCRS

    params = mock_params(getmap_params, LAYERS=None, CRS='EPSG:3857')
    result = getmap_handler.validate(params)
    assert result.message == 'Required parameter LAYERS not specified'

    params = mock_params(getmap_params, FORMAT=None, WIDTH='foo')
    result = getmap_handler.validate(params)
    assert result.message == 'Required parameter FORMAT not specified'

    params = mock_params(getmap_params, WIDTH='foo', BBOX='foo')
    result = getmap_handler.validate(params)
    assert result.message == 'Invalid parameters for HEIGHT or WIDTH'


@pytest.mark.parametrize('width, height', [
    ('foo', '400'),
    ('800', 'foo'),
    ('', '400'),
    ('800.0', '400'),
    ('32768', '400'),
    ('800', '-32769'),
    ('1_000', '400'),
    ('\u0668\u0660\u0660', '400')
])
def test_validate_invalid_size(getmap_handler, getmap_params,
                               width, height):
    params = mock_params(getmap_params, WIDTH=width, HEIGHT=height)
    result = getmap_handler.validate(params)

    assert isinstance(result, WMSFailure)
    assert result.code == WMSExceptionCode.NoApplicableCode
    assert result.message == 'Invalid parameters for HEIGHT or WIDTH'


def test_validate_size_range(getmap_handler, getmap_params):
    params = mock_params(getmap_params, WIDTH='32767', HEIGHT=' +1 ')
    result = getmap_handler.validate(params)
    assert result.width == 32767
    assert result.height == 1


@pytest.mark.parametrize('bbox', [
    '',
    '-90,-180,90',
    '-90,-180,90,east',
    '90,-180,-90,180',
    '-90,180,90,-180',
    '0,0,1e400,1',
    '-1e400,0,0,1'
])
def test_validate_invalid_bbox(getmap_handler, getmap_params, bbox):
    params = mock_params(getmap_params, BBOX=bbox)
    result = getmap_handler.validate(params)

    assert isinstance(result, WMSFailure)
    assert result.code == WMSExceptionCode.NoApplicableCode
    assert result.message == 'Invalid parameter BBOX'


def test_validate_kvp(getmap_handler):
    params = parse_kvp(
        'service=WMS&request=GetMap&version=1.3.0&layers=countries'
        '&styles=&crs=EPSG:4326&bbox=-90,-180,90,180&width=256'
        '&height=256&format=image/png&cql_filter=name+%3D%3D+Brazil')

    result = getmap_handler.validate(params)
    assert isinstance(result, WMSParams)
    assert result.styles == ''
    assert result.cql_filter == 'name == Brazil'


def test_validate_is_pure(getmap_handler, getmap_params):
    results = [getmap_handler.validate(getmap_params) for _ in range(3)]
    assert results[0] == results[1] == results[2]

    with pytest.raises(Exception):
        results[0].width = 10


def test_failure_to_exception(getmap_handler, getmap_params):
    params = mock_params(getmap_params, CRS='EPSG:3857')
    result = getmap_handler.validate(params)

    exception = result.to_exception()
    assert isinstance(exception, WMSException)
    assert exception.ogc_exception_code == 'InvalidCRS'
    assert exception.http_status_code == 400
    assert exception.message == 'CRS not supported'


def test_validate_getfeatureinfo(getfeatureinfo_handler,
                                 getfeatureinfo_params):
    result = getfeatureinfo_handler.validate(getfeatureinfo_params)

    assert isinstance(result, GetFeatureInfoParams)
    assert result.query_layers == 'countries'
    assert result.info_format == 'application/json'
    assert result.i == 400
    assert result.j == 100
    assert result.feature_count == 1

    point = result.query_point()
    assert point.x == 0
    assert point.y == 45


def test_validate_getfeatureinfo_commons(getfeatureinfo_handler,
                                         getfeatureinfo_params):
    params = mock_params(getfeatureinfo_params, CRS='EPSG:3857')
    result = getfeatureinfo_handler.validate(params)
    assert result.code == WMSExceptionCode.InvalidCRS


def test_validate_getfeatureinfo_xy(getfeatureinfo_handler,
                                    getfeatureinfo_params):
    params = mock_params(getfeatureinfo_params, I=None, J=None,
                         X='10', Y='20')
    result = getfeatureinfo_handler.validate(params)
    assert result.i == 10
    assert result.j == 20


@pytest.mark.parametrize('overrides, code, message', [
    ({'QUERY_LAYERS': None}, WMSExceptionCode.NoApplicableCode,
     'Required parameter QUERY_LAYERS not specified'),
    ({'QUERY_LAYERS': 'rivers'}, WMSExceptionCode.LayerNotQueryable,
     'Layer rivers not in LAYERS'),
    ({'INFO_FORMAT': None}, WMSExceptionCode.NoApplicableCode,
     'Required parameter INFO_FORMAT not specified'),
    ({'I': None}, WMSExceptionCode.InvalidPoint,
     'Required parameters I and J not specified'),
    ({'J': 'foo'}, WMSExceptionCode.InvalidPoint,
     'Invalid parameters for I or J'),
    ({'I': '800'}, WMSExceptionCode.InvalidPoint,
     'I or J outside of the map'),
    ({'J': '-1'}, WMSExceptionCode.InvalidPoint,
     'I or J outside of the map'),
    ({'FEATURE_COUNT': '0'}, WMSExceptionCode.NoApplicableCode,
     'Invalid parameter FEATURE_COUNT'),
    ({'FEATURE_COUNT': 'all'}, WMSExceptionCode.NoApplicableCode,
     'Invalid parameter FEATURE_COUNT')
])
def test_validate_getfeatureinfo_invalid(getfeatureinfo_handler,
                                         getfeatureinfo_params,
                                         overrides, code, message):
    params = mock_params(getfeatureinfo_params, **overrides)
    result = getfeatureinfo_handler.validate(params)

    assert isinstance(result, WMSFailure)
    assert result.code == code
    assert result.message == message


def test_validate_getfeatureinfo_feature_count(getfeatureinfo_handler,
                                               getfeatureinfo_params):
    params = mock_params(getfeatureinfo_params, FEATURE_COUNT='10',
                         QUERY_LAYERS='lakes, countries')
    result = getfeatureinfo_handler.validate(params)
    assert result.feature_count == 10


def test_split_layers():
    assert split_layers('a,b') == ['a', 'b']
    assert split_layers(' a , b ,') == ['a', 'b']
    assert split_layers('') == []
