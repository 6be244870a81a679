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

import logging
from typing import Mapping, Optional

from pygeowms.crs import flip_axes, get_target_srid
from pygeowms.models.request import (
    Envelope, ValidationResult, WMSExceptionCode, WMSFailure, WMSParams,
    failure
)
from pygeowms.util import parse_double, parse_int16

LOGGER = logging.getLogger(__name__)

#: Supported WMS protocol version
WMS_VERSION = '1.3.0'


def parse_bbox(bbox: str, flip_xy: bool) -> Optional[Envelope]:
    """
    Parses a bounding box string in the format minx,miny,maxx,maxy

    :param bbox: `str` of bounding box
    :param flip_xy: `bool` of whether x and y ordinates are swapped
                    (latitude first axis order)

    :returns: `Envelope` or `None` if the format is invalid
    """

    values = bbox.split(',')
    if len(values) != 4:
        LOGGER.debug('bbox should be 4 values (minx,miny,maxx,maxy)')
        return None

    minx, miny, maxx, maxy = [parse_double(v) for v in values]

    if None in (minx, miny, maxx, maxy):
        LOGGER.debug('bbox values must be numbers')
        return None
    if maxx < minx:
        LOGGER.debug('minx is greater than maxx')
        return None
    if maxy < miny:
        LOGGER.debug('miny is greater than maxy')
        return None

    if flip_xy:
        return Envelope(minx=miny, maxx=maxy, miny=minx, maxy=maxx)
    return Envelope(minx=minx, maxx=maxx, miny=miny, maxy=maxy)


class BaseHandler:
    """generic WMS request handler ABC"""

    def __init__(self, handler_def):
        """
        Initialize object

        :param handler_def: handler definition: `name` of the request
                            and `map` configuration

        :returns: pygeowms.handlers.base.BaseHandler
        """

        try:
            self.name = handler_def['name']
        except KeyError:
            raise RuntimeError('name is required')

        self.map = handler_def.get('map')

    def target_srid(self) -> int:
        """
        Get the SRID requests have to be expressed in

        :raises `MapConfigurationError`: if the map has no layer

        :returns: int of EPSG SRID of the first map layer
        """

        return get_target_srid(self.map)

    def validate(self, params: Mapping[str, str]) -> ValidationResult:
        """
        Validate request parameters against the configured map

        :param params: key-value-pair request parameters

        :raises `MapConfigurationError`: if the map has no layer

        :returns: `WMSParams` (or subclass) or `WMSFailure`
        """

        result = self.validate_params(params, self.target_srid())

        if isinstance(result, WMSFailure):
            LOGGER.error(f'{self.name}: {result.code.value} {result.message}')

        return result

    def validate_params(self, params: Mapping[str, str],
                        target_srid: int) -> ValidationResult:
        """
        Validate the parameters of this request type

        :param params: key-value-pair request parameters
        :param target_srid: SRID of the active map layer

        :returns: `WMSParams` (or subclass) or `WMSFailure`
        """

        raise NotImplementedError()

    def validate_commons(self, params: Mapping[str, str],
                         target_srid: int) -> ValidationResult:
        """
        Validate common arguments for GetFeatureInfo and GetMap requests.
        Checks run in a fixed order and the first failing one is reported.

        :param params: key-value-pair request parameters
        :param target_srid: SRID of the active map layer

        :returns: `WMSParams` or `WMSFailure`
        """

        version = params.get('VERSION')
        if version is None:
            return failure('VERSION parameter not supplied')
        if version.lower() != WMS_VERSION:
            return failure(f'Only version {WMS_VERSION} supported')

        layers = params.get('LAYERS')
        if layers is None:
            return failure('Required parameter LAYERS not specified')

        styles = params.get('STYLES')
        if styles is None:
            return failure('Required parameter STYLES not specified')

        crs = params.get('CRS')
        if crs is None:
            return failure('Required parameter CRS not specified')
        if crs != f'EPSG:{target_srid}':
            return failure('CRS not supported', WMSExceptionCode.InvalidCRS)

        bbox = params.get('BBOX')
        if bbox is None:
            return failure('Required parameter BBOX not specified',
                           WMSExceptionCode.InvalidDimensionValue)

        width = params.get('WIDTH')
        if width is None:
            return failure('Required parameter WIDTH not specified',
                           WMSExceptionCode.InvalidDimensionValue)

        height = params.get('HEIGHT')
        if height is None:
            return failure('Required parameter HEIGHT not specified',
                           WMSExceptionCode.InvalidDimensionValue)

        format_ = params.get('FORMAT')
        if format_ is None:
            return failure('Required parameter FORMAT not specified')

        cql_filter = params.get('CQL_FILTER')

        LOGGER.debug('Processing width/height parameters')
        width2 = parse_int16(width)
        height2 = parse_int16(height)
        if width2 is None or height2 is None:
            return failure('Invalid parameters for HEIGHT or WIDTH')

        LOGGER.debug('Processing bbox parameter')
        envelope = parse_bbox(bbox, flip_axes(target_srid))
        if envelope is None:
            return failure('Invalid parameter BBOX')

        return WMSParams(
            layers=layers,
            styles=styles,
            crs=crs,
            bbox=envelope,
            width=width2,
            height=height2,
            format=format_,
            cql_filter=cql_filter
        )

    def __repr__(self):
        return f'<BaseHandler> {self.name}'
