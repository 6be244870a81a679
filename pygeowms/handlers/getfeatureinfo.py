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
from typing import Mapping

from pygeowms.handlers.base import BaseHandler
from pygeowms.models.request import (
    GetFeatureInfoParams, ValidationResult, WMSExceptionCode, WMSFailure,
    failure
)
from pygeowms.util import parse_int16

LOGGER = logging.getLogger(__name__)


def split_layers(value: str) -> list:
    """
    Split a comma-separated list of layer names

    :param value: `str` of layer names

    :returns: `list` of non-empty layer names
    """

    return [layer.strip() for layer in value.split(',') if layer.strip()]


class GetFeatureInfoHandler(BaseHandler):
    """WMS 1.3.0 GetFeatureInfo request handler"""

    def validate_params(self, params: Mapping[str, str],
                        target_srid: int) -> ValidationResult:
        """
        Validate GetFeatureInfo parameters: the GetMap parameters
        followed by QUERY_LAYERS, INFO_FORMAT, I, J and FEATURE_COUNT

        :param params: key-value-pair request parameters
        :param target_srid: SRID of the active map layer

        :returns: `GetFeatureInfoParams` or `WMSFailure`
        """

        LOGGER.debug('Validating GetFeatureInfo parameters')
        commons = self.validate_commons(params, target_srid)
        if isinstance(commons, WMSFailure):
            return commons

        query_layers = params.get('QUERY_LAYERS')
        if query_layers is None:
            return failure('Required parameter QUERY_LAYERS not specified')

        layers = split_layers(commons.layers)
        for layer in split_layers(query_layers):
            if layer not in layers:
                return failure(f'Layer {layer} not in LAYERS',
                               WMSExceptionCode.LayerNotQueryable)

        info_format = params.get('INFO_FORMAT')
        if info_format is None:
            return failure('Required parameter INFO_FORMAT not specified')

        # WMS 1.1.1 clients send X/Y
        i = params.get('I', params.get('X'))
        j = params.get('J', params.get('Y'))
        if i is None or j is None:
            return failure('Required parameters I and J not specified',
                           WMSExceptionCode.InvalidPoint)

        LOGGER.debug('Processing I/J parameters')
        i2 = parse_int16(i)
        j2 = parse_int16(j)
        if i2 is None or j2 is None:
            return failure('Invalid parameters for I or J',
                           WMSExceptionCode.InvalidPoint)
        if not (0 <= i2 < commons.width and 0 <= j2 < commons.height):
            return failure('I or J outside of the map',
                           WMSExceptionCode.InvalidPoint)

        feature_count = 1
        if params.get('FEATURE_COUNT') is not None:
            feature_count = parse_int16(params['FEATURE_COUNT'])
            if feature_count is None or feature_count < 1:
                return failure('Invalid parameter FEATURE_COUNT')

        return GetFeatureInfoParams(
            **commons.model_dump(),
            query_layers=query_layers,
            info_format=info_format,
            i=i2,
            j=j2,
            feature_count=feature_count
        )

    def __repr__(self):
        return f'<GetFeatureInfoHandler> {self.name}'
