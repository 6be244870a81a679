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
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat
from shapely.geometry import Point, Polygon, box

from pygeowms.error import WMSException
from pygeowms.util import INT16_MAX, INT16_MIN


class WMSExceptionCode(str, Enum):
    """OGC WMS 1.3.0 service exception codes"""
    NoApplicableCode = 'NoApplicableCode'
    InvalidFormat = 'InvalidFormat'
    InvalidCRS = 'InvalidCRS'
    LayerNotDefined = 'LayerNotDefined'
    StyleNotDefined = 'StyleNotDefined'
    LayerNotQueryable = 'LayerNotQueryable'
    InvalidPoint = 'InvalidPoint'
    MissingDimensionValue = 'MissingDimensionValue'
    InvalidDimensionValue = 'InvalidDimensionValue'
    OperationNotSupported = 'OperationNotSupported'


class Envelope(BaseModel):
    """ Axis-aligned rectangle. Bounds ordering is checked by
    :func:`pygeowms.handlers.base.parse_bbox`, not here. """
    model_config = ConfigDict(frozen=True)

    minx: FiniteFloat
    maxx: FiniteFloat
    miny: FiniteFloat
    maxy: FiniteFloat

    @property
    def width(self) -> float:
        return self.maxx - self.minx

    @property
    def height(self) -> float:
        return self.maxy - self.miny

    def to_geometry(self) -> Polygon:
        """ Returns the envelope as a shapely polygon. """
        return box(self.minx, self.miny, self.maxx, self.maxy)


class WMSParams(BaseModel):
    """ Validated parameters common to GetMap and GetFeatureInfo. """
    model_config = ConfigDict(frozen=True)

    layers: str = Field(description='Comma-separated layer names')
    styles: str
    crs: str = Field(pattern=r'^EPSG:-?\d+$')
    bbox: Envelope
    width: int = Field(ge=INT16_MIN, le=INT16_MAX)
    height: int = Field(ge=INT16_MIN, le=INT16_MAX)
    format: str = Field(description='Output MIME type')
    cql_filter: Optional[str] = Field(
        None,
        description='CQL filter applied to feature rows. '
                    'None or empty means no filtering.'
    )


class GetFeatureInfoParams(WMSParams):
    """ Validated GetFeatureInfo parameters. """
    query_layers: str
    info_format: str
    i: int = Field(ge=0)
    j: int = Field(ge=0)
    feature_count: int = Field(1, ge=1)

    def query_point(self) -> Point:
        """ Returns the map position of pixel (i, j), with j counted
        downwards from the top edge of the map. """
        x = self.bbox.minx + self.i * self.bbox.width / self.width
        y = self.bbox.maxy - self.j * self.bbox.height / self.height
        return Point(x, y)


class WMSFailure(BaseModel):
    """ Validation failure, with the exception code reported to clients. """
    model_config = ConfigDict(frozen=True)

    message: str
    code: WMSExceptionCode = WMSExceptionCode.NoApplicableCode

    def to_exception(self) -> WMSException:
        return WMSException(self.message,
                            ogc_exception_code=self.code.value)


#: Outcome of a request validation: exactly one of parameters or failure
ValidationResult = Union[WMSParams, WMSFailure]


def failure(message: str,
            code: WMSExceptionCode = WMSExceptionCode.NoApplicableCode
            ) -> WMSFailure:
    """ Shorthand for building a :class:`WMSFailure`. """
    return WMSFailure(message=message, code=code)
