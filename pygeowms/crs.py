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
from typing import Union

import pyproj
from pyproj.exceptions import CRSError

from pygeowms.error import MapConfigurationError

LOGGER = logging.getLogger(__name__)

#: Geographic CRS whose WMS 1.3.0 axis order is latitude first
GEOGRAPHIC_SRID = 4326


def get_crs(crs: Union[int, str, pyproj.CRS]) -> pyproj.CRS:
    """
    Get a `pyproj.CRS` instance from a CRS.

    :param crs: Integer SRID, `EPSG:<n>` string, OGC CRS URI
                (e.g. http://www.opengis.net/def/crs/EPSG/0/4326)
                or `pyproj.CRS` instance

    :raises `MapConfigurationError`: Error raised if the CRS is unknown

    :returns: `pyproj.CRS` instance
    """

    if isinstance(crs, pyproj.CRS):
        return crs

    try:
        if isinstance(crs, int):
            return pyproj.CRS.from_epsg(crs)
        return pyproj.CRS.from_user_input(crs)
    except CRSError as err:
        msg = f'CRS could not be identified: {crs}'
        LOGGER.error(f'{msg}: {err}')
        raise MapConfigurationError(msg)


def get_srid(crs: Union[int, str, pyproj.CRS]) -> int:
    """
    Helper function to extract an EPSG SRID from a CRS definition

    :param crs: CRS definition (see :func:`get_crs`)

    :raises `MapConfigurationError`: Error raised if the CRS has no
                                     EPSG identifier

    :returns: int of EPSG SRID
    """

    crs = get_crs(crs)

    srid = crs.to_epsg()
    if srid is None:
        try:
            srid = pyproj.CRS(crs.to_proj4()).to_epsg()
        except CRSError:
            LOGGER.debug('Unable to extract SRID from proj4 string')

    if srid is None:
        msg = f'No EPSG identifier for CRS {crs.name}'
        LOGGER.error(msg)
        raise MapConfigurationError(msg)

    return srid


def get_target_srid(map_def: dict) -> int:
    """
    Get the target SRID of the active map, i.e. the SRID of its
    first configured layer

    :param map_def: `dict` of map configuration (`map` section)

    :raises `MapConfigurationError`: Error raised if no layer is configured

    :returns: int of EPSG SRID
    """

    if map_def is None:
        raise MapConfigurationError('no map defined')

    layers = map_def.get('layers') or []
    if not layers:
        raise MapConfigurationError('no layers defined')

    layer = layers[0]
    LOGGER.debug(f"Target CRS taken from layer {layer.get('name')}")

    return get_srid(layer['crs'])


def flip_axes(srid: int) -> bool:
    """
    Whether WMS 1.3.0 bounding boxes in this CRS list latitude first

    :param srid: int of EPSG SRID

    :returns: `bool` of whether x and y are swapped
    """

    return srid == GEOGRAPHIC_SRID
