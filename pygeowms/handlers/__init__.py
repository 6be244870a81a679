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

"""WMS request handlers"""

import logging
from typing import Optional

from pygeowms.handlers.base import BaseHandler
from pygeowms.plugin import PLUGINS, load_plugin

LOGGER = logging.getLogger(__name__)


def handler_for(request: str, map_def: dict) -> Optional[BaseHandler]:
    """
    Get the handler of a WMS request type

    :param request: `str` of REQUEST parameter (case-insensitive)
    :param map_def: `dict` of map configuration

    :returns: handler instance, or `None` if the request is not supported
    """

    if request is None:
        return None

    for name in PLUGINS['handler']:
        if name.lower() == request.lower():
            LOGGER.debug(f'Loading handler for {name}')
            return load_plugin('handler', {'name': name, 'map': map_def})

    LOGGER.debug(f'No handler for request {request}')
    return None
