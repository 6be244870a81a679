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

"""Command line interface for request validation and row filtering"""

import json
import logging

import click

from pygeowms.config import load_config
from pygeowms.cql import filter_rows
from pygeowms.error import MapConfigurationError
from pygeowms.handlers import handler_for
from pygeowms.log import setup_logger
from pygeowms.models.feature import FeatureRow
from pygeowms.models.request import WMSFailure
from pygeowms.util import parse_kvp, to_json

LOGGER = logging.getLogger(__name__)


@click.group()
def request():
    """WMS request management"""
    pass


@click.command()
@click.pass_context
@click.option('--config', '-c', 'config_file', required=True,
              help='configuration file')
@click.option('--pretty', is_flag=True, default=False,
              help='pretty print output')
@click.argument('query_string')
def validate(ctx, config_file, pretty, query_string):
    """Validate the parameters of a GetMap or GetFeatureInfo request"""

    cfg = load_config(config_file)
    setup_logger(cfg['logging'])

    params = parse_kvp(query_string)
    handler = handler_for(params.get('REQUEST'), cfg['map'])
    if handler is None:
        raise click.ClickException(
            f"Request {params.get('REQUEST')} not supported")

    try:
        result = handler.validate(params)
    except MapConfigurationError as err:
        raise click.ClickException(str(err))

    click.echo(to_json(result, pretty))

    if isinstance(result, WMSFailure):
        ctx.exit(1)


request.add_command(validate)


@click.command('filter')
@click.option('--cql', 'cql_expression', required=True,
              help='CQL filter expression')
@click.option('--pretty', is_flag=True, default=False,
              help='pretty print output')
@click.argument('geojson_file', type=click.File(encoding='utf8'))
def filter_(cql_expression, pretty, geojson_file):
    """Filter the features of a GeoJSON file by a CQL filter"""

    collection = json.load(geojson_file)
    features = collection.get('features', [])

    LOGGER.debug(f'Filtering {len(features)} features')
    rows = {FeatureRow.from_feature(feature): feature for feature in features}
    matched = [rows[row] for row in filter_rows(rows, cql_expression)]

    click.echo(to_json({
        'type': 'FeatureCollection',
        'features': matched,
        'numberMatched': len(matched)
    }, pretty))
