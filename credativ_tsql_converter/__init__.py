# credativ-tsql-converter
# Copyright (C) 2025 credativ GmbH
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""
credativ-tsql-converter - rewrites T-SQL (MSSQL) queries into PostgreSQL

    from credativ_tsql_converter import convert
    convert("SELECT TOP 5 [Name] FROM [dbo].[Users]")

or from the command line:

    credativ-tsql-converter --input queries/ --output converted/ --config config.yaml
"""

import sys
from credativ_tsql_converter.command_line import CommandLine
from credativ_tsql_converter.config_parser import ConfigParser
from credativ_tsql_converter.constants import ConverterConstants
from credativ_tsql_converter.converter_logging import ConverterLogger
from credativ_tsql_converter.interval_mapper import IntervalMapper, IntervalUnit
from credativ_tsql_converter.orchestrator import Orchestrator
from credativ_tsql_converter.pipeline import ConversionPipeline, convert
from credativ_tsql_converter.rules import ComputedReplacement, ConversionRule, RuleTable, StaticReplacement

__version__ = ConverterConstants.get_version()

__all__ = [
    'ComputedReplacement',
    'ConversionPipeline',
    'ConversionRule',
    'IntervalMapper',
    'IntervalUnit',
    'RuleTable',
    'StaticReplacement',
    'convert',
    'main',
]


def main(argv=None):
    cmd = CommandLine()
    args = cmd.parse_arguments(argv)

    # Check if the version flag is set
    if args.version:
        print(f"Version: {ConverterConstants.get_version()}")
        sys.exit(0)

    logger = ConverterLogger(args.log_file)
    success = False

    try:
        logger.logger.info(ConverterConstants.get_full_name())

        cmd.print_all(logger.logger)

        logger.logger.info('Starting configuration parser...')
        config_parser = ConfigParser(args, logger.logger)

        if args.log_level == 'DEBUG':
            logger.logger.debug(f"Parsed configuration: {config_parser.config}")
        for line in config_parser.describe_substitutions():
            config_parser.print_log_message('INFO', f"Custom substitution: {line}")

        logger.logger.info('Starting orchestrator...')
        orchestrator = Orchestrator(config_parser)
        success = orchestrator.run()

        logger.logger.info("Conversion Done")

    except Exception as e:
        logger.logger.error(f"An error in the main: {e}")
        sys.exit(1)

    finally:
        logger.stop_logging()

    if not success:
        sys.exit(1)
