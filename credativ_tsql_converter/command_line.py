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

import argparse
from credativ_tsql_converter.constants import ConverterConstants


class CommandLine:
    def __init__(self):
        self.parser = argparse.ArgumentParser(description=f"""{ConverterConstants.get_full_name()}, version: {ConverterConstants.get_version()}""")
        self.args = None
        self.setup_arguments()

    def setup_arguments(self):
        self.parser.add_argument(
            '--input',
            type=str,
            default='-',
            help="T-SQL file or directory to convert, '-' reads from stdin (default: -)")

        self.parser.add_argument(
            '--output',
            type=str,
            default=None,
            help="Output file or directory for converted code (default: stdout)")

        self.parser.add_argument(
            '--config',
            type=str,
            default=None,
            help='Path/name of the configuration file')

        self.parser.add_argument(
            '--converter',
            type=str,
            default=None,
            choices=list(ConverterConstants.get_modules()),
            help=f"Converter to use (default: {ConverterConstants.get_default_converter()})")

        self.parser.add_argument(
            '--validate',
            action='store_true',
            help="Check converted code with the PostgreSQL parser of sqlglot and report problems")

        self.parser.add_argument(
            '--log-level',
            default='INFO',
            choices=ConverterConstants.get_message_levels(),
            help="Set the logging level")

        self.parser.add_argument(
            '--log-file',
            type=str,
            default=None,
            help=f'Path/name of the log file, console only if not set (suggested: {ConverterConstants.get_default_log()})')

        self.parser.add_argument(
            '--version',
            action='store_true',
            help='Show the version of the tool')

    def parse_arguments(self, argv=None):
        self.args = self.parser.parse_args(argv)
        return self.args

    def print_all(self, logger):
        if self.args.log_level:
            logger.info("Command line parameters:")
            logger.info("input        = {}".format(self.args.input))
            logger.info("output       = {}".format(self.args.output))
            logger.info("config       = {}".format(self.args.config))
            logger.info("converter    = {}".format(self.args.converter))
            logger.info("validate     = {}".format(self.args.validate))
            logger.info("log_level    = {}".format(self.args.log_level))
            logger.info("log          = {}".format(self.args.log_file))

if __name__ == "__main__":
    print("This script is not meant to be run directly")
