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

import sqlglot
from sqlglot.errors import ParseError, SqlglotError


class OutputValidator:
    """
    Best effort check of converted code with the sqlglot PostgreSQL parser.
    Only reports problems - converted code is never changed here.
    """

    def __init__(self, config_parser=None):
        self.config_parser = config_parser

    def check_postgres_syntax(self, sql):
        """ Returns list of problems found, empty list means sqlglot could parse the code """
        if not sql or not sql.strip():
            return []
        try:
            sqlglot.parse(sql, read='postgres')
        except ParseError as e:
            problems = []
            for error in e.errors:
                line = error.get('line')
                column = error.get('col')
                description = error.get('description') or str(e)
                if line is not None:
                    problems.append(f"line {line}, column {column}: {description}")
                else:
                    problems.append(description)
            return problems or [str(e)]
        except SqlglotError as e:
            return [str(e)]
        return []

    def validate(self, sql, source_name=''):
        """ Logs every problem as WARNING, returns True when none was found """
        problems = self.check_postgres_syntax(sql)
        if self.config_parser:
            for problem in problems:
                self.config_parser.print_log_message('WARNING', f"Output check {source_name}: {problem}")
        return not problems

if __name__ == "__main__":
    print("This script is not meant to be run directly")
