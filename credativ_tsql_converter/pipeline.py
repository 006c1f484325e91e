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
T-SQL -> PostgreSQL conversion of one query text.

Steps of ConversionPipeline.convert():

1. every parenthesized group is converted on its own (same pipeline, recursively)
2. the rule table is applied to the result
3. schema qualified names and table names after FROM / JOIN / INTO / UPDATE
   get their case converted (lower by default, PostgreSQL folds unquoted names to lower case)
4. if the input had TOP n and the output still has no LIMIT, " LIMIT n" is appended

The conversion is best effort on the text level and never raises,
constructs without a rule are passed through unchanged.
"""

import re
from credativ_tsql_converter.rules import RuleTable
from credativ_tsql_converter.subquery import recurse
from credativ_tsql_converter.converter_logging import get_logger

_LITERAL_SPLIT = re.compile(r"('(?:[^']|'')*')")
_NAME_PART = r'(?:"[^"]+"|[A-Za-z_][\w$#]*)'
_QUALIFIED_NAME = re.compile(rf'(?<![\w$#@."])(?:"[^"]+"|[A-Za-z_][\w$#]*)(?:\.(?:{_NAME_PART}|\*))+')
_TABLE_REFERENCE = re.compile(rf'\b(FROM|JOIN|INTO|UPDATE)(\s+)({_NAME_PART}(?:\.{_NAME_PART})*)', re.IGNORECASE)
_NAME_PARTS = re.compile(r'"[^"]+"|[^".]+')
_TOP_CLAUSE = re.compile(r'\bTOP\s*(?:\(\s*(\d+)\s*\)|(\d+)\b)', re.IGNORECASE)
_LIMIT_CLAUSE = re.compile(r'\bLIMIT\b', re.IGNORECASE)
_QUOTED_NAME = re.compile(r'\[[^\]]*\]|"[^"]*"')


def _without_quoted_text(text):
    """ text with string literals and quoted names blanked out """
    parts = _LITERAL_SPLIT.split(text)
    return " ".join(_QUOTED_NAME.sub(" ", part) for part in parts[0::2])


class ConversionPipeline:
    def __init__(self, rule_table=None, names_case_handling='lower', on_rule_applied=None, logger=None):
        self.rule_table = rule_table if rule_table is not None else RuleTable.default()
        self.names_case_handling = names_case_handling
        self.on_rule_applied = on_rule_applied
        self.logger = logger or get_logger()

    def convert(self, query):
        if not query:
            return query
        try:
            return self._convert(query)
        except RecursionError:
            self.logger.warning("Query nesting too deep for conversion, the whole query is returned unconverted")
            return query

    def _convert(self, query):
        converted = recurse(query, self._convert)
        converted = self.rule_table.apply(converted, self.on_rule_applied)
        converted = self.normalize_identifiers(converted)
        return self.fix_limit(query, converted)

    def convert_names_case(self, name):
        if self.names_case_handling == 'lower':
            return name.lower()
        elif self.names_case_handling == 'upper':
            return name.upper()
        return name

    def _convert_qualified_name(self, name):
        return _NAME_PARTS.sub(lambda m: self.convert_names_case(m.group(0)), name)

    def normalize_identifiers(self, text):
        if self.names_case_handling == 'keep':
            return text
        # odd items are 'string literals' and stay untouched
        parts = _LITERAL_SPLIT.split(text)
        for index in range(0, len(parts), 2):
            part = _QUALIFIED_NAME.sub(lambda m: self._convert_qualified_name(m.group(0)), parts[index])
            part = _TABLE_REFERENCE.sub(
                lambda m: f"{m.group(1)}{m.group(2)}{self._convert_qualified_name(m.group(3))}", part)
            parts[index] = part
        return "".join(parts)

    def fix_limit(self, original, converted):
        top_match = _TOP_CLAUSE.search(_without_quoted_text(original))
        if not top_match or _LIMIT_CLAUSE.search(_without_quoted_text(converted)):
            return converted
        count = top_match.group(1) or top_match.group(2)
        body = converted.rstrip()
        trailing = converted[len(body):]
        if body.endswith(';'):
            return f"{body[:-1].rstrip()} LIMIT {count};{trailing}"
        return f"{body} LIMIT {count}{trailing}"


_default_pipeline = ConversionPipeline()


def convert(query):
    """ Convert a T-SQL query text into PostgreSQL with the built-in rules """
    return _default_pipeline.convert(query)

if __name__ == "__main__":
    print("This script is not meant to be run directly")
