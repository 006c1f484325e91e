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

from credativ_tsql_converter.converters.query_converter import QueryConverter
from credativ_tsql_converter.interval_mapper import IntervalMapper
from credativ_tsql_converter.pipeline import ConversionPipeline
from credativ_tsql_converter.rules import RuleTable


class RuleConverter(QueryConverter):
    """ Pattern based converter, built-in rule table plus settings from the config file """

    def __init__(self, config_parser):
        super().__init__(config_parser)
        self.logger = config_parser.logger
        self.interval_mapper = IntervalMapper(self.logger)
        self.rule_table = RuleTable.default(
            interval_mapper=self.interval_mapper,
            exclude_rules=self.config_parser.get_exclude_rules(),
            custom_substitutions=self.config_parser.get_custom_substitutions(),
            logger=self.logger)
        self.pipeline = ConversionPipeline(
            rule_table=self.rule_table,
            names_case_handling=self.config_parser.get_names_case_handling(),
            on_rule_applied=self.log_rule_applied,
            logger=self.logger)
        self.config_parser.print_log_message('DEBUG', f"Rule table: {', '.join(self.rule_table.names())}")

    def log_rule_applied(self, rule, before, after):
        self.config_parser.print_log_message('DEBUG3', f"Rule {rule.name} applied: {before!r} -> {after!r}")

    def convert(self, query: str) -> str:
        self.config_parser.print_log_message('DEBUG2', f"Converting query ({len(query or '')} characters)")
        return self.pipeline.convert(query)

    def get_description(self) -> str:
        return f"rule based converter, {len(self.rule_table)} rules, names case handling '{self.pipeline.names_case_handling}'"

if __name__ == "__main__":
    print("This script is not meant to be run directly")
