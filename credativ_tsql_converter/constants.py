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


class ConverterConstants:
    @staticmethod
    def get_version():
        return '0.1.0'

    @staticmethod
    def get_full_name():
        return 'T-SQL to PostgreSQL Query Converter credativ-tsql-converter'

    @staticmethod
    def get_message_levels():
        return ['INFO', 'DEBUG', 'DEBUG2', 'DEBUG3']

    @staticmethod
    def get_default_name():
        return 'converter'

    @staticmethod
    def get_default_log():
        return f'./{ConverterConstants.get_default_name()}.log'

    @staticmethod
    def get_default_converter():
        return 'rules'

    @staticmethod
    def get_default_include_files():
        return ['*.sql']

    @staticmethod
    def get_default_encoding():
        return 'utf-8'

    @staticmethod
    def get_names_case_handling_options():
        return ['lower', 'upper', 'keep']

    @staticmethod
    def get_on_error_actions():
        return ['stop', 'continue']

    @staticmethod
    def get_internal_configuration():
        return {
            'converter': ConverterConstants.get_default_converter(),
            'on_error_action': 'continue',
            'include_files': ConverterConstants.get_default_include_files(),
            'exclude_files': [],
            'conversion': {
                'names_case_handling': 'lower',
                'exclude_rules': [],
                'custom_substitutions': [],
                'validate_output': False,
            },
            'encoding': ConverterConstants.get_default_encoding(),
        }

    @staticmethod
    def get_modules():
        return {
            'rules': 'credativ_tsql_converter.converters.rule_converter:RuleConverter',
        }

if __name__ == "__main__":
    print("This script is not meant to be run directly")
