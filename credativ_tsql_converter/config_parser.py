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

import yaml
from credativ_tsql_converter.constants import ConverterConstants
from credativ_tsql_converter.rules import get_default_rule_names
import copy
import os
import re


class ConfigParser:
    def __init__(self, args, logger):
        self.args = args
        self.logger = logger
        self.config = self.merge_config(ConverterConstants.get_internal_configuration(), self.load_config(getattr(args, 'config', None)))
        self.validate_config()

    def load_config(self, config_file):
        """Load the configuration file, no file means built-in defaults only."""
        if not config_file:
            self.print_log_message('DEBUG', "No configuration file given, using default settings")
            return {}
        self.print_log_message('INFO', f"Working directory: {os.path.dirname(os.path.abspath(config_file))}")
        self.print_log_message('INFO', f"Loading configuration from {config_file}")
        with open(config_file, 'r') as file:
            return yaml.safe_load(file) or {}

    def merge_config(self, defaults, loaded):
        merged = copy.deepcopy(defaults)
        for key, value in loaded.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = self.merge_config(merged[key], value)
            else:
                merged[key] = value
        return merged

    def validate_config(self):

        names_case_handling = self.get_names_case_handling()
        if names_case_handling not in ConverterConstants.get_names_case_handling_options():
            raise ValueError(f"Invalid names_case_handling in the config file: {names_case_handling}. Must be one of 'lower', 'upper', or 'keep'.")

        on_error_action = self.get_on_error_action()
        if on_error_action not in ConverterConstants.get_on_error_actions():
            raise ValueError(f"Invalid on_error_action in the config file: {on_error_action}. Must be 'stop' or 'continue'.")

        converter_name = self.get_converter_name()
        if converter_name not in ConverterConstants.get_modules():
            raise ValueError(f"Unsupported converter: {converter_name}. Available converters: {', '.join(ConverterConstants.get_modules())}")

        exclude_rules = self.get_exclude_rules()
        if not isinstance(exclude_rules, list):
            raise ValueError("When exclude_rules is used, it must be a list of rule names")
        rule_names = get_default_rule_names()
        unknown_rules = [name for name in exclude_rules if name not in rule_names]
        if unknown_rules:
            raise ValueError(f"Unknown rules in exclude_rules: {unknown_rules}. Available rules: {rule_names}")

        custom_substitutions = self.get_custom_substitutions()
        if not isinstance(custom_substitutions, list):
            raise ValueError("When custom_substitutions is used, it must be a list of [pattern, replacement, comment] entries")
        for entry in custom_substitutions:
            if not isinstance(entry, (list, tuple)) or len(entry) not in (2, 3):
                raise ValueError("Please update your config file. Each entry in custom_substitutions must have 2 or 3 elements - [pattern, replacement, comment].")

        for setting in ('include_files', 'exclude_files'):
            value = self.config.get(setting)
            if type(value) is str and value.lower() == 'all':
                continue
            if value is not None and not isinstance(value, list):
                raise ValueError(f"When {setting} is used, it must be a list of file name patterns")

        return True


    ## General config
    def get_converter_name(self):
        converter_name = getattr(self.args, 'converter', None)
        if converter_name:
            return converter_name
        return self.config.get('converter', ConverterConstants.get_default_converter())

    def get_input_path(self):
        input_path = getattr(self.args, 'input', None)
        if not input_path or input_path == '-':
            return None
        return input_path

    def get_output_path(self):
        return getattr(self.args, 'output', None)

    def get_on_error_action(self):
        return str(self.config.get('on_error_action', 'continue')).lower()

    def get_include_files(self):
        include_files = self.config.get('include_files', None)
        if include_files is None:
            return ConverterConstants.get_default_include_files()
        if type(include_files) is str and include_files.lower() == 'all':
            return ['*']
        return include_files

    def get_exclude_files(self):
        return self.config.get('exclude_files', []) or []

    def get_encoding(self):
        return self.config.get('encoding', ConverterConstants.get_default_encoding())


    ## Conversion settings
    def get_conversion_config(self):
        return self.config.get('conversion', {})

    def get_names_case_handling(self):
        return str(self.get_conversion_config().get('names_case_handling', 'lower')).lower()

    def get_exclude_rules(self):
        return self.get_conversion_config().get('exclude_rules', []) or []

    def get_custom_substitutions(self):
        return self.get_conversion_config().get('custom_substitutions', []) or []

    def should_validate_output(self):
        if getattr(self.args, 'validate', False):
            return True
        return bool(self.get_conversion_config().get('validate_output', False))


    ## Logging
    def get_log_level(self):
        log_level = getattr(self.args, 'log_level', None)
        if log_level:
            return log_level
        return 'INFO'

    def print_log_message(self, message_level, message):
        if message_level.upper() == 'ERROR':
            self.logger.error(message)
            return
        if message_level.upper() == 'WARNING':
            self.logger.warning(message)
            return
        current_log_level = self.get_log_level()
        if message_level.upper() not in ConverterConstants.get_message_levels():
            raise ValueError(f"Invalid message_level: {message_level}. Must be one of {ConverterConstants.get_message_levels()}")
        if ConverterConstants.get_message_levels().index(message_level.upper()) <= ConverterConstants.get_message_levels().index(current_log_level.upper()):
            if message_level == 'DEBUG':
                self.logger.debug(message)
            elif message_level == 'DEBUG2':
                self.logger.debug('DEBUG2: ' + message)
            elif message_level == 'DEBUG3':
                self.logger.debug('DEBUG3: ' + message)
            else:
                self.logger.info(message)

    def describe_substitutions(self):
        """ One line per custom substitution, used for the startup log """
        lines = []
        for entry in self.get_custom_substitutions():
            comment = entry[2] if len(entry) > 2 else ''
            try:
                re.compile(entry[0]).sub(entry[1], '')
                status = 'OK'
            except (re.error, IndexError):
                status = 'INVALID'
            lines.append(f"{entry[0]} -> {entry[1]!r} [{status}] {comment}".rstrip())
        return lines

### Main entry point

if __name__ == "__main__":
    print("This script is not meant to be run directly")
