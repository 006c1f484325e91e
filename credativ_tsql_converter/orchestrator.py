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

import importlib
import fnmatch
import os
import sys
import traceback
from credativ_tsql_converter.constants import ConverterConstants
from credativ_tsql_converter.validator import OutputValidator


class Orchestrator:
    def __init__(self, config_parser, input_stream=None, output_stream=None):
        self.config_parser = config_parser
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout
        self.on_error_action = self.config_parser.get_on_error_action()
        self.converter = self.load_converter()
        self.validator = OutputValidator(self.config_parser) if self.config_parser.should_validate_output() else None
        self.stats = {'converted': 0, 'failed': 0, 'with_problems': 0}

    def run(self):
        self.config_parser.print_log_message('INFO', f"Starting Orchestrator with {self.converter.get_description()}...")
        input_path = self.config_parser.get_input_path()
        output_path = self.config_parser.get_output_path()

        if input_path is None:
            self.run_convert_stream()
        elif os.path.isdir(input_path):
            if not output_path:
                raise ValueError("Output directory is required when input is a directory")
            self.run_convert_directory(input_path, output_path)
        else:
            self.run_convert_file(input_path, output_path)

        self.print_summary()
        self.config_parser.print_log_message('INFO', "Orchestration complete.")
        return self.stats['failed'] == 0

    def load_converter(self):
        """Dynamically load the query converter."""
        converter_name = self.config_parser.get_converter_name()
        self.config_parser.print_log_message('DEBUG', f"Loading converter: {converter_name}")
        converter_module = ConverterConstants.get_modules().get(converter_name)
        if not converter_module:
            raise ValueError(f"Unsupported converter: {converter_name}")
        module_name, class_name = converter_module.split(':')
        if not module_name or not class_name:
            raise ValueError(f"Invalid module format: {converter_module}")
        module = importlib.import_module(module_name)
        converter_class = getattr(module, class_name)
        return converter_class(self.config_parser)

    def convert_code(self, tsql_code, source_name):
        converted_code = self.converter.convert(tsql_code)
        self.config_parser.print_log_message('DEBUG3', f"[OK] Source code for {source_name}: {tsql_code}")
        self.config_parser.print_log_message('DEBUG3', f"[OK] Converted code for {source_name}: {converted_code}")
        if self.validator and not self.validator.validate(converted_code, source_name):
            self.stats['with_problems'] += 1
        self.stats['converted'] += 1
        return converted_code

    def run_convert_stream(self):
        self.config_parser.print_log_message('INFO', "Reading T-SQL code from stdin.")
        converted_code = self.convert_code(self.input_stream.read(), 'stdin')
        self.output_stream.write(converted_code)

    def run_convert_file(self, input_file, output_file=None):
        try:
            self.config_parser.print_log_message('INFO', f"Converting file {input_file}")
            with open(input_file, 'r', encoding=self.config_parser.get_encoding()) as file:
                tsql_code = file.read()
            converted_code = self.convert_code(tsql_code, input_file)
            if output_file:
                output_dir = os.path.dirname(os.path.abspath(output_file))
                os.makedirs(output_dir, exist_ok=True)
                with open(output_file, 'w', encoding=self.config_parser.get_encoding()) as file:
                    file.write(converted_code)
                self.config_parser.print_log_message('INFO', f"Converted code written to {output_file}")
            else:
                self.output_stream.write(converted_code)
            return True
        except Exception as e:
            self.stats['failed'] += 1
            self.handle_error(e, f"convert file {input_file}")
            return False

    def collect_input_files(self, input_dir):
        include_files = self.config_parser.get_include_files()
        exclude_files = self.config_parser.get_exclude_files()
        input_files = []
        for root, dirs, files in os.walk(input_dir):
            dirs.sort()
            for file_name in sorted(files):
                relative_name = os.path.relpath(os.path.join(root, file_name), input_dir)
                if not any(fnmatch.fnmatch(file_name, pattern) for pattern in include_files):
                    continue
                if any(fnmatch.fnmatch(file_name, pattern) for pattern in exclude_files):
                    self.config_parser.print_log_message('INFO', f"File {relative_name} is excluded from conversion.")
                    continue
                input_files.append(relative_name)
        return input_files

    def run_convert_directory(self, input_dir, output_dir):
        input_files = self.collect_input_files(input_dir)
        if not input_files:
            self.config_parser.print_log_message('INFO', f"No files found to convert in {input_dir}.")
            return
        for order_num, relative_name in enumerate(input_files, start=1):
            self.config_parser.print_log_message('INFO', f"Processing file {order_num}/{len(input_files)}: {relative_name}")
            self.run_convert_file(os.path.join(input_dir, relative_name), os.path.join(output_dir, relative_name))

    def print_summary(self):
        self.config_parser.print_log_message('INFO', "#############################################################################")
        self.config_parser.print_log_message('INFO', f"Converted: {self.stats['converted']}, failed: {self.stats['failed']}")
        if self.validator:
            self.config_parser.print_log_message('INFO', f"Converted with problems reported by output check: {self.stats['with_problems']}")
        self.config_parser.print_log_message('INFO', "#############################################################################")

    def handle_error(self, e, description=None):
        self.config_parser.print_log_message('ERROR', f"An error in {self.__class__.__name__} ({description}): {e}")
        self.config_parser.print_log_message('ERROR', traceback.format_exc())
        if self.on_error_action == 'stop':
            self.config_parser.print_log_message('ERROR', "Stopping due to error.")
            sys.exit(1)

if __name__ == "__main__":
    print("This script is not meant to be run directly")
