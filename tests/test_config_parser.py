from argparse import Namespace
from unittest.mock import MagicMock

import pytest
import yaml

from credativ_tsql_converter.config_parser import ConfigParser


def make_args(config=None, **kwargs):
    values = {
        'input': '-',
        'output': None,
        'config': config,
        'converter': None,
        'validate': False,
        'log_level': 'INFO',
        'log_file': None,
    }
    values.update(kwargs)
    return Namespace(**values)


def write_config(tmp_path, content):
    config_file = tmp_path / 'config.yaml'
    config_file.write_text(yaml.safe_dump(content))
    return str(config_file)


def test_defaults_without_config_file():
    config_parser = ConfigParser(make_args(), MagicMock())
    assert config_parser.get_converter_name() == 'rules'
    assert config_parser.get_on_error_action() == 'continue'
    assert config_parser.get_names_case_handling() == 'lower'
    assert config_parser.get_include_files() == ['*.sql']
    assert config_parser.get_exclude_files() == []
    assert config_parser.get_exclude_rules() == []
    assert config_parser.get_custom_substitutions() == []
    assert config_parser.get_encoding() == 'utf-8'
    assert config_parser.should_validate_output() is False
    assert config_parser.get_input_path() is None
    assert config_parser.get_output_path() is None


def test_config_file_is_merged_over_defaults(tmp_path):
    config_file = write_config(tmp_path, {
        'on_error_action': 'Stop',
        'include_files': 'all',
        'exclude_files': ['*_old.sql'],
        'conversion': {
            'names_case_handling': 'Upper',
            'exclude_rules': ['string_concatenation'],
            'custom_substitutions': [[r'\bNEWID\(\)', 'gen_random_uuid()', 'uuid']],
            'validate_output': True,
        },
    })
    config_parser = ConfigParser(make_args(config_file), MagicMock())
    assert config_parser.get_on_error_action() == 'stop'
    assert config_parser.get_include_files() == ['*']
    assert config_parser.get_exclude_files() == ['*_old.sql']
    assert config_parser.get_names_case_handling() == 'upper'
    assert config_parser.get_exclude_rules() == ['string_concatenation']
    assert config_parser.get_custom_substitutions()[0][1] == 'gen_random_uuid()'
    assert config_parser.should_validate_output() is True
    # untouched defaults survive the merge
    assert config_parser.get_encoding() == 'utf-8'


def test_empty_config_file(tmp_path):
    config_file = tmp_path / 'empty.yaml'
    config_file.write_text('')
    config_parser = ConfigParser(make_args(str(config_file)), MagicMock())
    assert config_parser.get_converter_name() == 'rules'


def test_command_line_overrides_config(tmp_path):
    config_file = write_config(tmp_path, {'conversion': {'validate_output': False}})
    config_parser = ConfigParser(make_args(config_file, validate=True, input='in.sql', output='out.sql'), MagicMock())
    assert config_parser.should_validate_output() is True
    assert config_parser.get_input_path() == 'in.sql'
    assert config_parser.get_output_path() == 'out.sql'


@pytest.mark.parametrize('content', [
    {'conversion': {'names_case_handling': 'title'}},
    {'on_error_action': 'ignore'},
    {'converter': 'llm'},
    {'conversion': {'exclude_rules': 'string_concatenation'}},
    {'conversion': {'exclude_rules': ['no_such_rule']}},
    {'conversion': {'custom_substitutions': [['only_pattern']]}},
    {'conversion': {'custom_substitutions': 'NEWID'}},
    {'include_files': '*.sql'},
    {'exclude_files': 5},
])
def test_invalid_values_are_rejected(tmp_path, content):
    config_file = write_config(tmp_path, content)
    with pytest.raises(ValueError):
        ConfigParser(make_args(config_file), MagicMock())


def test_print_log_message_respects_level():
    logger = MagicMock()
    config_parser = ConfigParser(make_args(log_level='DEBUG'), logger)
    logger.reset_mock()

    config_parser.print_log_message('INFO', 'info')
    config_parser.print_log_message('DEBUG', 'debug')
    config_parser.print_log_message('DEBUG2', 'debug2')
    config_parser.print_log_message('WARNING', 'warning')
    config_parser.print_log_message('ERROR', 'error')

    logger.info.assert_called_once_with('info')
    logger.debug.assert_called_once_with('debug')
    logger.warning.assert_called_once_with('warning')
    logger.error.assert_called_once_with('error')


def test_print_log_message_prefixes_deep_debug_levels():
    logger = MagicMock()
    config_parser = ConfigParser(make_args(log_level='DEBUG3'), logger)
    logger.reset_mock()
    config_parser.print_log_message('DEBUG3', 'details')
    logger.debug.assert_called_once_with('DEBUG3: details')


def test_print_log_message_rejects_unknown_level():
    config_parser = ConfigParser(make_args(), MagicMock())
    with pytest.raises(ValueError):
        config_parser.print_log_message('TRACE', 'x')


def test_describe_substitutions(tmp_path):
    config_file = write_config(tmp_path, {
        'conversion': {'custom_substitutions': [['NEWID', 'gen_random_uuid', 'uuid'], ['(bad', 'x'], ['foo', r'\2']]},
    })
    lines = ConfigParser(make_args(config_file), MagicMock()).describe_substitutions()
    assert lines == ["NEWID -> 'gen_random_uuid' [OK] uuid", "(bad -> 'x' [INVALID]", "foo -> '\\\\2' [INVALID]"]


def test_include_files_without_value_uses_default(tmp_path):
    config_file = tmp_path / 'config.yaml'
    config_file.write_text("include_files:\n")
    config_parser = ConfigParser(make_args(str(config_file)), MagicMock())
    assert config_parser.get_include_files() == ['*.sql']
