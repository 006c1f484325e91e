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
Ordered T-SQL -> PostgreSQL rewrite rules.

Every rule is a regular expression plus a replacement. The replacement is
either a StaticReplacement (re.sub template with group references) or a
ComputedReplacement (function receiving the match). ScannedReplacement is
the computed kind for constructs whose end a regex cannot find - function
calls with arbitrarily nested arguments and SELECT TOP statements - the
pattern only finds where they start and the subquery scanner does the rest.

Rules run in table order and each one sees the text already rewritten by
the rules before it, so the order of the table is part of its behaviour:

* bracket quoting runs first, later rules only see "quoted" names
* SELECT TOP n is moved to LIMIT n before the generic strip of SELECT TOP
* GETDATE() becomes CURRENT_DATE before DATEDIFF / DATEADD look for arguments

Patterns which must not touch string literals match a whole 'literal' as
their first alternative and give it back unchanged.
"""

import re
from credativ_tsql_converter.interval_mapper import IntervalMapper
from credativ_tsql_converter.converter_logging import get_logger
from credativ_tsql_converter.subquery import find_statement_end, split_arguments

_LITERAL = r"'(?:[^']|'')*'"
_CAST_TYPE = re.compile(r"\w+(?:\s*\(\s*(?:\d+|MAX)\s*(?:,\s*\d+\s*)?\))?", re.IGNORECASE)
_UNIT = re.compile(r"\w+")
_OPERAND = r"(?:'(?:[^']|'')*'|\"[^\"]*\"|[@#]*\w+)(?:\.(?:\"[^\"]*\"|\w+))*"
_OPERAND_OR_PLUS = re.compile(rf"({_OPERAND})|\+")


class StaticReplacement:
    """ re.sub template, e.g. r'"\\1"' """

    def __init__(self, template):
        self.template = template

    def apply(self, pattern, text):
        return pattern.sub(self.template, text)

    def __repr__(self):
        return f"StaticReplacement({self.template!r})"


class ComputedReplacement:
    """ Function called with every match, returns the replacement text """

    def __init__(self, function):
        self.function = function

    def apply(self, pattern, text):
        return pattern.sub(self.function, text)

    def __repr__(self):
        return f"{self.__class__.__name__}({getattr(self.function, '__name__', self.function)!r})"


class ScannedReplacement(ComputedReplacement):
    """
    Function called with every match and the whole text, returns
    (replacement, end) to replace text[match.start():end], or None
    to keep the matched text as it is.
    """

    def apply(self, pattern, text):
        converted = []
        position = 0
        for match in pattern.finditer(text):
            # inside a construct which was already replaced
            if match.start() < position:
                continue
            result = self.function(match, text)
            if result is None:
                continue
            replacement, end = result
            converted.append(text[position:match.start()])
            converted.append(replacement)
            position = end
        converted.append(text[position:])
        return "".join(converted)


class ConversionRule:
    def __init__(self, name, pattern, replacement, comment='', flags=re.IGNORECASE):
        self.name = name
        self.pattern = re.compile(pattern, flags)
        self.replacement = replacement
        self.comment = comment

    def apply(self, text):
        return self.replacement.apply(self.pattern, text)

    def __repr__(self):
        return f"ConversionRule({self.name!r}, {self.replacement!r})"


class RuleTable:
    """
    Immutable ordered sequence of ConversionRule objects.
    apply() runs all of them, in order, over one string.
    """

    def __init__(self, rules):
        self._rules = tuple(rules)

    @property
    def rules(self):
        return self._rules

    def names(self):
        return [rule.name for rule in self._rules]

    def get_rule(self, name):
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def apply(self, text, on_rule_applied=None):
        for rule in self._rules:
            converted = rule.apply(text)
            if on_rule_applied is not None and converted != text:
                on_rule_applied(rule, text, converted)
            text = converted
        return text

    def __iter__(self):
        return iter(self._rules)

    def __len__(self):
        return len(self._rules)

    @classmethod
    def default(cls, interval_mapper=None, exclude_rules=None, custom_substitutions=None, logger=None):
        """
        Built-in rules minus exclude_rules, followed by custom substitutions
        given as [pattern, replacement, comment] entries.
        """
        logger = logger or get_logger()
        exclude_rules = set(exclude_rules or [])
        rules = [rule for rule in build_default_rules(interval_mapper) if rule.name not in exclude_rules]

        for index, entry in enumerate(custom_substitutions or []):
            pattern, replacement = entry[0], entry[1]
            comment = entry[2] if len(entry) > 2 else ''
            try:
                rule = ConversionRule(f"custom_{index + 1}", pattern, StaticReplacement(replacement), comment)
                # the template is compiled here, bad group references raise now and not during conversion
                rule.apply('')
            except (re.error, IndexError) as e:
                logger.warning(f"Invalid custom_substitutions entry {index + 1} skipped: {pattern} -> {replacement!r} ({e})")
                continue
            rules.append(rule)

        return cls(rules)


def _call_pattern(function_name):
    return rf"{_LITERAL}|(?P<function>\b{function_name})\s*\("


def _function_call(rewrite):
    """
    ScannedReplacement function for FUNCTION( ... ) calls. rewrite() gets the
    stripped arguments and returns the new text, None keeps the call.
    """
    def replace(match, text):
        if match.group('function') is None:
            return None
        call = split_arguments(text, match.end() - 1)
        if call is None:
            return None
        arguments, end = call
        arguments = [argument.strip() for argument in arguments]
        if not all(arguments):
            return None
        replacement = rewrite(arguments)
        if replacement is None:
            return None
        return replacement, end
    return replace


def _quote_bracketed(match):
    return match.group(1) or f'"{match.group(2)}"'


def _reposition_top(match, text):
    if match.group('select') is None:
        return None
    body = text[match.end():find_statement_end(text, match.end())].rstrip()
    if not body:
        return None
    count = match.group('paren_count') or match.group('count')
    return f"{match.group('select')}{match.group('distinct') or ''} {body} LIMIT {count}", match.end() + len(body)


def _date_difference(arguments, interval_mapper):
    if len(arguments) != 3 or not _UNIT.fullmatch(arguments[0]):
        return None
    unit, start, end = arguments
    return f"DATE_PART('{interval_mapper.resolve_part(unit)}', {end}::timestamp - {start}::timestamp)"


def _type_cast(arguments):
    # CONVERT with a style argument has no CAST form
    if len(arguments) != 2 or not _CAST_TYPE.fullmatch(arguments[0]):
        return None
    return f"CAST({arguments[1]} AS {arguments[0]})"


def _substring_position(arguments):
    if len(arguments) != 2:
        return None
    return f"POSITION({arguments[0]} IN {arguments[1]})"


def _date_arithmetic(arguments, interval_mapper):
    if len(arguments) != 3 or not _UNIT.fullmatch(arguments[0]):
        return None
    unit, amount, date = arguments
    return f"({date}::timestamp + INTERVAL '{amount} {interval_mapper.resolve_interval(unit)}')"


def _string_concatenation(match):
    # operands are matched first, so a '+' inside a literal stays where it is
    return _OPERAND_OR_PLUS.sub(lambda m: m.group(1) or '||', match.group(0))


def build_default_rules(interval_mapper=None):
    interval_mapper = interval_mapper or IntervalMapper()
    return [
        ConversionRule(
            'bracket_identifiers',
            rf'({_LITERAL})|\[([^\[\]]+)\]',
            ComputedReplacement(_quote_bracketed),
            '[Name] -> "Name", string literals untouched'),
        ConversionRule(
            'national_strings',
            rf"({_LITERAL})|(?<![^\s(,=<>+|])N({_LITERAL})",
            StaticReplacement(r'\1\2'),
            "N'text' -> 'text'"),
        ConversionRule(
            'row_limiting',
            rf"{_LITERAL}|\b(?P<select>SELECT)(?P<distinct>\s+DISTINCT)?\s+TOP\s*(?:\(\s*(?P<paren_count>\d+)\s*\)|(?P<count>\d+)\b)\s*",
            ScannedReplacement(_reposition_top),
            'SELECT TOP n ... -> SELECT ... LIMIT n'),
        ConversionRule(
            'current_date',
            r'\bGETDATE\s*\(\s*\)',
            StaticReplacement('CURRENT_DATE'),
            'GETDATE() -> CURRENT_DATE'),
        ConversionRule(
            'current_timestamp',
            r'\bSYSDATETIME\s*\(\s*\)',
            StaticReplacement('CURRENT_TIMESTAMP'),
            'SYSDATETIME() -> CURRENT_TIMESTAMP'),
        ConversionRule(
            'date_difference',
            _call_pattern('DATEDIFF'),
            ScannedReplacement(_function_call(lambda arguments: _date_difference(arguments, interval_mapper))),
            "DATEDIFF(unit, start, end) -> DATE_PART('unit', end::timestamp - start::timestamp)"),
        ConversionRule(
            'null_coalescing',
            r'\bISNULL\s*\(',
            StaticReplacement('COALESCE('),
            'ISNULL(a, b) -> COALESCE(a, b)'),
        ConversionRule(
            'type_cast',
            _call_pattern('CONVERT'),
            ScannedReplacement(_function_call(_type_cast)),
            'CONVERT(type, expr) -> CAST(expr AS type)'),
        ConversionRule(
            'substring_position',
            _call_pattern('CHARINDEX'),
            ScannedReplacement(_function_call(_substring_position)),
            'CHARINDEX(a, b) -> POSITION(a IN b)'),
        ConversionRule(
            'string_length',
            r'\bLEN\s*\(',
            StaticReplacement('LENGTH('),
            'LEN(x) -> LENGTH(x)'),
        ConversionRule(
            'utc_timestamp',
            r'\bGETUTCDATE\s*\(\s*\)',
            StaticReplacement("CURRENT_TIMESTAMP AT TIME ZONE 'UTC'"),
            "GETUTCDATE() -> CURRENT_TIMESTAMP AT TIME ZONE 'UTC'"),
        ConversionRule(
            'date_construction',
            r'\bDATEFROMPARTS\s*\(',
            StaticReplacement('MAKE_DATE('),
            'DATEFROMPARTS(y, m, d) -> MAKE_DATE(y, m, d)'),
        ConversionRule(
            'date_arithmetic',
            _call_pattern('DATEADD'),
            ScannedReplacement(_function_call(lambda arguments: _date_arithmetic(arguments, interval_mapper))),
            "DATEADD(unit, n, date) -> (date::timestamp + INTERVAL 'n units')"),
        ConversionRule(
            'string_concatenation',
            # no left operand right after '::', '.' or a quote - keeps x::timestamp + INTERVAL intact
            rf"(?<![\w.:'\"@#]){_OPERAND}(?:\s*\+\s*{_OPERAND})+",
            ComputedReplacement(_string_concatenation),
            'a + b -> a || b, numeric addition included'),
        ConversionRule(
            'redundant_top_select',
            rf'({_LITERAL})|\b(SELECT)(\s+DISTINCT)?\s+TOP\s*(?:\(\s*\d+\s*\)|\d+\b)',
            StaticReplacement(r'\1\2\3'),
            'SELECT TOP n -> SELECT, LIMIT is added by the final fixup'),
        ConversionRule(
            'batch_separator',
            r'^[ \t]*GO[ \t]*(?=\r?$)',
            StaticReplacement(';'),
            'GO line -> ;',
            flags=re.IGNORECASE | re.MULTILINE),
    ]


def get_default_rule_names():
    return [rule.name for rule in build_default_rules()]

if __name__ == "__main__":
    print("This script is not meant to be run directly")
