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
Parenthesized groups are found with a character scanner and a depth
counter, so any nesting depth is handled. Parentheses inside 'literals',
"quoted" and [bracketed] identifiers do not count.
The same scanning finds the arguments of a function call and the end
of a statement.
"""

import re

_CLOSING_QUOTES = {"'": "'", '"': '"', '[': ']'}
_STATEMENT_START = re.compile(r'[ \t]*(?:SELECT|INSERT|UPDATE|DELETE|WITH|GO)\b', re.IGNORECASE)
_SET_OPERATOR = re.compile(r'\b(?:UNION(?:\s+ALL)?|EXCEPT|INTERSECT)\s*$', re.IGNORECASE)


def _scan(text):
    """
    Returns (segments, unclosed) - unclosed is the tail of text starting
    with a '(' which never got its closing ')', None if all groups closed.
    """
    segments = []
    current = ""
    depth = 0
    closing_quote = ''

    for char in text:
        if closing_quote:
            current += char
            if char == closing_quote:
                closing_quote = ''
            continue

        if char in _CLOSING_QUOTES:
            closing_quote = _CLOSING_QUOTES[char]
        elif char == '(':
            if depth == 0 and current:
                segments.append((False, current))
                current = ""
            depth += 1
        elif char == ')' and depth > 0:
            depth -= 1
            if depth == 0:
                segments.append((True, current + char))
                current = ""
                continue
        current += char

    if depth > 0:
        return segments, current
    if current:
        segments.append((False, current))
    return segments, None


def split_parenthesized(text):
    """
    Split text into top level segments, list of (is_group, segment_text).
    A group segment includes its outer parentheses. An unbalanced '(' or ')'
    stays in the surrounding plain text.
    """
    segments = []
    remaining = text
    while remaining:
        scanned, unclosed = _scan(remaining)
        segments.extend(scanned)
        if unclosed is None:
            break
        # unmatched '(' is plain text, scanning continues right after it
        segments.append((False, '('))
        remaining = unclosed[1:]

    merged = []
    for is_group, segment in segments:
        if merged and not is_group and not merged[-1][0]:
            merged[-1] = (False, merged[-1][1] + segment)
        else:
            merged.append((is_group, segment))
    return merged


def recurse(text, convert):
    """
    Convert the inside of every top level group with convert() and put
    the parentheses back, text outside of groups is returned as it is.
    """
    converted = []
    for is_group, segment in split_parenthesized(text):
        if is_group:
            converted.append(f"({convert(segment[1:-1])})")
        else:
            converted.append(segment)
    return "".join(converted)


def split_arguments(text, open_index):
    """
    Arguments of the call whose '(' is at text[open_index], split on commas
    outside of nested parentheses and quotes.
    Returns (arguments, end) with end right after the closing ')',
    None when the call is never closed.
    """
    arguments = []
    current = ""
    depth = 0
    closing_quote = ''

    for index in range(open_index, len(text)):
        char = text[index]
        if closing_quote:
            current += char
            if char == closing_quote:
                closing_quote = ''
            continue

        if char in _CLOSING_QUOTES:
            closing_quote = _CLOSING_QUOTES[char]
        elif char == '(':
            depth += 1
            if depth == 1:
                continue
        elif char == ')':
            depth -= 1
            if depth == 0:
                arguments.append(current)
                return arguments, index + 1
        elif char == ',' and depth == 1:
            arguments.append(current)
            current = ""
            continue
        current += char

    return None


def find_statement_end(text, start):
    """
    Index where the statement running from start ends: ';' or a ')' closing
    an enclosing group, or a line starting the next statement (GO included).
    A line after UNION / EXCEPT / INTERSECT continues the statement.
    """
    depth = 0
    closing_quote = ''

    for index in range(start, len(text)):
        char = text[index]
        if closing_quote:
            if char == closing_quote:
                closing_quote = ''
        elif char in _CLOSING_QUOTES:
            closing_quote = _CLOSING_QUOTES[char]
        elif char == '(':
            depth += 1
        elif char == ')':
            if depth == 0:
                return index
            depth -= 1
        elif depth == 0:
            if char == ';':
                return index
            if char == '\n' and _STATEMENT_START.match(text, index + 1) and not _SET_OPERATOR.search(text, start, index):
                return index

    return len(text)


if __name__ == "__main__":
    print("This script is not meant to be run directly")
