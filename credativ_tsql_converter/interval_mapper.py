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

from enum import Enum
from credativ_tsql_converter.converter_logging import get_logger


class IntervalUnit(Enum):
    """Date/time units understood by DATEADD and DATEDIFF"""
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


class IntervalMapper:
    """
    Resolves T-SQL datepart tokens into PostgreSQL spellings.
    DATE_PART() wants the singular field name ('day'),
    INTERVAL literals get the plural unit ('DAYS').
    Unknown tokens are returned as they are - the result may not be valid
    PostgreSQL, so every such case is reported as a warning.
    """

    def __init__(self, logger=None):
        self.logger = logger or get_logger()
        self.units_mapping = self.get_units_mapping()

    def get_units_mapping(self):
        """ T-SQL datepart names and abbreviations """
        return {
            'year': IntervalUnit.YEAR,
            'yy': IntervalUnit.YEAR,
            'yyyy': IntervalUnit.YEAR,
            'month': IntervalUnit.MONTH,
            'mm': IntervalUnit.MONTH,
            'm': IntervalUnit.MONTH,
            'day': IntervalUnit.DAY,
            'dd': IntervalUnit.DAY,
            'd': IntervalUnit.DAY,
            'hour': IntervalUnit.HOUR,
            'hh': IntervalUnit.HOUR,
            'minute': IntervalUnit.MINUTE,
            'mi': IntervalUnit.MINUTE,
            'n': IntervalUnit.MINUTE,
            'second': IntervalUnit.SECOND,
            'ss': IntervalUnit.SECOND,
            's': IntervalUnit.SECOND,
        }

    def lookup(self, unit):
        return self.units_mapping.get(unit.strip().lower())

    def resolve(self, unit, plural=False):
        interval_unit = self.lookup(unit)
        if interval_unit is None:
            self.logger.warning(f"Unknown interval unit '{unit}' passed through unchanged, result may not be valid PostgreSQL")
            return unit
        if plural:
            return f"{interval_unit.value.upper()}S"
        return interval_unit.value

    def resolve_part(self, unit):
        """ Field name for DATE_PART('...', ...) """
        return self.resolve(unit, plural=False)

    def resolve_interval(self, unit):
        """ Unit for INTERVAL 'n ...' """
        return self.resolve(unit, plural=True)

if __name__ == "__main__":
    print("This script is not meant to be run directly")
