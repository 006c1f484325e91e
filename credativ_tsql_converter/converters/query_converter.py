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

from abc import ABC, abstractmethod


class QueryConverter(ABC):
    """
    Abstract base class for query converters.
    Every converter takes T-SQL query text and returns PostgreSQL query text,
    without any state shared between two calls.
    """

    def __init__(self, config_parser):
        self.config_parser = config_parser

    @abstractmethod
    def convert(self, query: str) -> str:
        """
        Convert one T-SQL query text into PostgreSQL.
        Must not raise for malformed SQL - unknown constructs are returned unchanged.
        """
        pass

    @abstractmethod
    def get_description(self) -> str:
        """Short human readable description used in logs."""
        pass

if __name__ == "__main__":
    print("This script is not meant to be run directly")
