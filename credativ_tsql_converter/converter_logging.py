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

import logging
from credativ_tsql_converter.constants import ConverterConstants


def get_logger():
    """Return the shared converter logger, configured or not."""
    return logging.getLogger(ConverterConstants.get_default_name())


class ConverterLogger:
    def __init__(self, log_file=None):
        self.logger = get_logger()
        self.logger.setLevel(logging.DEBUG)

        # Check if handlers are already added to avoid duplicate logs
        if not self.logger.handlers:
            formatter = logging.Formatter('%(asctime)s: [%(levelname)s] %(message)s')

            # Console goes to stderr, stdout may carry converted SQL
            ch = logging.StreamHandler()
            ch.setLevel(logging.DEBUG)
            ch.setFormatter(formatter)
            self.logger.addHandler(ch)

            if log_file:
                fh = logging.FileHandler(log_file)
                fh.setLevel(logging.DEBUG)
                fh.setFormatter(formatter)
                self.logger.addHandler(fh)

    def stop_logging(self):
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

if __name__ == "__main__":
    print("This script is not meant to be run directly")
