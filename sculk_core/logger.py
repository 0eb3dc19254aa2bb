#    This file is part of Sculk.
#
#    Sculk is free software: you can redistribute it and/or
#    modify it under the terms of the GNU General Public License as published
#    by the Free Software Foundation, either version 3 of the License, or (at
#    your option) any later version.
#
#    Sculk is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General
#    Public License for more details.
#
#    You should have received a copy of the GNU General Public License along
#    with Sculk.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import platform
import sys

# For background, add 40. For foreground, add 30
BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE = range(8)

RESET_SEQ = "\033[0m"
COLOR_SEQ = "\033[1;%dm"

COLORIZE = {
    'DEBUG': CYAN,
}
HIGHLIGHT = {
    'CRITICAL': RED,
    'ERROR': RED,
    'WARNING': YELLOW,
}


class HighlightingFormatter(logging.Formatter):
    """Base class of our formatters. Adds `pid`, `fileandlineno` and
    `shortlevelname` to each record before formatting it."""
    datefmt = "%Y-%m-%d %H:%M:%S"

    def __init__(self, verbose=False):
        if verbose:
            fmtstr = '%(fileandlineno)-18s %(pid)s %(asctime)s ' \
                    '%(levelname)-8s %(message)s'
        else:
            fmtstr = '%(asctime)s ' '%(shortlevelname)-1s%(message)s'

        logging.Formatter.__init__(self, fmtstr, self.datefmt)

    def format(self, record):
        record.shortlevelname = record.levelname[0] + ' '
        if record.levelname == 'INFO':
            record.shortlevelname = ''

        record.pid = os.getpid()
        record.fileandlineno = "%s:%s" % (record.filename, record.lineno)

        return self.highlight(record)

    def highlight(self, record):
        """Override this in subclasses to decorate the formatted line"""
        return logging.Formatter.format(self, record)


class DumbFormatter(HighlightingFormatter):
    """For log files and terminals without colour. Prints a line of stars
    above a highlighted line."""
    def highlight(self, record):
        if record.levelname in HIGHLIGHT:
            line = logging.Formatter.format(self, record)
            return "*" * min(79, len(line)) + "\n" + line
        return HighlightingFormatter.highlight(self, record)


class ANSIColorFormatter(HighlightingFormatter):
    def highlight(self, record):
        if record.levelname in COLORIZE:
            # left justify again, the colour sequence counts towards the width
            record.levelname = COLOR_SEQ % (30 + COLORIZE[record.levelname]) + \
                    "%-8s" % record.levelname + RESET_SEQ
            return logging.Formatter.format(self, record)

        elif record.levelname in HIGHLIGHT:
            line = logging.Formatter.format(self, record)
            return COLOR_SEQ % (40 + HIGHLIGHT[record.levelname]) + line + RESET_SEQ

        return logging.Formatter.format(self, record)


def configure(loglevel=logging.INFO, verbose=False, simple=False, outstream=None):
    """Configures the root logger for the command line tools and the test
    runner.

    This function may be called more than once; later calls replace the
    formatter and level of the handler installed by the first one.

    """
    logger = logging.getLogger()

    if outstream is None:
        outstream = sys.stdout
    if simple or platform.system() == 'Windows' or not outstream.isatty():
        formatter = DumbFormatter(verbose)
    else:
        formatter = ANSIColorFormatter(verbose)

    if hasattr(logger, 'sculkHandler'):
        logger.sculkHandler.setFormatter(formatter)
        logger.setLevel(loglevel)
    else:
        # Remember our handler so a later call can find it again
        logger.sculkHandler = logging.StreamHandler(outstream)
        logger.sculkHandler.setFormatter(formatter)
        logger.addHandler(logger.sculkHandler)
        logger.setLevel(loglevel)
