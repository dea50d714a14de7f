#!/usr/bin/env python3

# log.py - virtinv logger functions
# Part of the virtinv hypervisor inventory tool
#
#    Copyright (C) 2026 virtinv contributors
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, version 3.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <https://www.gnu.org/licenses/>.
#
###############################################################################

from click import echo
from colorama import Fore, Style
from datetime import datetime


class Logger(object):
    # Define a logger class for a single inventory run
    # Diagnostics go to stderr (and optionally a log file) so that the report
    # on stdout stays clean; messages are formatted based off their state.

    # Format maps
    format_map_colourized = {
        # Colourized formatting with chevron prompts (log_colours = True)
        "o": {"colour": Fore.GREEN, "prompt": ">>> "},
        "e": {"colour": Fore.RED, "prompt": ">>> "},
        "w": {"colour": Fore.YELLOW, "prompt": ">>> "},
        "i": {"colour": Fore.BLUE, "prompt": ">>> "},
        "d": {"colour": Fore.WHITE, "prompt": ">>> "},
        "x": {"colour": "", "prompt": ""},
    }
    format_map_textual = {
        # Uncolourized formatting with text prompts (log_colours = False)
        "o": {"colour": "", "prompt": "ok: "},
        "e": {"colour": "", "prompt": "failed: "},
        "w": {"colour": "", "prompt": "warning: "},
        "i": {"colour": "", "prompt": "info: "},
        "d": {"colour": "", "prompt": "debug: "},
        "x": {"colour": "", "prompt": ""},
    }

    def __init__(self, config):
        self.config = config
        self.writer = None

        if self.config.get("log_file"):
            # The logfile stays open for the duration of the run
            self.writer = open(self.config["log_file"], "a")

    def terminate(self):
        if self.writer is not None:
            self.writer.close()
            self.writer = None

    # Output function
    def out(self, message, state=None, prefix=""):
        # Debug messages are dropped unless debugging is enabled
        if state == "d" and not self.config.get("log_debug", False):
            return

        if self.config.get("log_dates", False):
            date = "{} ".format(datetime.now().strftime("%Y/%m/%d %H:%M:%S.%f"))
        else:
            date = ""

        if self.config.get("log_colours", False):
            format_map = self.format_map_colourized
            endc = Style.RESET_ALL
        else:
            format_map = self.format_map_textual
            endc = ""

        # Define an undefined state as 'x'; no date in these prompts
        if not state:
            state = "x"
            date = ""

        colour = format_map[state]["colour"]
        prompt = format_map[state]["prompt"]
        if not colour:
            endc = ""

        if prefix != "":
            prefix = prefix + " - "

        message = colour + prompt + endc + date + prefix + message

        if not self.config.get("quiet", False):
            echo(message, err=True, color=self.config.get("log_colours") or None)

        if self.writer is not None:
            self.writer.write(message + "\n")
