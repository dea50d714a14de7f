#!/usr/bin/env python3

# helpers.py - virtinv Click CLI helper function library
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

from click import echo as click_echo
from os import environ, path, get_terminal_size
from yaml import load as yload
from yaml import SafeLoader
from yaml import YAMLError


VERSION = "0.1.0"

DEFAULT_CONFIG_FILENAME = "virtinv.yaml"

DEFAULT_CONFIG = {
    "storage_listing": "all",
    "show_xml": True,
    "show_capabilities": True,
    "log_colours": False,
    "log_dates": False,
    "log_debug": False,
    "log_file": None,
}

try:
    # Define the content width to be the maximum terminal size
    MAX_CONTENT_WIDTH = get_terminal_size().columns - 1
except OSError:
    # Fall back to 80 columns if "Inappropriate ioctl for device"
    MAX_CONTENT_WIDTH = 80


class ConfigError(Exception):
    pass


def echo(config, message, newline=True, stderr=False):
    """
    Output a message with click.echo respecting our configuration
    """

    if config.get("colour", False):
        colour = True
    else:
        colour = None

    if config.get("quiet", False) and stderr:
        pass
    else:
        click_echo(message=message, color=colour, nl=newline, err=stderr)


def default_config_file():
    """
    Find the configuration file to use when none was given on the command line
    """

    if environ.get("VIRTINV_CONFIG", None):
        return environ["VIRTINV_CONFIG"]

    home_dir = environ.get("HOME", None)
    if home_dir:
        return f"{home_dir}/.config/virtinv/{DEFAULT_CONFIG_FILENAME}"

    return None


def read_config_from_yaml(cfgfile):
    """
    Read the report and log settings from a YAML configuration file
    """

    try:
        with open(cfgfile) as fh:
            raw_config = yload(fh, Loader=SafeLoader)
    except (OSError, YAMLError) as e:
        raise ConfigError(f'Failed to read configuration file "{cfgfile}": {e}')

    if raw_config is None:
        raw_config = dict()
    if not isinstance(raw_config, dict):
        raise ConfigError(f'Configuration file "{cfgfile}" is not a mapping')

    report_config = raw_config.get("report", None) or dict()
    log_config = raw_config.get("log", None) or dict()

    file_config = dict()
    for key in ["storage_listing", "show_xml", "show_capabilities"]:
        if key in report_config:
            file_config[key] = report_config[key]
    for key in ["colours", "dates", "debug", "file"]:
        if key in log_config:
            file_config[f"log_{key}"] = log_config[key]

    if file_config.get("storage_listing", "all") not in ["names", "handles", "all"]:
        raise ConfigError(
            f'Invalid storage_listing "{file_config["storage_listing"]}" in "{cfgfile}"'
        )

    return file_config


def get_config(cfgfile=None):
    """
    Load the configuration, starting from the defaults and applying a config file.
    An explicitly-given file must exist; the default file is optional.
    """

    config = dict(DEFAULT_CONFIG)

    if cfgfile is not None:
        if not path.isfile(cfgfile):
            raise ConfigError(f'Configuration file "{cfgfile}" does not exist')
    else:
        cfgfile = default_config_file()
        if cfgfile is None or not path.isfile(cfgfile):
            return config

    config.update(read_config_from_yaml(cfgfile))
    config["cfgfile"] = cfgfile

    return config
