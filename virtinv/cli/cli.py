#!/usr/bin/env python3

# cli.py - virtinv Click CLI main library
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

from functools import wraps
from sys import exit

from virtinv.cli.helpers import (
    MAX_CONTENT_WIDTH,
    VERSION,
    ConfigError,
    echo,
    get_config,
)
from virtinv.cli.formatters import (
    cli_inventory_format_pretty,
    cli_inventory_format_json,
    cli_inventory_format_json_pretty,
)
from virtinv.lib.auth import Credentials
from virtinv.lib.inventory import STORAGE_LISTING_MODES, collect_inventory
from virtinv.lib.log import Logger
from virtinv.lib.session import Session, SessionError

import click


###############################################################################
# Context handler, globals
###############################################################################


CONTEXT_SETTINGS = dict(
    help_option_names=["-h", "--help"], max_content_width=MAX_CONTENT_WIDTH
)

CLI_CONFIG = dict()


###############################################################################
# Local helper functions
###############################################################################


def finish(success=True, data=None, formatter=None):
    """
    Output data to the terminal and exit based on code (T/F or integer code)
    """

    if data is not None:
        if formatter is not None:
            echo(CLI_CONFIG, formatter(CLI_CONFIG, data))
        else:
            # Bare messages on failure are diagnostics
            echo(CLI_CONFIG, data, stderr=not success)

    # Allow passing raw values if not a bool
    if isinstance(success, bool):
        if success:
            exit(0)
        else:
            exit(1)
    else:
        exit(success)


def version(ctx, param, value):
    """
    Show the version of the CLI client
    """

    if not value or ctx.resilient_parsing:
        return

    echo(CLI_CONFIG, f"virtinv hypervisor inventory tool version {VERSION}")
    ctx.exit()


###############################################################################
# Click command decorators
###############################################################################


def format_opt(formats, default_format="pretty"):
    """
    Click Option Decorator with argument:
    Wraps a Click command that can output in multiple formats; {formats} defines a dictionary of
    formatting functions for the command with keys as valid format types.
    Injects a "format_function" argument into the function for this purpose.
    """

    if default_format not in formats.keys():
        echo(CLI_CONFIG, f"Fatal code error: {default_format} not in {formats.keys()}")
        exit(255)

    def format_decorator(function):
        @click.option(
            "-f",
            "--format",
            "output_format",
            default=default_format,
            show_default=True,
            type=click.Choice(formats.keys()),
            help="Output information in this format.",
        )
        @wraps(function)
        def format_action(*args, **kwargs):
            kwargs["format_function"] = formats[kwargs["output_format"]]

            del kwargs["output_format"]

            return function(*args, **kwargs)

        return format_action

    return format_decorator


###############################################################################
# > virtinv
###############################################################################
@click.command(name="virtinv", context_settings=CONTEXT_SETTINGS)
@click.argument("username")
@click.argument("password")
@click.argument("uri")
@click.argument("domain", default=None, required=False)
@click.option(
    "-c",
    "--config",
    "cfgfile",
    default=None,
    help="Read report and log settings from this YAML file.",
)
@format_opt(
    {
        "pretty": cli_inventory_format_pretty,
        "json": cli_inventory_format_json,
        "json-pretty": cli_inventory_format_json_pretty,
    }
)
@click.option(
    "--xml/--no-xml",
    "show_xml",
    default=None,
    help="Show or hide the XML description of DOMAIN [default: show].",
)
@click.option(
    "-s",
    "--storage-listing",
    "storage_listing",
    default=None,
    type=click.Choice(STORAGE_LISTING_MODES),
    help="List storage pools by name, by pool handle, or both [default: all].",
)
@click.option(
    "-v",
    "--debug",
    "_debug",
    envvar="VIRTINV_DEBUG",
    is_flag=True,
    default=False,
    help="Additional debug details.",
)
@click.option(
    "-q",
    "--quiet",
    "_quiet",
    envvar="VIRTINV_QUIET",
    is_flag=True,
    default=False,
    help="Suppress diagnostics sent to stderr.",
)
@click.option(
    "--colour",
    "--color",
    "_colour",
    envvar="VIRTINV_COLOUR",
    is_flag=True,
    default=False,
    help="Force colourized output.",
)
@click.option(
    "--version",
    is_flag=True,
    callback=version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
def cli(
    username,
    password,
    uri,
    domain,
    cfgfile,
    show_xml,
    storage_listing,
    _debug,
    _quiet,
    _colour,
    format_function,
):
    """
    Connect to the hypervisor at URI as USERNAME/PASSWORD and print an inventory report of
    the host, its storage pools, networks and domains. If DOMAIN is given, also print a
    detailed report for that domain.

    Environment variables:

      "VIRTINV_CONFIG": Read settings from this file instead of "~/.config/virtinv/virtinv.yaml"

      "VIRTINV_DEBUG": Enable additional debugging details instead of using --debug/-v

      "VIRTINV_QUIET": Suppress stderr output instead of using --quiet/-q

      "VIRTINV_COLOUR": Force colour on the output even if Click determines it is not a console
    """

    global CLI_CONFIG
    CLI_CONFIG["quiet"] = _quiet

    try:
        config = get_config(cfgfile)
    except ConfigError as e:
        finish(False, f"ERROR: {e}")

    config["quiet"] = _quiet
    config["colour"] = _colour
    if _colour:
        config["log_colours"] = True
    if _debug:
        config["log_debug"] = True
    if show_xml is not None:
        config["show_xml"] = show_xml
    if storage_listing is not None:
        config["storage_listing"] = storage_listing
    CLI_CONFIG = config

    try:
        logger = Logger(CLI_CONFIG)
    except OSError as e:
        finish(False, f'ERROR: Failed to open log file "{CLI_CONFIG["log_file"]}": {e}')

    credentials = Credentials(username, password, logger=logger)

    try:
        try:
            session = Session.open(uri, credentials, logger=logger)
        except SessionError as e:
            finish(False, f"ERROR: {e}")

        with session:
            success, data = collect_inventory(
                session, logger, CLI_CONFIG, domain_name=domain
            )
    finally:
        logger.terminate()

    finish(success, data, format_function)
