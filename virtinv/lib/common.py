#!/usr/bin/env python3

# common.py - virtinv function library, Common functions
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


def kib_to_gib(size_kib):
    """
    Convert a size in KiB to GiB (KiB -> MiB -> GiB)
    """

    return size_kib / 1024 / 1024


def mib_to_gib(size_mib):
    return size_mib / 1024


def bytes_to_gib(size_bytes):
    return kib_to_gib(size_bytes / 1024)


def format_gib(size_gib):
    """
    Format a GiB value the way all report memory lines display it, e.g. "2.00G"
    """

    if size_gib is None:
        return "N/A"
    return f"{size_gib:.2f}G"


def format_yes_no(value):
    if value is None:
        return "N/A"
    return "yes" if value else "no"


def format_optional(value):
    if value is None:
        return "N/A"
    return value


def error_message(error):
    """
    Extract the remote error text from a libvirtError (or any other exception)
    """

    get_message = getattr(error, "get_error_message", None)
    if get_message is not None:
        message = get_message()
        if message:
            return message
    return str(error)
