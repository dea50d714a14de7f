#!/usr/bin/env python3

# formatters.py - virtinv Click CLI output formatters library
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

from json import dumps as jdumps

from virtinv.lib.common import format_gib, format_optional, format_yes_no
from virtinv.lib.lazy_imports import etree


# Define colour values for use in formatters
ansii = {
    "green": "\033[92m",
    "yellow": "\033[93m",
    "purple": "\033[95m",
    "end": "\033[0m",
}


def label(text, indent=""):
    return f"{indent}{ansii['purple']}{text}{ansii['end']}"


def format_xml(xml):
    """
    Pretty-print an XML document, falling back to the raw text if it does not parse
    """

    try:
        parser = etree.XMLParser(remove_blank_text=True)
        xml_data = etree.fromstring(xml.encode("utf8"), parser)
        return etree.tostring(xml_data, pretty_print=True).decode("utf8").strip()
    except etree.XMLSyntaxError:
        return xml.strip()


def format_connection(data):
    output = list()

    if "capabilities" in data:
        capabilities = data["capabilities"]
        if capabilities is not None:
            capabilities = capabilities.strip()
        output.append(f"{label('Capabilities:')} {format_optional(capabilities)}")
    output.append(f"{label('Connected at')} {format_optional(data.get('uri'))}")
    output.append(f"{label('Hostname:')} {format_optional(data.get('hostname'))}")
    output.append(
        f"{label('Virtualization Type:')} {format_optional(data.get('type'))}"
    )
    output.append(f"{label('Driver Version:')} {format_optional(data.get('version'))}")
    output.append(
        f"{label('LibVirt Version:')} {format_optional(data.get('lib_version'))}"
    )
    if "max_vcpus" in data:
        output.append(f"{label('Max vCPUs:')} {data['max_vcpus']}")
    output.append(f"{label('Node Free Memory:')} {format_gib(data.get('free_memory'))}")
    output.append(
        f"{label('Connection is encrypted:')} {format_optional(data.get('encrypted'))}"
    )
    output.append(
        f"{label('Connection is secure:')} {format_optional(data.get('secure'))}"
    )

    return output


def format_storage(data):
    output = list()

    storage = data.get("storage", None)
    if storage is None:
        return output

    output.append(f"{label('Number of Storage Pools:')} {storage['count']}")
    if storage.get("names"):
        output.append(label("Storage pools by name:"))
        for name in storage["names"]:
            output.append(f"\t{name}")
    if storage.get("pools"):
        output.append(label("Storage names:"))
        for name in storage["pools"]:
            output.append(f"\t{name}")

    return output


def format_networks(data):
    output = list()

    networks = data.get("networks", None)
    if networks is None:
        return output

    output.append(f"{label('Networks:')} {networks['count']}")
    if networks.get("names"):
        output.append(label("Networks by name:"))
        for name in networks["names"]:
            output.append(f"\t{name}")

    return output


def format_node(data):
    output = list()

    indent = "\t"
    output.append(label("Node Info:"))

    node = data.get("node", None)
    if node is not None:
        output.append(f"{label('Model:', indent)} {node['model']}")
        output.append(f"{label('Memory:', indent)} {format_gib(node['memory'])}")
        output.append(f"{label('CPUs:', indent)} {node['cpus']}")

    security = data.get("security", None)
    if security is not None:
        output.append(f"{label('Security Model:', indent)} {security['model']}")
        output.append(f"{label('Security DOI:', indent)} {security['doi']}")

    output.append(
        f"{label('Active Domains:', indent)} {format_optional(data.get('domains_active'))}"
    )
    output.append(
        f"{label('Inactive Domains:', indent)} {format_optional(data.get('domains_inactive'))}"
    )

    return output


def format_domain_list(data):
    output = list()

    domains = data.get("domains", None)
    if not domains:
        return output

    output.append(label("Domains:"))
    for domain in domains:
        if domain["active"] is None:
            state = f"{ansii['yellow']}Unknown{ansii['end']}"
        elif domain["active"]:
            state = f"{ansii['green']}Active{ansii['end']}"
        else:
            state = "Non-active"
        output.append(f"\t{format_optional(domain['name']):>8}: {state}")

    return output


def format_domain_details(data):
    output = list()

    details = data.get("domain", None)
    if details is None:
        return output

    indent = "\t"
    output.append(label(f"Domain {details['name']} Info:"))
    if "max_vcpus" in details:
        output.append(f"{label('Max vCPUs:', indent)} {details['max_vcpus']}")
    output.append(f"{label('Is running:', indent)} {format_yes_no(details['running'])}")
    output.append(
        f"{label('Max Memory Allowed:', indent)} {format_gib(details['max_memory'])}"
    )
    output.append(f"{label('Used memory:', indent)} {format_gib(details['memory'])}")
    output.append(f"{label('Number of virtual CPUs:', indent)} {details['vcpus']}")
    output.append(f"{label('CPU time (nanoseconds):', indent)} {details['cpu_time']}")
    if "autostart" in details:
        output.append(
            f"{label('Autostart:', indent)} {format_yes_no(details['autostart'])}"
        )
    if "os_type" in details:
        output.append(f"{label('OS type:', indent)} {details['os_type']}")
    if "xml" in details:
        output.append(label("Domain XML Description:"))
        output.append(format_xml(details["xml"]))

    return output


def cli_inventory_format_pretty(CLI_CONFIG, data):
    """
    Pretty format the full output of the inventory report
    """

    output = list()
    output += format_connection(data)
    output += format_storage(data)
    output += format_networks(data)
    output += format_node(data)
    output += format_domain_list(data)
    output += format_domain_details(data)

    return "\n".join(output)


def cli_inventory_format_json(CLI_CONFIG, data):
    return jdumps(data)


def cli_inventory_format_json_pretty(CLI_CONFIG, data):
    return jdumps(data, indent=2)
