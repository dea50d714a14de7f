#!/usr/bin/env python3

# inventory.py - virtinv function library, hypervisor inventory collection
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

from virtinv.lib.common import bytes_to_gib, error_message, kib_to_gib, mib_to_gib
from virtinv.lib.lazy_imports import libvirt


STORAGE_LISTING_MODES = ["names", "handles", "all"]


def fetch(logger, description, function, *args):
    """
    Run a single remote query; a libvirt failure is logged and returns None
    """

    try:
        return function(*args)
    except libvirt.libvirtError as e:
        logger.out(f"Could not get {description}: {error_message(e)}", state="w")
        return None


#
# Connection and host information
#
def collect_connection(session, logger, config, data):
    conn = session.conn

    if config.get("show_capabilities", True):
        data["capabilities"] = fetch(logger, "capabilities", conn.getCapabilities)
    data["uri"] = fetch(logger, "connection URI", conn.getURI)
    data["hostname"] = fetch(logger, "hostname", conn.getHostname)
    data["type"] = fetch(logger, "virtualization type", conn.getType)
    data["version"] = fetch(logger, "driver version", conn.getVersion)
    data["lib_version"] = fetch(logger, "library version", conn.getLibVersion)

    # -1 means the driver cannot tell us
    max_vcpus = fetch(logger, "maximum vCPUs", conn.getMaxVcpus, None)
    if max_vcpus is not None and max_vcpus != -1:
        data["max_vcpus"] = max_vcpus

    # The binding reports free memory in bytes
    free_memory = fetch(logger, "node free memory", conn.getFreeMemory)
    data["free_memory"] = bytes_to_gib(free_memory) if free_memory is not None else None

    data["encrypted"] = fetch(logger, "encryption state", conn.isEncrypted)
    data["secure"] = fetch(logger, "security state", conn.isSecure)


def collect_storage(session, logger, config, data):
    """
    Storage pools, listed by name and/or through pool handles.
    The section is skipped entirely when the driver cannot count pools.
    """

    conn = session.conn
    listing = config.get("storage_listing", "all")

    count = fetch(logger, "storage pool count", conn.numOfStoragePools)
    if count is None:
        return

    storage = {"count": count, "names": None, "pools": None}
    data["storage"] = storage
    if count <= 0:
        return

    if listing in ["names", "all"]:
        names = fetch(logger, "storage pool names", conn.listStoragePools)
        if names is not None and len(names) == count:
            storage["names"] = list(names)

    if listing in ["handles", "all"]:
        try:
            pools = session.list_all_storage_pools(count)
        except libvirt.libvirtError as e:
            logger.out(f"Could not list storage pools: {error_message(e)}", state="w")
            return

        storage["pools"] = list()
        with pools:
            for pool in pools:
                with pool:
                    name = fetch(logger, "storage pool name", pool.name)
                    if name is not None:
                        storage["pools"].append(name)


def collect_networks(session, logger, config, data):
    conn = session.conn

    count = fetch(logger, "network count", conn.numOfNetworks)
    if count is None:
        return

    networks = {"count": count, "names": None}
    data["networks"] = networks
    if count <= 0:
        return

    names = fetch(logger, "network names", conn.listNetworks)
    if names is not None and len(names) == count:
        networks["names"] = list(names)


def collect_node(session, logger, config, data):
    conn = session.conn

    # Never show partial or zeroed capacity details for a failed query
    node_info = fetch(logger, "node info", conn.getInfo)
    if node_info is not None:
        # [model, memory (MiB), cpus, mhz, nodes, sockets, cores, threads]
        data["node"] = {
            "model": node_info[0],
            "memory": mib_to_gib(node_info[1]),
            "cpus": node_info[2],
        }
    else:
        data["node"] = None

    security_model = fetch(logger, "security model", conn.getSecurityModel)
    if security_model is not None and security_model[0]:
        data["security"] = {"model": security_model[0], "doi": security_model[1]}
    else:
        data["security"] = None

    data["domains_active"] = fetch(logger, "active domain count", conn.numOfDomains)
    data["domains_inactive"] = fetch(
        logger, "inactive domain count", conn.numOfDefinedDomains
    )


#
# Domain information
#
def collect_domains(session, logger, config, data):
    """
    List every domain, active or inactive. Returns False if the listing failed.
    """

    flags = (
        libvirt.VIR_CONNECT_LIST_DOMAINS_ACTIVE
        | libvirt.VIR_CONNECT_LIST_DOMAINS_INACTIVE
    )

    try:
        domains = session.list_all_domains(flags)
    except libvirt.libvirtError as e:
        logger.out(f"Failed to get all domains: {error_message(e)}", state="e")
        return False

    data["domains"] = list()
    with domains:
        for dom in domains:
            with dom:
                name = fetch(logger, "domain name", dom.name)
                active = fetch(logger, f"active state of domain {name}", dom.isActive)
                data["domains"].append(
                    {
                        "name": name,
                        "active": (active == 1) if active is not None else None,
                    }
                )

    return True


def collect_domain_details(session, logger, config, domain_name):
    """
    Gather the detailed report for one domain; returns None if it is not available
    """

    try:
        dom = session.lookup_domain(domain_name)
    except libvirt.libvirtError:
        logger.out(f"Domain {domain_name} not found", state="e")
        return None

    with dom:
        try:
            # [state, maxMem (KiB), memory (KiB), nrVirtCpu, cpuTime (ns)]
            info = dom.info()
        except libvirt.libvirtError as e:
            logger.out(f"Could not get info: {error_message(e)}", state="e")
            return None

        details = {
            "name": domain_name,
            "running": info[0] == libvirt.VIR_DOMAIN_RUNNING,
            "max_memory": kib_to_gib(info[1]),
            "memory": kib_to_gib(info[2]),
            "vcpus": info[3],
            "cpu_time": info[4],
        }

        # Only valid on active domains for most drivers
        max_vcpus = fetch(logger, "domain maximum vCPUs", dom.maxVcpus)
        if max_vcpus is not None and max_vcpus != -1:
            details["max_vcpus"] = max_vcpus

        autostart = fetch(logger, "autostart flag", dom.autostart)
        if autostart is not None and autostart != -1:
            details["autostart"] = bool(autostart)

        os_type = fetch(logger, "OS type", dom.OSType)
        if os_type:
            details["os_type"] = os_type

        if config.get("show_xml", True):
            xml = fetch(logger, "XML description", dom.XMLDesc, 0)
            if xml:
                details["xml"] = xml

    return details


def collect_inventory(session, logger, config, domain_name=None):
    """
    Collect the full inventory report from an open session.
    Returns (success, data); success is False only if domain enumeration failed,
    in which case the domain sections are absent from data.
    """

    data = dict()

    collect_connection(session, logger, config, data)
    collect_storage(session, logger, config, data)
    collect_networks(session, logger, config, data)
    collect_node(session, logger, config, data)

    if not collect_domains(session, logger, config, data):
        return False, data

    if domain_name is not None:
        details = collect_domain_details(session, logger, config, domain_name)
        if details is not None:
            data["domain"] = details

    return True, data
