#!/usr/bin/env python3

# session.py - virtinv function library, libvirt session and handle management
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

from virtinv.lib.common import error_message
from virtinv.lib.lazy_imports import libvirt


class SessionError(Exception):
    """
    The hypervisor session could not be opened
    """

    def __init__(self, uri, detail=None):
        self.uri = uri
        self.detail = detail
        message = f'Failed to connect to hypervisor at "{uri}"'
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class HandleError(Exception):
    pass


class Handle(object):
    """
    A single-owner reference to a remote object (domain, storage pool) obtained from a session.
    The reference must be released exactly once; use it as a context manager to guarantee that.
    """

    def __init__(self, session, obj, kind):
        self.session = session
        self.obj = obj
        self.kind = kind
        self.released = False
        session.handles.append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if not self.released:
            self.release()

    def __getattr__(self, attr):
        # Pass through to the remote object while we still hold it
        if attr == "obj" or self.__dict__.get("obj") is None:
            raise HandleError(f"{self.kind} handle has already been released")
        return getattr(self.obj, attr)

    def release(self):
        if self.released:
            raise HandleError(f"{self.kind} handle released twice")
        # Dropping our reference lets the binding free the remote object
        self.obj = None
        self.released = True
        self.session.handles.remove(self)


class HandleList(object):
    """
    The container returned by an enumeration call; releasing it releases every
    element that the consumer did not already release
    """

    def __init__(self, handles):
        self.handles = handles

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()

    def __iter__(self):
        return iter(self.handles)

    def __len__(self):
        return len(self.handles)

    def release(self):
        for handle in self.handles:
            if not handle.released:
                handle.release()


class Session(object):
    """
    An authenticated connection to one hypervisor endpoint
    """

    def __init__(self, uri, conn, logger=None):
        self.uri = uri
        self.conn = conn
        self.logger = logger
        self.handles = list()

    @classmethod
    def open(cls, uri, credentials, logger=None, flags=0):
        if logger is not None:
            logger.out(f"Connecting to hypervisor at {uri}", state="d")

        try:
            conn = libvirt.openAuth(uri, credentials.auth(), flags)
        except libvirt.libvirtError as e:
            if credentials.error is not None:
                raise SessionError(uri, str(credentials.error))
            raise SessionError(uri, error_message(e))

        if conn is None:
            raise SessionError(uri, credentials.error and str(credentials.error))

        return cls(uri, conn, logger=logger)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def closed(self):
        return self.conn is None

    def close(self):
        if self.conn is None:
            return

        for handle in list(self.handles):
            if self.logger is not None:
                self.logger.out(
                    f"Releasing leaked {handle.kind} handle on close", state="w"
                )
            handle.release()

        conn = self.conn
        self.conn = None
        conn.close()

        if self.logger is not None:
            self.logger.out(f"Closed connection to {self.uri}", state="d")

    def list_all_domains(self, flags):
        return HandleList(
            [Handle(self, dom, "domain") for dom in self.conn.listAllDomains(flags)]
        )

    def list_all_storage_pools(self, limit, flags=0):
        """
        List storage pool handles, bound to the pool count obtained beforehand.
        A shorter result is fine; handles beyond the limit are released unread.
        """

        handles = [
            Handle(self, pool, "storage pool")
            for pool in self.conn.listAllStoragePools(flags)
        ]
        for handle in handles[limit:]:
            handle.release()
        return HandleList(handles[:limit])

    def lookup_domain(self, name):
        return Handle(self, self.conn.lookupByName(name), "domain")
