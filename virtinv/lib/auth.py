#!/usr/bin/env python3

# auth.py - virtinv function library, libvirt credential negotiation
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

from virtinv.lib.lazy_imports import libvirt


# Index of the result slot in a libvirt credential entry
# [type, prompt, challenge, defresult, result]
CRED_RESULT = 4


def credential_types():
    """
    The credential kinds advertised to the hypervisor, in negotiation order
    """

    return [
        libvirt.VIR_CRED_AUTHNAME,  # ESX expects AUTHNAME
        libvirt.VIR_CRED_PASSPHRASE,
        libvirt.VIR_CRED_USERNAME,
    ]


class CredentialError(Exception):
    """
    Base class for credential negotiation failures
    """

    def __init__(self, kind, message):
        self.kind = kind
        super().__init__(message)


class EmptyUsername(CredentialError):
    def __init__(self, kind):
        super().__init__(kind, "invalid user: no username was supplied")


class EmptyPassword(CredentialError):
    def __init__(self, kind):
        super().__init__(kind, "invalid pass: no password was supplied")


class UnsupportedCredentialKind(CredentialError):
    def __init__(self, kind):
        super().__init__(kind, f"Cred type not found: {kind}")


class Credentials(object):
    """
    A username/password pair supplied to libvirt on demand during connection
    """

    def __init__(self, username, password, logger=None):
        self.username = username
        self.password = password
        self.logger = logger
        self.error = None

    def resolve(self, kind):
        if kind in [libvirt.VIR_CRED_USERNAME, libvirt.VIR_CRED_AUTHNAME]:
            if not self.username:
                raise EmptyUsername(kind)
            return self.username
        elif kind == libvirt.VIR_CRED_PASSPHRASE:
            if not self.password:
                raise EmptyPassword(kind)
            return self.password
        else:
            raise UnsupportedCredentialKind(kind)

    def callback(self, credentials, user_data):
        """
        libvirt authentication callback; returns 0 on success and -1 to fail the negotiation
        """

        for credential in credentials:
            try:
                credential[CRED_RESULT] = self.resolve(credential[0])
            except UnsupportedCredentialKind as e:
                # Unknown kinds are ignored; the hypervisor decides if that is fatal
                self._log(str(e), state="w")
            except CredentialError as e:
                self._log(str(e), state="e")
                self.error = e
                return -1

        return 0

    def auth(self):
        return [credential_types(), self.callback, None]

    def _log(self, message, state):
        if self.logger is not None:
            self.logger.out(message, state=state)
