import pytest

from fakes import FakeConnection, FakeDomain, FakeLibvirt, FakeStoragePool

from virtinv.lib import lazy_imports
from virtinv.lib.log import Logger
from virtinv.lib.session import Handle, Session


@pytest.fixture()
def fake_libvirt(monkeypatch):
    fake = FakeLibvirt()
    monkeypatch.setattr(lazy_imports.libvirt, "_module", fake)
    return fake


@pytest.fixture()
def logger():
    return Logger({"log_colours": False, "log_dates": False, "log_debug": True})


@pytest.fixture()
def inventory_conn():
    return FakeConnection(
        domains=[
            FakeDomain("web01", active=True),
            FakeDomain("db01", active=False),
            FakeDomain("mail01", active=True),
        ],
        pools=[FakeStoragePool("default"), FakeStoragePool("images")],
        networks=["default", "isolated"],
    )


@pytest.fixture()
def session(fake_libvirt, inventory_conn, logger):
    return Session("qemu:///system", inventory_conn, logger=logger)


@pytest.fixture()
def release_counter(monkeypatch):
    """Count Handle.release calls per handle kind."""

    counts = {}
    original = Handle.release

    def counting_release(self):
        counts[self.kind] = counts.get(self.kind, 0) + 1
        return original(self)

    monkeypatch.setattr(Handle, "release", counting_release)
    return counts
