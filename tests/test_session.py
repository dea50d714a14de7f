"""Tests for session opening, closing and handle bookkeeping."""

import pytest

from fakes import FakeConnection, FakeDomain, FakeStoragePool, libvirtError

from virtinv.lib.auth import Credentials
from virtinv.lib.session import HandleError, Session, SessionError


def test_open_supplies_credentials(fake_libvirt):
    conn = FakeConnection()
    fake_libvirt.connection = conn

    session = Session.open("esx://host/?no_verify=1", Credentials("root", "pw"))

    assert session.conn is conn
    assert session.uri == "esx://host/?no_verify=1"
    assert fake_libvirt.open_calls == ["esx://host/?no_verify=1"]
    assert fake_libvirt.supplied == {2: "root", 5: "pw"}


def test_open_failure_names_target(fake_libvirt):
    fake_libvirt.connection = None

    with pytest.raises(SessionError) as excinfo:
        Session.open("qemu+tcp://nowhere/system", Credentials("root", "pw"))

    assert "qemu+tcp://nowhere/system" in str(excinfo.value)
    assert "unable to connect" in str(excinfo.value)
    assert fake_libvirt.open_calls == ["qemu+tcp://nowhere/system"]


def test_open_failure_reports_credential_error(fake_libvirt):
    fake_libvirt.connection = FakeConnection()

    with pytest.raises(SessionError) as excinfo:
        Session.open("qemu:///system", Credentials("", "pw"))

    assert "invalid user" in str(excinfo.value)


def test_close_is_exactly_once(fake_libvirt):
    conn = FakeConnection()
    session = Session("qemu:///system", conn)

    with session:
        pass
    session.close()

    assert conn.close_count == 1
    assert session.closed


def test_handle_released_exactly_once(fake_libvirt):
    conn = FakeConnection(domains=[FakeDomain("web01")])
    session = Session("qemu:///system", conn)

    handle = session.lookup_domain("web01")
    assert handle.name() == "web01"
    assert session.handles == [handle]

    handle.release()
    assert session.handles == []
    with pytest.raises(HandleError):
        handle.release()
    with pytest.raises(HandleError):
        handle.name()


def test_handle_list_releases_remaining_on_error(fake_libvirt, release_counter):
    domains = [FakeDomain("a"), FakeDomain("b", fail=["name"]), FakeDomain("c")]
    session = Session("qemu:///system", FakeConnection(domains=domains))

    with pytest.raises(libvirtError):
        with session.list_all_domains(3) as handles:
            for handle in handles:
                with handle:
                    handle.name()

    assert release_counter == {"domain": 3}
    assert session.handles == []


@pytest.mark.parametrize("count", [0, 1, 5])
def test_handle_list_release_count(fake_libvirt, release_counter, count):
    domains = [FakeDomain(f"vm{i}") for i in range(count)]
    session = Session("qemu:///system", FakeConnection(domains=domains))

    with session.list_all_domains(3) as handles:
        assert len(handles) == count
        for handle in handles:
            with handle:
                handle.isActive()

    assert release_counter.get("domain", 0) == count
    assert session.handles == []


def test_storage_pool_listing_bound_to_count(fake_libvirt, release_counter):
    pools = [FakeStoragePool("default"), FakeStoragePool("images"), FakeStoragePool("iso")]
    session = Session("qemu:///system", FakeConnection(pools=pools))

    with session.list_all_storage_pools(2) as handles:
        names = [handle.name() for handle in handles]

    assert names == ["default", "images"]
    assert release_counter == {"storage pool": 3}
    assert session.handles == []


def test_storage_pool_listing_shorter_than_count(fake_libvirt):
    session = Session("qemu:///system", FakeConnection(pools=[FakeStoragePool("default")]))

    with session.list_all_storage_pools(4) as handles:
        assert len(handles) == 1


def test_close_releases_leaked_handles(fake_libvirt, logger, capsys):
    conn = FakeConnection(domains=[FakeDomain("web01")])
    session = Session("qemu:///system", conn, logger=logger)
    session.lookup_domain("web01")

    session.close()

    assert session.handles == []
    assert conn.close_count == 1
    assert "Releasing leaked domain handle" in capsys.readouterr().err
