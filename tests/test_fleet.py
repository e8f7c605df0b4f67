# tests/test_fleet.py
"""Tests for per-dictionary listeners and port allocation."""

import socket

import pytest
from fastapi.testclient import TestClient

from dictfleet.core.bundle import Bundle, scan
from dictfleet.core.engine import FileLookupEngine
from dictfleet.core.errors import BindError, DiscoveryError
from dictfleet.server.fleet import create_fleet_app, launch
from dictfleet.server.listener import bind_socket


class RecordingBind:
    """Binds ephemeral ports but remembers what was asked for."""

    def __init__(self, fail_at: int | None = None):
        self.requested = []
        self.sockets = []
        self.fail_at = fail_at

    def __call__(self, host, port):
        self.requested.append(port)
        if port == self.fail_at:
            raise BindError(f"cannot listen on {host}:{port}")
        sock = bind_socket(host, 0)
        self.sockets.append(sock)
        return sock

    def close(self):
        for sock in self.sockets:
            sock.close()


@pytest.fixture
def bundles(tmp_path):
    result = []
    for name in ["a", "b", "c", "d"]:
        directory = tmp_path / name
        directory.mkdir()
        (directory / f"{name}.mdx").write_bytes(b"")
        result.append(Bundle(str(directory), f"{name}.mdx"))
    return result


class TestLaunch:
    def test_ports_are_sequential(self, bundles):
        bind = RecordingBind()
        try:
            handles = launch(bundles, 44000, bind=bind)
        finally:
            bind.close()

        assert bind.requested == [44000, 44001, 44002, 44003]
        assert [h.port for h in handles] == [44000, 44001, 44002, 44003]
        assert [h.bundle for h in handles] == bundles
        assert [h.engine.describe()["port"] for h in handles] == [44000, 44001, 44002, 44003]

    def test_one_listener_per_bundle(self, bundles):
        bind = RecordingBind()
        try:
            handles = launch(bundles, 50000, bind=bind)
        finally:
            bind.close()

        assert len({id(h.listener) for h in handles}) == len(bundles)
        assert all(isinstance(h.engine, FileLookupEngine) for h in handles)

    def test_custom_engine_factory(self, bundles):
        seen = []

        def factory(bundle, port):
            seen.append((bundle.main_file, port))
            return FileLookupEngine(bundle, port)

        bind = RecordingBind()
        try:
            launch(bundles[:2], 44000, engine_factory=factory, bind=bind)
        finally:
            bind.close()

        assert seen == [("a.mdx", 44000), ("b.mdx", 44001)]

    def test_empty_registry_binds_nothing(self):
        bind = RecordingBind()

        with pytest.raises(DiscoveryError):
            launch([], 44000, bind=bind)

        assert bind.requested == []

    def test_bind_failure_aborts_launch(self, bundles):
        bind = RecordingBind(fail_at=44002)

        with pytest.raises(BindError):
            launch(bundles, 44000, bind=bind)

        assert bind.requested == [44000, 44001, 44002]
        assert all(sock.fileno() == -1 for sock in bind.sockets)

    def test_port_in_use(self, bundles):
        blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        blocker.bind(("127.0.0.1", 0))
        blocker.listen()
        try:
            port = blocker.getsockname()[1]
            with pytest.raises(BindError) as exc:
                launch(bundles[:1], port)
        finally:
            blocker.close()

        assert exc.value.exit_code == 4
        assert str(port) in exc.value.message


class TestFleetApp:
    @pytest.fixture
    def client(self, two_tier):
        bundle = [b for b in scan(two_tier) if b.main_file == "oaldpe.mdx"][0]
        return TestClient(create_fleet_app(FileLookupEngine(bundle, 44001)))

    def test_lookup_serves_bundle_file(self, client):
        r = client.get("/oaldpe.css")
        assert r.status_code == 200
        assert r.text == "body { color: black; }"
        assert r.headers["content-type"].startswith("text/css")

    def test_unknown_extension_is_octet_stream(self, client):
        r = client.get("/oaldpe.mdd")
        assert r.status_code == 200
        assert r.headers["content-type"] == "application/octet-stream"

    def test_lookup_missing(self, client):
        assert client.get("/nope.css").status_code == 404
        assert client.get("/").status_code == 404

    def test_lookup_does_not_descend(self, client):
        assert client.get("/sub/oaldpe.css").status_code == 404

    def test_weak_etag_and_304(self, client):
        r = client.get("/oaldpe.css")
        etag = r.headers["etag"]
        assert etag.startswith("W/")

        r = client.get("/oaldpe.css", headers={"If-None-Match": etag})
        assert r.status_code == 304

    def test_any_path_reaches_engine(self, two_tier):
        calls = []

        class Echo(FileLookupEngine):
            async def lookup(self, request):
                calls.append(request.url.path)
                return {"path": request.url.path}

        bundle = scan(two_tier)[0]
        client = TestClient(create_fleet_app(Echo(bundle, 44000)))

        r = client.get("/hello/world")

        assert r.json() == {"path": "/hello/world"}
        assert calls == ["/hello/world"]


def test_engine_failure_releases_its_socket(bundles):
    bind = RecordingBind()

    def factory(bundle, port):
        if port == 44001:
            raise RuntimeError("cannot decode dictionary")
        return FileLookupEngine(bundle, port)

    with pytest.raises(RuntimeError):
        launch(bundles, 44000, engine_factory=factory, bind=bind)

    assert bind.requested == [44000, 44001]
    assert all(sock.fileno() == -1 for sock in bind.sockets)
