import socket
import threading
import time

import pytest
import uvicorn

from echo_app import app
from helpers import ServerFixture


@pytest.fixture
def server_factory():
    servers = []

    def _factory(handler, connections: int = 1) -> ServerFixture:
        server = ServerFixture(handler, connections)
        server.start()
        servers.append(server)
        return server

    yield _factory

    for server in servers:
        server.stop()


@pytest.fixture(scope="session")
def app_server():
    """Serves echo_app with uvicorn on a free port for the whole session."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]

    server = uvicorn.Server(uvicorn.Config(app, log_level="warning"))
    thread = threading.Thread(target=server.run, kwargs={"sockets": [sock]}, daemon=True)
    thread.start()

    deadline = time.monotonic() + 10
    while not server.started:
        if time.monotonic() > deadline or not thread.is_alive():
            pytest.fail("uvicorn test server did not start")
        time.sleep(0.01)

    yield f"http://127.0.0.1:{port}"

    server.should_exit = True
    thread.join(timeout=5)
    sock.close()
