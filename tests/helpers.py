import socket
import threading


def recv_request(sock: socket.socket) -> bytes:
    """Reads one request: the header block plus Content-Length body bytes."""
    data = b""
    while b"\r\n\r\n" not in data:
        chunk = sock.recv(1024)
        if not chunk:
            return data
        data += chunk

    head, _, body = data.partition(b"\r\n\r\n")
    length = 0
    for line in head.split(b"\r\n")[1:]:
        key, _, value = line.partition(b":")
        if key.strip().lower() == b"content-length":
            length = int(value.strip())

    while len(body) < length:
        chunk = sock.recv(1024)
        if not chunk:
            break
        body += chunk
    return head + b"\r\n\r\n" + body


class ServerFixture:
    def __init__(self, handler, connections: int = 1):
        self._handler = handler
        self._connections = connections
        self._should_stop = threading.Event()
        self.listener_sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.listener_sock.bind(("127.0.0.1", 0))
        self.port = self.listener_sock.getsockname()[1]
        self.thread = threading.Thread(target=self._accept_loop)

    def url(self, path: str = "/") -> str:
        return f"http://127.0.0.1:{self.port}{path}"

    def start(self):
        self.listener_sock.listen()
        self.thread.start()

    def stop(self):
        if not self._should_stop.is_set():
            self._should_stop.set()
            # Connect to unblock the accept() call
            try:
                socket.create_connection(("127.0.0.1", self.port), timeout=0.1).close()
            except OSError:
                pass
            self.thread.join(timeout=2)
            self.listener_sock.close()

    def _accept_loop(self):
        for _ in range(self._connections):
            try:
                client_sock, _ = self.listener_sock.accept()
            except OSError:
                return
            with client_sock:
                if self._should_stop.is_set():
                    return
                if self._handler:
                    try:
                        self._handler(client_sock)
                    except OSError:
                        pass
