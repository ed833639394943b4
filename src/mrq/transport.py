from typing import Protocol


class Transport(Protocol):
    """
    A duplex byte stream to one host.

    Implementations translate OS failures into TransportError subclasses.
    A timeout given at construction bounds connect, every write and every
    read; expiry raises SocketTimeoutError.
    """

    def connect(self, host: str, port: int) -> None:
        ...

    def write(self, data: bytes) -> int:
        """Sends all of ``data`` and returns its length."""
        ...

    def read_into(self, buffer: bytearray | memoryview) -> int:
        """Reads at most ``len(buffer)`` bytes. Zero means the peer closed."""
        ...

    def close(self) -> None:
        ...
