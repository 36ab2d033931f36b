from abc import ABC, abstractmethod

from ..models.http import HTTPHeaders

# Status value meaning "not set yet"; never a valid HTTP status.
STATUS_UNSET = 0
STATUS_OK = 200


class ResponseWriter(ABC):
    """The response-writing capability handed to handler code."""

    @property
    @abstractmethod
    def headers(self) -> HTTPHeaders:
        """Mutable multi-value header mapping of the response."""
        pass

    @abstractmethod
    def write_header(self, status: int) -> None:
        pass

    @abstractmethod
    def write(self, data: bytes) -> int:
        pass


class ResponseRecorder(ResponseWriter):
    """
    In-memory ResponseWriter.

    Accumulates status, headers and body instead of sending them. One recorder
    serves exactly one invocation. The body size is not limited here; the
    gateway enforces its own payload limit.
    """

    def __init__(self):
        self.status = STATUS_UNSET
        self._headers = HTTPHeaders()
        self._body = bytearray()

    @property
    def headers(self) -> HTTPHeaders:
        return self._headers

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, status: int) -> None:
        self.status = status

    def write(self, data: bytes) -> int:
        if self.status == STATUS_UNSET:
            self.status = STATUS_OK
        self._body.extend(data)
        return len(data)
