"""
Generic HTTP request model.

Decouples handler code from the API Gateway event shape.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, BinaryIO, List, Mapping, Optional, Tuple

from starlette.datastructures import URL, MutableHeaders

VALUE_ENCODING = "utf-8"


class HTTPHeaders(MutableHeaders):
    """
    Case-insensitive multi-value headers whose values are UTF-8 strings.

    starlette reads raw values as latin-1, which garbles any non-ASCII value
    the gateway delivers. Names stay latin-1 and lower-cased.
    """

    def __init__(
        self,
        headers: Optional[Mapping[str, str]] = None,
        raw: Optional[List[Tuple[bytes, bytes]]] = None,
    ) -> None:
        super().__init__(raw=raw)
        if headers is not None:
            for key, value in headers.items():
                self.append(key, value)

    def values(self) -> List[str]:  # type: ignore[override]
        return [value.decode(VALUE_ENCODING) for _, value in self._list]

    def items(self) -> List[Tuple[str, str]]:  # type: ignore[override]
        return [(key.decode("latin-1"), value.decode(VALUE_ENCODING)) for key, value in self._list]

    def getlist(self, key: str) -> List[str]:
        wanted = key.lower().encode("latin-1")
        return [value.decode(VALUE_ENCODING) for name, value in self._list if name == wanted]

    def mutablecopy(self) -> "HTTPHeaders":
        return HTTPHeaders(raw=self._list[:])

    def __getitem__(self, key: str) -> str:
        wanted = key.lower().encode("latin-1")
        for name, value in self._list:
            if name == wanted:
                return value.decode(VALUE_ENCODING)
        raise KeyError(key)

    def __setitem__(self, key: str, value: str) -> None:
        """Replace every entry for ``key`` with one value, keeping the first position."""
        set_key = key.lower().encode("latin-1")
        set_value = value.encode(VALUE_ENCODING)
        found = [idx for idx, (name, _) in enumerate(self._list) if name == set_key]
        for idx in reversed(found[1:]):
            del self._list[idx]
        if found:
            self._list[found[0]] = (set_key, set_value)
        else:
            self._list.append((set_key, set_value))

    def setdefault(self, key: str, value: str) -> str:
        if key in self:
            return self[key]
        self.append(key, value)
        return value

    def append(self, key: str, value: str) -> None:
        self._list.append((key.lower().encode("latin-1"), value.encode(VALUE_ENCODING)))


@dataclass
class Request:
    """
    A synchronous HTTP request as seen by handler code.

    ``headers`` holds every value of a repeated header separately, as the
    strings the gateway delivered.
    ``context`` is the read-only request-scoped binding created by the adapter.
    """

    method: str
    url: URL
    headers: HTTPHeaders
    body: BinaryIO
    host: str = ""
    context: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def path(self) -> str:
        return self.url.path

    @property
    def query_string(self) -> str:
        return self.url.query

    @property
    def scheme(self) -> str:
        return self.url.scheme
