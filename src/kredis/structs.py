import ipaddress
import re
from typing import Iterable, NamedTuple, Optional, Union

from kredis.errors import (
    EmptyInputError,
    MalformedAddressError,
    PartError,
    ParseError,
    TooManyComponentsError,
)


__all__ = (
    "DEFAULT_PORT",
    "IPAddress",
    "Endpoint",
    "EndpointGroup",
    "NodeAddress",
)


DEFAULT_PORT = "6379"

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_NODE_ADDRESS_RE = re.compile(r"([^:]*):([0-9]*)(@([0-9]*))?")


class Endpoint(NamedTuple):
    host: str
    port: str = DEFAULT_PORT

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def port_number(self) -> int:
        return int(self.port)

    @classmethod
    def parse(cls, text: str) -> "Endpoint":
        """Parse ``host`` or ``host:port`` string.

        Port defaults to 6379 when omitted.
        """

        text = text.strip()
        if not text:
            raise EmptyInputError("an endpoint cannot be empty")

        components = text.split(":")
        if len(components) == 1:
            return cls(components[0].strip(), DEFAULT_PORT)
        elif len(components) == 2:
            return cls(components[0].strip(), components[1].strip())

        raise TooManyComponentsError(text, components[2:])


class EndpointGroup(tuple):
    """Ordered group of endpoints, e.g. startup masters of a cluster"""

    __slots__ = ()

    def __new__(cls, endpoints: Iterable[Endpoint] = ()) -> "EndpointGroup":
        return super().__new__(cls, endpoints)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {str(self)!r}>"

    def __str__(self) -> str:
        return ",".join(str(endpoint) for endpoint in self)

    @classmethod
    def parse(cls, text: str) -> "EndpointGroup":
        text = text.strip()
        if not text:
            return cls()

        endpoints = []
        for index, part in enumerate(text.split(",")):
            try:
                endpoints.append(Endpoint.parse(part))
            except ParseError as e:
                raise PartError(index, e) from e

        return cls(endpoints)


class NodeAddress(NamedTuple):
    ip: Optional[IPAddress]
    port: str
    cluster_port: str = ""

    def __str__(self) -> str:
        parts = []
        if self.ip is not None:
            parts.append(str(self.ip))
        parts.append(f":{self.port}")
        if self.cluster_port:
            parts.append(f"@{self.cluster_port}")
        return "".join(parts)

    @classmethod
    def parse(cls, text: str) -> "NodeAddress":
        """
        Parse node address in ``ip:port@cport`` form.

        @see: https://redis.io/commands/cluster-nodes#serialization-format
        """

        m = _NODE_ADDRESS_RE.fullmatch(text)
        if m is None:
            raise MalformedAddressError(text)

        ip: Optional[IPAddress]
        try:
            ip = ipaddress.ip_address(m.group(1))
        except ValueError:
            # empty or not yet resolved address
            ip = None

        return cls(ip, m.group(2), m.group(4) or "")

    def endpoint(self) -> Optional[Endpoint]:
        if self.ip is None:
            return None
        return Endpoint(str(self.ip), self.port)
