import dataclasses
import enum
import re
from typing import Iterable, List, Optional

from kredis.errors import (
    IntegerFieldError,
    LineError,
    MultipleSelfNodesError,
    NoSelfNodeError,
    ParseError,
    TooFewFieldsError,
    UncoveredSlotError,
    UnknownFlagError,
    UnknownFormatError,
)
from kredis.slots import SlotRanges, key_slot
from kredis.structs import NodeAddress


__all__ = (
    "NodeFlag",
    "NodeFlagSet",
    "LinkState",
    "ClusterNode",
    "ClusterNodeList",
    "format_node_id",
)


NO_FLAGS = "noflags"
NO_NODE_ID = "-"

_NODE_LINE_FIELDS = 8
_INT_RE = re.compile(r"-?[0-9]+")


@enum.unique
class NodeFlag(enum.Enum):
    MYSELF = "myself"
    MASTER = "master"
    SLAVE = "slave"
    PROBABLE_FAIL = "fail?"
    FAIL = "fail"
    HANDSHAKE = "handshake"
    NO_ADDRESS = "noaddr"

    def __str__(self) -> str:
        return self.value


class NodeFlagSet(frozenset):
    """
    Set of node flags.

    Empty set is serialized as ``noflags`` sentinel.
    """

    __slots__ = ()

    def __new__(cls, flags: Iterable[NodeFlag] = ()) -> "NodeFlagSet":
        return super().__new__(cls, flags)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {str(self)!r}>"

    def __str__(self) -> str:
        if not self:
            return NO_FLAGS
        return ",".join(sorted(flag.value for flag in self))

    @classmethod
    def parse(cls, text: str) -> "NodeFlagSet":
        flags = []
        for token in text.split(","):
            if token == NO_FLAGS:
                # sentinel is authoritative even when mixed with other flags
                return cls()
            try:
                flags.append(NodeFlag(token))
            except ValueError:
                raise UnknownFlagError(token) from None

        return cls(flags)

    @property
    def is_myself(self) -> bool:
        return NodeFlag.MYSELF in self

    @property
    def is_master(self) -> bool:
        return NodeFlag.MASTER in self

    @property
    def is_replica(self) -> bool:
        return NodeFlag.SLAVE in self

    @property
    def is_failing(self) -> bool:
        return NodeFlag.FAIL in self or NodeFlag.PROBABLE_FAIL in self


@enum.unique
class LinkState(enum.Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"

    def __str__(self) -> str:
        return self.value


def format_node_id(node_id: str) -> str:
    return node_id or NO_NODE_ID


def _parse_int_field(field: str, value: str) -> int:
    if not _INT_RE.fullmatch(value):
        cause = ValueError(f"invalid integer {value!r}")
        raise IntegerFieldError(field, cause) from cause
    return int(value)


@dataclasses.dataclass(frozen=True)
class ClusterNode:
    id: str
    address: NodeAddress
    flags: NodeFlagSet
    master_id: str
    ping_sent: int
    pong_received: int
    epoch: int
    link_state: LinkState
    slots: SlotRanges = dataclasses.field(default_factory=SlotRanges)

    def __str__(self) -> str:
        line = (
            f"{format_node_id(self.id)} {self.address} {self.flags} "
            f"{format_node_id(self.master_id)} {self.ping_sent} {self.pong_received} "
            f"{self.epoch} {self.link_state}"
        )
        if self.slots:
            line = f"{line} {self.slots}"
        return line

    @classmethod
    def parse(cls, line: str) -> "ClusterNode":
        """
        Parse single line of ``CLUSTER NODES`` command output.

        @see: https://redis.io/commands/cluster-nodes#serialization-format
        """

        parts = line.split(" ")
        if len(parts) < _NODE_LINE_FIELDS:
            raise TooFewFieldsError(line, len(parts))

        node_id, raw_addr, raw_flags, master_id, ping_sent, pong_recv, epoch, link_state = parts[
            :_NODE_LINE_FIELDS
        ]

        address = NodeAddress.parse(raw_addr)
        flags = NodeFlagSet.parse(raw_flags)
        ping_sent_ms = _parse_int_field("ping_sent", ping_sent)
        pong_recv_ms = _parse_int_field("pong_received", pong_recv)
        config_epoch = _parse_int_field("epoch", epoch)

        try:
            state = LinkState(link_state)
        except ValueError:
            raise UnknownFormatError(link_state, "unknown link state") from None

        return cls(
            id="" if node_id == NO_NODE_ID else node_id,
            address=address,
            flags=flags,
            master_id="" if master_id == NO_NODE_ID else master_id,
            ping_sent=ping_sent_ms,
            pong_received=pong_recv_ms,
            epoch=config_epoch,
            link_state=state,
            slots=SlotRanges.from_tokens(parts[_NODE_LINE_FIELDS:]),
        )

    @property
    def is_myself(self) -> bool:
        return self.flags.is_myself

    @property
    def is_master(self) -> bool:
        return self.flags.is_master

    @property
    def is_replica(self) -> bool:
        return self.flags.is_replica

    def owns_slot(self, slot: int) -> bool:
        return slot in self.slots


class ClusterNodeList(tuple):
    """Cluster nodes as returned by ``CLUSTER NODES`` command"""

    __slots__ = ()

    def __new__(cls, nodes: Iterable[ClusterNode] = ()) -> "ClusterNodeList":
        return super().__new__(cls, nodes)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} nodes:{len(self)}>"

    def __str__(self) -> str:
        return "\n".join(str(node) for node in self)

    @classmethod
    def parse(cls, text: str) -> "ClusterNodeList":
        nodes = []
        for index, line in enumerate(text.split("\n")):
            if not line.strip():
                continue

            try:
                nodes.append(ClusterNode.parse(line))
            except ParseError as e:
                raise LineError(index, e) from e

        return cls(nodes)

    def myself(self) -> ClusterNode:
        """Return the node snapshot was taken from."""

        found: Optional[ClusterNode] = None
        for node in self:
            if not node.is_myself:
                continue
            if found is not None:
                raise MultipleSelfNodesError([found.id, node.id])
            found = node

        if found is None:
            raise NoSelfNodeError()

        return found

    def find(self, node_id: str) -> Optional[ClusterNode]:
        for node in self:
            if node.id == node_id:
                return node
        return None

    def masters(self) -> List[ClusterNode]:
        return [node for node in self if node.is_master]

    def replicas(self, master_id: str) -> List[ClusterNode]:
        return [node for node in self if node.master_id == master_id and node.is_replica]

    def slot_owner(self, slot: int) -> ClusterNode:
        for node in self:
            if node.is_master and node.owns_slot(slot):
                return node

        raise UncoveredSlotError(slot)

    def key_owner(self, key: bytes) -> ClusterNode:
        return self.slot_owner(key_slot(key))
