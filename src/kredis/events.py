import dataclasses
import datetime
from typing import Union

from kredis.nodes import ClusterNode, ClusterNodeList
from kredis.structs import Endpoint


__all__ = (
    "SnapshotLoaded",
    "SnapshotFailed",
    "SnapshotEvent",
)


@dataclasses.dataclass(frozen=True)
class SnapshotLoaded:
    source: Endpoint
    nodes: ClusterNodeList = dataclasses.field(repr=False)
    loaded_at: datetime.datetime = dataclasses.field(default_factory=datetime.datetime.now)

    def myself(self) -> ClusterNode:
        return self.nodes.myself()


@dataclasses.dataclass(frozen=True)
class SnapshotFailed:
    source: Endpoint
    error: BaseException
    loaded_at: datetime.datetime = dataclasses.field(default_factory=datetime.datetime.now)


SnapshotEvent = Union[SnapshotLoaded, SnapshotFailed]
