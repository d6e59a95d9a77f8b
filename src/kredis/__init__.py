from ._version import __version__
from .errors import (
    EmptyInputError,
    IntegerFieldError,
    KredisError,
    LineError,
    LoadError,
    MalformedAddressError,
    MultipleSelfNodesError,
    NoSelfNodeError,
    ParseError,
    PartError,
    QueryError,
    TooFewFieldsError,
    TooManyComponentsError,
    UncoveredSlotError,
    UnknownFlagError,
    UnknownFormatError,
)
from .events import SnapshotEvent, SnapshotFailed, SnapshotLoaded
from .loader import ClusterNodesLoader, cluster_nodes_fetcher, load_cluster_nodes
from .nodes import ClusterNode, ClusterNodeList, LinkState, NodeFlag, NodeFlagSet
from .slots import SlotRanges, key_slot
from .structs import Endpoint, EndpointGroup, NodeAddress

__all__ = [
    "__version__",
    # Codec
    "Endpoint",
    "EndpointGroup",
    "NodeAddress",
    "NodeFlag",
    "NodeFlagSet",
    "LinkState",
    "SlotRanges",
    "ClusterNode",
    "ClusterNodeList",
    # helpers
    "key_slot",
    # Loading
    "ClusterNodesLoader",
    "cluster_nodes_fetcher",
    "load_cluster_nodes",
    "SnapshotEvent",
    "SnapshotLoaded",
    "SnapshotFailed",
    # Errors
    "KredisError",
    "ParseError",
    "EmptyInputError",
    "MalformedAddressError",
    "UnknownFormatError",
    "TooManyComponentsError",
    "UnknownFlagError",
    "IntegerFieldError",
    "TooFewFieldsError",
    "LineError",
    "PartError",
    "QueryError",
    "NoSelfNodeError",
    "MultipleSelfNodesError",
    "UncoveredSlotError",
    "LoadError",
]
