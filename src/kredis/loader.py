import asyncio
import logging
from typing import List, Sequence, Tuple, Type, Union

import async_timeout

from kredis.errors import KredisError, LoadError
from kredis.events import SnapshotEvent, SnapshotFailed, SnapshotLoaded
from kredis.log import logger
from kredis.nodes import ClusterNodeList
from kredis.structs import Endpoint, EndpointGroup
from kredis.typedef import FetcherFactory, NodesFetcher, PExecutor


__all__ = (
    "cluster_nodes_fetcher",
    "load_cluster_nodes",
    "ClusterNodesLoader",
)


def cluster_nodes_fetcher(conn: PExecutor) -> NodesFetcher:
    """Adapt redis connection to nodes fetcher issuing ``CLUSTER NODES``"""

    async def fetch() -> str:
        return await conn.execute(b"CLUSTER", b"NODES", encoding="utf-8")

    return fetch


async def load_cluster_nodes(
    fetcher: NodesFetcher,
    *,
    timeout: float = None,
) -> ClusterNodeList:
    async with async_timeout.timeout(timeout):
        raw_nodes = await fetcher()

    return ClusterNodeList.parse(raw_nodes)


class ClusterNodesLoader:
    EXECUTE_TIMEOUT = 5.0
    FETCH_ERRORS: Tuple[Type[Exception], ...] = (KredisError, OSError)

    def __init__(
        self,
        startup_nodes: Union[str, Sequence[Endpoint]],
        fetcher_factory: FetcherFactory,
        *,
        execute_timeout: float = None,
        check_myself: bool = None,
        fetch_errors: Sequence[Type[Exception]] = None,
    ) -> None:
        if isinstance(startup_nodes, str):
            startup_nodes = EndpointGroup.parse(startup_nodes)
        self._startup_nodes = EndpointGroup(startup_nodes)
        self._fetcher_factory = fetcher_factory

        if execute_timeout is None:
            execute_timeout = self.EXECUTE_TIMEOUT
        elif execute_timeout < 0:
            raise ValueError("execute_timeout cannot be negative")
        self._execute_timeout = execute_timeout

        if check_myself is None:
            check_myself = True
        self._check_myself = check_myself

        # connection specific errors, e.g. redis client reply errors
        self._fetch_errors = self.FETCH_ERRORS + tuple(fetch_errors or ())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} startup_nodes:{str(self._startup_nodes)!r}>"

    @property
    def startup_nodes(self) -> EndpointGroup:
        return self._startup_nodes

    async def fetch_snapshot(self, endpoint: Endpoint) -> SnapshotEvent:
        logger.debug("Obtain cluster nodes from %s", endpoint)
        try:
            nodes = await load_cluster_nodes(
                self._fetcher_factory(endpoint),
                timeout=self._execute_timeout,
            )
            if self._check_myself:
                nodes.myself()
        except asyncio.TimeoutError as e:
            logger.warning("Getting cluster nodes from %s is timed out", endpoint)
            return SnapshotFailed(endpoint, e)
        except self._fetch_errors as e:
            logger.warning("Unable to get cluster nodes from %s: %r", endpoint, e)
            return SnapshotFailed(endpoint, e)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Cluster nodes successful loaded from %s: masters:%d nodes:%d",
                endpoint,
                len(nodes.masters()),
                len(nodes),
            )

        return SnapshotLoaded(endpoint, nodes)

    async def load(self) -> SnapshotLoaded:
        """Load cluster nodes from first available startup node."""

        if not self._startup_nodes:
            raise RuntimeError("no startup nodes to load cluster nodes")

        logger.debug("Trying to obtain cluster nodes from: %s", self._startup_nodes)

        failures: List[SnapshotFailed] = []
        for endpoint in self._startup_nodes:
            event = await self.fetch_snapshot(endpoint)
            if isinstance(event, SnapshotLoaded):
                return event
            failures.append(event)

        logger.error(
            "No available hosts to load cluster nodes. Tried hosts: %s", self._startup_nodes
        )

        raise LoadError(
            f"unable to load cluster nodes from {self._startup_nodes}"
        ) from failures[-1].error
