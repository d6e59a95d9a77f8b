from typing import Awaitable, Callable, Protocol

from kredis.structs import Endpoint


NodesFetcher = Callable[[], Awaitable[str]]


class PExecutor(Protocol):
    async def execute(self, command, *args, encoding=None):
        ...


FetcherFactory = Callable[[Endpoint], NodesFetcher]
