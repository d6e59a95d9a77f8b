from typing import Sequence


__all__ = [
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


class KredisError(Exception):
    """Base exception class for kredis exceptions."""


class ParseError(KredisError, ValueError):
    """Raises while text does not match cluster nodes grammar"""


class EmptyInputError(ParseError):
    """Raises than required text is empty after trimming"""


class MalformedAddressError(ParseError):
    """Raises than node address is not in ``ip:port[@cport]`` form"""

    def __init__(self, text: str) -> None:
        super().__init__(f"{text!r} is not a valid cluster node address")

        self.text = text


class UnknownFormatError(ParseError):
    def __init__(self, text: str, reason: str = "unknown format") -> None:
        super().__init__(f"parsing {text!r}: {reason}")

        self.text = text
        self.reason = reason


class TooManyComponentsError(ParseError):
    def __init__(self, text: str, surplus: Sequence[str]) -> None:
        super().__init__(f"parsing {text!r}: too many components: {list(surplus)!r}")

        self.text = text
        self.surplus = tuple(surplus)


class UnknownFlagError(ParseError):
    def __init__(self, token: str) -> None:
        super().__init__(f"unrecognized flag {token!r}")

        self.token = token


class IntegerFieldError(ParseError):
    def __init__(self, field: str, cause: Exception) -> None:
        super().__init__(f"field {field!r}: {cause}")

        self.field = field
        self.cause = cause


class TooFewFieldsError(ParseError):
    def __init__(self, text: str, count: int) -> None:
        super().__init__(f"parsing {text!r}: not enough fields ({count})")

        self.text = text
        self.count = count


class LineError(ParseError):
    """Wraps node parsing error with 0-based line index"""

    def __init__(self, index: int, cause: Exception) -> None:
        super().__init__(f"parsing line {index} of cluster nodes: {cause}")

        self.index = index
        self.cause = cause


class PartError(ParseError):
    """Wraps endpoint parsing error with 0-based part index"""

    def __init__(self, index: int, cause: Exception) -> None:
        super().__init__(f"parsing part {index}: {cause}")

        self.index = index
        self.cause = cause


class QueryError(KredisError, LookupError):
    """Raises while derived query over nodes list is not satisfiable"""


class NoSelfNodeError(QueryError):
    def __init__(self) -> None:
        super().__init__("no `myself` node found")


class MultipleSelfNodesError(QueryError):
    def __init__(self, node_ids: Sequence[str]) -> None:
        super().__init__(f"can't have multiple `myself` nodes: {list(node_ids)!r}")

        self.node_ids = tuple(node_ids)


class UncoveredSlotError(QueryError):
    """Raise than slot not owned by any master in nodes list"""

    def __init__(self, slot: int) -> None:
        super().__init__(slot)

        self.slot = slot


class LoadError(KredisError):
    """Raises than cluster nodes can't be loaded from any endpoint"""
