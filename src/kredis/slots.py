import bisect
import re
from binascii import crc_hqx
from typing import Iterable, List, Tuple

from kredis.errors import UnknownFormatError


__all__ = (
    "REDIS_CLUSTER_HASH_SLOTS",
    "SlotRanges",
    "parse_slot_token",
    "crc16",
    "key_slot",
)

REDIS_CLUSTER_HASH_SLOTS = 16384

_SLOT_RE = re.compile(r"[0-9]+")


def crc16(data: bytes) -> int:
    return crc_hqx(data, 0)


def key_slot(key: bytes) -> int:
    """Hash slot of a key, only the first non-empty ``{hash tag}`` is hashed.

    @see: https://redis.io/docs/reference/cluster-spec/#hash-tags
    """

    tag_start = key.find(b"{")
    if tag_start > -1:
        tag_end = key.find(b"}", tag_start + 1)
        if tag_end > tag_start + 1:
            key = key[tag_start + 1 : tag_end]
    return crc16(key) % REDIS_CLUSTER_HASH_SLOTS


def parse_slot_token(text: str) -> List[int]:
    """Parse single slot ``N`` or inclusive slots range ``LOW-HIGH``.

    Result is not sorted, callers accumulate slots of all node tokens
    and sort them once.
    """

    parts = text.split("-")
    if len(parts) > 2:
        raise UnknownFormatError(text, "unknown hash slot format")

    bounds = []
    for part in parts:
        if not _SLOT_RE.fullmatch(part):
            raise UnknownFormatError(text, f"invalid hash slot {part!r}")
        slot = int(part)
        if slot >= REDIS_CLUSTER_HASH_SLOTS:
            raise UnknownFormatError(text, f"hash slot {slot} is out of range")
        bounds.append(slot)

    if len(bounds) == 1:
        return bounds

    begin, end = bounds
    if begin > end:
        raise UnknownFormatError(text, "hash slots range begin is greater than end")

    return list(range(begin, end + 1))


class SlotRanges(tuple):
    """Ascending sequence of distinct hash slots"""

    __slots__ = ()

    def __new__(cls, slots: Iterable[int] = ()) -> "SlotRanges":
        return super().__new__(cls, sorted(set(slots)))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {str(self)!r}>"

    def __str__(self) -> str:
        return " ".join(
            str(begin) if begin == end else f"{begin}-{end}" for begin, end in self.ranges()
        )

    def __contains__(self, slot) -> bool:
        index = bisect.bisect_left(self, slot)
        return index < len(self) and self[index] == slot

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "SlotRanges":
        slots: List[int] = []
        for token in tokens:
            slots.extend(parse_slot_token(token))
        return cls(slots)

    @classmethod
    def from_range(cls, begin: int, end: int, step: int = 1) -> "SlotRanges":
        return cls(range(begin, end + 1, step))

    def ranges(self) -> List[Tuple[int, int]]:
        """Fold slots into maximal contiguous ``(begin, end)`` runs"""

        runs: List[Tuple[int, int]] = []
        if not self:
            return runs

        begin = last = self[0]
        for slot in self[1:]:
            if slot == last + 1:
                last = slot
                continue

            runs.append((begin, last))
            begin = last = slot

        runs.append((begin, last))
        return runs
