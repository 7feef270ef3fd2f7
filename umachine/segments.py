"""Segmented memory for the universal machine."""

from __future__ import annotations

from collections.abc import Iterable

WORD_BYTES = 4
WORD_MASK = 0xFFFFFFFF


class SegmentError(Exception):
    """Raised on access to an unmapped segment or outside a segment."""


def words_from_bytes(data: bytes) -> list[int]:
    """Decode big-endian 32-bit words from a program image.

    A final fragment of one or two bytes is dropped. A fragment of three
    bytes cannot be completed and is an error.
    """
    whole, rest = divmod(len(data), WORD_BYTES)
    if rest == WORD_BYTES - 1:
        raise SegmentError("program image ends in the middle of a word")
    return [
        int.from_bytes(data[start:start + WORD_BYTES], "big")
        for start in range(0, whole * WORD_BYTES, WORD_BYTES)
    ]


class Memory:
    """Mapped segments of words, with segment 0 holding the program.

    Identifiers of unmapped segments are reused, the most recently
    freed first.
    """

    def __init__(self, program: Iterable[int]) -> None:
        self._segments: list[list[int] | None] = [list(program)]
        self._free: list[int] = []

    def segment(self, segment_id: int) -> list[int]:
        """Return the words of a mapped segment."""
        if not 0 <= segment_id < len(self._segments):
            raise SegmentError(f"segment {segment_id} does not exist")
        words = self._segments[segment_id]
        if words is None:
            raise SegmentError(f"segment {segment_id} is not mapped")
        return words

    def map(self, size: int) -> int:
        """Map a new zero-filled segment of ``size`` words; return its id."""
        if size < 0:
            raise SegmentError("segment size cannot be negative")
        words = [0] * size
        if self._free:
            segment_id = self._free.pop()
            self._segments[segment_id] = words
            return segment_id
        self._segments.append(words)
        return len(self._segments) - 1

    def unmap(self, segment_id: int) -> None:
        """Unmap a segment and make its identifier available again."""
        self.segment(segment_id)
        self._segments[segment_id] = None
        self._free.append(segment_id)

    def load(self, segment_id: int, offset: int) -> int:
        """Return the word at ``offset`` in a segment."""
        words = self.segment(segment_id)
        if not 0 <= offset < len(words):
            raise SegmentError(
                f"offset {offset} outside segment {segment_id}"
            )
        return words[offset]

    def store(self, segment_id: int, offset: int, value: int) -> None:
        """Store a 32-bit word at ``offset`` in a segment."""
        words = self.segment(segment_id)
        if not 0 <= offset < len(words):
            raise SegmentError(
                f"offset {offset} outside segment {segment_id}"
            )
        words[offset] = value & WORD_MASK

    def replace_program(self, segment_id: int) -> None:
        """Replace segment 0 with a copy of another segment."""
        self._segments[0] = list(self.segment(segment_id))

    def instruction(self, pc: int) -> int:
        """Return the program word at ``pc``."""
        return self.load(0, pc)