"""Character to UTF-8 byte offset mapping for error positions."""

from __future__ import annotations

from typing import Final


class UTF8PositionMapper:
    """Maps character offsets of a decoded document back to byte offsets.

    Byte offsets of every ``checkpoint_interval``-th character are recorded
    up front; a lookup encodes only the characters between the nearest
    checkpoint and the requested position.
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        """Initialize the mapper.

        Args:
            text: The decoded document
            checkpoint_interval: Characters between checkpoints
        """
        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        self._is_ascii_only: Final = text.isascii()
        self._checkpoints: list[int] = []

        if not self._is_ascii_only:
            self._build_checkpoints()

    def _build_checkpoints(self) -> None:
        byte_pos = 0
        for start in range(0, len(self.text), self.checkpoint_interval):
            self._checkpoints.append(byte_pos)
            chunk = self.text[start : start + self.checkpoint_interval]
            byte_pos += len(chunk.encode("utf-8", "surrogatepass"))

    def char_to_byte(self, char_pos: int) -> int:
        """Convert a character position to a byte position.

        Args:
            char_pos: Character position in the decoded text

        Returns:
            Byte position in the UTF-8 encoded text
        """
        if self._is_ascii_only:
            return char_pos

        char_pos = min(char_pos, len(self.text))
        block = char_pos // self.checkpoint_interval
        if block >= len(self._checkpoints):
            block = len(self._checkpoints) - 1
        if block < 0:
            return 0

        start = block * self.checkpoint_interval
        partial = self.text[start:char_pos].encode("utf-8", "surrogatepass")
        return self._checkpoints[block] + len(partial)
