"""Character to UTF-8 byte offset mapping for error positions."""

from __future__ import annotations

from typing import Final


class UTF8PositionMapper:
    """Maps character offsets in a text to offsets in its UTF-8 encoding.

    Byte offsets are recorded at fixed character intervals, so a lookup only
    has to encode the characters between the nearest checkpoint and the
    requested position instead of the whole prefix.
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        """Initialize the mapper and its checkpoint table.

        Args:
            text: The text positions refer to
            checkpoint_interval: Characters between checkpoints (default 256)
        """
        if checkpoint_interval <= 0:
            raise ValueError("checkpoint_interval must be positive")

        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        self.is_ascii: Final = text.isascii()
        # checkpoints[k] is the byte offset of character k * interval
        self.checkpoints: list[int] = (
            [] if self.is_ascii else self._build_checkpoints()
        )

    def _build_checkpoints(self) -> list[int]:
        checkpoints = []
        byte_pos = 0
        for start in range(0, len(self.text), self.checkpoint_interval):
            checkpoints.append(byte_pos)
            chunk = self.text[start : start + self.checkpoint_interval]
            byte_pos += _utf8_length(chunk)
        return checkpoints

    def char_to_byte(self, char_pos: int) -> int:
        """Convert a character offset to a byte offset.

        Offsets past the end of the text are clamped to its length.

        Args:
            char_pos: Character offset in the original text

        Returns:
            Byte offset in the UTF-8 encoded text
        """
        char_pos = max(0, min(char_pos, len(self.text)))

        if self.is_ascii:
            return char_pos

        index = min(
            char_pos // self.checkpoint_interval, len(self.checkpoints) - 1
        )
        start = index * self.checkpoint_interval
        return self.checkpoints[index] + _utf8_length(
            self.text[start:char_pos]
        )


def _utf8_length(chunk: str) -> int:
    # lone surrogates can survive in str values; count them as 3 bytes
    return len(chunk.encode("utf-8", "surrogatepass"))
