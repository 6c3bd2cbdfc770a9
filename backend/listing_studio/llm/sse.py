"""Incremental Server-Sent Events frame decoder.

The decoder only splits and parses text. It knows nothing about what the
event types mean; dispatch happens in the completion client.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass

FRAME_DELIMITER = "\n\n"


@dataclass(frozen=True)
class SseFrame:
    event_type: str
    data: str | None = None


def parse_sse_block(block: str) -> SseFrame:
    """Parse one blank-line delimited block into a frame.

    ``event: `` sets the type (the last one wins). ``data: `` and ``data:``
    lines are joined with newlines. Anything else is ignored.
    """
    event_type = ""
    data_lines: list[str] = []

    for line in block.split("\n"):
        if line.startswith("event: "):
            event_type = line[len("event: "):].strip()
        elif line.startswith("data: "):
            data_lines.append(line[len("data: "):])
        elif line.startswith("data:"):
            data_lines.append(line[len("data:"):])

    data = "\n".join(data_lines) if data_lines else None
    return SseFrame(event_type=event_type, data=data)


class SseDecoder:
    """Turns append-only byte chunks into complete frames.

    A block is only parsed once its terminating blank line has arrived, so
    the frames produced never depend on where the transport split the bytes::

        decoder = SseDecoder()
        async for chunk in response.aiter_bytes():
            for frame in decoder.feed(chunk):
                ...
    """

    def __init__(self) -> None:
        self._buffer = ""
        # Multi-byte characters may be split across chunks
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def pending(self) -> str:
        """Text received but not yet terminated by a blank line."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[SseFrame]:
        self._buffer += self._utf8.decode(chunk)
        if "\r" in self._buffer:
            self._buffer = self._buffer.replace("\r\n", "\n")

        frames: list[SseFrame] = []
        while True:
            pos = self._buffer.find(FRAME_DELIMITER)
            if pos == -1:
                break
            block = self._buffer[:pos]
            self._buffer = self._buffer[pos + len(FRAME_DELIMITER):]
            frames.append(parse_sse_block(block))
        return frames
