"""Line-oriented UART handshake between two boards.

The sender repeats a ``START ...`` request each loop until the responder
acknowledges it with ``... OK``. The responder lights its LED chain in a
pattern for each request and answers. Incoming characters collect in a
small line buffer; a line is matched against the known messages each time a
burst of input ends.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator, Optional, Union

log = logging.getLogger(__name__)

BUFFER_SIZE = 64
TERMINATORS = "\n\r\0"


def contains(text: str, words: str) -> bool:
    """Whether ``words`` follows a run of matching characters in ``text``.

    After a mismatch the scan restarts at the next character, without
    checking the mismatching character against the start of ``words``.
    """
    if not words or len(words) > len(text):
        return False
    j = 0
    for char in text:
        if char == words[j]:
            if j == len(words) - 1:
                return True
            j += 1
        else:
            j = 0
    return False


class LineBuffer:
    """Characters received since the buffer was last reset."""

    def __init__(self, size: int = BUFFER_SIZE) -> None:
        if size < 1:
            raise ValueError("buffer size must be at least 1")
        self.size = size
        self._chars: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def reset(self) -> None:
        self._chars.clear()

    def feed(self, data: Union[str, bytes]) -> Iterator[str]:
        """Take in received data, yielding the text after each burst.

        A burst ends at a line terminator or at the end of ``data``.
        Terminators are not stored and do not empty the buffer; the buffer
        starts over when it would overflow.
        """
        if isinstance(data, (bytes, bytearray)):
            data = data.decode("latin-1")
        pending = False
        for char in data:
            if char in TERMINATORS:
                pending = False
                yield self.text
                continue
            pending = True
            if len(self._chars) < self.size - 1:
                self._chars.append(char)
            else:
                log.warning("UART buffer overflow")
                self._chars.clear()
        if pending:
            yield self.text


class ResponderStatus(Enum):
    NO_MESSAGE = 0
    FIRST_MESSAGE = 1
    SECOND_MESSAGE = 2
    THIRD_MESSAGE = 3


_RESPONDER_TRIGGERS = (
    ("START LIGHT", ResponderStatus.FIRST_MESSAGE),
    ("START SECOND", ResponderStatus.SECOND_MESSAGE),
    ("START THIRD", ResponderStatus.THIRD_MESSAGE),
)

_RESPONSES = {
    ResponderStatus.FIRST_MESSAGE: (
        (0 << 24, 0 << 16, 0 << 8, (0 << 24) | (0 << 16), (50 << 16) | (50 << 8)),
        "FIRST OK\n",
    ),
    ResponderStatus.SECOND_MESSAGE: (
        (0 << 24, 0 << 16, 0 << 8, (50 << 24) | (50 << 16), (50 << 16) | (50 << 8)),
        "SECOND OK\n",
    ),
    ResponderStatus.THIRD_MESSAGE: (
        (0 << 24, 0 << 16, 50 << 8, (50 << 24) | (50 << 16), (50 << 16) | (50 << 8)),
        "THIRD OK\n",
    ),
}


class LightResponder:
    """The board that lights its LEDs on request and acknowledges."""

    def __init__(self) -> None:
        self.status = ResponderStatus.NO_MESSAGE
        self._buffer = LineBuffer()

    def receive(self, data: Union[str, bytes]) -> None:
        """Handle received data, noting the last request recognised."""
        for text in self._buffer.feed(data):
            for words, status in _RESPONDER_TRIGGERS:
                if contains(text, words):
                    self.status = status
                    self._buffer.reset()
                    break

    def step(self) -> Optional[tuple[tuple[int, ...], str]]:
        """Run one loop pass.

        Returns the LED colour words to shift out and the reply to send for
        a pending request, or ``None`` when there is none.
        """
        response = _RESPONSES.get(self.status)
        if response is None:
            return None
        log.info("%s received", self.status.name)
        self.status = ResponderStatus.NO_MESSAGE
        return response


class SenderStatus(Enum):
    SEND_FIRST = 0
    SEND_SECOND = 1
    SEND_THIRD = 2
    FINISHED = 3


_SENDER_TRIGGERS = (
    ("FIRST OK", SenderStatus.SEND_SECOND),
    ("SECOND OK", SenderStatus.SEND_THIRD),
    ("THIRD OK", SenderStatus.FINISHED),
)

_REQUESTS = {
    SenderStatus.SEND_FIRST: "START LIGHT\n",
    SenderStatus.SEND_SECOND: "START SECOND\n",
    SenderStatus.SEND_THIRD: "START THIRD\n",
}


class LightSender:
    """The board that drives the handshake through its three requests."""

    def __init__(self) -> None:
        self.status = SenderStatus.SEND_FIRST
        self._buffer = LineBuffer()

    @property
    def led(self) -> bool:
        """Whether the indicator LED is lit, which it is once finished."""
        return self.status is SenderStatus.FINISHED

    def receive(self, data: Union[str, bytes]) -> None:
        """Handle received data, advancing on each acknowledgement."""
        for text in self._buffer.feed(data):
            for words, status in _SENDER_TRIGGERS:
                if contains(text, words):
                    self.status = status
                    self._buffer.reset()
                    break

    def step(self) -> Optional[str]:
        """Run one loop pass: the request to send, or ``None`` once finished."""
        request = _REQUESTS.get(self.status)
        if request is None:
            log.info("communication finished")
        return request