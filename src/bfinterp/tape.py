from __future__ import annotations

from typing import List, Tuple

import numpy as np

# Cells per chunk; the tape grows by one chunk at a time
CHUNK_SIZE = 128


def wrap_cell(value: int) -> int:
    """Wrap any integer into the signed 8-bit range (127 + 1 == -128)."""
    return ((int(value) + 128) & 0xFF) - 128


def _new_chunk() -> np.ndarray:
    return np.zeros(CHUNK_SIZE, dtype=np.int8)


class Tape:
    """
    Unbounded bidirectional tape of signed 8-bit cells.

    The tape is made of fixed-size chunks allocated lazily, zero-filled,
    the first time the cursor walks past either end. Chunks are addressed
    by a chunk number relative to the chunk the tape started with:
    chunks grown to the right get 1, 2, ... and chunks grown to the left
    get -1, -2, ..., so existing positions (and bookmarks) stay valid when
    the tape grows at the front.

    ``lower_limit`` and ``upper_limit`` record the furthest offset reached
    inside the first and last chunk respectively. They are only updated
    while the cursor is in that outermost chunk, and reset when a new
    outermost chunk is allocated.
    """

    def __init__(self):
        self._right: List[np.ndarray] = [_new_chunk()]  # chunk numbers 0, 1, 2...
        self._left: List[np.ndarray] = []  # chunk numbers -1, -2, ...

        self._chunk = 0
        self._offset = 0
        self.lower_limit = 0
        self.upper_limit = 0

        self._bookmarks: List[Tuple[int, int]] = []

    # ===== Chunk bookkeeping =====

    @property
    def first_chunk(self) -> int:
        return -len(self._left)

    @property
    def last_chunk(self) -> int:
        return len(self._right) - 1

    @property
    def chunk_count(self) -> int:
        return len(self._left) + len(self._right)

    @property
    def position(self) -> Tuple[int, int]:
        """Current (chunk number, offset) pair."""
        return self._chunk, self._offset

    def _current(self) -> np.ndarray:
        if self._chunk >= 0:
            return self._right[self._chunk]
        return self._left[-self._chunk - 1]

    # ===== Cell access =====

    def get_current_value(self) -> int:
        return int(self._current()[self._offset])

    def set_current_value(self, value: int) -> None:
        self._current()[self._offset] = wrap_cell(value)

    # ===== Movement =====

    def move_left(self) -> None:
        if self._offset == 0:
            if self._chunk == self.first_chunk:
                self._left.append(_new_chunk())
                self.lower_limit = CHUNK_SIZE - 1
            self._chunk -= 1
            self._offset = CHUNK_SIZE - 1
            return

        self._offset -= 1
        if self._chunk == self.first_chunk and self._offset < self.lower_limit:
            self.lower_limit = self._offset

    def move_right(self) -> None:
        if self._offset == CHUNK_SIZE - 1:
            if self._chunk == self.last_chunk:
                self._right.append(_new_chunk())
                self.upper_limit = 0
            self._chunk += 1
            self._offset = 0
            return

        self._offset += 1
        if self._chunk == self.last_chunk and self._offset > self.upper_limit:
            self.upper_limit = self._offset

    def is_at_beginning(self) -> bool:
        return self._chunk == self.first_chunk and self._offset == self.lower_limit

    def is_at_end(self) -> bool:
        return self._chunk == self.last_chunk and self._offset == self.upper_limit

    # ===== Bookmarks =====

    def push_bookmark(self) -> None:
        self._bookmarks.append((self._chunk, self._offset))

    def pop_bookmark(self) -> bool:
        """Restore the most recently saved position.

        Returns False, leaving the cursor alone, if there is no bookmark.
        """
        if not self._bookmarks:
            return False
        self._chunk, self._offset = self._bookmarks.pop()
        return True

    @property
    def bookmark_depth(self) -> int:
        return len(self._bookmarks)

    # ===== Inspection =====

    def dump(self) -> str:
        """
        Render the visited region of the tape, e.g. ``[ 0 <3> 0 1 ]``.

        The current cell is wrapped in angle brackets. The cursor is
        restored before returning.
        """
        self.push_bookmark()
        try:
            current = self.position

            while not self.is_at_beginning():
                self.move_left()

            cells: List[str] = []
            while True:
                text = str(self.get_current_value())
                if self.position == current:
                    text = f"<{text}>"
                cells.append(text)
                if self.is_at_end():
                    break
                self.move_right()
        finally:
            self.pop_bookmark()

        return "[ " + " ".join(cells) + " ]"
