from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .errors import BFIOError, BFLoadError, LoadErrorKind, make_load_error
from .instruction import Instruction, InstructionValue, release, walk
from .lexer import split_input, tokenize

logger = logging.getLogger(__name__)


class Program:
    """
    A loaded Brainfuck program.

    Holds the root of the instruction tree, which is never None (an empty
    program is a single NONE instruction), and the literal input that
    followed the ``!`` marker in the source, if any.
    """

    def __init__(self):
        self._instructions = Instruction()
        self.input: Optional[str] = None

    @property
    def instructions(self) -> Instruction:
        return self._instructions

    @instructions.setter
    def instructions(self, root: Optional[Instruction]) -> None:
        if root is None:
            root = Instruction()
        elif not isinstance(root, Instruction):
            raise TypeError(f"Expected an Instruction, got {type(root).__name__}")
        previous, self._instructions = self._instructions, root
        if previous is not root:
            release(previous, keep=root)

    def _reset(self) -> None:
        self.instructions = None
        self.input = None

    # ===== Loading =====

    def load(self, source: Union[str, bytes]) -> None:
        """
        Parse ``source`` and replace the current instructions and input.

        Args:
            source: program text, or UTF-8 encoded bytes

        Raises:
            BFLoadError: the source is not valid UTF-8 or its brackets do
                not match. The program is left empty in that case.
        """
        try:
            text = _decode(source)
            code, literal_input = split_input(text)
            root = _build_tree(code, text)
        except BFLoadError as exc:
            logger.debug("Load failed: %s", exc.kind.value)
            self._reset()
            raise

        self.instructions = root
        self.input = literal_input
        logger.debug(
            "Loaded %d instructions%s",
            sum(1 for _ in walk(root)),
            "" if literal_input is None else f" and {len(literal_input)} chars of input",
        )

    def load_from_file(self, path: Union[str, Path]) -> None:
        p = Path(path)
        try:
            data = p.read_bytes()
        except OSError as exc:
            raise BFIOError(message=f"IOError: cannot read {p}: {exc.strerror or exc}", path=p) from exc
        self.load(data)


def _decode(source: Union[str, bytes]) -> str:
    if isinstance(source, (bytes, bytearray)):
        try:
            return bytes(source).decode('utf-8')
        except UnicodeDecodeError as exc:
            raise make_load_error(
                kind=LoadErrorKind.BAD_UTF8, source='', position=exc.start, message='invalid UTF-8 sequence'
            ) from exc

    if not isinstance(source, str):
        raise TypeError(f"Expected str or bytes, got {type(source).__name__}")
    try:
        source.encode('utf-8')
    except UnicodeEncodeError as exc:
        raise make_load_error(
            kind=LoadErrorKind.BAD_UTF8, source='', position=exc.start, message='text cannot be encoded as UTF-8'
        ) from exc
    return source


def _build_tree(code: str, text: str) -> Instruction:
    first: Optional[Instruction] = None
    current: Optional[Instruction] = None
    # LOOP_BEGIN nodes still waiting for their "]", with source offsets
    open_loops: List[Tuple[Instruction, int]] = []

    def append(node: Instruction) -> None:
        nonlocal first
        if current is not None:
            current.next = node
        elif open_loops:
            open_loops[-1][0].loop = node
        else:
            first = node

    try:
        for tok in tokenize(code):
            node = Instruction(tok.value, tok.quantity)

            if tok.value is InstructionValue.LOOP_BEGIN:
                append(node)
                open_loops.append((node, tok.position))
                current = None
                continue

            if tok.value is InstructionValue.LOOP_END:
                if not open_loops:
                    raise make_load_error(
                        kind=LoadErrorKind.UNMATCHED_BRACKET,
                        source=text,
                        position=tok.position,
                        message="']' without a matching '['",
                    )
                append(node)
                current, _ = open_loops.pop()
                continue

            append(node)
            current = node

        if open_loops:
            _, position = open_loops[-1]
            raise make_load_error(
                kind=LoadErrorKind.UNBALANCED_BRACKETS,
                source=text,
                position=position,
                message=f"{len(open_loops)} unclosed '['",
            )
    except BFLoadError:
        if first is not None:
            release(first)
        raise

    return first if first is not None else Instruction()
