from __future__ import annotations

from enum import Enum
from typing import Iterator, List, Optional


class InstructionValue(Enum):
    NONE = ''
    MOVE_LEFT = '<'
    MOVE_RIGHT = '>'
    INCREASE = '+'
    DECREASE = '-'
    LOOP_BEGIN = '['
    LOOP_END = ']'
    READ = ','
    PRINT = '.'
    DUMP_TAPE = '#'

    @classmethod
    def from_char(cls, ch: str) -> Optional["InstructionValue"]:
        """Return the value for a source character, or None for comments."""
        if not ch:
            return None
        return _BY_CHAR.get(ch)


_BY_CHAR = {v.value: v for v in InstructionValue if v.value}

# Brackets always get a node of their own
UNMERGEABLE = frozenset({InstructionValue.LOOP_BEGIN, InstructionValue.LOOP_END})


class Instruction:
    """
    A single node of a compiled Brainfuck program.

    Each node carries a value, the number of times it has to be executed
    and two edges: ``next`` is the rest of the current chain, ``loop`` is
    the body of a loop and is only set on LOOP_BEGIN nodes. A node owns
    whatever hangs off its edges; replacing an edge releases the previous
    subtree.
    """

    __slots__ = ('_value', '_quantity', '_next', '_loop')

    def __init__(self, value: InstructionValue = InstructionValue.NONE, quantity: int = 1):
        self._value = InstructionValue.NONE
        self._quantity = 1
        self._next: Optional[Instruction] = None
        self._loop: Optional[Instruction] = None
        self.value = value
        self.quantity = quantity

    def __repr__(self) -> str:
        return f"Instruction({self._value.name}, quantity={self._quantity})"

    @property
    def value(self) -> InstructionValue:
        return self._value

    @value.setter
    def value(self, value: InstructionValue) -> None:
        if not isinstance(value, InstructionValue):
            raise TypeError(f"Invalid instruction value: {value!r}")
        self._value = value

    @property
    def quantity(self) -> int:
        return self._quantity

    @quantity.setter
    def quantity(self, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Quantity must be an int, got {type(quantity).__name__}")
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive, got {quantity}")
        self._quantity = quantity

    @property
    def next(self) -> Optional[Instruction]:
        return self._next

    @next.setter
    def next(self, instruction: Optional[Instruction]) -> None:
        self._check_edge(instruction)
        previous, self._next = self._next, instruction
        if previous is not None and previous is not instruction:
            release(previous, keep=instruction)

    @property
    def loop(self) -> Optional[Instruction]:
        return self._loop

    @loop.setter
    def loop(self, instruction: Optional[Instruction]) -> None:
        self._check_edge(instruction)
        previous, self._loop = self._loop, instruction
        if previous is not None and previous is not instruction:
            release(previous, keep=instruction)

    def _check_edge(self, instruction: Optional[Instruction]) -> None:
        if instruction is not None and not isinstance(instruction, Instruction):
            raise TypeError(f"Expected an Instruction or None, got {type(instruction).__name__}")
        if instruction is self:
            raise ValueError("An instruction cannot own itself")


def release(root: Instruction, keep: Optional[Instruction] = None) -> None:
    """Detach every edge below ``root``.

    ``keep`` (typically the node replacing ``root``) and everything below it
    is left intact, so a chain can be spliced with ``a.next = a.next.next``.
    Works with an explicit stack so that very long chains do not hit the
    recursion limit.
    """
    stack: List[Instruction] = [root]
    while stack:
        node = stack.pop()
        if node is keep:
            continue
        if node._next is not None:
            stack.append(node._next)
            node._next = None
        if node._loop is not None:
            stack.append(node._loop)
            node._loop = None


def walk(root: Optional[Instruction]) -> Iterator[Instruction]:
    """Yield every node in source order: a LOOP_BEGIN, its body, then its next."""
    stack: List[Instruction] = []
    node = root
    while node is not None or stack:
        if node is None:
            node = stack.pop()
        yield node
        if node.loop is not None:
            if node.next is not None:
                stack.append(node.next)
            node = node.loop
        else:
            node = node.next


def emit(root: Optional[Instruction]) -> str:
    """Regenerate Brainfuck source text for a chain (comments are lost)."""
    out: List[str] = []
    for node in walk(root):
        if node.value is InstructionValue.NONE:
            continue
        out.append(node.value.value * node.quantity)
    return ''.join(out)
