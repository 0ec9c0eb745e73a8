"""
BF Parser - Source Text to Instruction Tree

Turns BF source text into a tree of instructions in a single pass.

Architecture:
- Instructions: closed set of dataclass nodes (MovePointer, ModifyCell,
  WriteByte, ReadByte, Loop)
- Parser: stack of open sequences; `[` opens a frame, `]` closes it into a Loop
- Run-length merging: consecutive `>`/`<` collapse into one MovePointer and
  consecutive `+`/`-` into one ModifyCell; a run that nets to zero vanishes

Example:
    >>> parse_code('++>+++[-]<-')
    [ModifyCell(delta=2), MovePointer(delta=1), ModifyCell(delta=3),
     Loop(body=[ModifyCell(delta=-1)]), MovePointer(delta=-1), ModifyCell(delta=-1)]
"""

from typing import List, Sequence
from dataclasses import dataclass, field
import logging

from .commands import POINTER_STEPS, CELL_STEPS, is_command
from .errors import (
    DataPointerIncrementOverflow, DataPointerDecrementOverflow, UnmatchedSymbol,
)

logger = logging.getLogger(__name__)

# Largest value an unsigned 64-bit data pointer can hold
MAX_DATA_POINTER = 2 ** 64 - 1

# Cells are bytes
CELL_MODULUS = 256


# ============================================================================
# Instructions
# ============================================================================

@dataclass
class Instruction:
    """Base instruction node"""
    pass


@dataclass
class MovePointer(Instruction):
    """Net data pointer movement of a `>`/`<` run"""
    delta: int


@dataclass
class ModifyCell(Instruction):
    """Net cell change of a `+`/`-` run, folded into (-256, 256)"""
    delta: int


@dataclass
class WriteByte(Instruction):
    """Emit the current cell"""
    pass


@dataclass
class ReadByte(Instruction):
    """Read one byte into the current cell"""
    pass


@dataclass
class Loop(Instruction):
    """Repeat body while the current cell is nonzero"""
    body: List[Instruction] = field(default_factory=list)


# ============================================================================
# Parser
# ============================================================================

class BFParser:
    """Parse BF source text into an instruction tree"""

    def __init__(self, source: str, pointer_limit: int = MAX_DATA_POINTER):
        self.source = source
        self.pointer_limit = pointer_limit

    def parse(self) -> List[Instruction]:
        """Parse the whole source; raises BFParseError subclasses"""
        frames: List[List[Instruction]] = [[]]

        for char in self.source:
            if not is_command(char):
                continue
            if char in POINTER_STEPS:
                self._merge_pointer(frames[-1], POINTER_STEPS[char])
            elif char in CELL_STEPS:
                self._merge_cell(frames[-1], CELL_STEPS[char])
            elif char == '.':
                frames[-1].append(WriteByte())
            elif char == ',':
                frames[-1].append(ReadByte())
            elif char == '[':
                frames.append([])
            elif char == ']':
                if len(frames) == 1:
                    raise UnmatchedSymbol(']')
                body = frames.pop()
                frames[-1].append(Loop(body=body))

        if len(frames) > 1:
            raise UnmatchedSymbol('[')

        code = frames.pop()
        logger.debug("Parsed %d source characters into %d top-level instructions",
                     len(self.source), len(code))
        return code

    def _merge_pointer(self, sequence: List[Instruction], step: int):
        """Fold a `>` or `<` into the tail of the sequence"""
        tail = sequence[-1] if sequence else None
        if not isinstance(tail, MovePointer):
            tail = None

        delta = (tail.delta if tail is not None else 0) + step
        if delta > self.pointer_limit:
            raise DataPointerIncrementOverflow()
        if delta < -self.pointer_limit:
            raise DataPointerDecrementOverflow()

        if tail is None:
            sequence.append(MovePointer(delta=delta))
        elif delta == 0:
            sequence.pop()
        else:
            tail.delta = delta

    def _merge_cell(self, sequence: List[Instruction], step: int):
        """Fold a `+` or `-` into the tail of the sequence, wrapping at 256"""
        tail = sequence[-1] if sequence else None
        if not isinstance(tail, ModifyCell):
            sequence.append(ModifyCell(delta=step))
            return

        delta = tail.delta + step
        if abs(delta) == CELL_MODULUS:
            delta = 0

        if delta == 0:
            sequence.pop()
        else:
            tail.delta = delta


# ============================================================================
# Formatting
# ============================================================================

def format_code(code: Sequence[Instruction]) -> str:
    """
    Render an instruction tree back to canonical source text

    Args:
        code: Instruction tree, as returned by parse_code

    Returns:
        Source text containing only command characters

    Example:
        >>> format_code(parse_code('+++ add three [-] clear'))
        '+++[-]'
    """
    parts = []
    for node in code:
        if isinstance(node, MovePointer):
            parts.append('>' * node.delta if node.delta > 0 else '<' * -node.delta)
        elif isinstance(node, ModifyCell):
            parts.append('+' * node.delta if node.delta > 0 else '-' * -node.delta)
        elif isinstance(node, WriteByte):
            parts.append('.')
        elif isinstance(node, ReadByte):
            parts.append(',')
        elif isinstance(node, Loop):
            parts.append('[' + format_code(node.body) + ']')
        else:
            raise TypeError(f"Unknown instruction type: {type(node).__name__}")
    return ''.join(parts)


# ============================================================================
# Convenience Function
# ============================================================================

def parse_code(source: str, pointer_limit: int = MAX_DATA_POINTER) -> List[Instruction]:
    """
    Parse BF source text (convenience function)

    Args:
        source: BF source text; non-command characters are comments
        pointer_limit: Largest net pointer movement a single run may express

    Returns:
        Instruction tree

    Raises:
        DataPointerIncrementOverflow: a `>` run exceeds pointer_limit
        DataPointerDecrementOverflow: a `<` run exceeds pointer_limit
        UnmatchedSymbol: unbalanced brackets
    """
    return BFParser(source, pointer_limit=pointer_limit).parse()


__all__ = [
    'MAX_DATA_POINTER',
    'CELL_MODULUS',
    'Instruction',
    'MovePointer',
    'ModifyCell',
    'WriteByte',
    'ReadByte',
    'Loop',
    'BFParser',
    'parse_code',
    'format_code',
]
