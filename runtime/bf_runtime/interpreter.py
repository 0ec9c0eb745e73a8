"""
BF Interpreter - Instruction Tree Execution

Executes parsed BF programs against a growable byte tape.

Architecture:
- Tape: bytearray starting with a single zero cell, grown on demand
- Evaluator: walks the instruction tree with an explicit frame stack,
  so nesting depth is not limited by the Python call stack
- Streams: any binary file-like objects (read(n) / write(b) + flush())
- Statistics: instruction-equivalents executed and tape length in use
- Runtime: parse + interpret convenience wrapper

Reference: parser.py (for the instruction tree)
"""

from typing import Any, BinaryIO, List, Optional, Sequence
from dataclasses import dataclass
import io
import logging
import sys

from .errors import (
    BFInterpretError, DataPointerOutsideMemory, EmptyLoop, WriteError,
)
from .parser import (
    MAX_DATA_POINTER, CELL_MODULUS,
    Instruction, MovePointer, ModifyCell, WriteByte, ReadByte, Loop,
    parse_code,
)

logger = logging.getLogger(__name__)

# Statistics counter is an unsigned 64-bit value and wraps like one
COUNTER_MODULUS = 2 ** 64


@dataclass
class ExecutionStats:
    """Snapshot of interpreter instrumentation"""
    instruction_count: int = 0
    used_memory: int = 1


# ============================================================================
# Evaluator
# ============================================================================

class BFInterpreter:
    """Execute BF instruction trees, keeping tape state between calls"""

    def __init__(self, input: BinaryIO, output: BinaryIO,
                 memory_limit: int = MAX_DATA_POINTER):
        self.input = input
        self.output = output
        self.memory_limit = memory_limit
        self.tape = bytearray(1)
        self.pointer = 0
        self.instruction_count = 0

    def interpret(self, code: Sequence[Instruction]):
        """
        Execute an instruction tree.

        Tape, pointer and statistics carry over from earlier calls. The first
        error aborts execution; output already written and cells already
        changed stay as they are.

        Raises:
            DataPointerOutsideMemory: pointer would leave [0, memory_limit]
            EmptyLoop: an empty loop was entered with a nonzero cell
            WriteError: the output stream failed
        """
        # Each frame is [body, index of next instruction]
        frames: List[List[Any]] = [[code, 0]]
        try:
            while frames:
                frame = frames[-1]
                body, index = frame

                if index == len(body):
                    if len(frames) > 1 and self.tape[self.pointer] != 0:
                        frame[1] = 0
                    else:
                        frames.pop()
                    continue

                node = body[index]
                frame[1] = index + 1

                if isinstance(node, Loop):
                    if self.tape[self.pointer] == 0:
                        continue
                    if not node.body:
                        raise EmptyLoop()
                    frames.append([node.body, 0])
                else:
                    self._evaluate(node)
        except BFInterpretError as err:
            logger.debug("Execution aborted at pointer %d: %s", self.pointer, err)
            raise

    def _evaluate(self, node: Instruction):
        """Execute a single non-loop instruction"""
        if isinstance(node, MovePointer):
            target = self.pointer + node.delta
            if target < 0 or target > self.memory_limit:
                raise DataPointerOutsideMemory()
            if target >= len(self.tape):
                self.tape.extend(bytes(target + 1 - len(self.tape)))
            self.pointer = target
            self._count(abs(node.delta))

        elif isinstance(node, ModifyCell):
            self.tape[self.pointer] = (self.tape[self.pointer] + node.delta) % CELL_MODULUS
            self._count(abs(node.delta))

        elif isinstance(node, WriteByte):
            try:
                self.output.write(bytes((self.tape[self.pointer],)))
                self.output.flush()
            except (OSError, ValueError) as err:
                raise WriteError(err) from err
            self._count(1)

        elif isinstance(node, ReadByte):
            try:
                data = self.input.read(1)
            except (OSError, ValueError) as err:
                logger.debug("Read failed, leaving cell unchanged: %s", err)
                data = b''
            if data:
                self.tape[self.pointer] = data[0]
            self._count(1)

        else:
            raise TypeError(f"Unknown instruction type: {type(node).__name__}")

    def _count(self, steps: int):
        self.instruction_count = (self.instruction_count + steps) % COUNTER_MODULUS

    def reset(self):
        """Restore the single zero cell tape and clear statistics"""
        self.tape = bytearray(1)
        self.pointer = 0
        self.instruction_count = 0
        logger.debug("Interpreter state reset")

    def stats(self) -> ExecutionStats:
        """Current statistics snapshot"""
        return ExecutionStats(
            instruction_count=self.instruction_count,
            used_memory=len(self.tape),
        )


# ============================================================================
# Runtime Interface
# ============================================================================

class BFRuntime:
    """Main BF runtime interface"""

    def __init__(self, input: Optional[BinaryIO] = None, output: Optional[BinaryIO] = None,
                 memory_limit: int = MAX_DATA_POINTER):
        self.memory_limit = memory_limit
        self.interpreter = BFInterpreter(
            input if input is not None else sys.stdin.buffer,
            output if output is not None else sys.stdout.buffer,
            memory_limit=memory_limit,
        )

    def execute(self, source: str):
        """Parse and execute BF source text"""
        code = parse_code(source, pointer_limit=self.memory_limit)
        self.interpreter.interpret(code)

    def reset(self):
        """Reset tape, pointer and statistics"""
        self.interpreter.reset()

    def stats(self) -> ExecutionStats:
        """Get execution statistics"""
        return self.interpreter.stats()


# ============================================================================
# Convenience Function
# ============================================================================

def execute_bf(source: str, input_data: bytes = b"") -> bytes:
    """
    Execute BF source text on a fresh runtime (convenience function)

    Args:
        source: BF source text
        input_data: Bytes made available to `,`

    Returns:
        Everything the program wrote

    Example:
        >>> execute_bf(',+.', b'A')
        b'B'
    """
    output = io.BytesIO()
    runtime = BFRuntime(io.BytesIO(input_data), output)
    runtime.execute(source)
    return output.getvalue()


__all__ = [
    'COUNTER_MODULUS',
    'ExecutionStats',
    'BFInterpreter',
    'BFRuntime',
    'execute_bf',
]
