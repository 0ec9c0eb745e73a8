"""
BF Runtime - Tape Language Interpreter

This package provides a complete interpreter for the eight-command tape
language (`> < + - . , [ ]`):

**Parsing:**
- Parser: source text to instruction tree with bracket validation
- Run-length merging of pointer and cell runs
- Formatter: instruction tree back to canonical source

**Execution:**
- Interpreter: growable byte tape, pointer bounds checks, empty-loop detection
- Statistics: instruction-equivalents executed and memory in use
- Runtime: parse + interpret in one call

**Host:**
- CLI: file runner and line-based REPL (`python -m bf_runtime`)

Version: 1.0.0
"""

__version__ = '1.0.0'

# ============================================================================
# Errors
# ============================================================================

from .errors import (
    E_POINTER_INCREMENT_OVERFLOW, E_POINTER_DECREMENT_OVERFLOW, E_UNMATCHED_SYMBOL,
    E_POINTER_OUTSIDE_MEMORY, E_EMPTY_LOOP, E_WRITE_ERROR,
    BFError,
    BFParseError, DataPointerIncrementOverflow, DataPointerDecrementOverflow, UnmatchedSymbol,
    BFInterpretError, DataPointerOutsideMemory, EmptyLoop, WriteError,
)

# ============================================================================
# Parsing
# ============================================================================

from .commands import COMMANDS, is_command, strip_comments

from .parser import (
    MAX_DATA_POINTER, CELL_MODULUS,
    Instruction, MovePointer, ModifyCell, WriteByte, ReadByte, Loop,
    BFParser, parse_code, format_code,
)

# ============================================================================
# Execution
# ============================================================================

from .interpreter import ExecutionStats, BFInterpreter, BFRuntime, execute_bf

# ============================================================================
# Exports
# ============================================================================

__all__ = [
    # Version
    '__version__',

    # Errors
    'E_POINTER_INCREMENT_OVERFLOW', 'E_POINTER_DECREMENT_OVERFLOW', 'E_UNMATCHED_SYMBOL',
    'E_POINTER_OUTSIDE_MEMORY', 'E_EMPTY_LOOP', 'E_WRITE_ERROR',
    'BFError',
    'BFParseError', 'DataPointerIncrementOverflow', 'DataPointerDecrementOverflow', 'UnmatchedSymbol',
    'BFInterpretError', 'DataPointerOutsideMemory', 'EmptyLoop', 'WriteError',

    # Commands
    'COMMANDS', 'is_command', 'strip_comments',

    # Parser
    'MAX_DATA_POINTER', 'CELL_MODULUS',
    'Instruction', 'MovePointer', 'ModifyCell', 'WriteByte', 'ReadByte', 'Loop',
    'BFParser', 'parse_code', 'format_code',

    # Interpreter
    'ExecutionStats', 'BFInterpreter', 'BFRuntime', 'execute_bf',
]
