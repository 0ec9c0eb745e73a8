"""
BF Runtime - Error Definitions

Two independent taxonomies:
- BFParseError: static problems found in source text before execution
- BFInterpretError: dynamic problems found while executing a program

Every error carries a stable code string and renders as "[CODE] message".
"""

from typing import Optional


# ============================================================================
# Error Codes
# ============================================================================

E_POINTER_INCREMENT_OVERFLOW = "E_POINTER_INCREMENT_OVERFLOW"
E_POINTER_DECREMENT_OVERFLOW = "E_POINTER_DECREMENT_OVERFLOW"
E_UNMATCHED_SYMBOL = "E_UNMATCHED_SYMBOL"
E_POINTER_OUTSIDE_MEMORY = "E_POINTER_OUTSIDE_MEMORY"
E_EMPTY_LOOP = "E_EMPTY_LOOP"
E_WRITE_ERROR = "E_WRITE_ERROR"


class BFError(Exception):
    """Base exception for BF runtime errors"""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


# ============================================================================
# Parse Errors
# ============================================================================

class BFParseError(BFError):
    """Raised when source text cannot be turned into an instruction tree"""


class DataPointerIncrementOverflow(BFParseError):
    def __init__(self):
        super().__init__(E_POINTER_INCREMENT_OVERFLOW, "data pointer increment overflow")


class DataPointerDecrementOverflow(BFParseError):
    def __init__(self):
        super().__init__(E_POINTER_DECREMENT_OVERFLOW, "data pointer decrement overflow")


class UnmatchedSymbol(BFParseError):
    """A `]` without an open loop, or a `[` that is never closed"""
    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(E_UNMATCHED_SYMBOL, f"unmatched `{symbol}`")


# ============================================================================
# Interpret Errors
# ============================================================================

class BFInterpretError(BFError):
    """Raised when execution of an instruction tree fails"""


class DataPointerOutsideMemory(BFInterpretError):
    def __init__(self):
        super().__init__(E_POINTER_OUTSIDE_MEMORY, "data pointer outside available memory")


class EmptyLoop(BFInterpretError):
    def __init__(self):
        super().__init__(E_EMPTY_LOOP, "interpreter stuck in an empty loop")


class WriteError(BFInterpretError):
    """Output stream failure; the underlying exception is kept in `cause`"""
    def __init__(self, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(E_WRITE_ERROR, f"output error: {cause}")


__all__ = [
    'E_POINTER_INCREMENT_OVERFLOW',
    'E_POINTER_DECREMENT_OVERFLOW',
    'E_UNMATCHED_SYMBOL',
    'E_POINTER_OUTSIDE_MEMORY',
    'E_EMPTY_LOOP',
    'E_WRITE_ERROR',
    'BFError',
    'BFParseError',
    'DataPointerIncrementOverflow',
    'DataPointerDecrementOverflow',
    'UnmatchedSymbol',
    'BFInterpretError',
    'DataPointerOutsideMemory',
    'EmptyLoop',
    'WriteError',
]
