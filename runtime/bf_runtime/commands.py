"""
BF Command Characters

The eight source characters the language recognises. Everything else in a
source file is a comment.
"""

COMMANDS = frozenset('><+-.,[]')

# Run-length mergeable commands and the step each one contributes
POINTER_STEPS = {'>': 1, '<': -1}
CELL_STEPS = {'+': 1, '-': -1}


def is_command(char: str) -> bool:
    """Check if a character is one of the eight commands"""
    return char in COMMANDS


def strip_comments(source: str) -> str:
    """Drop every non-command character from source text"""
    return ''.join(char for char in source if char in COMMANDS)


__all__ = [
    'COMMANDS',
    'POINTER_STEPS',
    'CELL_STEPS',
    'is_command',
    'strip_comments',
]
