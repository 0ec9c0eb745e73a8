"""
BF command-line host

Runs a BF source file against stdin/stdout, or starts a line-based REPL
when no file is given.

Usage:
    bf-runtime hello.bf
    bf-runtime --stats hello.bf
    bf-runtime            # REPL; type "reset" or "exit"
"""

from typing import BinaryIO, Iterable, Iterator, List, Optional, TextIO
import argparse
import logging
import os
import sys

from .errors import BFParseError, BFInterpretError
from .interpreter import BFRuntime
from .parser import MAX_DATA_POINTER, parse_code, format_code

logger = logging.getLogger(__name__)

MEMORY_LIMIT_ENV = "BF_MEMORY_LIMIT"


def default_memory_limit() -> int:
    """Pointer ceiling from the environment, else the unsigned 64-bit maximum"""
    return int(os.environ.get(MEMORY_LIMIT_ENV, MAX_DATA_POINTER))


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bf-runtime", description="Run BF programs.")
    parser.add_argument("file", nargs="?", help="Path to a BF source file. Starts a REPL if omitted.")
    parser.add_argument("--stats", action="store_true",
                        help="Print instruction count and memory use after each run.")
    parser.add_argument("--dump", action="store_true",
                        help="Print the parsed program in canonical form instead of running it.")
    parser.add_argument("--memory-limit", type=int, default=None,
                        help=f"Highest addressable cell (default: ${MEMORY_LIMIT_ENV} or 2**64 - 1).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def print_stats(runtime: BFRuntime, err: TextIO):
    stats = runtime.stats()
    print(f"instructions: {stats.instruction_count}, memory: {stats.used_memory}", file=err)


def run_file(path: str, runtime: BFRuntime, show_stats: bool = False, dump: bool = False,
             out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Run one source file, reporting failures on err. Returns an exit status."""
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            source = f.read()
    except OSError as e:
        print(f"failed to read file: {e}", file=err)
        return 1

    try:
        code = parse_code(source, pointer_limit=runtime.memory_limit)
    except BFParseError as e:
        print(f"parser error: {e}", file=err)
        return 1

    if dump:
        print(format_code(code), file=out)
        return 0

    try:
        runtime.interpreter.interpret(code)
    except BFInterpretError as e:
        print(f"interpreter error: {e}", file=err)
        return 1
    finally:
        if show_stats:
            print_stats(runtime, err)

    return 0


def repl(runtime: BFRuntime, lines: Iterable[str], show_stats: bool = False,
         err: Optional[TextIO] = None):
    """Interpret one line at a time on a persistent runtime until "exit" or EOF"""
    err = err or sys.stderr
    print('Welcome to REPL! Type "reset" to reset state or "exit" to exit.', file=err)

    for line in _prompted(lines, err):
        command = line.strip().lower()
        if command == "exit":
            return
        if command == "reset":
            runtime.reset()
            print("state reset", file=err)
            continue

        try:
            runtime.execute(line)
        except (BFParseError, BFInterpretError) as e:
            print(e, file=err)
            continue

        if show_stats:
            print_stats(runtime, err)


def decoded_lines(stream: BinaryIO) -> Iterator[str]:
    """Read lines from the same binary stream `,` reads from"""
    for line in iter(stream.readline, b""):
        yield line.decode("utf-8", "replace")


def _prompted(lines: Iterable[str], err: TextIO):
    iterator = iter(lines)
    while True:
        print("> ", end="", file=err, flush=True)
        try:
            yield next(iterator)
        except StopIteration:
            print(file=err)
            return


def main(argv: Optional[List[str]] = None) -> int:
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.memory_limit is not None:
        memory_limit = args.memory_limit
    else:
        try:
            memory_limit = default_memory_limit()
        except ValueError:
            arg_parser.error(f"${MEMORY_LIMIT_ENV} must be an integer, got {os.environ[MEMORY_LIMIT_ENV]!r}")
    if memory_limit < 0:
        arg_parser.error(f"memory limit must not be negative, got {memory_limit}")

    runtime = BFRuntime(sys.stdin.buffer, sys.stdout.buffer, memory_limit=memory_limit)
    logger.debug("Memory limit: %d", memory_limit)

    if args.file:
        return run_file(args.file, runtime, show_stats=args.stats, dump=args.dump)

    repl(runtime, decoded_lines(sys.stdin.buffer), show_stats=args.stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
