#!/usr/bin/env python3
"""
BF Interpreter Benchmark
Times parse + interpret over a few reference programs and reports
instruction-equivalents per second.
"""

import io
import json
import sys
import time
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent / "runtime"))

from bf_runtime.commands import strip_comments
from bf_runtime.interpreter import BFInterpreter
from bf_runtime.parser import Loop, parse_code

PROGRAMS = {
    'hello_world': (
        "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
        ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
    ),
    # 255 * 255 inner iterations
    'nested_countdown': "-[>-[>+<-]<-]",
    # walks 10k cells to the right and back
    'tape_sweep': "+" * 10 + "[>" + "+" * 10 + "[>+>+<<-]<-]" + ">" * 10000 + "<" * 10000,
}


def count_nodes(code):
    """Number of instruction nodes in a tree"""
    total = 0
    for node in code:
        total += 1
        if isinstance(node, Loop):
            total += count_nodes(node.body)
    return total


def benchmark_program(name, source, repeats=20):
    code = parse_code(source)
    timings = []
    instructions = 0

    for _ in range(repeats):
        interpreter = BFInterpreter(io.BytesIO(), io.BytesIO())
        start = time.perf_counter()
        interpreter.interpret(code)
        timings.append(time.perf_counter() - start)
        instructions = interpreter.stats().instruction_count

    timings = np.array(timings) * 1000
    rate = instructions / (timings.mean() / 1000)

    print(f"{name:18s} commands={len(strip_comments(source)):6d} nodes={count_nodes(code):5d} "
          f"mean={timings.mean():8.3f}ms std={timings.std():7.3f}ms "
          f"p95={np.percentile(timings, 95):8.3f}ms ops/s={int(rate):10d}")

    return {
        'commands': len(strip_comments(source)),
        'nodes': count_nodes(code),
        'instruction_count': instructions,
        'mean_ms': float(timings.mean()),
        'std_ms': float(timings.std()),
        'p50_ms': float(np.percentile(timings, 50)),
        'p95_ms': float(np.percentile(timings, 95)),
        'ops_per_sec': float(rate),
    }


if __name__ == '__main__':
    results = {name: benchmark_program(name, source) for name, source in PROGRAMS.items()}

    # Save results
    output_dir = Path("benchmarks/results")
    output_dir.mkdir(parents=True, exist_ok=True)

    with open(output_dir / "interpreter_results.json", 'w') as f:
        json.dump(results, f, indent=2)

    print(f"\nResults saved to benchmarks/results/interpreter_results.json")
