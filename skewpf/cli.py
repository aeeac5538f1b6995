'''
Command line driver for skewpf.

Reads an even dimension followed by the row-major strict upper triangle,
builds the skew-symmetric matrix and prints its Pfaffian.

Usage:
    python -m skewpf 4 2 3 4 5 6 7                 # -> 16.0
    python -m skewpf 6 $(seq 1 15) --method iterative --stats
    python -m skewpf --demo
'''

import argparse
import logging
from typing import List, Optional, Sequence

from .algebra.errors import SkewMatrixError
from .algebra.pfaffian import PfaffianAlgorithms, pfaffian_with_stats
from .algebra.skew import SkewMatrix
from .algebra.utils import print_config
from .common.flog import get_global_logger, print_arguments

# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog        = "skewpf",
        description = "Pfaffian of a skew-symmetric matrix given by its strict upper triangle.")
    parser.add_argument("n", type=int, nargs="?", default=None,
                        help="Even dimension of the matrix.")
    parser.add_argument("values", type=float, nargs="*", default=[],
                        help="n*(n-1)/2 upper-triangle values, row-major.")
    parser.add_argument("-m", "--method", default=None,
                        choices=[m.name.lower() for m in PfaffianAlgorithms],
                        help="Algorithm (default: PY_PFAFFIAN_METHOD).")
    parser.add_argument("--show", action="store_true",
                        help="Print the dense matrix.")
    parser.add_argument("--stats", action="store_true",
                        help="Print call and memo counters.")
    parser.add_argument("--demo", action="store_true",
                        help="Run the 2x2, 4x4 and 6x6 examples.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging, options table and configuration.")
    return parser

# ─────────────────────────────────────────────────────────────────────────────

def _report(m: SkewMatrix, method, show: bool, stats: bool, label: Optional[str] = None) -> float:
    if show:
        print(f"A {m.n}x{m.n} Matrix:\n{m}\n")
    res     = pfaffian_with_stats(m, method)
    label   = label or f"Pfaffian(A_{m.n}x{m.n})"
    print(f"{label} = {res.value}")
    if stats:
        print(f"method={res.method.name} calls={res.calls} memo_hits={res.memo_hits} memo_size={res.memo_size}")
    return res.value

def run_demo(method=None, stats: bool = False) -> List[float]:
    '''
    The 2x2, 4x4 and 6x6 examples; returns their Pfaffians.
    '''
    out = []

    # the only matching is (0,1)
    out.append(_report(SkewMatrix(2, [12.0]), method, True, stats))
    print("---")

    # matchings (0,1)(2,3), (0,2)(1,3), (0,3)(1,2) -> af - be + cd
    a, b, c, d, e, f = 2.0, 3.0, 4.0, 5.0, 6.0, 7.0
    out.append(_report(SkewMatrix(4, [a, b, c, d, e, f]), method, True, stats))
    print(f"Expected (af - be + cd) = {a * f - b * e + c * d}")
    print("---")

    # 5!! = 15 matchings
    out.append(_report(SkewMatrix(6, [float(v) for v in range(1, 16)]), method, False, stats))
    return out

def main(argv: Optional[Sequence[str]] = None) -> int:
    parser  = build_parser()
    args    = parser.parse_args(argv)
    log     = get_global_logger()

    if args.verbose:
        log.set_level(logging.DEBUG)
        print_arguments(parser, log, title="skewpf options")
        print_config(log)

    if args.demo:
        run_demo(args.method, args.stats)
        return 0

    if args.n is None:
        parser.print_usage()
        log.error("Dimension n is required unless --demo is given.")
        return 2

    try:
        m = SkewMatrix(args.n, args.values)
    except SkewMatrixError as e:
        log.error(str(e))
        return 2

    _report(m, args.method, args.show, args.stats, label="Pfaffian")
    return 0

# ─────────────────────────────────────────────────────────────────────────────
