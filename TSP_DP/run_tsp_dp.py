#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exact TSP solver (Held-Karp dynamic programming) command line.

Features:
- Read `input/<name>` in matrix layout or list layout (see utils/readTSPInput.py)
- Validate: 2..20 cities, square matrix, zero diagonal, finite non-negative distances
- Solve with the top-down or bottom-up (numba) Held-Karp engine
- Print minimum cost + closed path, save a PNG of the tour to `output/`
- Optional brute-force cross-check for <= 8 cities

Example:
    python -m TSP_DP.run_tsp_dp --input cities.txt --output my_tour --verbose
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

from .dp.spec import ENGINES, from_json
from .errors import TSPError, TSPFileNotFoundError
from .problem import TSPDP
from .utils.utils import format_path, make_logger


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tsp-dp", description="A TSP solver using dynamic programming")
    ap.add_argument("-i", "--input", type=str, required=True, help="Input file name (under --input_dir)")
    ap.add_argument("-o", "--output", type=str, default="tsp_solution", help="Output image base name")
    ap.add_argument("-v", "--verbose", action="store_true", help="Show input summary, DP steps and timings")
    ap.add_argument("--input_dir", type=str, default=None, help="Directory holding input files (default: input)")
    ap.add_argument("--output_dir", type=str, default=None, help="Existing directory for images (default: output)")
    ap.add_argument("--engine", type=str, choices=ENGINES, default=None, help="Held-Karp evaluation order")
    ap.add_argument("--spec_json", type=str, default="", help="Optional JSON file with DPSpec overrides")
    ap.add_argument("--verify", action="store_true", help="Cross-check the optimum by brute force (n <= 8)")
    ap.add_argument("--no_render", action="store_true", help="Skip the PNG output")
    ap.add_argument("--log_file", type=str, default="", help="Optional log file to append logs")
    return ap


def load_spec(args: argparse.Namespace):
    js = None
    if args.spec_json:
        try:
            with open(args.spec_json, "r", encoding="utf-8") as f:
                js = json.load(f)
        except FileNotFoundError as e:
            raise TSPFileNotFoundError(args.spec_json) from e
        except json.JSONDecodeError as e:
            raise SystemExit(f"Error: invalid JSON in {args.spec_json}: {e}")
    spec = from_json(js)

    # 命令行参数优先于 JSON
    if args.engine:
        spec.engine["type"] = args.engine
    if args.input_dir is not None:
        spec.io["input_dir"] = args.input_dir
    if args.output_dir is not None:
        spec.io["output_dir"] = args.output_dir
    return spec


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = make_logger("tsp_dp", logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    print("TSP Solver with Dynamic Programming", flush=True)
    print("=====================================", flush=True)

    try:
        spec = load_spec(args)
        prob = TSPDP(spec, verbose=args.verbose, logger=logger)
        res = prob.run(args.input, output_base=args.output, render=not args.no_render, verify=args.verify)
    except TSPError as e:
        logger.error("%s: %s", type(e).__name__, e)
        raise SystemExit(f"Error: {e}")

    print("\nSolution Found!", flush=True)
    print("==================", flush=True)
    print(f"Minimum cost: {res['min_cost']}", flush=True)
    print(f"Optimal path: {format_path(res['cities'], res['tour'])}", flush=True)
    if res["output_file"]:
        print(f"Visualization saved to: {res['output_file']}", flush=True)
    print("\nTSP solving completed successfully!", flush=True)

    if res["meta"].get("verified") is False:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
