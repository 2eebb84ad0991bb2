# TSP_DP/problem.py
from __future__ import annotations

import logging
import math
import os

from .dp.dp_run import resolve_spec, solve_instance_with_spec
from .errors import TSPFileNotFoundError
from .utils import readTSPInput
from .utils.profiler import Profiler
from .utils.utils import (
    brute_force_tsp,
    format_input_summary,
    generate_unique_filename,
    summarize_matrix,
)
from .utils.validators import validate_input
from .visualize import create_visualization

VERIFY_MAX_CITIES = 8


class TSPDP:
    def __init__(self, spec=None, verbose: bool = False, logger: logging.Logger | None = None) -> None:
        """
        Held-Karp 问题接口：读取 -> 校验 -> 求解 -> 绘图。

        任何一步失败都抛出 TSPError 子类，前面的结果全部丢弃（不做部分输出）。
        """
        self.spec = resolve_spec(spec)
        self.verbose = bool(verbose)
        self.log = logger or logging.getLogger("tsp_dp")
        self.profiler = Profiler()

    # ---------------- 输入 ----------------
    def resolve_input(self, input_name: str) -> str:
        path = os.path.join(str(self.spec.io.get("input_dir", "input")), input_name)
        if not os.path.isfile(path):
            raise TSPFileNotFoundError(path)
        return path

    def load(self, input_name: str):
        """Return (cities, validated float64 matrix)."""
        with self.profiler.stage("read"):
            path = self.resolve_input(input_name)
            self.log.info("Reading input file: %s", path)
            cities, matrix = readTSPInput.read_tsp_input(path)
            self.log.info("Successfully parsed %d cities", len(cities))

        with self.profiler.stage("validate"):
            mat = validate_input(
                cities,
                matrix,
                min_cities=int(self.spec.limits.get("min_cities", 2)),
                max_cities=int(self.spec.limits.get("max_cities", 20)),
                logger=self.log,
            )
        return cities, mat

    # ---------------- 求解 ----------------
    def solve(self, matrix, verify: bool = False):
        with self.profiler.stage("solve"):
            min_cost, tour, meta = solve_instance_with_spec(
                matrix, self.spec, verbose=self.verbose, logger=self.log, return_meta=True
            )

        if verify:
            meta["verified"] = self.verify(matrix, min_cost)
        return min_cost, tour, meta

    def verify(self, matrix, min_cost: float):
        """Brute-force cross-check; None when the instance is too large to enumerate."""
        n = len(matrix)
        if n > VERIFY_MAX_CITIES:
            self.log.warning("Skip brute-force check: %d cities > %d", n, VERIFY_MAX_CITIES)
            return None
        with self.profiler.stage("verify"):
            bf_cost, _ = brute_force_tsp(matrix)
        ok = math.isclose(bf_cost, min_cost, rel_tol=1e-9, abs_tol=1e-9)
        if ok:
            self.log.info("Brute-force check passed (cost=%s)", bf_cost)
        else:
            self.log.warning("Brute-force check FAILED: dp=%s brute_force=%s", min_cost, bf_cost)
        return ok

    # ---------------- 输出 ----------------
    def output_path(self, output_base: str) -> str:
        return generate_unique_filename(
            output_base,
            output_dir=str(self.spec.io.get("output_dir", "output")),
            max_attempts=int(self.spec.io.get("max_attempts", 9999)),
        )

    def render(self, cities, tour, min_cost: float, output_file: str) -> str:
        r = self.spec.render
        with self.profiler.stage("render"):
            return create_visualization(
                cities, tour, min_cost, output_file,
                width=int(r.get("width", 800)),
                height=int(r.get("height", 600)),
                dpi=int(r.get("dpi", 100)),
                arrow_pos=float(r.get("arrow_pos", 0.75)),
                arrow_length=float(r.get("arrow_length", 0.05)),
                arrow_angle=float(r.get("arrow_angle", 0.5)),
                logger=self.log,
            )

    # ---------------- 全流程 ----------------
    def run(self, input_name: str, output_base: str = "tsp_solution", render: bool = True,
            verify: bool = False) -> dict:
        cities, matrix = self.load(input_name)

        if self.verbose:
            print("\n" + format_input_summary(cities, matrix) + "\n", flush=True)
            self.log.debug("Matrix profile: %s", summarize_matrix(matrix))

        # 输出目录 / 文件名属于校验的一部分，在求解之前完成
        output_file = self.output_path(output_base) if render else None

        self.log.info("Solving TSP using Dynamic Programming...")
        min_cost, tour, meta = self.solve(matrix, verify=verify)

        if output_file is not None:
            self.log.info("Generating visualization...")
            self.render(cities, tour, min_cost, output_file)

        if self.verbose:
            self.log.debug("Stage timings: %s", self.profiler.dumps())

        return {
            "cities": list(cities),
            "min_cost": float(min_cost),
            "tour": list(tour),
            "output_file": output_file,
            "meta": meta,
        }
