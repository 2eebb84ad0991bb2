#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TSP 输入文件读取 / 写出工具。

支持两种布局（先去掉空行与以 '#' 开头的注释行）：

Matrix layout:
    A B C
    0 10 15
    10 0 20
    15 20 0

List layout（每行一个城市名，第一行全是数字的行开始矩阵）:
    Jakarta
    Bandung
    Surabaya
    0 10 15
    10 0 20
    15 20 0

返回：
    cities: list[str]
    matrix: list[list[float]]   (n x n, 下标与 cities 一致)
"""
from __future__ import annotations

import math
import os
import re
from typing import List, Optional, Sequence, Tuple

from ..errors import (
    DimensionMismatchError,
    EmptyInputError,
    InputReadError,
    InvalidNumberError,
    MalformedLayoutError,
    TSPFileNotFoundError,
)

Line = Tuple[int, str]  # (1-based line number, stripped text)


# ---------------------------------------------------------------------------
#  Tokens
# ---------------------------------------------------------------------------

_NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?", re.ASCII)


def _parse_number(tok: str) -> Optional[float]:
    """Plain ASCII decimal/exponent tokens only; '1_0', 'inf', 'nan' etc. give None."""
    if not _NUMBER_RE.fullmatch(tok):
        return None
    try:
        v = float(tok)
    except ValueError:
        return None
    if not math.isfinite(v):
        return None
    return v


def _is_numeric_line(text: str) -> bool:
    return all(_parse_number(tok) is not None for tok in text.split())


def _retained_lines(text: str) -> List[Line]:
    out: List[Line] = []
    for i, raw in enumerate(text.splitlines(), start=1):
        s = raw.strip()
        if not s or s.startswith("#"):
            continue
        out.append((i, s))
    return out


def is_matrix_format(lines: Sequence[Line]) -> bool:
    if not lines:
        return False
    parts = lines[0][1].split()
    return len(parts) > 1 and any(_parse_number(p) is None for p in parts)


# ---------------------------------------------------------------------------
#  Matrix block
# ---------------------------------------------------------------------------

def _parse_matrix_rows(rows: Sequence[Line], n: int) -> List[List[float]]:
    matrix: List[List[float]] = []
    for r, (line_no, s) in enumerate(rows[:n], start=1):
        row: List[float] = []
        for tok in s.split():
            v = _parse_number(tok)
            if v is None:
                raise InvalidNumberError(row=r, line_no=line_no, token=tok)
            row.append(v)
        if len(row) != n:
            raise DimensionMismatchError("columns", expected=n, actual=len(row), row=r, line_no=line_no)
        matrix.append(row)

    if len(rows) != n:
        raise DimensionMismatchError("rows", expected=n, actual=len(rows))
    return matrix


def _parse_matrix_format(lines: Sequence[Line]) -> Tuple[List[str], List[List[float]]]:
    if len(lines) < 2:
        raise MalformedLayoutError("Matrix format requires at least 2 lines")
    cities = lines[0][1].split()
    return cities, _parse_matrix_rows(lines[1:], len(cities))


def _parse_list_format(lines: Sequence[Line]) -> Tuple[List[str], List[List[float]]]:
    matrix_start = 0
    for i, (_, s) in enumerate(lines):
        if _is_numeric_line(s):
            matrix_start = i
            break

    # 0 也覆盖了“第一行就是数字”的情况：没有城市名
    if matrix_start == 0:
        raise MalformedLayoutError("Could not find distance matrix in input")

    cities = [s for _, s in lines[:matrix_start]]
    return cities, _parse_matrix_rows(lines[matrix_start:], len(cities))


# ---------------------------------------------------------------------------
#  Public entry points
# ---------------------------------------------------------------------------

def parse_tsp_text(text: str) -> Tuple[List[str], List[List[float]]]:
    lines = _retained_lines(text)
    if not lines:
        raise EmptyInputError()
    if is_matrix_format(lines):
        return _parse_matrix_format(lines)
    return _parse_list_format(lines)


def read_tsp_input(path: str) -> Tuple[List[str], List[List[float]]]:
    if not os.path.isfile(path):
        raise TSPFileNotFoundError(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (UnicodeDecodeError, OSError) as e:
        raise InputReadError(path, f"{type(e).__name__}: {e}") from e
    return parse_tsp_text(text)


def format_tsp_text(
    cities: Sequence[str],
    matrix: Sequence[Sequence[float]],
    layout: str = "matrix",
    header: str = "",
) -> str:
    """
    写出为可被 parse_tsp_text 读回的文本；数值用 repr(float) 保证精确往返。
    无法往返的城市名（含空白、以 '#' 开头、在 matrix 布局下全是数字）直接报错。
    """
    names = [str(c) for c in cities]
    n = len(names)
    if len(matrix) != n or any(len(row) != n for row in matrix):
        raise ValueError(f"matrix must be {n}x{n} to match {n} cities")

    for nm in names:
        if not nm.strip() or nm != nm.strip() or nm.startswith("#"):
            raise ValueError(f"city name {nm!r} cannot be written")
        if layout == "matrix" and len(nm.split()) != 1:
            raise ValueError(f"city name {nm!r} contains whitespace (not allowed in matrix layout)")
        if layout == "list" and _is_numeric_line(nm):
            raise ValueError(f"city name {nm!r} is numeric (not allowed in list layout)")

    out: List[str] = []
    if header:
        out.extend(f"# {h}" for h in header.splitlines())

    if layout == "matrix":
        if n < 2 or all(_parse_number(nm) is not None for nm in names):
            raise ValueError("matrix layout needs at least 2 cities and one non-numeric name")
        out.append(" ".join(names))
    elif layout == "list":
        if n < 1:
            raise ValueError("list layout needs at least 1 city")
        # 首行若有多个 token 会被识别为 matrix layout
        if len(names[0].split()) > 1:
            raise ValueError(f"first city name {names[0]!r} must be a single token in list layout")
        out.extend(names)
    else:
        raise ValueError(f"Unknown layout: {layout!r}")

    for row in matrix:
        out.append(" ".join(repr(float(v)) for v in row))
    return "\n".join(out) + "\n"


def write_tsp_input(path: str, cities: Sequence[str], matrix: Sequence[Sequence[float]],
                    layout: str = "matrix", header: str = "") -> str:
    text = format_tsp_text(cities, matrix, layout=layout, header=header)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path
