# TSP_DP/dp/spec.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional

ENGINES = ("top_down", "bottom_up")


@dataclass
class DPSpec:
    """ Held-Karp 运行配置：引擎 / 规模上限 / 诊断输出 / 绘图 / 文件路径 """
    # engine: bottom_up 走 numba 分层扫描；top_down 为记忆化递归（参考实现）
    engine: Dict[str, Any] = field(default_factory=lambda: {"type": "bottom_up", "progress": False})
    # limits: 2^n * n 的状态空间决定了 20 城市的上限
    limits: Dict[str, Any] = field(default_factory=lambda: {"min_cities": 2, "max_cities": 20})
    # trace: verbose 时只打印 popcount <= max_popcount 的状态
    trace: Dict[str, Any] = field(default_factory=lambda: {"max_popcount": 3})
    render: Dict[str, Any] = field(default_factory=lambda: {
        "width": 800,
        "height": 600,
        "dpi": 100,
        "arrow_pos": 0.75,
        "arrow_length": 0.05,
        "arrow_angle": 0.5,
    })
    io: Dict[str, Any] = field(default_factory=lambda: {
        "input_dir": "input",
        "output_dir": "output",
        "max_attempts": 9999,
    })

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def default_dp_spec() -> DPSpec:
    return DPSpec()


def to_dict(spec: DPSpec) -> Dict[str, Any]:
    return asdict(spec)


def from_json(js: Optional[Dict[str, Any]]) -> DPSpec:
    """
    从 JSON/dict 构造 DPSpec。
    未出现的字段使用默认值；未知字段忽略；非 dict 的段落整体忽略。
    """
    base = default_dp_spec()
    if not isinstance(js, dict):
        return base

    def merge_dict(dst: Dict[str, Any], src_val: Any) -> Dict[str, Any]:
        if isinstance(src_val, dict):
            out = dict(dst)
            out.update(src_val)
            return out
        return dst

    engine = merge_dict(base.engine, js.get("engine"))
    if engine.get("type") not in ENGINES:
        engine["type"] = base.engine["type"]

    return DPSpec(
        engine=engine,
        limits=merge_dict(base.limits, js.get("limits")),
        trace=merge_dict(base.trace, js.get("trace")),
        render=merge_dict(base.render, js.get("render")),
        io=merge_dict(base.io, js.get("io")),
    )
