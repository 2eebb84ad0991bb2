from TSP_DP.dp.dp_run import resolve_spec, solve_instance_with_spec
from TSP_DP.dp.spec import DPSpec, default_dp_spec, from_json, to_dict


def test_defaults():
    spec = default_dp_spec()
    assert spec.engine["type"] == "bottom_up"
    assert spec.limits == {"min_cities": 2, "max_cities": 20}
    assert spec.trace["max_popcount"] == 3
    assert spec.io["max_attempts"] == 9999


def test_from_json_merges_sections():
    spec = from_json({"engine": {"type": "top_down"}, "io": {"output_dir": "imgs"}, "unknown": 1})
    assert spec.engine == {"type": "top_down", "progress": False}
    assert spec.io["output_dir"] == "imgs"
    assert spec.io["input_dir"] == "input"


def test_from_json_is_lenient():
    assert from_json(None) == default_dp_spec()
    assert from_json([1, 2]) == default_dp_spec()
    spec = from_json({"engine": {"type": "simulated_annealing"}, "limits": "oops"})
    assert spec.engine["type"] == "bottom_up"
    assert spec.limits == default_dp_spec().limits


def test_round_trip_through_dict():
    spec = from_json({"trace": {"max_popcount": 5}})
    assert from_json(to_dict(spec)) == spec
    assert spec.to_dict() == to_dict(spec)


def test_defaults_are_not_shared():
    a = default_dp_spec()
    a.engine["type"] = "top_down"
    assert default_dp_spec().engine["type"] == "bottom_up"


def test_resolve_spec():
    spec = DPSpec()
    assert resolve_spec(spec) is spec
    assert resolve_spec({"engine": {"type": "top_down"}}).engine["type"] == "top_down"
    assert resolve_spec(None) == default_dp_spec()


def test_solve_instance_with_meta(small_matrix):
    cost, tour, meta = solve_instance_with_spec(small_matrix, {"engine": {"type": "top_down"}}, return_meta=True)
    assert (cost, tour) == (45.0, [0, 1, 2])
    assert meta["engine"] == "top_down"
    assert meta["n"] == 3
    assert meta["n_states"] == 24
    # (001,0), (011,1), (101,2)
    assert meta["states_filled"] == 3
    assert meta["elapsed_sec"] >= 0.0


def test_solve_instance_without_meta(small_matrix):
    assert solve_instance_with_spec(small_matrix) == (45.0, [0, 1, 2])
