from __future__ import annotations

import numpy as np

from common.param_utils import make_hashable_param, ordered_items_to_tuple, params_to_tuple


def test_params_to_tuple_is_order_independent() -> None:
    a = params_to_tuple({"k": 2, "mode": "generalized", "c": [0.1, 0.2]})
    b = params_to_tuple({"c": (0.1, 0.2), "mode": "generalized", "k": 2})
    assert a == b
    hash(a)


def test_ordered_items_keep_insertion_order() -> None:
    a = ordered_items_to_tuple({"XY": 1.0, "YZ": 2.0})
    b = ordered_items_to_tuple({"YZ": 2.0, "XY": 1.0})
    assert a != b
    assert params_to_tuple({"XY": 1.0, "YZ": 2.0}) == params_to_tuple({"YZ": 2.0, "XY": 1.0})


def test_arrays_hash_by_content() -> None:
    x = make_hashable_param(np.arange(6, dtype=np.float64).reshape(2, 3))
    y = make_hashable_param(np.arange(6, dtype=np.float64).reshape(2, 3))
    z = make_hashable_param(np.arange(6, dtype=np.float64).reshape(3, 2))
    assert x == y
    assert x != z
    assert make_hashable_param(np.float64(1.5)) == 1.5
    assert make_hashable_param({2, 1}) == make_hashable_param({1, 2})


def test_unhashable_objects_fall_back_to_identity() -> None:
    class Box:
        __hash__ = None  # type: ignore[assignment]

    b = Box()
    key = make_hashable_param(b)
    assert key[0] == "obj" and key[2] == id(b)
