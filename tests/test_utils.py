import math

import pytest

from hoeffding_tree.utils import (
    DatasetInfo,
    NAN_PLACEHOLDER,
    check_index,
    entropy,
    gini_impurity,
    hoeffding_bound,
)


def test_gini_impurity():
    assert gini_impurity([10, 0]) == 0.0
    assert gini_impurity([5, 5]) == pytest.approx(0.5)
    assert gini_impurity([1, 1, 1, 1]) == pytest.approx(0.75)
    assert gini_impurity([0, 0, 0]) == 0.0


def test_entropy():
    assert entropy([7, 0]) == 0.0
    assert entropy([5, 5]) == pytest.approx(1.0)
    assert entropy([2, 2, 2, 2]) == pytest.approx(2.0)
    assert entropy([0, 0]) == 0.0


def test_hoeffding_bound_shrinks_with_samples():
    bounds = [hoeffding_bound(0.5, 0.95, n) for n in (1, 10, 100, 1000, 10000)]
    assert all(a > b for a, b in zip(bounds, bounds[1:]))
    assert bounds[-1] < 0.01

    expected = math.sqrt(0.25 * math.log(1.0 / 0.05) / (2 * 100))
    assert hoeffding_bound(0.5, 0.95, 100) == pytest.approx(expected)


def test_hoeffding_bound_edge_cases():
    assert hoeffding_bound(0.5, 0.95, 0) == float('inf')
    assert hoeffding_bound(0.0, 0.95, 10) == 0.0
    with pytest.raises(ValueError):
        hoeffding_bound(0.5, 1.0, 10)
    with pytest.raises(ValueError):
        hoeffding_bound(0.5, 0.0, 10)
    with pytest.raises(ValueError):
        hoeffding_bound(0.5, 0.95, -1)


def test_check_index():
    assert check_index(2, 3, "category") == 2
    with pytest.raises(ValueError):
        check_index(3, 3, "category")
    with pytest.raises(ValueError):
        check_index(-1, 3, "category")
    with pytest.raises(TypeError):
        check_index(1.0, 3, "category")
    with pytest.raises(TypeError):
        check_index(True, 3, "category")


def test_dataset_info_maps_strings_densely():
    info = DatasetInfo(2)
    assert info.map_string("cat1", 0) == 0
    assert info.map_string("cat2", 0) == 1
    assert info.map_string("cat1", 0) == 0
    assert info.map_string("other", 1) == 0
    assert info.map_string(None, 1) == 1

    assert info.num_mappings(0) == 2
    assert info.num_mappings(1) == 2
    assert info.unmap_string(1, 0) == "cat2"
    assert info.unmap_string(1, 1) == NAN_PLACEHOLDER

    with pytest.raises(ValueError):
        info.unmap_string(5, 0)
    with pytest.raises(IndexError):
        info.num_mappings(2)


def test_dataset_info_from_category_counts():
    info = DatasetInfo.from_category_counts([4, 3, 2])
    assert [info.num_mappings(d) for d in range(3)] == [4, 3, 2]
    assert info.unmap_string(3, 0) == "3"
    # Declared categories keep their codes; unseen values extend the dimension.
    assert info.map_string("2", 1) == 2
    assert info.map_string("new", 1) == 3


def test_dataset_info_encode():
    info = DatasetInfo(2)
    assert info.encode(["a", "x"]) == [0, 0]
    assert info.encode(["b", "x"]) == [1, 0]
    with pytest.raises(ValueError):
        info.encode(["a"])
