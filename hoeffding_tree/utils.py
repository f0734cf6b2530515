# HoeffdingTree/hoeffding_tree/utils.py
import math
import numbers

import numpy as np

NAN_PLACEHOLDER = '__NaN__'


def gini_impurity(class_counts):
    """
    Gini impurity of a class-count vector: 1 - sum(p_i^2).
    An empty vector (all zeros) has impurity 0.
    """
    class_counts = np.asarray(class_counts, dtype=float)
    total = class_counts.sum()
    if total == 0:
        return 0.0
    p = class_counts / total
    return float(1.0 - np.sum(p * p))


def entropy(class_counts):
    """
    Shannon entropy (base 2) of a class-count vector.
    Zero-count classes contribute nothing; an empty vector has entropy 0.
    """
    class_counts = np.asarray(class_counts, dtype=float)
    total = class_counts.sum()
    if total == 0:
        return 0.0
    p = class_counts[class_counts > 0] / total
    return float(-np.sum(p * np.log2(p)))


def hoeffding_bound(value_range, confidence, num_samples):
    """
    Hoeffding bound on the deviation of an empirical mean from its true value.

    epsilon = sqrt(R^2 * ln(1 / (1 - confidence)) / (2 * n))

    Args:
        value_range (float): Range R of the observed quantity.
        confidence (float): Probability in (0, 1) that the true mean lies within epsilon.
        num_samples (int): Number of observations n.

    Returns:
        float: epsilon. With no observations nothing is known, so the bound is infinite.
    """
    check_confidence(confidence)
    if num_samples < 0:
        raise ValueError(f"num_samples must be non-negative, got {num_samples}.")
    if num_samples == 0:
        return float('inf')
    return math.sqrt(value_range ** 2 * math.log(1.0 / (1.0 - confidence)) / (2.0 * num_samples))


def check_confidence(confidence):
    if not (0.0 < confidence < 1.0):
        raise ValueError(f"confidence must be in (0, 1), got {confidence}.")


def check_index(value, upper, name):
    """Validates that value is an integer in [0, upper) and returns it as int."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}.")
    value = int(value)
    if value < 0 or value >= upper:
        raise ValueError(f"{name} {value} out of range [0, {upper}).")
    return value


class DatasetInfo:
    """
    Per-dimension mapping from raw categorical values to dense integer codes.

    The tree core only ever asks `num_mappings(dimension)`; string handling
    stays here, before data reaches `train`.
    """

    def __init__(self, dimensionality):
        if dimensionality < 0:
            raise ValueError("dimensionality must be non-negative.")
        self.dimensionality = dimensionality
        self.categorical_maps = [
            {'value_to_code': {}, 'code_to_value': {}} for _ in range(dimensionality)
        ]

    @classmethod
    def from_category_counts(cls, counts):
        info = cls(len(counts))
        for dimension, count in enumerate(counts):
            for code in range(count):
                info.map_string(str(code), dimension)
        return info

    def _maps(self, dimension):
        if not (0 <= dimension < self.dimensionality):
            raise IndexError(f"dimension {dimension} out of range for dimensionality {self.dimensionality}.")
        return self.categorical_maps[dimension]

    def map_string(self, value, dimension):
        maps = self._maps(dimension)
        str_value = str(value) if value is not None else NAN_PLACEHOLDER
        code = maps['value_to_code'].get(str_value)
        if code is None:
            code = len(maps['value_to_code'])
            maps['value_to_code'][str_value] = code
            maps['code_to_value'][code] = str_value
        return code

    def unmap_string(self, code, dimension):
        maps = self._maps(dimension)
        if code not in maps['code_to_value']:
            raise ValueError(f"Unknown code {code} for dimension {dimension}.")
        return maps['code_to_value'][code]

    def num_mappings(self, dimension):
        return len(self._maps(dimension)['value_to_code'])

    def encode(self, row):
        if len(row) != self.dimensionality:
            raise ValueError(f"Expected {self.dimensionality} values, got {len(row)}.")
        return [self.map_string(value, d) for d, value in enumerate(row)]

    def __repr__(self):
        counts = [self.num_mappings(d) for d in range(self.dimensionality)]
        return f"DatasetInfo(dimensionality={self.dimensionality}, categories={counts})"
