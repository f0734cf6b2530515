# HoeffdingTree/hoeffding_tree/splitting.py
import math
from dataclasses import dataclass

import numpy as np

from .utils import gini_impurity, entropy, check_index


def _weighted_child_impurity(counts, impurity):
    totals_per_category = counts.sum(axis=1)
    total = totals_per_category.sum()
    weighted = 0.0
    for category_counts, category_total in zip(counts, totals_per_category):
        if category_total > 0:
            weighted += (category_total / total) * impurity(category_counts)
    return weighted


class GiniImpurity:
    """
    Gain in Gini impurity from splitting on one categorical dimension.

    `counts` is a (num_categories, num_classes) matrix; the gain is the Gini
    impurity of the merged class distribution minus the category-weighted
    Gini impurity of each category's distribution.
    """

    @staticmethod
    def evaluate(counts):
        counts = np.asarray(counts)
        if counts.sum() == 0:
            return 0.0
        merged = gini_impurity(counts.sum(axis=0))
        gain = merged - _weighted_child_impurity(counts, gini_impurity)
        # Rounding can push a zero gain slightly negative.
        return max(0.0, gain)

    @staticmethod
    def range(num_classes):
        if num_classes < 1:
            raise ValueError("num_classes must be at least 1.")
        return (num_classes - 1) / num_classes


class InformationGain:
    """Same contract as GiniImpurity, measured in bits of entropy."""

    @staticmethod
    def evaluate(counts):
        counts = np.asarray(counts)
        if counts.sum() == 0:
            return 0.0
        merged = entropy(counts.sum(axis=0))
        return max(0.0, merged - _weighted_child_impurity(counts, entropy))

    @staticmethod
    def range(num_classes):
        if num_classes < 1:
            raise ValueError("num_classes must be at least 1.")
        return math.log2(num_classes)


@dataclass(frozen=True)
class CategoricalSplitInfo:
    """Routing for a committed categorical split: one child per category."""
    num_categories: int

    def calculate_direction(self, category):
        return check_index(category, self.num_categories, "category")


class CategoricalSplit:
    """
    Split candidate for a single categorical dimension of one node.

    Accumulates a category x class count matrix and scores it with a purity
    measure (any class with static `evaluate(counts)` and `range(num_classes)`).
    """

    split_info_type = CategoricalSplitInfo

    def __init__(self, num_categories, num_classes, fitness_function=GiniImpurity):
        if num_categories < 0:
            raise ValueError("num_categories must be non-negative.")
        if num_classes < 1:
            raise ValueError("num_classes must be at least 1.")
        self.num_categories = num_categories
        self.num_classes = num_classes
        self.fitness_function = fitness_function
        self.sufficient_statistics = np.zeros((num_categories, num_classes), dtype=np.int64)

    def train(self, category, label):
        category = check_index(category, self.num_categories, "category")
        label = check_index(label, self.num_classes, "label")
        self.sufficient_statistics[category, label] += 1

    @property
    def num_samples(self):
        return int(self.sufficient_statistics.sum())

    def class_totals(self):
        return self.sufficient_statistics.sum(axis=0)

    def majority_class(self):
        # argmax returns the lowest index among ties, and 0 when nothing has been seen.
        return int(np.argmax(self.class_totals()))

    def evaluate_fitness_function(self):
        return float(self.fitness_function.evaluate(self.sufficient_statistics))

    def create_children(self, children, dataset_info, split_info, child_factory):
        """
        Appends one fresh child per category to `children`.

        Args:
            children (list): Receives the new child nodes, in category order.
            dataset_info (DatasetInfo): Category info used to size the children's candidates.
            split_info (CategoricalSplitInfo or None): Routing for the split. When None,
                a new identity mapping over this candidate's categories is built.
            child_factory (callable): `child_factory(dataset_info)` returns a new, untrained node.

        Returns:
            CategoricalSplitInfo: the routing that maps category i to child i.
        """
        if split_info is None:
            split_info = self.split_info_type(self.num_categories)
        elif split_info.num_categories != self.num_categories:
            raise ValueError(
                f"split_info covers {split_info.num_categories} categories, "
                f"candidate has {self.num_categories}."
            )
        for _ in range(self.num_categories):
            children.append(child_factory(dataset_info))
        return split_info

    def __repr__(self):
        return (f"CategoricalSplit(num_categories={self.num_categories}, num_classes={self.num_classes}, "
                f"samples={self.num_samples}, fitness={self.evaluate_fitness_function():.4f})")
