# HoeffdingTree/hoeffding_tree/tree.py
from dataclasses import dataclass
from typing import List

import numpy as np

from .splitting import GiniImpurity, CategoricalSplit, CategoricalSplitInfo
from .stopping import HoeffdingSplit
from .utils import check_index


@dataclass
class UnsplitState:
    procedure: HoeffdingSplit


@dataclass
class SplitState:
    dimension: int
    split_info: CategoricalSplitInfo
    children: List['StreamingDecisionTree']


class StreamingDecisionTree:
    """
    A Hoeffding tree grown one labeled observation at a time.

    A node starts UNSPLIT and forwards samples to its HoeffdingSplit. As soon
    as a split is committed the node becomes SPLIT: the decision procedure is
    dropped, one child is created per category of the split dimension, and
    later samples are routed to the matching child. A split node never
    changes shape again.
    """

    def __init__(
        self,
        dataset_info,
        dimensionality,
        num_classes,
        confidence=0.95,
        fitness_function=GiniImpurity,
        split_type=CategoricalSplit,
        max_samples=0,
        verbose=False,
        depth=0
    ):
        self.dataset_info = dataset_info
        self.dimensionality = dimensionality
        self.num_classes = num_classes
        self.confidence = confidence
        self.fitness_function = fitness_function
        self.split_type = split_type
        self.max_samples = max_samples
        self.verbose = verbose
        self.depth = depth

        self.class_counts = np.zeros(num_classes, dtype=np.int64)
        self.state = UnsplitState(HoeffdingSplit(
            dimensionality, num_classes, dataset_info,
            confidence=confidence, fitness_function=fitness_function,
            split_type=split_type, max_samples=max_samples,
            verbose=verbose, depth=depth
        ))

    @property
    def is_leaf(self):
        return isinstance(self.state, UnsplitState)

    @property
    def split_dimension(self):
        return None if self.is_leaf else self.state.dimension

    @property
    def split_info(self):
        return None if self.is_leaf else self.state.split_info

    @property
    def children(self):
        return [] if self.is_leaf else self.state.children

    @property
    def num_samples(self):
        return int(self.class_counts.sum())

    def train(self, point, label):
        label = check_index(label, self.num_classes, "label")
        if self.is_leaf:
            self.state.procedure.train(point, label)
            self.class_counts[label] += 1
            dimension = self.split_check()
            if dimension is not None:
                self._split(dimension)
        else:
            if len(point) != self.dimensionality:
                raise ValueError(f"Expected a point with {self.dimensionality} dimensions, got {len(point)}.")
            child = self._route(point)
            child.train(point, label)
            self.class_counts[label] += 1

    def train_batch(self, points, labels):
        if len(points) != len(labels):
            raise ValueError(f"Got {len(points)} points but {len(labels)} labels.")
        for point, label in zip(points, labels):
            self.train(point, label)

    def split_check(self):
        """On a node that has never been trained this is advisory: `train` only checks after a sample."""
        if not self.is_leaf:
            return None
        return self.state.procedure.split_check()

    def _make_child(self, dataset_info):
        return StreamingDecisionTree(
            dataset_info, self.dimensionality, self.num_classes,
            confidence=self.confidence, fitness_function=self.fitness_function,
            split_type=self.split_type, max_samples=self.max_samples,
            verbose=self.verbose, depth=self.depth + 1
        )

    def _split(self, dimension):
        procedure = self.state.procedure
        children = []
        split_info = procedure.candidates[dimension].create_children(
            children, self.dataset_info, None, self._make_child
        )
        self.state = SplitState(dimension, split_info, children)
        if self.verbose:
            indent = "  " * (self.depth + 1)
            print(f"{indent}Node (Depth {self.depth}) SPLIT on dimension {dimension} "
                  f"after {procedure.num_samples} samples into {len(children)} children.")

    def _route(self, point):
        dimension = self.state.dimension
        return self.state.children[self.state.split_info.calculate_direction(point[dimension])]

    def majority_class(self):
        return int(np.argmax(self.class_counts))

    def classify(self, point):
        """
        Returns (label, probability) from the leaf the point reaches.

        If that leaf has not seen any samples yet, the deepest ancestor on the
        path that has answers instead.
        """
        if len(point) != self.dimensionality:
            raise ValueError(f"Expected a point with {self.dimensionality} dimensions, got {len(point)}.")
        node = self
        answering = self
        while True:
            if node.num_samples > 0:
                answering = node
            if node.is_leaf:
                break
            node = node._route(point)

        label = answering.majority_class()
        total = answering.num_samples
        probability = answering.class_counts[label] / total if total > 0 else 0.0
        return label, float(probability)

    def predict(self, points):
        return np.array([self.classify(point)[0] for point in points], dtype=int)

    def num_descendants(self):
        return 1 + sum(child.num_descendants() for child in self.children)

    def get_params(self, deep=True):
        return {
            'dimensionality': self.dimensionality,
            'num_classes': self.num_classes,
            'confidence': self.confidence,
            'fitness_function': self.fitness_function,
            'split_type': self.split_type,
            'max_samples': self.max_samples,
            'verbose': self.verbose
        }

    def print_tree(self, indent="", label_names=None):
        majority = self.majority_class()
        majority_repr = label_names[majority] if label_names else majority
        node_stats = f"N={self.num_samples} | counts={self.class_counts.tolist()} | majority={majority_repr}"

        if self.is_leaf:
            print(f"{indent}Leaf: {node_stats}")
            return

        dimension = self.state.dimension
        print(f"{indent}Split: dimension {dimension} | {node_stats}")
        for category, child in enumerate(self.state.children):
            try:
                category_repr = self.dataset_info.unmap_string(category, dimension)
            except ValueError:
                category_repr = f"code({category})"
            child.print_tree(indent + f"  |--{category_repr}: ", label_names)

    def __repr__(self):
        if self.is_leaf:
            return (f"StreamingDecisionTree(Leaf, depth={self.depth}, samples={self.num_samples}, "
                    f"majority={self.majority_class()})")
        return (f"StreamingDecisionTree(Split, depth={self.depth}, dimension={self.state.dimension}, "
                f"children={len(self.state.children)})")
