# HoeffdingTree/hoeffding_tree/stopping.py
from typing import Optional

from .splitting import GiniImpurity, CategoricalSplit
from .utils import hoeffding_bound, check_confidence, check_index


class HoeffdingSplit:
    """
    Decides, from a prefix of the stream, whether a node should stop
    accumulating statistics and split.

    One split candidate is kept per dimension. After each observation the
    best and second-best candidate fitness are compared; once their gap
    exceeds the Hoeffding bound for the samples seen so far, the best
    dimension is the right one with probability at least `confidence`.

    Args:
        dimensionality (int): Number of input dimensions.
        num_classes (int): Number of class labels.
        dataset_info: Category info provider; `num_mappings(d)` sizes the candidate for dimension d.
        confidence (float): Required probability in (0, 1) that the chosen dimension is correct.
        fitness_function: Purity measure with static `evaluate` and `range`.
        split_type: Split candidate class, constructed as `split_type(num_categories, num_classes, fitness_function)`.
        max_samples (int): If > 0, commit to the best dimension once this many samples have been
            seen, provided it has positive fitness. 0 disables the limit.
        verbose (bool): Print the decision made by each split check.
        depth (int): Depth of the owning node, for log indentation.
    """

    def __init__(
        self,
        dimensionality,
        num_classes,
        dataset_info,
        confidence=0.95,
        fitness_function=GiniImpurity,
        split_type=CategoricalSplit,
        max_samples=0,
        verbose=False,
        depth=0
    ):
        if dimensionality < 1:
            raise ValueError("dimensionality must be at least 1.")
        if num_classes < 1:
            raise ValueError("num_classes must be at least 1.")
        check_confidence(confidence)
        if max_samples < 0:
            raise ValueError("max_samples must be non-negative.")

        self.dimensionality = dimensionality
        self.num_classes = num_classes
        self.confidence = confidence
        self.fitness_function = fitness_function
        self.max_samples = max_samples
        self.verbose = verbose
        self.depth = depth
        self.num_samples = 0
        self._candidates = [
            split_type(dataset_info.num_mappings(d), num_classes, fitness_function)
            for d in range(dimensionality)
        ]

    @property
    def candidates(self):
        return tuple(self._candidates)

    def train(self, point, label):
        if len(point) != self.dimensionality:
            raise ValueError(f"Expected a point with {self.dimensionality} dimensions, got {len(point)}.")
        # Validate everything first so a bad sample leaves no partial counts behind.
        label = check_index(label, self.num_classes, "label")
        point = [
            check_index(category, candidate.num_categories, f"category of dimension {d}")
            for d, (candidate, category) in enumerate(zip(self._candidates, point))
        ]
        for candidate, category in zip(self._candidates, point):
            candidate.train(category, label)
        self.num_samples += 1

    def majority_class(self):
        return self._candidates[0].majority_class()

    def fitness(self):
        return [candidate.evaluate_fitness_function() for candidate in self._candidates]

    def bound(self):
        value_range = self.fitness_function.range(self.num_classes)
        return hoeffding_bound(value_range, self.confidence, self.num_samples)

    def split_check(self) -> Optional[int]:
        """
        Returns the dimension to split on, or None if the evidence is not yet
        strong enough.
        """
        fitness = self.fitness()
        # Stable sort: among equal fitness values the lower dimension wins.
        order = sorted(range(self.dimensionality), key=lambda d: -fitness[d])
        best = order[0]
        best_fitness = fitness[best]
        second_fitness = fitness[order[1]] if self.dimensionality > 1 else 0.0
        gap = best_fitness - second_fitness

        indent = "  " * (self.depth + 1)

        if self.num_samples == 0:
            if self.verbose:
                print(f"{indent}Split Check: no samples seen, committing to dimension {best}.")
            return best

        epsilon = self.bound()

        if self.verbose:
            print(f"{indent}Split Check (n={self.num_samples}):")
            print(f"{indent}  - Best dimension: {best} (fitness {best_fitness:.5f})")
            print(f"{indent}  - Second best fitness: {second_fitness:.5f}")
            print(f"{indent}  - Gap: {gap:.5f}, Hoeffding bound: {epsilon:.5f}")

        if gap > epsilon:
            if self.verbose:
                print(f"{indent}  - Decision: split on dimension {best} (gap > bound).")
            return best

        if self.max_samples and self.num_samples >= self.max_samples and best_fitness > 0.0:
            if self.verbose:
                print(f"{indent}  - Decision: split on dimension {best} (max_samples {self.max_samples} reached).")
            return best

        if self.verbose:
            print(f"{indent}  - Decision: keep accumulating.")
        return None

    def __repr__(self):
        return (f"HoeffdingSplit(dimensionality={self.dimensionality}, num_classes={self.num_classes}, "
                f"confidence={self.confidence}, samples={self.num_samples})")
