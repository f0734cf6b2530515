# hoeffding_tree/__init__.py

"""
Hoeffding (streaming) Decision Tree Package
"""

from .splitting import GiniImpurity, InformationGain, CategoricalSplit, CategoricalSplitInfo
from .stopping import HoeffdingSplit
from .tree import StreamingDecisionTree
from .utils import DatasetInfo, hoeffding_bound

VERSION = "0.1.0"

__all__ = [
    "GiniImpurity",
    "InformationGain",
    "CategoricalSplit",
    "CategoricalSplitInfo",
    "HoeffdingSplit",
    "StreamingDecisionTree",
    "DatasetInfo",
    "hoeffding_bound",
    "VERSION",
]
