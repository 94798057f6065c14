"""Selection policy implementations."""

from wordsampler.selection.base import SelectionPolicy
from wordsampler.selection.least_recorded import LeastRecordedPolicy, choose_least_recorded
from wordsampler.selection.uniform import UniformPolicy, choose_without_replacement
from wordsampler.selection.weighted import (
    WeightedPolicy,
    choose_weighted_without_replacement,
    locate_region,
)

__all__ = [
    "SelectionPolicy",
    "LeastRecordedPolicy",
    "UniformPolicy",
    "WeightedPolicy",
    "choose_least_recorded",
    "choose_weighted_without_replacement",
    "choose_without_replacement",
    "locate_region",
]
