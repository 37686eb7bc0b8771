"""
Built-in statistics collectors.

Import collectors here to automatically register them.
"""

from hare_eda.statistics.collectors.juvenile_counts import JuvenileCountsCollector
from hare_eda.statistics.collectors.weight_by_sex_site import WeightBySexSiteCollector
from hare_eda.statistics.collectors.weight_comparison import WeightComparisonCollector
from hare_eda.statistics.collectors.weight_hind_foot import WeightHindFootCollector

__all__ = [
    'JuvenileCountsCollector',
    'WeightBySexSiteCollector',
    'WeightComparisonCollector',
    'WeightHindFootCollector',
]
