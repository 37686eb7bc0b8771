"""
Weight vs hind foot length regression collector.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from hare_eda.statistics.base import StatisticsCollector, register_collector
from hare_eda.statistics.grouping import hind_foot_of, weight_of
from hare_eda.statistics.model import Stats
from hare_eda.statistics.regression import complete_pairs, regress


@register_collector
@dataclass
class WeightHindFootCollector(StatisticsCollector):
    """
    Regresses juvenile weight (g) on hind foot length (mm).

    Only records with both measurements are used (pairwise complete).
    """
    collector_id: str = "weight_hind_foot"

    def collect(self, records: Sequence[Any], existing_stats: Stats, collector_num: Optional[int] = None, total_collectors: Optional[int] = None) -> Stats:
        """Collect the regression and correlation."""
        stats = Stats()
        self._report_step(info=f"{self._prefix(collector_num, total_collectors)}Regressing weight on hind foot length")

        hind_foot, weight = complete_pairs((hind_foot_of(r), weight_of(r)) for r in records)
        stats.add_value('weight_hind_foot', 'pairs', len(hind_foot))
        stats.add_value('weight_hind_foot', 'excluded_incomplete', len(records) - len(hind_foot))

        stats.add_value('weight_hind_foot', 'result', regress(hind_foot, weight))
        return stats
