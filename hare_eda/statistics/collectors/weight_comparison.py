"""
Male vs female juvenile weight comparison collector.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, List, Optional, Sequence

from hare_eda.observation import SEX_FEMALE, SEX_MALE
from hare_eda.statistics.base import StatisticsCollector, register_collector
from hare_eda.statistics.descriptive import drop_missing
from hare_eda.statistics.inference import compare_samples
from hare_eda.statistics.model import Stats

logger = logging.getLogger(__name__)


@register_collector
@dataclass
class WeightComparisonCollector(StatisticsCollector):
    """
    Compares juvenile weight between two sexes (male vs female by default).

    Records of any other sex (unspecified) are excluded by an explicit filter
    before the test; the number excluded is reported alongside the result.

    Statistics collected:
        - ComparisonResult (Welch's t-test, Cohen's d, mean difference)
        - Records excluded for sex, and records excluded for missing weight
    """
    collector_id: str = "weight_comparison"
    group_a: str = SEX_MALE
    group_b: str = SEX_FEMALE

    def collect(self, records: Sequence[Any], existing_stats: Stats, collector_num: Optional[int] = None, total_collectors: Optional[int] = None) -> Stats:
        """Collect the two-sample weight comparison."""
        stats = Stats()
        self._report_step(info=f"{self._prefix(collector_num, total_collectors)}Comparing {self.group_a} and {self.group_b} weights")

        compared = [r for r in records if getattr(r, 'sex', None) in (self.group_a, self.group_b)]
        excluded_sex = len(records) - len(compared)
        if excluded_sex:
            logger.info(f"Weight comparison: excluding {excluded_sex} records with sex other than "
                        f"{self.group_a}/{self.group_b}")

        weights_a = self._weights(compared, self.group_a)
        weights_b = self._weights(compared, self.group_b)
        excluded_missing = len(compared) - len(weights_a) - len(weights_b)

        stats.add_value('weight_comparison', 'excluded_other_sex', excluded_sex)
        stats.add_value('weight_comparison', 'excluded_missing_weight', excluded_missing)

        result = compare_samples(weights_a, weights_b, label_a=self.group_a, label_b=self.group_b)
        stats.add_value('weight_comparison', 'result', result)
        return stats

    def _weights(self, records: Sequence[Any], sex: str) -> List[float]:
        return drop_missing(getattr(r, 'weight', None) for r in records if getattr(r, 'sex', None) == sex)
