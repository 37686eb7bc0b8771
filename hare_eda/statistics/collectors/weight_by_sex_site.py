"""
Juvenile weight by sex and site collector.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Optional, Sequence

from hare_eda.statistics.base import StatisticsCollector, register_collector
from hare_eda.statistics.grouping import (
    by_sex,
    by_sex_and_site,
    by_site,
    count_by_group,
    summarize_by_group,
    weight_of,
)
from hare_eda.statistics.model import Stats

logger = logging.getLogger(__name__)


@register_collector
@dataclass
class WeightBySexSiteCollector(StatisticsCollector):
    """
    Summarizes juvenile body weight (g) grouped by sex and site.

    Statistics collected:
        - Record counts per (sex, site_label)
        - Mean / sd / n of weight per (sex, site_label)
        - The same summaries per sex and per site
        - Number of records with missing weight

    Records whose site code had no label are grouped under site_label None.
    """
    collector_id: str = "weight_by_sex_site"
    strict: bool = False

    def collect(self, records: Sequence[Any], existing_stats: Stats, collector_num: Optional[int] = None, total_collectors: Optional[int] = None) -> Stats:
        """Collect weight summaries by sex and site."""
        stats = Stats()
        self._report_step(info=f"{self._prefix(collector_num, total_collectors)}Summarizing weight by sex and site")

        stats.add_value('weight_by_sex_site', 'counts', count_by_group(records, by_sex_and_site))
        by_group = summarize_by_group(records, by_sex_and_site, weight_of, strict=self.strict)
        stats.add_value('weight_by_sex_site', 'summaries', by_group)
        stats.add_value('weight_by_sex_site', 'by_sex', summarize_by_group(records, by_sex, weight_of, strict=self.strict))
        stats.add_value('weight_by_sex_site', 'by_site', summarize_by_group(records, by_site, weight_of, strict=self.strict))

        with_weight = sum(summary.n for summary in by_group.values())
        stats.add_value('weight_by_sex_site', 'records_with_weight', with_weight)
        stats.add_value('weight_by_sex_site', 'records_missing_weight', len(records) - with_weight)

        logger.info(f"Weight by sex and site: {len(by_group)} groups, {with_weight} of {len(records)} records weighed")
        return stats
