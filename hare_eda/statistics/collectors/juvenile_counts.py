"""
Annual juvenile trap counts collector.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional, Sequence

from hare_eda.statistics.base import StatisticsCollector, register_collector
from hare_eda.statistics.descriptive import describe
from hare_eda.statistics.grouping import by_year, count_by_group
from hare_eda.statistics.model import Stats

logger = logging.getLogger(__name__)


@register_collector
@dataclass
class JuvenileCountsCollector(StatisticsCollector):
    """
    Counts juvenile hare trappings per capture year.

    Statistics collected:
        - Trap count by year
        - Years inside the observed span with no juvenile trappings (the span
          covers only years within the plausible range, when one is set)
        - Min / max / mean / median of the annual counts
        - Years with the highest and lowest counts
    """
    collector_id: str = "juvenile_counts"
    include_zero_years: bool = True
    plausible_year_min: Optional[int] = None
    plausible_year_max: Optional[int] = None

    def collect(self, records: Sequence[Any], existing_stats: Stats, collector_num: Optional[int] = None, total_collectors: Optional[int] = None) -> Stats:
        """Collect annual juvenile trap counts."""
        stats = Stats()
        self._report_step(info=f"{self._prefix(collector_num, total_collectors)}Counting juvenile trappings by year")

        counts_by_year = count_by_group(records, by_year)
        stats.add_value('juvenile_counts', 'counts_by_year', counts_by_year)
        stats.add_value('juvenile_counts', 'total', sum(counts_by_year.values()))

        if not counts_by_year:
            logger.warning("No juvenile records to count")
            return stats

        zero_years = self._zero_years(counts_by_year)
        stats.add_value('juvenile_counts', 'years_with_zero', zero_years)

        annual: Dict[int, int] = dict(counts_by_year)
        if self.include_zero_years:
            annual.update({year: 0 for year in zero_years})
        summary = describe(list(annual.values()))
        stats.add_value('juvenile_counts', 'annual_min', summary['min'])
        stats.add_value('juvenile_counts', 'annual_max', summary['max'])
        stats.add_value('juvenile_counts', 'annual_mean', summary['mean'])
        stats.add_value('juvenile_counts', 'annual_median', summary['median'])
        stats.add_value('juvenile_counts', 'years_observed', len(annual))

        highest = max(annual.values())
        lowest = min(annual.values())
        stats.add_value('juvenile_counts', 'max_years', sorted(y for y, c in annual.items() if c == highest))
        stats.add_value('juvenile_counts', 'min_years', sorted(y for y, c in annual.items() if c == lowest))

        logger.info(f"Juvenile counts: {sum(counts_by_year.values())} trappings over {len(annual)} years "
                    f"(min {lowest}, max {highest})")
        return stats

    def _zero_years(self, counts_by_year: Dict[Any, int]) -> List[int]:
        """Years between the first and last plausible observed year with no trappings."""
        years = [year for year in counts_by_year if isinstance(year, int)]
        implausible = [year for year in years if not self._is_plausible(year)]
        if implausible:
            logger.warning(f"Juvenile counts: implausible capture years {implausible} left out of the zero-count span")
            years = [year for year in years if self._is_plausible(year)]
        if not years:
            return []
        return [year for year in range(min(years), max(years) + 1) if year not in counts_by_year]

    def _is_plausible(self, year: int) -> bool:
        if self.plausible_year_min is not None and year < self.plausible_year_min:
            return False
        if self.plausible_year_max is not None and year > self.plausible_year_max:
            return False
        return True
