"""
Example: Juvenile snowshoe hare report.

This example shows how to use the HareAnalysis class to produce the
annual counts, grouped weights, male vs female comparison and weight vs
hind foot regression from the Bonanza Creek trapping CSV.

Usage:
    python -m hare_eda.examples.juvenile_hare_report bonanza_hares.csv
"""

import logging
import sys
from pathlib import Path

from hare_eda import HareAnalysis, Observation


def print_report(analysis: HareAnalysis) -> None:
    """Print the four analyses of the report."""
    print("=== Annual juvenile trap counts ===")
    for year, count in analysis.get_value('juvenile_counts', 'counts_by_year', {}).items():
        print(f"{year}: {count}")
    zero_years = analysis.get_value('juvenile_counts', 'years_with_zero', [])
    if zero_years:
        print(f"Years with no juvenile trappings: {zero_years}")
    print(f"Annual mean: {analysis.get_value('juvenile_counts', 'annual_mean')}, "
          f"median: {analysis.get_value('juvenile_counts', 'annual_median')}")

    print("\n=== Weight (g) by sex and site ===")
    for (sex, site), summary in analysis.get_value('weight_by_sex_site', 'summaries', {}).items():
        mean = f"{summary.mean:.1f}" if summary.mean is not None else "undefined"
        sd = f"{summary.sd:.1f}" if summary.sd is not None else "undefined"
        print(f"{sex:12} {site or 'unmapped site':20} n={summary.n:4} mean={mean} sd={sd}")

    comparison = analysis.get_value('weight_comparison', 'result')
    if comparison:
        print("\n=== Male vs female weight ===")
        percent = f"{comparison.percent_difference:.1f}%" if comparison.percent_difference is not None else "undefined"
        print(f"Difference in means: {comparison.mean_difference:.2f} g ({percent})")
        print(f"Welch t({comparison.degrees_of_freedom:.1f}) = {comparison.test_statistic:.2f}, "
              f"p = {comparison.p_value:.3g}")
        print(f"Cohen's d = {comparison.effect_size:.2f} ({comparison.effect_size_magnitude})")

    regression = analysis.get_value('weight_hind_foot', 'result')
    if regression:
        print("\n=== Weight vs hind foot length ===")
        print(f"weight = {regression.intercept:.2f} + {regression.slope:.2f} * hind_foot "
              f"(n={regression.n}, R2={regression.r_squared:.3f})")
        print(f"Pearson r = {regression.pearson_r:.3f}, p = {regression.pearson_p:.3g}")

    for collector_id, message in analysis.get_category('errors').items():
        print(f"\n{collector_id} could not be computed: {message}")


def example_in_memory():
    """Run the analysis on a handful of records held in memory."""
    rows = [
        ("1", "j", "m", "bonrip", "11/26/98", 118, 1000),
        ("2", "j", "m", "bonmat", "7/8/99", 125, 1200),
        ("3", "j", "m", "bonbs", "7/9/99", 121, 1100),
        ("4", "j", "f", "bonrip", "11/26/98", 112, 900),
        ("5", "j", "f", "bonrip", "7/8/99", 116, 950),
        ("6", "j", "f", "bonmat", "8/1/01", 119, 1030),
        ("7", "a", "f", "bonmat", "8/1/01", 135, 1500),
    ]
    observations = [
        Observation.from_raw(record_id=rid, age_class=age, sex=sex, site_code=site,
                             capture_date=when, hind_foot_length=hind_foot, weight=weight)
        for rid, age, sex, site, when, hind_foot, weight in rows
    ]
    print_report(HareAnalysis(observations=observations))


if __name__ == '__main__':
    logging.basicConfig(level=logging.WARNING)
    if len(sys.argv) > 1:
        analysis = HareAnalysis.from_csv(Path(sys.argv[1]))
        print_report(analysis)
        print(f"\n{len(analysis.issues)} data issues recorded")
    else:
        example_in_memory()
