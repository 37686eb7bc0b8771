from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import logging

from hare_eda.app_hooks import AppHooks
from hare_eda.derivation import DerivationConfig, DerivationPipeline, DerivationResult, Issue
from hare_eda.loader import load_observations
from hare_eda.observation import Observation
from hare_eda.statistics import StatisticsConfig, StatisticsPipeline, Stats

logger = logging.getLogger(__name__)


class HareAnalysis:
    """
    High-level interface for the juvenile snowshoe hare analysis.

    Runs the derivation stage and the statistics collectors in order and
    keeps their outputs for the report renderer. Nothing is persisted.

    Example:
        # From the trapping CSV
        analysis = HareAnalysis.from_csv(Path("bonanza_hares.csv"))
        comparison = analysis.get_value('weight_comparison', 'result')

        # From observations already in memory
        analysis = HareAnalysis(observations=observations)
        counts = analysis.get_value('juvenile_counts', 'counts_by_year')
    """

    def __init__(
        self,
        observations: Optional[Iterable[Observation]] = None,
        derivation_config: Optional[DerivationConfig] = None,
        config_dict: Optional[Dict[str, Any]] = None,
        config_file: Optional[Path] = None,
        app_hooks: Optional[AppHooks] = None,
    ) -> None:
        """
        Initialize the analysis.

        Args:
            observations: Optional raw observations; analysis runs immediately if given
            derivation_config: Derivation settings (packaged defaults if None)
            config_dict: Dictionary to configure collectors (e.g., {'collectors': {'weight_hind_foot': False}})
            config_file: Path to YAML config file with 'derivation' and/or 'statistics' sections
            app_hooks: Optional application hooks for progress reporting
        """
        self.app_hooks = app_hooks
        self.load_issues: List[Issue] = []

        if derivation_config is None and config_file and Path(config_file).exists():
            derivation_config = DerivationConfig.from_yaml(Path(config_file))
        self.derivation_config = derivation_config or DerivationConfig()

        if config_dict:
            self.statistics_config = StatisticsConfig.from_dict(config_dict)
        elif config_file:
            self.statistics_config = StatisticsConfig(config_file=config_file)
        else:
            # Use defaults - all collectors enabled
            self.statistics_config = StatisticsConfig()

        # Annual counts only zero-fill years the derivation stage considers plausible
        for key in ('plausible_year_min', 'plausible_year_max'):
            self.statistics_config.statistics_options.setdefault(key, getattr(self.derivation_config, key))

        self.derivation_pipeline = DerivationPipeline(config=self.derivation_config, app_hooks=app_hooks)
        self.statistics_pipeline = StatisticsPipeline(config=self.statistics_config, app_hooks=app_hooks)

        self._derivation: Optional[DerivationResult] = None
        self._results: Optional[Stats] = None
        if observations is not None:
            self.analyze(observations)

    @classmethod
    def from_csv(cls, csv_path: Path, **kwargs: Any) -> HareAnalysis:
        """
        Load the trapping CSV and run the analysis.

        Malformed rows follow the derivation config's on_parse_error policy.
        """
        analysis = cls(**kwargs)
        loaded = load_observations(csv_path, on_parse_error=analysis.derivation_config.on_parse_error)
        analysis.load_issues = loaded.issues
        analysis.analyze(loaded.observations)
        return analysis

    def analyze(self, observations: Iterable[Observation]) -> Stats:
        """
        Derive juvenile records and collect all statistics.

        Args:
            observations: Raw observations.

        Returns:
            Stats object with collected statistics
        """
        observations = list(observations)
        logger.info(f"Analyzing {len(observations)} observations")

        self._derivation = self.derivation_pipeline.run(observations)
        self._update_key_value('juvenile_records', len(self._derivation.observations))
        self._update_key_value('derivation_issues', len(self._derivation.issues))

        self._results = self.statistics_pipeline.run(self._derivation.observations)
        return self._results

    @property
    def derivation(self) -> Optional[DerivationResult]:
        """Get the derivation stage result."""
        return self._derivation

    @property
    def results(self) -> Optional[Stats]:
        """Get the statistics results."""
        return self._results

    @property
    def issues(self) -> List[Issue]:
        """All issues from loading and derivation."""
        derivation_issues = self._derivation.issues if self._derivation else []
        return list(self.load_issues) + list(derivation_issues)

    def get_value(self, category: str, name: str, default=None):
        """
        Convenience method to get a specific statistic value.

        Args:
            category: Category name (e.g., 'juvenile_counts', 'weight_comparison')
            name: Statistic name (e.g., 'counts_by_year', 'result')
            default: Default value if not found

        Returns:
            The statistic value or default
        """
        if self._results:
            return self._results.get_value(category, name, default)
        return default

    def get_category(self, category: str) -> Dict[str, Any]:
        """Get all statistics in a category."""
        if self._results:
            return self._results.get_category(category)
        return {}

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """
        Export all statistics as a dictionary.

        Returns:
            Dictionary of categories to statistics
        """
        if self._results:
            return self._results.to_dict()
        return {}

    def _update_key_value(self, key: str, value: Any) -> None:
        if self.app_hooks and callable(getattr(self.app_hooks, "update_key_value", None)):
            self.app_hooks.update_key_value(key, value)
