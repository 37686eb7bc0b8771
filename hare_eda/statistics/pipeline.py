"""
Pipeline for running statistics collectors.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import yaml

from hare_eda.statistics.base import StatisticsCollector, get_collector_registry
from hare_eda.statistics.model import Stats

logger = logging.getLogger(__name__)


@dataclass
class StatisticsConfig:
    """
    Configuration for statistics collection.

    Attributes:
        collectors: Dict of collector_id -> enabled status
        statistics_options: Collector settings passed to every collector that
            has a field of the same name (e.g. 'include_zero_years', 'strict')
        fail_fast: Re-raise a collector error instead of recording it
        config_file: Path to YAML config file (optional)
    """
    collectors: Dict[str, bool] = field(default_factory=dict)
    statistics_options: Dict[str, Any] = field(default_factory=dict)
    fail_fast: bool = False
    config_file: Optional[Path] = None

    def __post_init__(self) -> None:
        """Load configuration from file if config_file is specified and exists."""
        if self.config_file and Path(self.config_file).exists():
            self._load_from_file()
        elif self.config_file:
            logger.warning(f"Statistics config file not found: {self.config_file}")

    def _load_from_file(self) -> None:
        """
        Load configuration from YAML file.

        Reads the 'statistics' section from the YAML file and extracts
        collector enable/disable settings and collector options.
        """
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to load statistics config from {self.config_file}: {e}")

        statistics_config = data.get('statistics', {}) or {}

        collectors_config = statistics_config.get('collectors', {}) or {}
        for collector_id, settings in collectors_config.items():
            if isinstance(settings, dict):
                self.collectors[collector_id] = settings.get('enabled', True)
            elif isinstance(settings, bool):
                self.collectors[collector_id] = settings
            else:
                logger.warning(f"Ignoring setting for collector '{collector_id}': {settings!r}")

        self.statistics_options.update(statistics_config.get('options', {}) or {})
        self.fail_fast = bool(statistics_config.get('fail_fast', self.fail_fast))

        logger.info(f"Loaded statistics config from {self.config_file}")

    def is_enabled(self, collector_id: str) -> bool:
        """
        Check if a collector is enabled.

        Args:
            collector_id: Identifier of the collector to check

        Returns:
            True if enabled (default if not specified), False otherwise
        """
        return self.collectors.get(collector_id, True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StatisticsConfig:
        """
        Create configuration from dictionary.

        Useful for testing and programmatic configuration.

        Args:
            data: Dictionary with 'collectors', 'options' and 'fail_fast' keys

        Returns:
            StatisticsConfig instance
        """
        return cls(
            collectors=dict(data.get('collectors', {})),
            statistics_options=dict(data.get('options', {})),
            fail_fast=bool(data.get('fail_fast', False)),
        )


@dataclass
class StatisticsPipeline:
    """
    Pipeline for running statistics collectors on derived juvenile records.

    Attributes:
        collectors: List of collector instances to run
        config: Configuration for the pipeline
        app_hooks: Optional application hooks for progress reporting
    """
    collectors: List[StatisticsCollector] = field(default_factory=list)
    config: StatisticsConfig = field(default_factory=StatisticsConfig)
    app_hooks: Optional[Any] = field(default=None)

    def __post_init__(self) -> None:
        """
        Initialize collectors from registry if none provided.

        If no collectors are explicitly provided, automatically loads
        all registered collectors from the global registry.
        """
        if not self.collectors:
            self._load_collectors_from_registry()

    def _load_collectors_from_registry(self) -> None:
        """
        Load all registered collectors with configuration applied.

        Instantiates each collector from the registry, applying the
        enabled/disabled setting and any matching statistics options.
        """
        registry = get_collector_registry()
        for collector_id, collector_cls in registry.items():
            enabled = self.config.is_enabled(collector_id)
            field_names = {f.name for f in fields(collector_cls)}
            options = {
                name: value for name, value in self.config.statistics_options.items()
                if name in field_names and name not in ('collector_id', 'enabled', 'app_hooks')
            }
            collector = collector_cls(enabled=enabled, app_hooks=self.app_hooks, **options)
            self.collectors.append(collector)
            logger.debug(f"Loaded collector: {collector_id} (enabled={enabled}, options={options})")

    def run(self, records: Iterable[Any]) -> Stats:
        """
        Run all enabled collectors on the dataset.

        A collector that raises is logged and its error recorded under the
        'errors' category; the remaining collectors still run unless
        config.fail_fast is set.

        Args:
            records: Iterable of DerivedObservation objects

        Returns:
            Stats object with all collected values
        """
        stats = Stats()

        # Materialize once so every collector sees the same records
        records_list = list(records)

        logger.debug(f"Running statistics on {len(records_list)} records")

        enabled_collectors = [c for c in self.collectors if c.enabled]
        total_collectors = len(enabled_collectors)
        self._report_step(info="Collecting statistics", target=total_collectors, reset_counter=True, plus_step=0)

        for collector_num, collector in enumerate(enabled_collectors, start=1):
            if self._stop_requested("Statistics collection stopped by user"):
                logger.info(f"Statistics stopped after {collector_num - 1} collectors")
                return stats

            try:
                logger.debug(f"Running collector: {collector.collector_id}")
                collector_stats = collector.collect(records_list, stats, collector_num, total_collectors)
                stats.merge(collector_stats)
            except Exception as e:
                if self.config.fail_fast:
                    raise
                logger.error(f"Error in collector {collector.collector_id}: {e}", exc_info=True)
                stats.add_value('errors', collector.collector_id, f"{type(e).__name__}: {e}")

            self._report_step(plus_step=1)

        return stats

    def _report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 0) -> None:
        """
        Report a step via app hooks if available. (Private method)

        Args:
            info (str): Information message.
            target (int): Target count for progress.
            reset_counter (bool): Whether to reset the counter.
            plus_step (int): Incremental step count.
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "report_step", None)):
            self.app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
        else:
            logger.debug(info)

    def _stop_requested(self, logger_stop_message: str = "Stop requested by user") -> bool:
        """
        Check if stop has been requested via app hooks. (Private method)

        Returns:
            bool: True if stop requested, False otherwise.
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "stop_requested", None)):
            if self.app_hooks.stop_requested():
                if logger_stop_message:
                    logger.info(logger_stop_message)
                return True
        return False
