from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from hare_eda.app_hooks import AppHooks
from hare_eda.capture_date import is_plausible_year, parse_capture_date
from hare_eda.errors import ParseError
from hare_eda.observation import Observation

from .config import DerivationConfig
from .model import DerivationResult, DerivedObservation, Issue

logger = logging.getLogger(__name__)


def filter_juveniles(observations: Iterable[Observation], config: DerivationConfig) -> Iterator[Observation]:
    """Yield only the observations whose age class denotes a juvenile."""
    return (obs for obs in observations if config.is_juvenile(obs.age_class))


def derive_observation(observation: Observation, config: DerivationConfig) -> Tuple[DerivedObservation, List[Issue]]:
    """
    Derive capture year and site label for a single record.

    Args:
        observation: A juvenile Observation.
        config: Derivation configuration.

    Returns:
        Tuple of the DerivedObservation and any issues found (implausible year,
        unmapped site code).

    Raises:
        ParseError: If the capture date cannot be parsed.
    """
    issues: List[Issue] = []
    capture_date = parse_capture_date(observation.capture_date, config.date_formats, observation.record_id)
    year = capture_date.year

    if not is_plausible_year(year, config.plausible_year_min, config.plausible_year_max):
        issues.append(Issue(
            issue_type="implausible_capture_year",
            severity="warning",
            message=(f"Capture year {year} is outside the expected range "
                     f"{config.plausible_year_min}-{config.plausible_year_max}"),
            record_id=observation.record_id,
        ))

    site_label = config.site_label(observation.site_code)
    if site_label is None:
        issues.append(Issue(
            issue_type="unmapped_site_code",
            severity="warning",
            message=f"Site code '{observation.site_code}' has no site label",
            record_id=observation.record_id,
        ))

    derived = DerivedObservation(
        observation=observation,
        capture_date=capture_date,
        capture_year=year,
        site_label=site_label,
    )
    return derived, issues


class DerivationPipeline:
    """
    Filters records to juveniles and derives capture year and site label.

    Each record is mapped independently; only the juvenile filter and (with the
    'skip' policy) an unparseable capture date remove a record.
    """

    def __init__(self, config: Optional[DerivationConfig] = None, app_hooks: Optional[AppHooks] = None) -> None:
        self.config = config or DerivationConfig()
        self.app_hooks = app_hooks

    def run(self, observations: Iterable[Observation]) -> DerivationResult:
        records = list(observations)
        juveniles = list(filter_juveniles(records, self.config))
        excluded = len(records) - len(juveniles)
        logger.info(f"Derivation: {len(juveniles)} juvenile records of {len(records)} ({excluded} excluded by age class)")

        derived: List[DerivedObservation] = []
        issues: List[Issue] = []
        skipped = 0

        self._report_step(info="Deriving juvenile records", target=len(juveniles), reset_counter=True, plus_step=0)

        for idx, observation in enumerate(juveniles):
            if idx % 100 == 0:
                if self._stop_requested("Derivation stopped by user"):
                    break
                self._report_step(plus_step=100)

            try:
                derived_observation, record_issues = derive_observation(observation, self.config)
            except ParseError as e:
                if self.config.on_parse_error == "raise":
                    raise
                logger.warning(f"Skipping record {observation.record_id}: {e}")
                issues.append(Issue(
                    issue_type="unparseable_capture_date",
                    severity="warning",
                    message=str(e),
                    record_id=observation.record_id,
                ))
                skipped += 1
                continue

            for issue in record_issues:
                logger.warning(f"Record {issue.record_id}: {issue.message}")
            issues.extend(record_issues)
            derived.append(derived_observation)

        return DerivationResult(
            observations=tuple(derived),
            issues=issues,
            total_records=len(records),
            excluded_non_juvenile=excluded,
            skipped_records=skipped,
        )

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
