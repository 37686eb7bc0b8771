from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_YAML = Path(__file__).parent / "config.yaml"

PARSE_ERROR_POLICIES = ("skip", "raise")


def _load_yaml(yaml_path: Path) -> Dict[str, Any]:
    """Read a YAML mapping, raising ValueError on malformed content."""
    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing {yaml_path}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top level of {yaml_path}")
    return data


def _as_list(value: Any, key: str) -> List[Any]:
    """Accept a single scalar or a sequence for list-valued settings."""
    if value is None:
        return []
    if isinstance(value, (str, int)):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValueError(f"{key} must be a value or a list of values, got {value!r}")


def _as_year(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a year, got {value!r}")
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a year, got {value!r}") from None


@dataclass
class DerivationConfig:
    """
    Configuration for the derivation stage.

    Loads all configuration values from config.yaml in the derivation directory.
    The packaged file holds the fixed juvenile filter, site lookup and plausible
    year range used by the hare analysis.
    """
    # Juvenile filter
    juvenile_codes: List[str] = field(init=False)

    # Site code -> site label
    site_labels: Dict[str, str] = field(init=False)

    # Plausible capture year range (flagged, not enforced)
    plausible_year_min: int = field(init=False)
    plausible_year_max: int = field(init=False)

    # Capture date parsing
    date_formats: List[str] = field(init=False)
    on_parse_error: str = field(init=False)

    def __post_init__(self):
        """Load configuration from the packaged YAML file."""
        if not DEFAULT_CONFIG_YAML.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {DEFAULT_CONFIG_YAML}. "
                "Please ensure config.yaml exists in the derivation directory."
            )
        self._apply(_load_yaml(DEFAULT_CONFIG_YAML), defaults={})

    def _apply(self, config_dict: Dict[str, Any], defaults: Dict[str, Any]) -> None:
        for key in self.__dataclass_fields__.keys():
            if key in config_dict:
                object.__setattr__(self, key, config_dict[key])
            elif key in defaults:
                object.__setattr__(self, key, defaults[key])
            else:
                raise ValueError(f"Required configuration field '{key}' not found")

        self.juvenile_codes = [str(code).strip().lower() for code in _as_list(self.juvenile_codes, 'juvenile_codes')]
        if self.site_labels is None:
            self.site_labels = {}
        if not isinstance(self.site_labels, dict):
            raise ValueError(f"site_labels must be a mapping of site code to label, got {self.site_labels!r}")
        self.site_labels = {str(k).strip().lower(): str(v) for k, v in self.site_labels.items()}
        self.date_formats = [str(fmt) for fmt in _as_list(self.date_formats, 'date_formats')]
        self.plausible_year_min = _as_year(self.plausible_year_min, 'plausible_year_min')
        self.plausible_year_max = _as_year(self.plausible_year_max, 'plausible_year_max')
        self.on_parse_error = str(self.on_parse_error).strip().lower()
        if self.on_parse_error not in PARSE_ERROR_POLICIES:
            raise ValueError(
                f"on_parse_error must be one of {PARSE_ERROR_POLICIES}, got '{self.on_parse_error}'"
            )
        if self.plausible_year_min > self.plausible_year_max:
            raise ValueError("plausible_year_min must not exceed plausible_year_max")

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> DerivationConfig:
        """
        Load configuration from a specific YAML file.

        Keys missing from the file fall back to the packaged config.yaml.

        Args:
            yaml_path: Path to YAML config file.

        Returns:
            DerivationConfig: Configuration instance loaded from YAML.
        """
        if not yaml_path or not Path(yaml_path).exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")
        config_dict = _load_yaml(Path(yaml_path))
        logger.info(f"Loaded derivation config from {yaml_path}")
        section = config_dict.get('derivation', config_dict)
        return cls.from_dict(section or {})

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> DerivationConfig:
        """
        Create configuration from a dictionary.

        Args:
            config_dict (Dict[str, Any]): Values overriding the packaged defaults.

        Returns:
            DerivationConfig: Configuration instance.
        """
        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ValueError(f"Derivation config must be a mapping, got {config_dict!r}")
        instance = object.__new__(cls)
        instance._apply(config_dict, defaults=_load_yaml(DEFAULT_CONFIG_YAML))
        return instance

    def is_juvenile(self, age_class: Optional[str]) -> bool:
        """Return True if the age-class code denotes a juvenile."""
        if age_class is None:
            return False
        return str(age_class).strip().lower() in self.juvenile_codes

    def site_label(self, site_code: Optional[str]) -> Optional[str]:
        """Map a site code to its label; unmapped or missing codes give None."""
        if site_code is None:
            return None
        return self.site_labels.get(str(site_code).strip().lower())
