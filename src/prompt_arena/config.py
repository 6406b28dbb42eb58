"""Configuration for Prompt Arena.

This module provides the runtime-tunable parameters of the slate bandit and
the rating updater, the admin-facing form validation that guards them, and
a thread-safe provider that serves consistent snapshots to callers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationInvalid
from .numbers import is_finite_number

logger = logging.getLogger(__name__)

DEFAULT_EXPLORATION_RATE = 0.1
DEFAULT_Z_SCORE_CLAMP = 3.0
DEFAULT_WEIGHT_PICK_RATE = 1.0
DEFAULT_WEIGHT_POST_RATE = 1.0
DEFAULT_K_FACTOR = 32.0
DEFAULT_INITIAL_RATING = 1200.0
DEFAULT_SLATE_SIZE = 3

# Admin form fields in display order, with their user-visible labels.
BANDIT_FORM_FIELDS: dict[str, str] = {
    "exploration_rate": "Exploration rate",
    "z_score_clamp": "Z-score clamp",
    "weight_pick_rate": "Pick rate weight",
    "weight_post_rate": "Post rate weight",
}


class BanditConfig(BaseModel):
    """Parameters of the epsilon-greedy slate bandit.

    Instances are immutable so a caller can hand one snapshot to a whole
    selection call while an admin replaces the provider's copy.

    Attributes:
        exploration_rate: Per-slot probability of a uniform random pick.
        z_score_clamp: Symmetric bound applied to standardized metrics.
        weight_pick_rate: Weight of the pick-rate z-score.
        weight_post_rate: Weight of the post-rate z-score.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    exploration_rate: float = Field(default=DEFAULT_EXPLORATION_RATE, ge=0.0, le=1.0)
    z_score_clamp: float = Field(default=DEFAULT_Z_SCORE_CLAMP, gt=0.0)
    weight_pick_rate: float = Field(default=DEFAULT_WEIGHT_PICK_RATE, ge=0.0)
    weight_post_rate: float = Field(default=DEFAULT_WEIGHT_POST_RATE, ge=0.0)


class RatingConfig(BaseModel):
    """Parameters of the tournament rating system.

    Attributes:
        k_factor: Maximum single-match rating swing.
        initial_rating: Rating assigned to a competitor's first match.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    k_factor: float = Field(default=DEFAULT_K_FACTOR, gt=0.0)
    initial_rating: float = DEFAULT_INITIAL_RATING


class ArenaConfig(BaseModel):
    """Full Prompt Arena configuration, typically loaded from YAML.

    Attributes:
        bandit: Slate bandit parameters.
        elo: Rating system parameters.
        slate_size: Number of words offered per slate.
    """

    bandit: BanditConfig = Field(default_factory=BanditConfig)
    elo: RatingConfig = Field(default_factory=RatingConfig)
    slate_size: int = Field(default=DEFAULT_SLATE_SIZE, ge=1)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ArenaConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            ArenaConfig instance.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ValueError: If the YAML is not a mapping.
            ConfigurationInvalid: If a value is out of range.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file: expected dict, got {type(data).__name__}")

        try:
            return cls(**data)
        except ValidationError as e:
            raise _as_configuration_invalid(e) from e


def _as_configuration_invalid(error: ValidationError) -> ConfigurationInvalid:
    """Translate the first pydantic error into a ConfigurationInvalid."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    return ConfigurationInvalid(first.get("msg", str(error)), field=field)


def parse_bandit_form(form: Mapping[str, Any]) -> BanditConfig:
    """Validate an admin form submission into a BanditConfig.

    Checks run in three passes (presence, numeric parse, range) so the admin
    sees the most basic problem first.

    Args:
        form: Raw form values keyed by field name. Values may be strings.

    Returns:
        A validated BanditConfig.

    Raises:
        ConfigurationInvalid: With ``field`` set and a user-visible
            ``user_message`` describing the first problem found.

    Example:
        ```python
        config = parse_bandit_form({
            "exploration_rate": "0.1",
            "z_score_clamp": "3",
            "weight_pick_rate": "1",
            "weight_post_rate": "1",
        })
        ```
    """
    for field, label in BANDIT_FORM_FIELDS.items():
        value = form.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ConfigurationInvalid(f"{label} is required", field=field)

    values: dict[str, float] = {}
    for field, label in BANDIT_FORM_FIELDS.items():
        value = form[field]
        try:
            if isinstance(value, bool):
                raise TypeError(value)
            number = float(value)
        except (TypeError, ValueError):
            raise ConfigurationInvalid(f"{label} must be a valid number", field=field) from None
        if not is_finite_number(number):
            raise ConfigurationInvalid(f"{label} must be a valid number", field=field)
        values[field] = number

    if not 0.0 <= values["exploration_rate"] <= 1.0:
        raise ConfigurationInvalid(
            "Exploration rate must be between 0 and 1", field="exploration_rate"
        )
    if values["z_score_clamp"] <= 0.0:
        raise ConfigurationInvalid("Z-score clamp must be positive", field="z_score_clamp")
    if values["weight_pick_rate"] < 0.0:
        raise ConfigurationInvalid(
            "Pick rate weight must be non-negative", field="weight_pick_rate"
        )
    if values["weight_post_rate"] < 0.0:
        raise ConfigurationInvalid(
            "Post rate weight must be non-negative", field="weight_post_rate"
        )

    return BanditConfig(**values)


def ensure_valid_bandit_config(config: object) -> BanditConfig:
    """Reject a bandit config that bypassed validation.

    ``model_construct`` and attribute patching can produce a BanditConfig
    whose values were never checked; the core refuses those rather than
    silently clamping them.
    """
    if not isinstance(config, BanditConfig):
        raise ConfigurationInvalid(
            f"expected BanditConfig, got {type(config).__name__}", field="config"
        )
    for field in BANDIT_FORM_FIELDS:
        value = getattr(config, field, None)
        if not is_finite_number(value):
            raise ConfigurationInvalid(f"{value!r} is not a finite number", field=field)
    if not 0.0 <= config.exploration_rate <= 1.0:
        raise ConfigurationInvalid("must be between 0 and 1", field="exploration_rate")
    if config.z_score_clamp <= 0.0:
        raise ConfigurationInvalid("must be positive", field="z_score_clamp")
    if config.weight_pick_rate < 0.0:
        raise ConfigurationInvalid("must be non-negative", field="weight_pick_rate")
    if config.weight_post_rate < 0.0:
        raise ConfigurationInvalid("must be non-negative", field="weight_post_rate")
    return config


def ensure_valid_k_factor(k_factor: object) -> float:
    """Return k_factor as a float, or raise if it is not a finite positive number."""
    if not is_finite_number(k_factor) or k_factor <= 0:
        raise ConfigurationInvalid(
            f"K-factor must be a positive number, got {k_factor!r}", field="k_factor"
        )
    return float(k_factor)


class ConfigProvider:
    """Thread-safe holder of the live bandit config and K-factor.

    Readers receive the stored immutable BanditConfig, so one read gives a
    self-consistent snapshot for an entire selection call.

    Example:
        ```python
        provider = ConfigProvider()
        provider.set_bandit_config(parse_bandit_form(request_form))
        slate = select_slate(stats, provider.get_bandit_config(), 3)
        ```
    """

    def __init__(
        self,
        bandit: BanditConfig | None = None,
        k_factor: float = DEFAULT_K_FACTOR,
    ):
        self._lock = threading.Lock()
        self._bandit = ensure_valid_bandit_config(bandit or BanditConfig())
        self._k_factor = ensure_valid_k_factor(k_factor)

    @classmethod
    def from_config(cls, config: ArenaConfig) -> ConfigProvider:
        """Seed a provider from a loaded ArenaConfig."""
        return cls(bandit=config.bandit, k_factor=config.elo.k_factor)

    def get_bandit_config(self) -> BanditConfig:
        with self._lock:
            return self._bandit

    def set_bandit_config(self, config: BanditConfig | Mapping[str, Any]) -> None:
        """Replace the live bandit config.

        Args:
            config: A BanditConfig, or a mapping of its four fields.

        Raises:
            ConfigurationInvalid: If a field is missing or out of range.
        """
        try:
            if not isinstance(config, BanditConfig):
                missing = [f for f in BANDIT_FORM_FIELDS if f not in config]
                if missing:
                    raise ConfigurationInvalid(
                        f"{BANDIT_FORM_FIELDS[missing[0]]} is required", field=missing[0]
                    )
                config = BanditConfig(**config)
            config = ensure_valid_bandit_config(config)
        except ValidationError as e:
            error = _as_configuration_invalid(e)
            logger.warning(f"Rejected bandit config update: {error}")
            raise error from e
        except ConfigurationInvalid as e:
            logger.warning(f"Rejected bandit config update: {e}")
            raise

        with self._lock:
            self._bandit = config
        logger.info(
            "Bandit config updated: "
            f"exploration_rate={config.exploration_rate} "
            f"z_score_clamp={config.z_score_clamp} "
            f"weight_pick_rate={config.weight_pick_rate} "
            f"weight_post_rate={config.weight_post_rate}"
        )

    def get_k_factor(self) -> float:
        with self._lock:
            return self._k_factor

    def set_k_factor(self, k_factor: float) -> None:
        """Replace the live K-factor.

        Raises:
            ConfigurationInvalid: If k_factor is not a finite positive number.
        """
        try:
            value = ensure_valid_k_factor(k_factor)
        except ConfigurationInvalid as e:
            logger.warning(f"Rejected K-factor update: {e}")
            raise
        with self._lock:
            self._k_factor = value
        logger.info(f"K-factor updated: {value}")
