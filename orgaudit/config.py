"""Audit policy configuration and loading."""

import logging
import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

type ConfigDict = dict[str, str | int | float | dict]
type SettingValue = int | float

DEFAULT_MIN_ABOVE_PCT = 0.20
DEFAULT_MAX_ABOVE_PCT = 0.50
DEFAULT_MAX_REPORTING_DEPTH = 4

def _to_int(raw: object) -> int:
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValueError(f"not an integer: {raw!r}")
    return int(raw)


# (section, key) in config files -> (PolicyConfig field, env var, parser)
_SETTINGS: dict[tuple[str, str], tuple[str, str, Callable[[object], SettingValue]]] = {
    ("salary", "min_percentage"): ("min_above_pct", "ORGAUDIT_SALARY_MIN_PCT", float),
    ("salary", "max_percentage"): ("max_above_pct", "ORGAUDIT_SALARY_MAX_PCT", float),
    ("reporting_line", "max_length"): (
        "max_reporting_depth", "ORGAUDIT_MAX_REPORTING_DEPTH", _to_int,
    ),
}


@dataclass(frozen=True)
class PolicyConfig:
    """Salary band percentages (as fractions) and the reporting depth limit."""

    min_above_pct: float = DEFAULT_MIN_ABOVE_PCT
    max_above_pct: float = DEFAULT_MAX_ABOVE_PCT
    max_reporting_depth: int = DEFAULT_MAX_REPORTING_DEPTH

    def __post_init__(self) -> None:
        if not 0 <= self.min_above_pct <= 1:
            raise ValueError(
                f"Min salary percentage must be between 0 and 1: {self.min_above_pct}"
            )
        if not 0 <= self.max_above_pct <= 2:
            raise ValueError(
                f"Max salary percentage must be between 0 and 2: {self.max_above_pct}"
            )
        if self.min_above_pct > self.max_above_pct:
            raise ValueError(
                "Min salary percentage cannot exceed max: "
                f"{self.min_above_pct} > {self.max_above_pct}"
            )
        if isinstance(self.max_reporting_depth, bool) or not isinstance(
            self.max_reporting_depth, int
        ):
            raise ValueError(
                f"Max reporting line length must be an integer: {self.max_reporting_depth!r}"
            )
        if self.max_reporting_depth < 1:
            raise ValueError(
                f"Max reporting line length must be at least 1: {self.max_reporting_depth}"
            )

    @classmethod
    def defaults(cls) -> "PolicyConfig":
        return cls()

    def min_expected_salary(self, average_subordinate_salary: float) -> float:
        return average_subordinate_salary * (1 + self.min_above_pct)

    def max_expected_salary(self, average_subordinate_salary: float) -> float:
        return average_subordinate_salary * (1 + self.max_above_pct)

    def __str__(self) -> str:
        return (
            f"PolicyConfig(min_salary={self.min_above_pct:.0%}, "
            f"max_salary={self.max_above_pct:.0%}, "
            f"max_reporting_line={self.max_reporting_depth})"
        )


def read_config_file(path: Path) -> ConfigDict:
    """Read a TOML or YAML settings file into a plain dict.

    Unreadable or non-mapping content raises ``ValueError``.
    """
    match path.suffix.lower():
        case ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
            # Accept a pyproject-style file as well as a dedicated one
            data = data.get("tool", {}).get("orgaudit", data)
        case ".yaml" | ".yml":
            with open(path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as exc:
                    raise ValueError(f"Malformed YAML in {path}: {exc}") from exc
        case ext:
            raise ValueError(f"Unsupported config format: {ext}")

    if not isinstance(data, Mapping):
        raise ValueError(f"Config file {path} must contain a mapping of settings")
    return data


def get_env_config() -> ConfigDict:
    """Read default settings from the project's pyproject.toml, if present."""
    pyproject = Path(__file__).parent.parent / "pyproject.toml"
    if not pyproject.exists():
        return {}
    return read_config_file(pyproject)


def _parse(raw: object, parser: Callable[[object], SettingValue], source: str) -> SettingValue | None:
    try:
        return parser(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid value for %s: %r", source, raw)
        return None


def _apply_file_settings(config: PolicyConfig, settings: ConfigDict, origin: str) -> PolicyConfig:
    overrides: dict[str, SettingValue] = {}
    for (section, key), (attr, _, parser) in _SETTINGS.items():
        block = settings.get(section)
        if not isinstance(block, Mapping) or key not in block:
            continue
        value = _parse(block[key], parser, f"{origin}:{section}.{key}")
        if value is not None:
            overrides[attr] = value
    return replace(config, **overrides) if overrides else config


def _apply_env_overrides(config: PolicyConfig, env: Mapping[str, str]) -> PolicyConfig:
    overrides: dict[str, SettingValue] = {}
    for attr, var, parser in _SETTINGS.values():
        if var not in env:
            continue
        value = _parse(env[var], parser, f"environment variable {var}")
        if value is not None:
            overrides[attr] = value
    return replace(config, **overrides) if overrides else config


def load_policy_config(
    path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> PolicyConfig:
    """Build the policy from defaults, a settings file and environment overrides.

    Later layers win. A value that does not parse is logged and skipped; a
    combination that parses but is out of range raises ``ValueError``.
    """
    env = os.environ if env is None else env
    config = PolicyConfig.defaults()

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        config = _apply_file_settings(config, read_config_file(path), str(path))
        logger.debug("Loaded policy settings from %s", path)
    else:
        project_settings = get_env_config()
        if project_settings:
            config = _apply_file_settings(config, project_settings, "pyproject.toml")
            logger.debug("Loaded policy settings from pyproject.toml")

    return _apply_env_overrides(config, env)
