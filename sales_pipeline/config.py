"""Pipeline configuration: report limits, rounding and bonus rates."""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from sales_pipeline.errors import ConfigError

type ConfigDict = dict[str, str | int | float | bool | dict]

PYPROJECT_NAME = "pyproject.toml"


@dataclass(frozen=True)
class BonusRates:
    """Share of profit paid as bonus, by rank band."""

    first: float = 0.15
    podium: float = 0.10
    podium_ranks: int = 2
    last: float = 0.0
    default: float = 0.05


@dataclass(frozen=True)
class AnalysisConfig:
    top_products_limit: int = 10
    money_places: int = 2
    bonus: BonusRates = field(default_factory=BonusRates)
    verbose: bool = True


def _build_config(data: ConfigDict) -> AnalysisConfig:
    known = {f.name for f in fields(AnalysisConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

    data = dict(data)
    match data.get("bonus"):
        case None:
            pass
        case dict() as rates:
            try:
                data["bonus"] = BonusRates(**rates)
            except TypeError as exc:
                raise ConfigError(f"Invalid bonus rates: {exc}") from exc
        case other:
            raise ConfigError(f"'bonus' must be a table, got {type(other).__name__}")

    config = AnalysisConfig(**data)
    if config.top_products_limit < 0:
        raise ConfigError("top_products_limit must be >= 0")
    if config.money_places < 0:
        raise ConfigError("money_places must be >= 0")
    return config


def get_env_config(pyproject: Path | None = None) -> ConfigDict:
    """Read the ``[tool.sales_pipeline]`` table from pyproject.toml.

    Without a path, looks in the current working directory, which is the
    project being analyzed rather than wherever this package is installed.
    """
    if pyproject is None:
        pyproject = Path.cwd() / PYPROJECT_NAME
    if not pyproject.exists():
        return {}
    with open(pyproject, "rb") as f:
        data = tomllib.load(f)
    return data.get("tool", {}).get("sales_pipeline", {})


def load_analysis_config(path: str | Path | None = None) -> AnalysisConfig:
    """Load configuration from a TOML or YAML file.

    With no path, falls back to the pyproject.toml table and then to defaults.
    A pyproject.toml passed explicitly is read the same way.
    """
    if path is None:
        return _build_config(get_env_config())

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    match path.suffix:
        case ".toml" if path.name == PYPROJECT_NAME:
            data = get_env_config(path)
        case ".toml":
            with open(path, "rb") as f:
                try:
                    data = tomllib.load(f)
                except tomllib.TOMLDecodeError as exc:
                    raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
        case ".yaml" | ".yml":
            with open(path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as exc:
                    raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        case ext:
            raise ConfigError(f"Unsupported config format: {ext}")

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")
    return _build_config(data)


def load_profile(env: str = "production") -> AnalysisConfig:
    match env:
        case "production":
            return AnalysisConfig(verbose=False)
        case "strict":
            return AnalysisConfig(top_products_limit=5, verbose=False)
        case "development":
            return AnalysisConfig(verbose=True)
        case other:
            raise ConfigError(f"Unknown profile: {other}")
