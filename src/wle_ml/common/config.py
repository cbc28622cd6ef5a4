from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import List, Optional
import yaml

from wle_ml.domain.columns import LABEL_COLUMN, METADATA_COLUMNS, NA_TOKENS


@dataclass
class LoaderConfig:
    """Where the two input tables live and how missing values are spelled."""
    train_path: Optional[str] = None
    test_path: Optional[str] = None
    na_values: List[str] = field(default_factory=lambda: list(NA_TOKENS))


@dataclass
class PartitionConfig:
    train_fraction: float = 0.8
    random_state: int = 42


@dataclass
class ReducerConfig:
    """Thresholds of the three feature-reduction passes."""
    correlation_cutoff: float = 0.7
    metadata_columns: List[str] = field(default_factory=lambda: list(METADATA_COLUMNS))
    n_bins: int = 10
    max_stale: int = 5


@dataclass
class ModelConfig:
    """Configuration for the Random Forest model."""
    n_estimators: int = 100
    cv_folds: int = 2
    tune_length: int = 3
    random_state: int = 42
    n_jobs: int = 1


@dataclass
class PipelineConfig:
    label_column: str = LABEL_COLUMN
    output_dir: str = "artifacts"
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    partition: PartitionConfig = field(default_factory=PartitionConfig)
    reducer: ReducerConfig = field(default_factory=ReducerConfig)
    model: ModelConfig = field(default_factory=ModelConfig)

    @property
    def model_path(self) -> Path:
        return Path(self.output_dir) / "model.joblib"

    @property
    def predictions_path(self) -> Path:
        return Path(self.output_dir) / "predictions.csv"

    def to_dict(self) -> dict:
        return asdict(self)


_SECTIONS = {
    "loader": LoaderConfig,
    "partition": PartitionConfig,
    "reducer": ReducerConfig,
    "model": ModelConfig,
}


def load_config(config_path: str | Path) -> dict:
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def _build(cls, values: dict, section: str):
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown keys in '{section}' config: {sorted(unknown)}")
    return cls(**values)


def config_from_dict(raw: dict) -> PipelineConfig:
    raw = dict(raw or {})
    sections = {}
    for name, cls in _SECTIONS.items():
        values = raw.pop(name, None) or {}
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{name}' must be a mapping")
        sections[name] = _build(cls, values, name)
    top = _build(PipelineConfig, raw, "pipeline")
    for name, section in sections.items():
        setattr(top, name, section)
    return top


def load_pipeline_config(config_path: str | Path | None = None) -> PipelineConfig:
    """Read a YAML config file onto the pipeline dataclasses; missing keys keep their defaults."""
    if config_path is None:
        return PipelineConfig()
    return config_from_dict(load_config(config_path))
