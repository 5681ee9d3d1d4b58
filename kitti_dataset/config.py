from dataclasses import dataclass, field
from typing import Optional
import yaml
from pathlib import Path

@dataclass
class DatasetConfig:
    kind: str
    root_dir: str

@dataclass
class InspectConfig:
    test: bool = False
    workers: int = 1
    report_path: Optional[str] = None
    plot_dir: Optional[str] = None
    max_plots: int = 1
    progress: bool = True

@dataclass
class LoggingConfig:
    level: str = "INFO"
    rich: bool = True

@dataclass
class AppConfig:
    dataset: DatasetConfig
    inspect: InspectConfig = field(default_factory=InspectConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> 'AppConfig':
        if not data or 'dataset' not in data:
            raise ValueError("Config must have a 'dataset' section")

        return cls(
            dataset=DatasetConfig(**data['dataset']),
            inspect=InspectConfig(**(data.get('inspect') or {})),
            logging=LoggingConfig(**(data.get('logging') or {})),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> 'AppConfig':
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)
