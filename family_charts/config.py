"""Application configuration using Pydantic Settings."""

import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ChartSettings(BaseSettings):
    """Chart generation defaults and limits."""

    model_config = SettingsConfigDict(env_prefix="CHARTS_")

    max_generations: int = 10
    ancestor_generations: int = 3
    descendant_generations: int = 3
    hourglass_generations: int = 2
    fan_generations: int = 4
    bowtie_generations: int = 3
    compact_generations: int = 5
    matrix_max_people: int = 20
    matrix_people_limit: int = 50

    # Fan chart arc, in degrees
    fan_span_degrees: float = 360.0
    fan_start_degrees: float = 0.0

    geographic_top_n: int = 10
    surname_top_n: int = 15


class DataSettings(BaseSettings):
    """Dataset location settings."""

    model_config = SettingsConfigDict(env_prefix="DATA_")

    dataset_path: str = "data/family.json"


class MetricsSettings(BaseSettings):
    """Prometheus metrics settings."""

    model_config = SettingsConfigDict(env_prefix="METRICS_")

    namespace: str = "family_charts"


class LoggingSettings(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    charts: ChartSettings = ChartSettings()
    data: DataSettings = DataSettings()
    metrics: MetricsSettings = MetricsSettings()
    log: LoggingSettings = LoggingSettings()


settings = Settings()


def configure_logging(config: Optional[LoggingSettings] = None) -> None:
    """Apply the configured level and format to the root logger."""
    config = config or settings.log
    logging.basicConfig(level=config.level.upper(), format=config.format)
