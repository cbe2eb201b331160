"""
Configuration management for the Glucose Dashboard.

This module provides dataclasses for all configurable thresholds and settings,
with support for loading from YAML files and runtime modification via UI.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any
import yaml


@dataclass
class GlucoseThresholds:
    """Glucose thresholds in mg/dL.

    Time-in-range bands use low / target_high / very_high.
    Status badges (table, calendar, distribution) use low / normal_high / target_high.
    The heatmap adds ideal_high and tight_high.
    """
    low: float = 70            # Hypoglycemia below this value
    target_low: float = 70     # TIR lower bound (inclusive)
    target_high: float = 180   # TIR upper bound (inclusive)
    very_high: float = 250     # Upper bound (inclusive) of the "high" band

    # Status bands
    normal_high: float = 130   # Normal up to and including this value

    # Heatmap bands
    ideal_high: float = 100
    tight_high: float = 140


@dataclass
class AnalysisSettings:
    """Settings for statistics and pattern algorithms."""
    # Variability limit - Consensus (Battelino 2019)
    cv_target: float = 36.0

    # Control score weights
    control_target_weight: float = 0.7
    control_variability_weight: float = 0.3

    # Peak/low hour detection
    peak_relative_threshold: float = 0.10  # Fraction of the overall hourly mean
    max_pattern_hours: int = 3
    min_populated_hours: int = 1

    # Overall trend (first vs last quarter)
    overall_trend_threshold: float = 15.0  # mg/dL
    min_trend_readings: int = 10

    # Recent week trend (first vs second half of the window)
    recent_trend_threshold: float = 10.0   # mg/dL
    recent_window_days: int = 7
    min_recent_total: int = 7
    min_recent_readings: int = 5


@dataclass
class RecommendationSettings:
    """Thresholds for the rule-based recommendations."""
    max_low_percent: float = 10.0
    min_target_percent: float = 70.0
    excellent_control_score: float = 80.0


@dataclass
class ReportSettings:
    """Settings for insights and the pattern report."""
    insight_window_days: int = 7
    insight_trend_threshold: float = 10.0
    min_insight_trend_readings: int = 3
    report_hours: int = 8
    extreme_readings: int = 10
    weekly_trend_weeks: int = 4


@dataclass
class SourceSettings:
    """Settings for the published spreadsheet source."""
    csv_url: Optional[str] = None
    request_timeout: float = 30.0
    date_format: str = "%m/%d/%Y"
    export_date_format: str = "%d/%m/%Y"


@dataclass
class VisualizationSettings:
    """Settings for chart rendering."""
    rolling_window: int = 5
    font_family: str = "Inter, sans-serif"
    default_range_days: Optional[int] = 30


@dataclass
class AnalysisConfig:
    """Master configuration container."""
    glucose: GlucoseThresholds = field(default_factory=GlucoseThresholds)
    analysis: AnalysisSettings = field(default_factory=AnalysisSettings)
    recommendations: RecommendationSettings = field(default_factory=RecommendationSettings)
    report: ReportSettings = field(default_factory=ReportSettings)
    source: SourceSettings = field(default_factory=SourceSettings)
    visualization: VisualizationSettings = field(default_factory=VisualizationSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisConfig':
        """Create config from dictionary."""
        return cls(
            glucose=GlucoseThresholds(**data.get('glucose', {})),
            analysis=AnalysisSettings(**data.get('analysis', {})),
            recommendations=RecommendationSettings(**data.get('recommendations', {})),
            report=ReportSettings(**data.get('report', {})),
            source=SourceSettings(**data.get('source', {})),
            visualization=VisualizationSettings(**data.get('visualization', {})),
        )


_SECTIONS = ('glucose', 'analysis', 'recommendations', 'report', 'source', 'visualization')


def load_config(config_path: Optional[Path] = None) -> AnalysisConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml. If None, looks for config.yaml
                    in the glucose_dashboard package directory.

    Returns:
        AnalysisConfig with values from file merged with defaults.
        Unknown sections and keys are ignored.
    """
    if config_path is None:
        config_path = Path(__file__).parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        return AnalysisConfig()

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    # Create config with defaults, then override with file values
    config = AnalysisConfig()

    for section_name in _SECTIONS:
        if section_name not in data:
            continue
        section = getattr(config, section_name)
        for key, value in (data[section_name] or {}).items():
            if hasattr(section, key):
                setattr(section, key, value)

    return config


def save_config(config: AnalysisConfig, config_path: Path) -> None:
    """Save configuration to YAML file."""
    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)
