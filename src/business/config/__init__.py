"""
Configuration Management

Loads and manages business layer configuration:
- AnalysisConfig: analysis policy thresholds and default market context
"""

from src.business.config.analysis_config import AnalysisConfig
from src.business.config.config_utils import ConfigError, merge_overrides

__all__ = ["AnalysisConfig", "ConfigError", "merge_overrides"]
