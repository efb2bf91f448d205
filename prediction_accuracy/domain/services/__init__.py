"""
Domain Services Package

Pure functions over prediction records: validation, outcome
classification, classification metrics, significance testing and the
rule-based insight and feedback heuristics.
"""

from .accuracy_report import build_accuracy_snapshot
from .analysis_window import AnalysisWindow, analysis_window
from .comparison_report import build_comparison, build_model_performance, compare_by_status
from .outcome_classifier import aggregate_error_rate, classify_error_rate
from .prediction_report import build_prediction_report
from .prediction_validator import parse_health_status, validate_prediction_record

__all__ = [
    "AnalysisWindow",
    "analysis_window",
    "build_accuracy_snapshot",
    "build_prediction_report",
    "build_model_performance",
    "compare_by_status",
    "build_comparison",
    "aggregate_error_rate",
    "classify_error_rate",
    "parse_health_status",
    "validate_prediction_record",
]
