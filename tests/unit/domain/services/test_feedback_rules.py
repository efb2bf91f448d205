from __future__ import annotations

from datetime import datetime, timezone

import pytest

from prediction_accuracy.domain.entities.feedback import (
    DriftType,
    ErrorPattern,
    ImprovementArea,
    Priority,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.services.feedback_rules import (
    analyze_drift,
    error_pattern,
    feature_insights,
    improvement_recommendations,
    likely_cause,
    misclassification_patterns,
    rank_error_patterns,
    severity_direction,
    to_high_confidence_error,
)
from tests.conftest import make_record

H, W, C = HealthStatus.HEALTHY, HealthStatus.WARNING, HealthStatus.CRITICAL


def _pattern(predicted, actual, count) -> ErrorPattern:
    return ErrorPattern(
        predicted=predicted,
        actual=actual,
        occurrence_count=count,
        average_confidence=0.8,
        likely_cause=likely_cause(predicted, actual),
    )


def test_likely_cause_known_and_fallback_pairs() -> None:
    assert likely_cause(H, C).startswith("Critical miss")
    assert likely_cause(C, H).startswith("False alarm")
    assert likely_cause(W, H) == "Threshold calibration needed"


def test_high_confidence_error_flags_underestimated_rate() -> None:
    record = make_record(
        H, C, confidence=0.95, predicted_error_rate=0.01, reasoning="quiet day"
    )
    record.actual_error_rate = 0.2
    record.id = 7

    error = to_high_confidence_error(record)

    assert error.prediction_id == 7
    assert error.predicted is H and error.actual is C
    assert error.possible_causes == [
        "Underestimated error rate",
        "Review input metrics quality",
    ]
    assert error.reasoning == "quiet day"


def test_high_confidence_error_without_rates_falls_back_to_status_severity() -> None:
    error = to_high_confidence_error(make_record(W, H, confidence=0.9))

    assert error.possible_causes == [
        "Overestimated severity",
        "Review input metrics quality",
    ]


def test_high_confidence_error_unknown_outcome_uses_generic_cause() -> None:
    error = to_high_confidence_error(make_record(W, HealthStatus.UNKNOWN, confidence=0.9))

    assert error.possible_causes == ["Review input metrics quality"]


@pytest.mark.parametrize(
    "predicted, actual, expected",
    [
        (H, C, "Underestimated severity"),
        (W, C, "Underestimated severity"),
        (C, W, "Overestimated severity"),
        (H, H, None),
        (HealthStatus.UNKNOWN, C, None),
    ],
)
def test_severity_direction(predicted, actual, expected) -> None:
    assert severity_direction(predicted, actual) == expected


def test_error_pattern_averages_example_confidence() -> None:
    examples = [make_record(H, C, confidence=0.6), make_record(H, C, confidence=1.0)]

    pattern = error_pattern(H, C, 2, examples)

    assert pattern.occurrence_count == 2
    assert pattern.average_confidence == pytest.approx(0.8)


def test_rank_error_patterns_keeps_top_five_by_count() -> None:
    patterns = [_pattern(H, W, n) for n in (1, 6, 3, 2, 5, 4)]

    ranked = rank_error_patterns(patterns)

    assert [p.occurrence_count for p in ranked] == [6, 5, 4, 3, 2]


def test_misclassification_percentages_sum_to_hundred() -> None:
    records = [
        make_record(H, C),
        make_record(H, C),
        make_record(W, H),
        make_record(H, H),
    ]

    patterns = misclassification_patterns(records)

    assert [(p.predicted, p.actual, p.count) for p in patterns] == [
        (H, C, 2),
        (W, H, 1),
    ]
    assert sum(p.percentage_of_errors for p in patterns) == pytest.approx(100.0)
    assert patterns[0].description == "HEALTHY misclassified as CRITICAL"


def test_misclassification_patterns_empty_without_errors() -> None:
    assert misclassification_patterns([make_record(H, H)]) == []


def test_feature_insight_when_confident_predictions_unreliable() -> None:
    records = [make_record(H, H, confidence=0.9), make_record(H, C, confidence=0.9)]

    insights = feature_insights(records)

    assert len(insights) == 1
    assert insights[0].correlation_with_error == pytest.approx(0.5)
    assert insights[0].recommendation == "Recalibrate confidence scoring"


def test_no_feature_insight_when_confident_predictions_reliable() -> None:
    records = [make_record(H, H, confidence=0.9) for _ in range(9)] + [
        make_record(H, C, confidence=0.5)
    ]

    assert feature_insights(records) == []


def test_recommendations_never_empty() -> None:
    recommendations = improvement_recommendations([], 0)

    assert len(recommendations) == 1
    assert recommendations[0].priority is Priority.LOW
    assert recommendations[0].recommendation.startswith("Continue monitoring")


def test_recommendations_sorted_by_priority() -> None:
    patterns = [_pattern(C, H, 6), _pattern(H, C, 1)]

    recommendations = improvement_recommendations(patterns, high_confidence_errors=2)

    assert [r.priority for r in recommendations] == [
        Priority.HIGH,
        Priority.HIGH,
        Priority.MEDIUM,
    ]
    assert recommendations[0].area is ImprovementArea.THRESHOLDS
    assert recommendations[-1].rationale == "6 false CRITICAL alarms detected"


def test_few_false_alarms_do_not_trigger_recommendation() -> None:
    recommendations = improvement_recommendations([_pattern(C, H, 5)], 0)

    assert [r.priority for r in recommendations] == [Priority.LOW]


def test_drift_concept_when_recent_half_declines() -> None:
    midpoint = datetime(2024, 5, 15, tzinfo=timezone.utc)
    older = [make_record(H, H) for _ in range(10)]
    recent = [make_record(H, H) for _ in range(3)] + [
        make_record(H, C) for _ in range(7)
    ]

    drift = analyze_drift(older, recent, midpoint)

    assert drift.drift_detected is True
    assert drift.drift_type is DriftType.CONCEPT_DRIFT
    assert drift.drift_score == pytest.approx(0.7)
    assert drift.baseline_accuracy == pytest.approx(1.0)
    assert drift.recent_accuracy == pytest.approx(0.3)
    assert drift.drift_start_date == midpoint


def test_drift_data_when_recent_half_improves() -> None:
    older = [make_record(H, C) for _ in range(5)]
    recent = [make_record(H, H) for _ in range(5)]

    drift = analyze_drift(older, recent)

    assert drift.drift_type is DriftType.DATA_DRIFT


def test_small_change_is_not_drift() -> None:
    older = [make_record(H, H) for _ in range(10)]
    recent = [make_record(H, H) for _ in range(9)] + [make_record(H, C)]

    drift = analyze_drift(older, recent)

    assert drift.drift_detected is False
    assert drift.drift_type is DriftType.NONE
    assert drift.description == "No significant drift detected"


def test_drift_with_empty_half_reports_insufficient_data() -> None:
    drift = analyze_drift([], [make_record(H, H)])

    assert drift.insufficient_data is True
    assert drift.drift_detected is False
    assert drift.recommendations == ["Collect more data"]
