from __future__ import annotations

from prediction_accuracy.application.dtos.accuracy_dto import (
    AccuracySnapshotDTO,
    AccuracySummaryDTO,
)
from prediction_accuracy.domain.services import analysis_window, build_accuracy_snapshot


def test_snapshot_dto_serializes_status_keys(scenario_records) -> None:
    snapshot = build_accuracy_snapshot(scenario_records, 5, analysis_window(30))

    body = AccuracySnapshotDTO.from_domain(snapshot).model_dump(mode="json")

    assert set(body["metrics_by_status"]) == {"HEALTHY", "WARNING", "CRITICAL", "UNKNOWN"}
    assert body["confusion_matrix"]["labels"] == [
        "HEALTHY",
        "WARNING",
        "CRITICAL",
        "UNKNOWN",
    ]
    assert body["metrics_by_status"]["WARNING"]["support"] == 1


def test_summary_dto_uses_weighted_f1(scenario_records) -> None:
    snapshot = build_accuracy_snapshot(scenario_records, 5, analysis_window(30))

    summary = AccuracySummaryDTO.from_domain(snapshot)

    assert summary.weighted_f1_score == snapshot.weighted.f1_score
    assert summary.insights == snapshot.insights
