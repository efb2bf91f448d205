"""
Accuracy Use Cases - Application Layer

Every call recomputes from the audit store; nothing is cached between calls.
"""

from prediction_accuracy.domain.entities.accuracy import (
    AccuracySnapshot,
    PredictionAccuracyReport,
)
from prediction_accuracy.domain.repositories.prediction_audit_repository import (
    IPredictionAuditRepository,
)
from prediction_accuracy.domain.services import (
    analysis_window,
    build_accuracy_snapshot,
    build_prediction_report,
)
from prediction_accuracy.shared import get_logger, publish_accuracy

from ..dtos.accuracy_dto import (
    AccuracySnapshotDTO,
    AccuracySummaryDTO,
    PredictionAccuracyReportDTO,
)

logger = get_logger(__name__)


class GetAccuracyMetricsUseCase:
    """Classification quality of evaluated predictions over a lookback window."""

    def __init__(self, audit_repository: IPredictionAuditRepository) -> None:
        self.audit_repository = audit_repository

    async def compute(self, window_days: int) -> AccuracySnapshot:
        """
        Build the snapshot for the last ``window_days`` days.

        Raises:
            InvalidAnalysisWindowError: If ``window_days`` is below 1
        """
        window = analysis_window(window_days)
        evaluated = await self.audit_repository.find_evaluated_since(window.start)
        total = await self.audit_repository.count_total_since(window.start)

        snapshot = build_accuracy_snapshot(evaluated, total, window)
        logger.info(
            "accuracy.computed",
            window_days=window_days,
            evaluated=snapshot.evaluated_predictions,
            accuracy=round(snapshot.overall_accuracy, 4),
        )
        if not snapshot.no_data:
            publish_accuracy(
                snapshot.overall_accuracy,
                snapshot.weighted.f1_score,
                snapshot.calibration_score,
            )
        return snapshot

    async def execute(self, window_days: int) -> AccuracySnapshotDTO:
        return AccuracySnapshotDTO.from_domain(await self.compute(window_days))


class GetAccuracySummaryUseCase:
    def __init__(self, metrics_use_case: GetAccuracyMetricsUseCase) -> None:
        self.metrics_use_case = metrics_use_case

    async def execute(self, window_days: int) -> AccuracySummaryDTO:
        snapshot = await self.metrics_use_case.compute(window_days)
        return AccuracySummaryDTO.from_domain(snapshot)


class GetPredictionAccuracyReportUseCase:
    """Accuracy report over every prediction of the window, pending ones included."""

    def __init__(self, audit_repository: IPredictionAuditRepository) -> None:
        self.audit_repository = audit_repository

    async def compute(self, window_days: int) -> PredictionAccuracyReport:
        """
        Raises:
            InvalidAnalysisWindowError: If ``window_days`` is below 1
        """
        window = analysis_window(window_days)
        records = await self.audit_repository.find_since(window.start)

        report = build_prediction_report(records, window)
        logger.info(
            "accuracy.report_generated",
            window_days=window_days,
            total=report.total_predictions,
            pending=report.pending_evaluation,
            days_with_predictions=len(report.daily_accuracy),
        )
        return report

    async def execute(self, window_days: int) -> PredictionAccuracyReportDTO:
        return PredictionAccuracyReportDTO.from_domain(await self.compute(window_days))
