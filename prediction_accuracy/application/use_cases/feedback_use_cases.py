"""
Feedback Use Cases - Application Layer

Mines reconciled predictions for error patterns and drift, and turns them
into prioritized improvement recommendations.
"""

from datetime import datetime, timezone
from typing import List

from prediction_accuracy.domain.entities.feedback import (
    DriftAnalysis,
    ErrorPattern,
    FeedbackReport,
    HighConfidenceError,
)
from prediction_accuracy.domain.entities.health_status import HealthStatus
from prediction_accuracy.domain.repositories.prediction_audit_repository import (
    IPredictionAuditRepository,
)
from prediction_accuracy.domain.services import analysis_window
from prediction_accuracy.domain.services.classification import split_at
from prediction_accuracy.domain.services.feedback_rules import (
    HIGH_CONFIDENCE_ERROR_LIMIT,
    analyze_drift,
    error_pattern,
    feature_insights,
    improvement_recommendations,
    misclassification_patterns,
    rank_error_patterns,
    to_high_confidence_error,
)
from prediction_accuracy.shared import get_logger

from ..dtos.feedback_dto import (
    DriftAnalysisDTO,
    FeedbackReportDTO,
    HighConfidenceErrorDTO,
    ImprovementRecommendationDTO,
)
from ..models import EvaluationPolicy

logger = get_logger(__name__)


class GenerateFeedbackUseCase:
    """Build the complete feedback loop report for a window."""

    def __init__(
        self, audit_repository: IPredictionAuditRepository, policy: EvaluationPolicy
    ) -> None:
        self.audit_repository = audit_repository
        self.policy = policy

    async def _error_patterns(self, since: datetime) -> List[ErrorPattern]:
        patterns: List[ErrorPattern] = []
        for predicted in HealthStatus.ordered():
            for actual in HealthStatus.ordered():
                if predicted == actual:
                    continue
                count = await self.audit_repository.count_misclassifications(
                    predicted, actual, since
                )
                if count <= 0:
                    continue
                examples = await self.audit_repository.find_misclassifications(
                    predicted, actual, since
                )
                patterns.append(error_pattern(predicted, actual, count, examples))
        return patterns

    async def _high_confidence_errors(
        self, since: datetime
    ) -> List[HighConfidenceError]:
        confident_errors = await self.audit_repository.find_high_confidence_errors(
            self.policy.high_confidence_threshold, since
        )
        return [
            to_high_confidence_error(r)
            for r in confident_errors[:HIGH_CONFIDENCE_ERROR_LIMIT]
        ]

    async def high_confidence_errors(
        self, window_days: int
    ) -> List[HighConfidenceError]:
        """Only the confident misses, without mining error patterns."""
        window = analysis_window(window_days)
        return await self._high_confidence_errors(window.start)

    async def drift(self, window_days: int) -> DriftAnalysis:
        """Older-half vs recent-half accuracy, without mining error patterns."""
        window = analysis_window(window_days)
        evaluated = await self.audit_repository.find_evaluated_since(window.start)
        older, recent = split_at(evaluated, window.midpoint)
        return analyze_drift(older, recent, window.midpoint)

    async def compute(self, window_days: int) -> FeedbackReport:
        """
        Raises:
            InvalidAnalysisWindowError: If ``window_days`` is below 1
        """
        window = analysis_window(window_days)
        since = window.start
        threshold = self.policy.high_confidence_threshold

        high_confidence_errors = await self._high_confidence_errors(since)
        evaluated = await self.audit_repository.find_evaluated_since(since)
        all_patterns = await self._error_patterns(since)
        older, recent = split_at(evaluated, window.midpoint)
        misclassifications = misclassification_patterns(evaluated)
        report = FeedbackReport(
            window_days=window.days,
            generated_at=datetime.now(timezone.utc),
            total_evaluated=len(evaluated),
            total_errors=sum(p.count for p in misclassifications),
            high_confidence_errors=high_confidence_errors,
            error_patterns=rank_error_patterns(all_patterns),
            misclassification_patterns=misclassifications,
            feature_insights=feature_insights(evaluated, threshold),
            recommendations=improvement_recommendations(
                all_patterns, len(high_confidence_errors)
            ),
            drift=analyze_drift(older, recent, window.midpoint),
        )
        logger.info(
            "feedback.computed",
            window_days=window_days,
            evaluated=report.total_evaluated,
            errors=report.total_errors,
            drift_type=report.drift.drift_type.value,
        )
        return report

    async def execute(self, window_days: int) -> FeedbackReportDTO:
        return FeedbackReportDTO.from_domain(await self.compute(window_days))


class GetHighConfidenceErrorsUseCase:
    def __init__(self, feedback_use_case: GenerateFeedbackUseCase) -> None:
        self.feedback_use_case = feedback_use_case

    async def execute(self, window_days: int) -> List[HighConfidenceErrorDTO]:
        errors = await self.feedback_use_case.high_confidence_errors(window_days)
        return [HighConfidenceErrorDTO.from_domain(e) for e in errors]


class GetDriftAnalysisUseCase:
    def __init__(self, feedback_use_case: GenerateFeedbackUseCase) -> None:
        self.feedback_use_case = feedback_use_case

    async def execute(self, window_days: int) -> DriftAnalysisDTO:
        drift = await self.feedback_use_case.drift(window_days)
        return DriftAnalysisDTO.from_domain(drift)


class GetImprovementRecommendationsUseCase:
    def __init__(self, feedback_use_case: GenerateFeedbackUseCase) -> None:
        self.feedback_use_case = feedback_use_case

    async def execute(self, window_days: int) -> List[ImprovementRecommendationDTO]:
        report = await self.feedback_use_case.compute(window_days)
        return [
            ImprovementRecommendationDTO.from_domain(r) for r in report.recommendations
        ]
