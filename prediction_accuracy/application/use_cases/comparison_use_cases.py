"""
Comparison Use Cases - Application Layer

A/B comparison of the primary model against the challenger over the same
window.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from prediction_accuracy.domain.entities.comparison import (
    ComparisonResult,
    ModelPerformance,
)
from prediction_accuracy.domain.entities.prediction import PredictionRecord
from prediction_accuracy.domain.repositories.prediction_audit_repository import (
    IPredictionAuditRepository,
)
from prediction_accuracy.domain.services import (
    analysis_window,
    build_comparison,
    build_model_performance,
    compare_by_status,
)
from prediction_accuracy.shared import get_logger

from ..dtos.comparison_dto import ComparisonResultDTO, ComparisonSummaryDTO
from ..models import EvaluationPolicy

logger = get_logger(__name__)


class CompareModelsUseCase:
    def __init__(
        self, audit_repository: IPredictionAuditRepository, policy: EvaluationPolicy
    ) -> None:
        self.audit_repository = audit_repository
        self.policy = policy

    async def _performance(
        self, model_type: str, since: datetime
    ) -> Tuple[ModelPerformance, List[PredictionRecord]]:
        repo = self.audit_repository
        evaluated = await repo.find_evaluated_by_model_type_since(model_type, since)
        everything = await repo.find_by_model_type_since(model_type, since)
        performance = build_model_performance(
            model_type,
            evaluated,
            total_predictions=len(everything),
            average_confidence=await repo.average_confidence_by_model_type(
                model_type, since
            ),
            average_response_time_ms=await repo.average_response_time_by_model_type(
                model_type, since
            ),
            error_count=await repo.count_errors_by_model_type(model_type, since),
        )
        return performance, evaluated

    async def compute(
        self,
        window_days: int,
        model_a: Optional[str] = None,
        model_b: Optional[str] = None,
    ) -> ComparisonResult:
        """
        Compare ``model_a`` with ``model_b`` over the same window.

        Args:
            window_days: Lookback in days
            model_a: Defaults to ``policy.primary_model``
            model_b: Defaults to ``policy.challenger_model``

        Raises:
            InvalidAnalysisWindowError: If ``window_days`` is below 1
        """
        window = analysis_window(window_days)
        model_a = model_a or self.policy.primary_model
        model_b = model_b or self.policy.challenger_model

        performance_a, evaluated_a = await self._performance(model_a, window.start)
        performance_b, evaluated_b = await self._performance(model_b, window.start)

        result = build_comparison(
            window,
            performance_a,
            performance_b,
            compare_by_status(model_a, evaluated_a, model_b, evaluated_b),
        )
        logger.info(
            "comparison.computed",
            window_days=window_days,
            model_a=model_a,
            model_b=model_b,
            winner=result.winner,
            evaluated_a=performance_a.evaluated_predictions,
            evaluated_b=performance_b.evaluated_predictions,
            p_value=result.significance.p_value,
        )
        return result

    async def execute(
        self,
        window_days: int,
        model_a: Optional[str] = None,
        model_b: Optional[str] = None,
    ) -> ComparisonResultDTO:
        result = await self.compute(window_days, model_a=model_a, model_b=model_b)
        return ComparisonResultDTO.from_domain(result)


class GetComparisonSummaryUseCase:
    def __init__(self, compare_use_case: CompareModelsUseCase) -> None:
        self.compare_use_case = compare_use_case

    async def execute(
        self,
        window_days: int,
        model_a: Optional[str] = None,
        model_b: Optional[str] = None,
    ) -> ComparisonSummaryDTO:
        result = await self.compare_use_case.compute(
            window_days, model_a=model_a, model_b=model_b
        )
        return ComparisonSummaryDTO.from_domain(result)
