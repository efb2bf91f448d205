from .system_info import EvaluationPolicy, SystemInfo

__all__ = ["SystemInfo", "EvaluationPolicy"]
