from .metrics import MetricsSnapshot, RequestMetrics, memory_usage

__all__ = ["MetricsSnapshot", "RequestMetrics", "memory_usage"]
