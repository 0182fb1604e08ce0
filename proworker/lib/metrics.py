"""
Prometheus-compatible metrics for observability.

Tracks:
- Context aggregations (by outcome)
- Chat requests (by outcome: answered, cached, quota_exceeded, queue_full, failed)
- LLM calls (by query intent and status)

Usage:
    from proworker.lib.metrics import get_metrics_collector

    metrics = get_metrics_collector()
    metrics.increment_aggregations(outcome="success")
    metrics.increment_chat_requests(outcome="cached")

    # Export for Prometheus
    prometheus_output = metrics.export_prometheus()
"""

from typing import Dict, Optional, Tuple
from threading import Lock


class MetricsCollector:
    """
    Prometheus-style metrics collector for the assistant.

    Counters:
    - worker_context_aggregations_total: Snapshot builds (labels: outcome)
    - chat_requests_total: Chat requests (labels: outcome)
    - llm_calls_total: Calls to the LLM provider (labels: intent, status)

    Thread-safe for concurrent increments.
    """

    def __init__(self):
        self._lock = Lock()

        # Counters: key = (metric_name, labels_tuple), value = count
        self._counters: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], int] = {}

    def _get_counter_key(self, metric_name: str, labels: Dict[str, str]) -> Tuple[str, Tuple[Tuple[str, str], ...]]:
        """Generate unique key for counter with sorted labels."""
        sorted_labels = tuple(sorted(labels.items()))
        return (metric_name, sorted_labels)

    def _increment(self, metric_name: str, labels: Dict[str, str], amount: int = 1):
        """Thread-safe increment of counter."""
        key = self._get_counter_key(metric_name, labels)
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    def _get_value(self, metric_name: str, labels: Dict[str, str]) -> int:
        key = self._get_counter_key(metric_name, labels)
        with self._lock:
            return self._counters.get(key, 0)

    # ===== Aggregation Metrics =====

    def increment_aggregations(self, outcome: str, amount: int = 1):
        """
        Increment worker context aggregation counter.

        Args:
            outcome: success or not_found
            amount: Increment amount (default 1)
        """
        self._increment(
            "worker_context_aggregations_total",
            {"outcome": outcome.lower()},
            amount,
        )

    # ===== Chat Metrics =====

    def increment_chat_requests(self, outcome: str, amount: int = 1):
        """Increment chat request counter for the given outcome."""
        self._increment("chat_requests_total", {"outcome": outcome.lower()}, amount)

    def increment_llm_calls(self, intent: str, status: str = "ok", amount: int = 1):
        """
        Increment LLM provider call counter.

        Args:
            intent: Detected query intent (comparison, financial, ...)
            status: ok, empty, rate_limited, error
            amount: Increment amount
        """
        labels = {
            "intent": intent.lower(),
            "status": status.lower(),
        }
        self._increment("llm_calls_total", labels, amount)

    # ===== Export =====

    def export_prometheus(self) -> str:
        """
        Export all metrics in Prometheus text format.

        Returns:
            Prometheus-compatible text output
        """
        output_lines = []

        metrics_by_name: Dict[str, list] = {}
        with self._lock:
            for (metric_name, labels_tuple), value in self._counters.items():
                metrics_by_name.setdefault(metric_name, []).append((dict(labels_tuple), value))

        for metric_name in sorted(metrics_by_name.keys()):
            help_text = self._get_help_text(metric_name)
            output_lines.append(f"# HELP {metric_name} {help_text}")
            output_lines.append(f"# TYPE {metric_name} counter")

            for labels_dict, value in sorted(metrics_by_name[metric_name], key=lambda x: str(x[0])):
                labels_str = ",".join([f'{k}="{v}"' for k, v in sorted(labels_dict.items())])
                output_lines.append(f"{metric_name}{{{labels_str}}} {value}")

            output_lines.append("")  # Blank line between metrics

        return "\n".join(output_lines)

    def _get_help_text(self, metric_name: str) -> str:
        help_texts = {
            "worker_context_aggregations_total": "Total number of worker context snapshots built",
            "chat_requests_total": "Total number of chat requests by outcome",
            "llm_calls_total": "Total number of calls made to the LLM provider",
        }
        return help_texts.get(metric_name, "Counter metric")

    def get_counter_value(self, metric_name: str, labels: Dict[str, str]) -> int:
        """
        Get current value of a specific counter.

        Args:
            metric_name: Name of the metric
            labels: Label filters

        Returns:
            Current counter value
        """
        return self._get_value(metric_name, labels)

    def reset_all(self):
        """Reset all counters (for testing)."""
        with self._lock:
            self._counters.clear()


# Global singleton instance
_metrics_collector: Optional[MetricsCollector] = None
_metrics_lock = Lock()


def get_metrics_collector() -> MetricsCollector:
    """
    Get global metrics collector singleton.

    Returns:
        MetricsCollector instance
    """
    global _metrics_collector
    if _metrics_collector is None:
        with _metrics_lock:
            if _metrics_collector is None:
                _metrics_collector = MetricsCollector()
    return _metrics_collector


def reset_metrics():
    """Reset global metrics collector (for testing)."""
    global _metrics_collector
    with _metrics_lock:
        if _metrics_collector is not None:
            _metrics_collector.reset_all()
