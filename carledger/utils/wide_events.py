"""
Wide Events (Canonical Log Lines) - Structured Logging Utility

- Emit ONE comprehensive JSON event per report computation
- Include high-cardinality data (request ids, car ids)
- Capture full context: input sizes, per-fuel-type outcome, errors, latencies
- Use tail sampling: keep all errors/slow requests, sample successful fast requests

Instead of logging what the calculator is doing, log what happened to this request.
"""

import random
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import structlog

from ..exceptions import CarLedgerError
from .error_codes import ErrorCode, StructuredError

# Configure structlog for JSON output
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

SERVICE_NAME = "carledger"


class WideEvent:
    """
    Accumulates context throughout an operation, then emits one comprehensive log event.

    Usage:
        event = WideEvent("consumption_report")
        event.add_context(data_points=420, car_configs=3)

        with event.timer("calculate"):
            result = calculate_consumption(points, configs)

        event.add_business_metric("fuel_types", 2)
        event.emit()
    """

    def __init__(self, operation: str, request_id: Optional[str] = None):
        """
        Initialize a wide event for a specific operation.

        Args:
            operation: Name of the operation (e.g., "consumption_report")
            request_id: Unique ID for this specific request (auto-generated if not provided)
        """
        self.operation = operation
        self.context: Dict[str, Any] = {
            "operation": operation,
            "service": SERVICE_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "start_time": time.time(),
            "request_id": request_id or str(uuid.uuid4()),
        }

        self.logger = structlog.get_logger()

    def add_context(self, **kwargs) -> "WideEvent":
        """Add high-cardinality context fields (request_id, car_ids, etc.)."""
        self.context.update(kwargs)
        return self

    def add_business_metric(self, key: str, value: Any) -> "WideEvent":
        """Add business metrics (fuel types reported, km measured, etc.)."""
        self.context.setdefault("business_metrics", {})[key] = value
        return self

    def add_technical_metric(self, key: str, value: Any) -> "WideEvent":
        """Add technical metrics (group counts, payload size, etc.)."""
        self.context.setdefault("technical_metrics", {})[key] = value
        return self

    def add_error(self, error: Exception, **kwargs) -> "WideEvent":
        """Add error details to the event."""
        if isinstance(error, StructuredError):
            self.context["error"] = error.to_dict()
        else:
            self.context["error"] = {
                "type": type(error).__name__,
                "message": str(error),
                "details": kwargs,
            }
        self.context["success"] = False
        return self

    def mark_success(self) -> "WideEvent":
        self.context["success"] = True
        return self

    def mark_failure(self, reason: str) -> "WideEvent":
        self.context["success"] = False
        self.context["failure_reason"] = reason
        return self

    @contextmanager
    def timer(self, operation_name: str):
        """
        Time a stage of the operation.

        Outputs: {"performance_breakdown": {"calculate_ms": 4.2}}
        """
        start = time.time()
        try:
            yield
        finally:
            duration_ms = (time.time() - start) * 1000
            self.context.setdefault("performance_breakdown", {})[f"{operation_name}_ms"] = round(duration_ms, 2)

    def set_duration(self) -> "WideEvent":
        """Calculate and set the duration of the operation."""
        if "start_time" in self.context:
            duration_ms = (time.time() - self.context["start_time"]) * 1000
            self.context["duration_ms"] = round(duration_ms, 2)
            del self.context["start_time"]
        return self

    def should_emit(self, sample_rate: float = 0.05, slow_threshold_ms: float = 1000) -> bool:
        """
        Tail sampling:
        - Always emit errors
        - Always emit slow requests (>slow_threshold_ms)
        - Always emit reports that discarded data or found outliers
        - Sample successful fast requests at sample_rate (default 5%)
        """
        if not self.context.get("success", True):
            return True

        if self.context.get("duration_ms", 0) > slow_threshold_ms:
            return True

        business_metrics = self.context.get("business_metrics", {})
        if business_metrics.get("excluded_segments") or business_metrics.get("low_confidence_fuel_types"):
            return True

        return random.random() < sample_rate

    def emit(self, level: str = "info", force: bool = False) -> None:
        """
        Emit the wide event as a single comprehensive log line.

        Args:
            level: Log level (info, warning, error)
            force: Force emission even if sampling says no
        """
        self.set_duration()

        if not force and not self.should_emit():
            return

        log_method = getattr(self.logger, level, self.logger.info)
        log_method(f"{self.operation}_complete", **self.context)


@contextmanager
def track_operation(
    operation: str,
    request_id: Optional[str] = None,
    error_code_for: Optional[Callable[[Exception], ErrorCode]] = None,
    sample_success: bool = False,
    **initial_context
):
    """
    Track an operation with a wide event that emits on exit.

    Failures always emit: CarLedgerError subclasses at warning level, anything
    else at error level. When error_code_for is given the failure is recorded
    as a StructuredError. Successes bypass tail sampling unless sample_success
    is set.

    Usage:
        with track_operation("consumption_report", data_points=42) as event:
            event.add_business_metric("fuel_types", 1)
    """
    event = WideEvent(operation, request_id=request_id)
    event.add_context(**initial_context)

    try:
        yield event
    except Exception as e:
        if error_code_for is not None:
            event.add_error(StructuredError(
                error_code_for(e),
                getattr(e, "message", str(e)),
                exception=e,
                **getattr(e, "details", {})
            ))
        else:
            event.add_error(e)
        event.mark_failure(str(e))
        event.emit(level="warning" if isinstance(e, CarLedgerError) else "error", force=True)
        raise

    event.mark_success()
    event.emit(force=not sample_success)
