"""
Utilities Package for Model Resolver
"""
from .logging import (
    setup_logging,
    get_logger,
    clear_context,
    log_context,
    log_operation,
)

from .errors import (
    ErrorSeverity,
    ErrorCategory,
    ErrorContext,
    ResolverError,
    SchemaModelError,
    ConfigurationError,
)

from .metrics import (
    MetricsCollector,
    get_metrics_collector,
    counter,
    gauge,
    timer,
    time_operation,
    ResolverMetrics,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "clear_context",
    "log_context",
    "log_operation",
    # Errors
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorContext",
    "ResolverError",
    "SchemaModelError",
    "ConfigurationError",
    # Metrics
    "MetricsCollector",
    "get_metrics_collector",
    "counter",
    "gauge",
    "timer",
    "time_operation",
    "ResolverMetrics",
]
