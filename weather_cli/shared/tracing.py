"""
Tracing leve - Flat Span Model sobre o logger da aplicação

Usage:
    from weather_cli.shared.tracing import trace_operation

    @trace_operation("provider.fetch_current_weather")
    def fetch(...):
        ...

Cada span emite marcadores [SPAN_START]/[SPAN_END] em DEBUG, com duração e status,
e anexa span_name/trace_id a todos os logs emitidos dentro dele.
"""
import time
import uuid
from contextvars import ContextVar
from functools import wraps
from typing import Any, Callable, List, Optional

from weather_cli.shared.config.logger_config import logger

# trace_id único por invocação do CLI
_trace_id_var: ContextVar[Optional[str]] = ContextVar('trace_id', default=None)

# Pilha de spans aninhados
_span_stack_var: ContextVar[Optional[List[str]]] = ContextVar('span_stack', default=None)


def get_trace_id() -> str:
    """Get current trace_id or generate new one."""
    trace_id = _trace_id_var.get()
    if not trace_id:
        trace_id = str(uuid.uuid4())
        _trace_id_var.set(trace_id)
    return trace_id


def trace_operation(span_name: str) -> Callable:
    """
    Decorator que delimita uma operação como span

    Args:
        span_name: Nome do span (ex: "fetch_coordinator.resolve")
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            trace_id = get_trace_id()

            span_stack = _span_stack_var.get()
            if span_stack is None:
                span_stack = []
                _span_stack_var.set(span_stack)
            span_stack.append(span_name)

            logger.append_keys(span_name=span_name, trace_id=trace_id)
            logger.debug(f"[SPAN_START] {span_name}", span_event="start")

            start = time.perf_counter()
            status = "completed"
            try:
                return func(*args, **kwargs)
            except Exception as e:
                status = "failed"
                logger.debug(f"[SPAN_ERROR] {span_name}", error=str(e), error_type=type(e).__name__)
                raise
            finally:
                duration_ms = (time.perf_counter() - start) * 1000
                logger.debug(
                    f"[SPAN_END] {span_name} ({duration_ms:.2f}ms) [{status}]",
                    span_event="end",
                    span_duration_ms=round(duration_ms, 2),
                    status=status
                )

                span_stack.pop()
                # Restaura o span pai para os logs seguintes
                if span_stack:
                    logger.append_keys(span_name=span_stack[-1])
                else:
                    logger.remove_keys(['span_name'])

        return wrapper
    return decorator
