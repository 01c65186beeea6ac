"""
Service layer decorators for common functionality.

This module provides a decorator that adds structured logging around service
methods while letting every error propagate to the caller unchanged.
"""

import functools
import inspect
from typing import Any, Callable, Dict, ParamSpec, TypeVar

import structlog

from riftstats.core.riot_api.errors import RiotAPIError

logger = structlog.get_logger(__name__)

# Type variables for generic decorator typing
P = ParamSpec("P")
R = TypeVar("R")

_MAX_CONTEXT_LENGTH = 100


def _call_context(
    func: Callable[..., Any],
    service_name: str,
    include_context: bool,
    args: tuple,
    kwargs: dict,
) -> Dict[str, Any]:
    context: Dict[str, Any] = {
        "service": service_name,
        "operation": func.__name__,
    }
    if not include_context:
        return context

    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()
    for name, value in bound_args.arguments.items():
        # Raw documents are large, keep only identifiers
        if name in ("self", "raw"):
            continue
        text = str(value) if value is not None else None
        if text is not None and len(text) > _MAX_CONTEXT_LENGTH:
            text = text[:_MAX_CONTEXT_LENGTH] + "..."
        context[name] = text
    return context


def service_error_handler(
    service_name: str,
    include_context: bool = True,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator for logging service method calls and failures.

    Riot API errors are logged as warnings, anything else as errors; both
    are re-raised unchanged so callers can translate them.

    :param service_name: Name of the service (e.g., "MatchService")
    :param include_context: Whether to include method parameters in log context
    :returns: Decorated function with error logging

    :example:
        @service_error_handler("MatchService")
        async def get_full_match_detail(self, match_id: str, region) -> MatchDetail:
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            context = _call_context(func, service_name, include_context, args, kwargs)
            logger.debug("Service method called", **context)

            try:
                result = await func(*args, **kwargs)  # type: ignore[misc]
            except RiotAPIError as e:
                logger.warning(
                    "Riot API error in service operation - propagating to caller",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    status_code=e.status_code,
                    **context,
                )
                raise
            except Exception as e:
                logger.error(
                    "Unexpected error in service operation",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    exc_info=True,
                    **context,
                )
                raise

            logger.debug("Service method completed successfully", **context)
            return result

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            context = _call_context(func, service_name, include_context, args, kwargs)
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "Error in synchronous service operation",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    **context,
                )
                raise

        # Return appropriate wrapper based on whether function is async
        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore[return-value]
        return sync_wrapper

    return decorator
