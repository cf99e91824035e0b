# venue_booking/services/base.py
"""
Base Service Pattern for the venue booking platform.

Provides common functionality for all service classes including:
- Transaction management
- Logging
- Version-token invalidation
- Performance monitoring
"""

import asyncio
from contextlib import asynccontextmanager
from functools import wraps
import logging
import time
from typing import TYPE_CHECKING, Any, AsyncIterator, Callable, Dict, Optional, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import RepositoryException
from ..monitoring.prometheus_metrics import prometheus_metrics

if TYPE_CHECKING:
    from .cache_service import VersionedCache

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

SLOW_OPERATION_SECONDS = 1.0


class BaseService:
    """
    Base class for all service layer components.

    Provides common patterns for:
    - Database session management
    - Cache token bumps
    - Logging
    - Transaction handling
    - Performance monitoring
    """

    # Class-level metrics storage
    _class_metrics: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def __init__(self, db: AsyncSession, cache: Optional["VersionedCache"] = None):
        """
        Initialize base service.

        Args:
            db: Async database session
            cache: Optional VersionedCache instance
        """
        self.db = db
        self.cache = cache
        self.logger = logging.getLogger(self.__class__.__name__)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Unit of work: commit on clean exit, roll back and re-raise otherwise.

        Usage:
            async with self.transaction():
                self.db.add(entity)
        """
        try:
            yield self.db
            await self.db.commit()
            self.logger.debug("Transaction committed successfully")
        except SQLAlchemyError as e:
            self.logger.error(f"Transaction failed: {str(e)}")
            await self.db.rollback()
            raise RepositoryException(f"Database operation failed: {str(e)}") from e
        except BaseException:
            await self.db.rollback()
            raise

    async def bump_tokens(self, *names: str) -> None:
        """
        Bump cache version tokens. Call only after a successful commit.

        The cache swallows its own failures, so this never raises for
        backend problems.
        """
        if not self.cache:
            return
        for name in names:
            version = await self.cache.bump_token(name)
            self.logger.debug(f"Bumped cache token {name} to {version}")

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Decorator to measure operation performance.

        Usage:
            @BaseService.measure_operation("create_booking")
            async def create_booking(self, data):
                ...

        Args:
            operation_name: Name of the operation for metrics
        """

        def decorator(func: F) -> F:
            func._operation_name = operation_name  # type: ignore[attr-defined]
            func._is_measured = True  # type: ignore[attr-defined]

            if not asyncio.iscoroutinefunction(func):

                @wraps(func)
                def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                    start_time = time.perf_counter()
                    success = False
                    error_type: Optional[str] = None
                    try:
                        result = func(self, *args, **kwargs)
                        success = True
                        return result
                    except Exception as exc:
                        error_type = type(exc).__name__
                        raise
                    finally:
                        _finish_measurement(self, operation_name, start_time, success, error_type)

                return cast(F, wrapper)

            @wraps(func)
            async def async_wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                start_time = time.perf_counter()
                success = False
                error_type: Optional[str] = None
                try:
                    result = await func(self, *args, **kwargs)
                    success = True
                    return result
                except Exception as exc:
                    error_type = type(exc).__name__
                    raise
                finally:
                    _finish_measurement(self, operation_name, start_time, success, error_type)

            return cast(F, async_wrapper)

        return decorator

    def log_operation(self, operation: str, **context: Any) -> None:
        """
        Log an operation with context.

        Args:
            operation: Operation name
            **context: Additional context to log
        """
        self.logger.info(f"Operation: {operation}", extra={"operation": operation, **context})

    def _record_metric(self, operation: str, elapsed: float, success: bool) -> None:
        class_name = self.__class__.__name__
        metrics = BaseService._class_metrics.setdefault(class_name, {})

        if operation not in metrics:
            metrics[operation] = {
                "count": 0,
                "total_time": 0.0,
                "success_count": 0,
                "failure_count": 0,
                "min_time": float("inf"),
                "max_time": 0.0,
            }

        metric_data = metrics[operation]
        metric_data["count"] += 1
        metric_data["total_time"] += elapsed
        metric_data["min_time"] = min(metric_data["min_time"], elapsed)
        metric_data["max_time"] = max(metric_data["max_time"], elapsed)

        if success:
            metric_data["success_count"] += 1
        else:
            metric_data["failure_count"] += 1

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get performance metrics for this service.

        Returns:
            Dictionary with metrics for each measured operation
        """
        metrics = BaseService._class_metrics.get(self.__class__.__name__, {})

        result = {}
        for operation, data in metrics.items():
            count = data["count"]
            if count == 0:
                continue
            result[operation] = {
                "count": count,
                "avg_time": data["total_time"] / count,
                "min_time": data["min_time"],
                "max_time": data["max_time"],
                "total_time": data["total_time"],
                "success_rate": data["success_count"] / count,
                "success_count": data["success_count"],
                "failure_count": data["failure_count"],
            }
        return result

    def reset_metrics(self) -> None:
        """Reset all metrics for this service."""
        class_name = self.__class__.__name__
        if class_name in BaseService._class_metrics:
            BaseService._class_metrics[class_name].clear()
        self.logger.info(f"Metrics reset for {class_name}")


def _finish_measurement(
    service: Any,
    operation_name: str,
    start_time: float,
    success: bool,
    error_type: Optional[str] = None,
) -> None:
    elapsed = time.perf_counter() - start_time

    if hasattr(service, "_record_metric"):
        service._record_metric(operation_name, elapsed, success)

    prometheus_metrics.record_service_operation(
        service.__class__.__name__,
        operation_name,
        elapsed,
        status="success" if success else "error",
        error_type=error_type,
    )

    if elapsed > SLOW_OPERATION_SECONDS and hasattr(service, "logger"):
        service.logger.warning(f"Slow operation detected: {operation_name} took {elapsed:.2f}s")
