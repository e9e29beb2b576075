"""
Base classes and utilities for the service layer.

Re-exports the shared ServiceResult/ResultError types and provides the
BaseService class all marketplace services extend.
"""

import logging
import time
from functools import wraps
from typing import Callable, Optional

from utils.service_base import (
    ErrorKind,
    ResultError,
    ServiceResult,
    service_err,
    service_ok,
)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name (or an injected logger)
    - Performance timing decorator
    - Exception to ServiceResult conversion

    Usage:
        class CategoryService(BaseService):
            def __init__(self, context, logger=None):
                super().__init__(logger)
                self.context = context

            @BaseService.log_performance
            def list_categories(self, language):
                ...
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize base service with logger."""
        self.logger = logger or logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Logs start, completion time, the failure kind of a failed
        ServiceResult, and any exception (re-raised).

        Example:
            @BaseService.log_performance
            def expensive_operation(self):
                ...
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.perf_counter()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"[{method_name}] | START")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.perf_counter() - start_time) * 1000

                if isinstance(result, ServiceResult) and not result.ok:
                    self.logger.warning(
                        f"[{method_name}] | FAILED with {result.error.kind.value} "
                        f"'{result.error_detail}' in {elapsed_time:.2f}ms"
                    )
                else:
                    self.logger.info(f"[{method_name}] | COMPLETED in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.perf_counter() - start_time) * 1000
                self.logger.error(
                    f"[{method_name}] | EXCEPTION after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper

    def wrap_exception(self, func: Callable, operation: str, message: Optional[str] = None) -> ServiceResult:
        """
        Execute a function and wrap any exception in an InternalServerError.

        Args:
            func: Function to execute
            operation: Operation name for the log line
            message: Client-facing message (defaults to the exception text)

        Example:
            result = self.wrap_exception(
                lambda: self.context.products.find_one({"_id": oid}),
                operation="get_product",
            )
        """
        try:
            return service_ok(func())
        except Exception as e:
            self.logger.error(f"[{operation}] | {type(e).__name__}: {str(e)}", exc_info=True)
            return service_err(ResultError.internal_server_error(message or str(e)))


__all__ = [
    "BaseService",
    "ErrorKind",
    "ResultError",
    "ServiceResult",
    "service_ok",
    "service_err",
]
