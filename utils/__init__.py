# Utils package for Somon backend

from .logging_utils import mask_url, mask_value
from .service_base import ErrorKind, ResultError, ServiceResult, error_from_status, status_for

__all__ = [
    "ErrorKind",
    "ResultError",
    "ServiceResult",
    "error_from_status",
    "status_for",
    "mask_url",
    "mask_value",
]
