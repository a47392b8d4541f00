from .logging_utils import configure_logger
from .get_ssm import (
    get_values_from_ssm,
    get_environment_prefix,
    get_config,
)
from .error_utils import log_exception, error_message
from .s3_utils import iter_s3_objects

__all__ = [
    "get_values_from_ssm",
    "get_environment_prefix",
    "get_config",
    "configure_logger",
    "log_exception",
    "error_message",
    "iter_s3_objects",
]
