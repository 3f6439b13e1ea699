"""Utils package."""

from .logger import setup_logging, get_logger, log_api_call, log_api_response, print_header

__all__ = [
    'setup_logging',
    'get_logger',
    'log_api_call',
    'log_api_response',
    'print_header'
]
