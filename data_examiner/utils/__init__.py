"""
Utils package initialization.
"""
from .error_handling import handle_error, error_status, error_message, validate_question
from .uploads import ClientDisconnected, staged_upload, run_until_disconnected

__all__ = [
    'handle_error',
    'error_status',
    'error_message',
    'validate_question',
    'ClientDisconnected',
    'staged_upload',
    'run_until_disconnected'
]
