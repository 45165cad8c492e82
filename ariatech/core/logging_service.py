"""
Centralized logging service for the AriaTech store.
Provides structured log lines with request context on top of the standard logging module.
"""

import json
import logging
import traceback
from flask import request, has_request_context

_logger = logging.getLogger('ariatech')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def configure(level='INFO'):
        """Attach a console handler to the ``ariatech`` logger once"""
        if not _logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(
                '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
            ))
            _logger.addHandler(handler)
        _logger.setLevel(level)

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (catalog, storage, auth, etc.)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        ip_address, user_agent, request_path = LoggingService._get_request_context()

        if isinstance(details, dict):
            details = json.dumps(details, default=str)

        parts = [f"[{source}] {message}"]
        if request_path:
            parts.append(f"path={request_path} ip={ip_address}")
        if user_id:
            parts.append(f"user={user_id}")
        if details:
            parts.append(f"details={details}")

        log_level = getattr(logging, level.upper(), logging.INFO)
        _logger.getChild(source).log(
            log_level, ' '.join(parts),
            extra={'source': source, 'user_agent': user_agent}
        )

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log admin actions (login, product created, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_storage_failure(source, operation, failure):
        """Log a StorageFailure handed back by the Supabase client"""
        LoggingService.error(source, f"Storage failure during {operation}: {failure.message}", {
            'status': failure.status,
            'details': failure.details,
        })

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events"""
        LoggingService.warning('security', message, details)


# Convenience instance for easy importing
logger = LoggingService()
