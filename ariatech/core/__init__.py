"""
AriaTech Core
=============

Core utilities shared by the store modules.
"""

from .config import Config
from .database import StoreResult, SupabaseClient
from .errors import (
    AriaTechError, ConfigurationError, NotFound, StorageFailure,
    UploadRejected, ValidationError,
)
from .logging_service import LoggingService, logger

__all__ = [
    'Config', 'StoreResult', 'SupabaseClient', 'LoggingService', 'logger',
    'AriaTechError', 'ConfigurationError', 'NotFound', 'StorageFailure',
    'UploadRejected', 'ValidationError',
]
