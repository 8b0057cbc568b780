"""
Exception classes for BCE Auth Python SDK
"""

from typing import Optional, Dict, Any


class BceSDKError(Exception):
    """Base exception for all BCE Auth SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(BceSDKError):
    """Exception raised when signing configuration cannot be loaded"""
    pass
