# ruff: noqa: D107
"""External provider exceptions (language model and speech synthesis)."""

from typing import Any

from .base import BaseAppException


class ProviderError(BaseAppException):
    """Base exception for hosted API failures."""

    def __init__(
        self,
        message: str = "External provider error occurred",
        error_code: str = "PROVIDER_ERROR",
        details: dict[str, Any] | None = None,
        status_code: int = 500,
    ):
        super().__init__(message=message, status_code=status_code, error_code=error_code, details=details)


class ResponseGenerationError(ProviderError):
    """Exception raised when the chat-completion API fails."""

    def __init__(
        self,
        message: str = "Failed to generate mentor response",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "RESPONSE_GENERATION_FAILED", details)


class SpeechGenerationError(ProviderError):
    """Exception raised when the text-to-speech API fails."""

    def __init__(
        self,
        message: str = "Failed to generate speech",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "SPEECH_GENERATION_FAILED", details)


class ProviderTimeoutError(ProviderError):
    """Exception raised when a provider request times out."""

    def __init__(
        self,
        message: str = "Provider request timed out",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "PROVIDER_TIMEOUT", details)


class ProviderConfigurationError(ProviderError):
    """Exception raised when a provider is not configured."""

    def __init__(
        self,
        message: str = "Provider is not properly configured",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "PROVIDER_CONFIGURATION_ERROR", details, status_code=503)
