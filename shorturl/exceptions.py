class ShortURLServiceError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shorturl_error'


class ConfigurationError(ShortURLServiceError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingConfigurationError(ConfigurationError):
    """Raised when a required startup parameter is missing."""

    error_code = 'config:missing_configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
