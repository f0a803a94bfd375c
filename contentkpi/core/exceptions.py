"""contentkpi exceptions."""


class ContentKPIError(Exception):
    """Base exception for all contentkpi errors."""


class ConfigurationError(ContentKPIError):
    """Invalid engine or host configuration."""


class WeightConfigurationError(ConfigurationError, ValueError):
    """Page/domain weight split outside the [0, 1] range."""

    def __init__(self, page_weight: float):
        self.page_weight = page_weight
        super().__init__(f"Page weight must be between 0.0 and 1.0, got {page_weight}")


class InputError(ContentKPIError):
    """Analysis payload could not be read or parsed."""

    def __init__(self, message: str, file_path: str | None = None):
        self.message = message
        self.file_path = file_path

        if file_path:
            full_message = f"File: {file_path}: {message}"
        else:
            full_message = message

        super().__init__(full_message)
