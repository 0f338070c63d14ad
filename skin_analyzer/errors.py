# error types surfaced to the user
# every one of these ends the current submission, nothing is retried


class SkinAnalyzerError(Exception):
    default_message = "An unknown error occurred during analysis."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ReadError(SkinAnalyzerError):
    default_message = "Could not read the selected image file."


class ConfigurationError(SkinAnalyzerError):
    default_message = "API key is not configured. Cannot call Gemini API."


class EmptyResponseError(SkinAnalyzerError):
    default_message = "Received an empty response from the AI."


class InvalidCredentialError(SkinAnalyzerError):
    default_message = "Invalid API Key. Please check your configuration."


class QuotaExceededError(SkinAnalyzerError):
    default_message = "API Quota Exceeded. Please check your Gemini API plan and usage."


class ServiceRequestError(SkinAnalyzerError):
    # keeps the remote message verbatim for diagnostics
    def __init__(self, original_message: str):
        self.original_message = original_message
        super().__init__(f"AI service request failed: {original_message}")


class NoImageSelectedError(SkinAnalyzerError):
    default_message = "Please select an image first."


class SubmissionInProgressError(SkinAnalyzerError):
    default_message = "An analysis is already running. Please wait for it to finish."


class UnsupportedImageError(SkinAnalyzerError):
    default_message = "Unsupported image format. Please upload PNG, JPG or GIF."
