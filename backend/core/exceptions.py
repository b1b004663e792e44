"""
Domain exceptions.

Each carries the HTTP status the API layer should answer with; the
application-level handler in ``main.py`` turns them into JSON responses.
"""


class CampaignCraftError(Exception):
    """Base class for errors raised by the campaign engine."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedModelError(CampaignCraftError):
    """Requested model identifier is not in the provider registry."""

    status_code = 400

    def __init__(self, model: str):
        super().__init__(f"Unsupported AI model: {model}")
        self.model = model


class AIProviderError(CampaignCraftError):
    """A vendor SDK call failed. The message is tagged with the provider name."""

    status_code = 502

    def __init__(self, provider: str, detail: str):
        super().__init__(f"{provider} API error: {detail}")
        self.provider = provider
        self.detail = detail


class AIResponseParseError(CampaignCraftError):
    """The model answered with text that is not valid JSON."""

    status_code = 502


class ObjectNotFoundError(CampaignCraftError):
    status_code = 404


class StorageError(CampaignCraftError):
    status_code = 500
