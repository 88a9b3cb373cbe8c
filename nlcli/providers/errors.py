"""Failures raised by the AI resolver. The resolver orchestrator treats all of them as a cue to fall back."""


class ResolverError(Exception):
    pass


class NotConfiguredError(ResolverError):
    def __init__(self, env_var: str = "OPENAI_API_KEY"):
        super().__init__(f"OpenAI API key not configured. Please set {env_var} environment variable.")


class NoResponseError(ResolverError):
    def __init__(self):
        super().__init__("No response from OpenAI")


class InvalidJSONError(ResolverError):
    def __init__(self, detail: str = ""):
        msg = "Invalid JSON response from OpenAI"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class InvalidFormatError(ResolverError):
    def __init__(self):
        super().__init__("Invalid response format from OpenAI")


class InvalidStructureError(ResolverError):
    def __init__(self):
        super().__init__("Invalid command structure from OpenAI")


class QuotaExceededError(ResolverError):
    def __init__(self):
        super().__init__("OpenAI API quota exceeded. Please check your billing.")


class InvalidCredentialError(ResolverError):
    def __init__(self, env_var: str = "OPENAI_API_KEY"):
        super().__init__(f"Invalid OpenAI API key. Please check your {env_var} environment variable.")


class ServiceError(ResolverError):
    def __init__(self, message: str):
        super().__init__(f"OpenAI API error: {message}")
