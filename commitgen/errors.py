"""Errors raised while turning a generation request into a commit message.

Each error carries the message and HTTP status code reported to the caller:
- MissingInput: neither a description nor a diff was supplied
- InvalidRequestBody: the request body is not a JSON object of string fields
- MissingCredential: the generation service API key is not configured
- UpstreamAuthFailure: the generation service rejected the API key
- MalformedUpstreamResponse: the reply could not be read as a commit result
- UpstreamFailure: the call failed for any other reason (network, quota, timeout)
"""


class GenerationError(Exception):
    """Base exception for commit message generation errors."""

    status_code = 500
    default_message = "Failed to generate commit message"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingInput(GenerationError):
    status_code = 400
    default_message = "Either changes description or git diff is required"


class MissingCredential(GenerationError):
    status_code = 500
    default_message = (
        "API key not configured. Please set GEMINI_API_KEY in your environment variables."
    )


class UpstreamAuthFailure(GenerationError):
    status_code = 401
    default_message = "Invalid API key. Please check your GEMINI_API_KEY."


class MalformedUpstreamResponse(GenerationError):
    status_code = 500
    default_message = "Could not parse response from AI"


class UpstreamFailure(GenerationError):
    status_code = 500


class InvalidRequestBody(GenerationError):
    status_code = 400
    default_message = "Invalid request body"
