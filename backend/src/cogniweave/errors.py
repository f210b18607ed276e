from dataclasses import dataclass


class CogniWeaveError(Exception):
    """Base for errors rendered as ``{"success": false, "error": ...}`` responses."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"success": False, "error": self.message}


class MissingFieldError(CogniWeaveError):
    status_code = 400

    def __init__(self, field: str, plural: bool = False):
        verb = "are" if plural else "is"
        super().__init__(f"Error: '{field}' {verb} required in the request body.")
        self.field = field


class ProfileNotFoundError(CogniWeaveError):
    status_code = 404

    def __init__(self, user_id: str):
        super().__init__(f"Error: No profile found for userId: {user_id}.")
        self.user_id = user_id


class TransformationFailedError(CogniWeaveError):
    status_code = 500

    def __init__(self, message: str, original_text: str | None):
        super().__init__(message)
        self.original_text = original_text

    def to_body(self) -> dict:
        return {**super().to_body(), "originalText": self.original_text}


class ModelGatewayError(Exception):
    """The hosted model could not be reached or did not return a usable response."""


@dataclass(frozen=True)
class SynthesisError:
    """Why the model step of profile synthesis produced no usable profile."""

    message: str
