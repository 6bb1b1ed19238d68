"""Pydantic models for WAPI responses.

Design Principles:
- Graceful degradation: extra="allow" for unknown fields
- Optional validation: used on error paths to build readable messages

Usage:
    error = ErrorResponse.model_validate(response.json())
    message = error.get_full_message()
"""

from pydantic import BaseModel, Field

from ..constants import MAX_ERROR_DETAIL_LENGTH


class ErrorResponse(BaseModel):
    """Error body returned by WAPI.

    Example:
        {
            "Error": "AdmConDataError: None (IBDataConflictError: ...)",
            "code": "Client.Ibap.Data.Conflict",
            "text": "The network 10.0.0.0/24 already exists."
        }
    """

    error: str = Field(..., alias="Error", description="Error class and summary")
    code: str | None = Field(None, description="Dotted WAPI error code")
    text: str | None = Field(None, description="Human readable detail")

    model_config = {"extra": "allow", "populate_by_name": True}

    def get_full_message(self) -> str:
        """Combine text, code and error summary into one message."""
        message = self.text or self.error
        if self.code:
            message += f" (Code: {self.code})"
        if self.text and self.error != self.text:
            detail = self.error
            if len(detail) > MAX_ERROR_DETAIL_LENGTH:
                detail = detail[: MAX_ERROR_DETAIL_LENGTH - 3] + "..."
            message += f" - {detail}"
        return message

    def is_duplicate(self) -> bool:
        """True when the appliance rejected a create because the object exists."""
        return bool(self.code and self.code.endswith("Data.Conflict"))
