"""Unit tests for WAPI error bodies."""

from wapi_client.wapi.response_models import ErrorResponse


class TestErrorResponse:
    def test_full_message(self):
        error = ErrorResponse.model_validate(
            {
                "Error": "AdmConDataError: None (IBDataConflictError: IB.Data.Conflict)",
                "code": "Client.Ibap.Data.Conflict",
                "text": "The network 10.0.0.0/24 already exists.",
            }
        )

        assert error.get_full_message() == (
            "The network 10.0.0.0/24 already exists. (Code: Client.Ibap.Data.Conflict)"
            " - AdmConDataError: None (IBDataConflictError: IB.Data.Conflict)"
        )
        assert error.is_duplicate() is True

    def test_error_only(self):
        error = ErrorResponse.model_validate({"Error": "AdmConProtoError: bad"})

        assert error.get_full_message() == "AdmConProtoError: bad"
        assert error.is_duplicate() is False

    def test_long_detail_truncated(self):
        error = ErrorResponse(error="x" * 500, text="short")

        detail = error.get_full_message().split(" - ", 1)[1]
        assert len(detail) == 200
        assert detail.endswith("...")

    def test_extra_fields_allowed(self):
        error = ErrorResponse.model_validate({"Error": "e", "trace": "..."})

        assert error.model_extra == {"trace": "..."}
