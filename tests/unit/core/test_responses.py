"""Unit tests for the response envelope builders."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from modules.core.responses import (
    ApiResponse,
    error,
    paginated,
    success,
    validation_error,
)

pytestmark = pytest.mark.unit


class _Item(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    unit_price: Decimal
    label: str


# ===========================================================================
# success
# ===========================================================================


class TestSuccess:
    def test_defaults(self):
        response = success({"a": 1})
        assert response.status_code == 200
        assert response.data == {"success": True, "message": "Success", "data": {"a": 1}}

    def test_custom_status_and_headers(self):
        response = success(None, "Created", status=201, headers={"Location": "/x/1"})
        assert response.status_code == 201
        assert response["Location"] == "/x/1"
        assert response.data["data"] is None

    def test_dtos_rendered_camel_case(self):
        response = success([_Item(unit_price=Decimal("2.50"), label="a")])
        assert response.data["data"] == [{"unitPrice": "2.50", "label": "a"}]

    def test_metadata_included_when_set(self):
        response = success([], metadata={"source": "cache"})
        assert response.data["metadata"] == {"source": "cache"}


# ===========================================================================
# error / validation_error
# ===========================================================================


class TestError:
    @pytest.mark.parametrize("code", [400, 401, 403, 404, 500])
    def test_known_codes_kept(self, code):
        response = error("boom", code)
        assert response.status_code == code
        assert response.data == {"success": False, "message": "boom", "data": None}

    @pytest.mark.parametrize("code", [409, 418, 502])
    def test_other_codes_become_400(self, code):
        assert error("boom", code).status_code == 400

    def test_default_is_400(self):
        assert error("boom").status_code == 400


class TestValidationError:
    def test_field_map_in_data(self):
        response = validation_error({"name": ["Name is required."]})
        assert response.status_code == 400
        assert response.data == {
            "success": False,
            "message": "Validation failed",
            "data": {"name": ["Name is required."]},
        }

    def test_custom_message(self):
        response = validation_error({}, message="Bad input")
        assert response.data["message"] == "Bad input"
        assert response.data["data"] == {}


# ===========================================================================
# paginated
# ===========================================================================


class TestPaginated:
    def test_middle_page(self):
        response = paginated([1, 2], page_number=2, page_size=2, total_count=5)
        body = response.data
        assert response.status_code == 200
        assert body["data"] == [1, 2]
        assert body["pageNumber"] == 2
        assert body["pageSize"] == 2
        assert body["totalCount"] == 5
        assert body["totalPages"] == 3
        assert body["hasNextPage"] is True
        assert body["hasPreviousPage"] is True

    def test_last_page(self):
        body = paginated([5], page_number=3, page_size=2, total_count=5).data
        assert body["hasNextPage"] is False

    def test_empty_result(self):
        body = paginated([], page_number=1, page_size=10, total_count=0).data
        assert body["totalPages"] == 0
        assert body["hasNextPage"] is False
        assert body["hasPreviousPage"] is False

    @pytest.mark.parametrize("page_number,page_size", [(0, 10), (1, 0)])
    def test_rejects_non_positive_page_args(self, page_number, page_size):
        with pytest.raises(ValueError):
            paginated([], page_number=page_number, page_size=page_size, total_count=0)


class TestApiResponseModel:
    def test_metadata_omitted_when_none(self):
        payload = ApiResponse[int](success=True, message="ok", data=1).to_payload()
        assert "metadata" not in payload
