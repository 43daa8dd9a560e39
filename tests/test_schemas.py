"""Tests for request/response value types."""

import pytest
from pydantic import ValidationError

from webagent.schemas import Credentials, RequestSpec, ResponseResult

FULL_CREDENTIALS = {
    "Location": "device.local:80",
    "Realm": "poer",
    "User": "user",
    "Password": "password",
}


class TestRequestSpec:
    def test_defaults(self):
        spec = RequestSpec(url="http://example.com/somedata.xml")
        assert spec.method == "GET"
        assert spec.data is None
        assert spec.headers is None
        assert spec.credentials is None
        assert spec.no_log is False

    def test_accepts_capitalized_keys(self):
        spec = RequestSpec.model_validate(
            {
                "URL": "http://example.com/someurl",
                "Type": "POST",
                "Data": [("Attribute", "Value")],
                "Header": {"Content_Type": "text/json"},
                "Credentials": FULL_CREDENTIALS,
                "Proxy": "http://proxy:3128",
                "Return": "REQUEST",
                "NoLog": 1,
            }
        )
        assert spec.method == "POST"
        assert spec.data == [("Attribute", "Value")]
        assert spec.headers == {"Content_Type": "text/json"}
        assert spec.credentials == Credentials(**FULL_CREDENTIALS)
        assert spec.proxy == "http://proxy:3128"
        assert spec.return_mode == "REQUEST"
        assert spec.no_log is True

    def test_url_required(self):
        with pytest.raises(ValidationError):
            RequestSpec.model_validate({"Type": "GET"})

    @pytest.mark.parametrize("missing", ["Location", "Realm", "User", "Password"])
    def test_incomplete_credentials_dropped(self, missing):
        creds = {k: v for k, v in FULL_CREDENTIALS.items() if k != missing}
        spec = RequestSpec(url="http://example.com", credentials=creds)
        assert spec.credentials is None

    def test_empty_string_credentials_count_as_set(self):
        creds = dict(FULL_CREDENTIALS, Password="")
        spec = RequestSpec(url="http://example.com", credentials=creds)
        assert spec.credentials is not None
        assert spec.credentials.password == ""

    def test_numeric_credentials_coerced_to_text(self):
        creds = dict(FULL_CREDENTIALS, Password=1234, Location=8080)
        spec = RequestSpec(url="http://example.com", credentials=creds)
        assert spec.credentials.password == "1234"
        assert spec.credentials.location == "8080"


class TestResponseResult:
    def test_success(self):
        result = ResponseResult(status="200 OK", content="hello")
        assert result.ok
        assert result.as_dict() == {"Status": "200 OK", "Content": "hello"}

    def test_failure_has_no_content_key(self):
        result = ResponseResult(status="404 Not Found")
        assert not result.ok
        assert result.as_dict() == {"Status": "404 Not Found"}

    def test_sentinel_stays_integer(self):
        result = ResponseResult(status=0)
        assert result.status == 0
        assert isinstance(result.status, int)
        assert not result.ok
        assert result.as_dict() == {"Status": 0}

