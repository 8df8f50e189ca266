"""Tests for the paperwork web API adapter."""

from datetime import date, timedelta
from unittest.mock import MagicMock, patch

import pytest
import requests

from paperdesk.adapters.paperwork_api import PaperworkAPIAdapter, submitted_record
from paperdesk.config import Config, Tokens
from paperdesk.core.paperwork import NewPaperwork, PaperSource, PaperType, Priority
from paperdesk.errors import AuthenticationError, InvalidPaperworkError, PaperworkAPIError


def make_response(status_code=200, body=None, cookies=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.json.return_value = body if body is not None else {}
    resp.cookies = cookies or {}
    return resp


@pytest.fixture
def config():
    return Config(api_base_url="https://paper.example.com")


@pytest.fixture
def tokens():
    tokens = Tokens(auth_token="signed.jwt.token")
    tokens.save = MagicMock()
    tokens.clear = MagicMock()
    return tokens


@pytest.fixture
def adapter(config, tokens):
    with patch("paperdesk.adapters.paperwork_api.requests.Session") as session_cls:
        session_cls.return_value = MagicMock()
        yield PaperworkAPIAdapter(config, tokens)


@pytest.fixture
def new_paperwork():
    return NewPaperwork(
        title="Budget approval",
        description="Q3 budget",
        paper_type=PaperType.PHYSICAL,
        paper_source=PaperSource.EXTERNAL,
        priority=Priority.HIGH,
        target_completion_date=date.today() + timedelta(days=5),
    )


class TestFetchAll:
    def test_maps_items(self, adapter):
        adapter._session.get.return_value = make_response(
            body={
                "code": "SUCCESS",
                "paperwork": [
                    {
                        "paperwork_id": "PW-1",
                        "paper_title": "Budget",
                        "paper_description": "",
                        "processing_priority": "High",
                        "target_completion_date": "13-06-2024",
                    },
                    {
                        "paperwork_id": "PW-2",
                        "paper_title": "Audit",
                        "processing_priority": "Low",
                        "target_completion_date": "14-06-2024",
                        "actual_completion_date": "undefined",
                    },
                ],
            }
        )

        paperwork = adapter.fetch_all()

        adapter._session.get.assert_called_once_with(
            "https://paper.example.com/api/paperwork/retrieval", timeout=10.0
        )
        adapter._session.cookies.set.assert_called_with("authToken", "signed.jwt.token")
        assert [p.id for p in paperwork] == ["PW-1", "PW-2"]
        assert paperwork[0].priority is Priority.HIGH
        assert paperwork[1].actual_completion_date is None

    def test_skips_invalid_items(self, adapter, caplog):
        adapter._session.get.return_value = make_response(
            body={"paperwork": [{"paper_title": "no id"}, {"paperwork_id": "PW-3"}]}
        )
        paperwork = adapter.fetch_all()
        assert [p.id for p in paperwork] == ["PW-3"]
        assert "Skipping invalid paperwork" in caplog.text

    def test_missing_paperwork_key_is_empty(self, adapter):
        adapter._session.get.return_value = make_response(body={"code": "SUCCESS"})
        assert adapter.fetch_all() == []

    def test_unauthorized(self, adapter):
        adapter._session.get.return_value = make_response(401, {"message": "Authentication required"})
        with pytest.raises(AuthenticationError, match="Authentication required"):
            adapter.fetch_all()

    def test_server_error(self, adapter):
        adapter._session.get.return_value = make_response(500, {"message": "db down"})
        with pytest.raises(PaperworkAPIError, match="db down") as exc_info:
            adapter.fetch_all()
        assert exc_info.value.status_code == 500

    def test_non_json_body(self, adapter):
        resp = make_response()
        resp.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        adapter._session.get.return_value = resp
        with pytest.raises(PaperworkAPIError, match="not valid JSON"):
            adapter.fetch_all()

    def test_non_object_body(self, adapter):
        adapter._session.get.return_value = make_response(body=["PW-001"])
        with pytest.raises(PaperworkAPIError, match="unexpected response body"):
            adapter.fetch_all()

    def test_requires_token(self, config):
        adapter = PaperworkAPIAdapter(config, Tokens())
        with pytest.raises(AuthenticationError, match="paperdesk login"):
            adapter.fetch_all()


class TestLogin:
    def test_stores_cookie_token(self, adapter, tokens):
        adapter._session.post.return_value = make_response(
            body={"code": "AUTHENTICATION_SUCCESS", "user": {"full_name": "Jane Doe"}},
            cookies={"authToken": "new.jwt.token"},
        )

        user = adapter.login("jane.doe", "correct-horse")

        assert user == {"full_name": "Jane Doe"}
        assert tokens.auth_token == "new.jwt.token"
        tokens.save.assert_called_once()
        args, kwargs = adapter._session.post.call_args
        assert args[0] == "https://paper.example.com/api/authentication/login"
        assert kwargs["json"] == {"username": "jane.doe", "password": "correct-horse"}

    def test_rejected_credentials(self, adapter):
        adapter._session.post.return_value = make_response(
            401, {"code": "INVALID_CREDENTIALS", "message": "Authentication failed."}
        )
        with pytest.raises(AuthenticationError, match="Authentication failed"):
            adapter.login("jane.doe", "wrong-password")

    @pytest.mark.parametrize("username,password", [("short", "long-enough"), ("long-enough", "short")])
    def test_short_credentials_rejected_locally(self, adapter, username, password):
        with pytest.raises(AuthenticationError, match="at least 8"):
            adapter.login(username, password)
        adapter._session.post.assert_not_called()

    def test_missing_cookie(self, adapter):
        adapter._session.post.return_value = make_response(body={"code": "AUTHENTICATION_SUCCESS"})
        with pytest.raises(AuthenticationError, match="no session cookie"):
            adapter.login("jane.doe", "correct-horse")


class TestLogout:
    def test_clears_token(self, adapter, tokens):
        adapter.logout()
        adapter._session.post.assert_called_once()
        tokens.clear.assert_called_once()

    def test_clears_token_even_if_request_fails(self, adapter, tokens):
        adapter._session.post.side_effect = requests.ConnectionError("offline")
        adapter.logout()
        tokens.clear.assert_called_once()


class TestSubmit:
    def test_posts_payload(self, adapter, new_paperwork):
        adapter._session.post.return_value = make_response(
            201, {"code": "SUCCESS", "paperwork_id": "PW-77"}
        )

        response = adapter.submit(new_paperwork)

        assert response["paperwork_id"] == "PW-77"
        args, kwargs = adapter._session.post.call_args
        assert args[0] == "https://paper.example.com/api/paperwork/submission"
        assert kwargs["json"]["target_completion_date"] == new_paperwork.target_completion_date.isoformat()
        assert kwargs["json"]["processing_priority"] == "High"

    def test_validation_error_before_request(self, adapter, new_paperwork):
        past = NewPaperwork(
            title=new_paperwork.title,
            description=new_paperwork.description,
            paper_type=new_paperwork.paper_type,
            paper_source=new_paperwork.paper_source,
            priority=new_paperwork.priority,
            target_completion_date=date.today() - timedelta(days=1),
        )
        with pytest.raises(InvalidPaperworkError):
            adapter.submit(past)
        adapter._session.post.assert_not_called()

    def test_non_json_body(self, adapter, new_paperwork):
        resp = make_response(201)
        resp.json.side_effect = ValueError("Expecting value")
        adapter._session.post.return_value = resp
        with pytest.raises(PaperworkAPIError, match="Submission"):
            adapter.submit(new_paperwork)

    def test_server_validation_error(self, adapter, new_paperwork):
        adapter._session.post.return_value = make_response(
            400, {"code": "VALIDATION_ERROR", "message": "Paper title and description are required"}
        )
        with pytest.raises(PaperworkAPIError, match="required"):
            adapter.submit(new_paperwork)


def test_submitted_record_formats_due_date(new_paperwork):
    record = submitted_record(new_paperwork, {"paperwork_id": 77})
    assert record.id == "77"
    assert record.title == "Budget approval"
    assert record.target_completion_date == new_paperwork.target_completion_date.strftime("%d-%m-%Y")
    assert record.actual_completion_date is None
