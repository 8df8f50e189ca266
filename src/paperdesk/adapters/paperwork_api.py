"""Paperwork web API adapter - HTTP client for retrieval and submission."""

import logging

import requests

from paperdesk.config import Config, Tokens, load_config
from paperdesk.core.dates import format_date
from paperdesk.core.paperwork import NewPaperwork, Paperwork
from paperdesk.errors import AuthenticationError, InvalidPaperworkError, PaperworkAPIError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/authentication/login"
LOGOUT_PATH = "/api/authentication/logout"
RETRIEVAL_PATH = "/api/paperwork/retrieval"
SUBMISSION_PATH = "/api/paperwork/submission"
AUTH_COOKIE = "authToken"
MIN_CREDENTIAL_LENGTH = 8


def _error_message(resp: requests.Response, default: str) -> str:
    """Pull the server's message out of an error response."""
    try:
        body = resp.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return default


def _json_body(resp: requests.Response, what: str) -> dict:
    """Decode a successful response body, which must be a JSON object."""
    try:
        body = resp.json()
    except ValueError as e:
        raise PaperworkAPIError(f"{what}: response was not valid JSON", resp.status_code) from e
    if not isinstance(body, dict):
        raise PaperworkAPIError(f"{what}: unexpected response body", resp.status_code)
    return body


class PaperworkAPIAdapter:
    """
    Paperwork web API adapter.

    Implements PaperworkRepository protocol. Handles the session cookie and
    API calls. No business logic - just I/O and boundary validation.
    """

    def __init__(self, config: Config | None = None, tokens: Tokens | None = None):
        self.config = config or load_config()
        self.tokens = tokens or Tokens.load()
        self._session = requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.config.api_base_url.rstrip('/')}{path}"

    def _ensure_session(self) -> None:
        """Attach the stored auth cookie, or fail if there is none."""
        if not self.tokens.auth_token:
            raise AuthenticationError("Not signed in. Run 'paperdesk login' first.")
        self._session.cookies.set(AUTH_COOKIE, self.tokens.auth_token)

    def login(self, username: str, password: str) -> dict:
        """Sign in and store the session token. Returns the user profile."""
        if len(username) < MIN_CREDENTIAL_LENGTH:
            raise AuthenticationError(f"Username must be at least {MIN_CREDENTIAL_LENGTH} characters.")
        if len(password) < MIN_CREDENTIAL_LENGTH:
            raise AuthenticationError(f"Password must be at least {MIN_CREDENTIAL_LENGTH} characters.")

        resp = self._session.post(
            self._url(LOGIN_PATH),
            json={"username": username, "password": password},
            timeout=self.config.request_timeout,
        )
        if resp.status_code != 200:
            raise AuthenticationError(_error_message(resp, "Authentication failed"))

        token = resp.cookies.get(AUTH_COOKIE)
        if not token:
            raise AuthenticationError("Login succeeded but no session cookie was returned")

        self.tokens.auth_token = token
        self.tokens.save()
        logger.info(f"Signed in as {username}")
        return _json_body(resp, "Login").get("user") or {}

    def logout(self) -> None:
        """Sign out on the server (best effort) and forget the local token."""
        if self.tokens.auth_token:
            self._session.cookies.set(AUTH_COOKIE, self.tokens.auth_token)
            try:
                self._session.post(self._url(LOGOUT_PATH), timeout=self.config.request_timeout)
            except requests.RequestException as e:
                logger.warning(f"Logout request failed: {e}")
        self.tokens.clear()

    def fetch_all_raw(self) -> list[dict]:
        """Fetch the raw paperwork items from the retrieval endpoint."""
        self._ensure_session()
        resp = self._session.get(self._url(RETRIEVAL_PATH), timeout=self.config.request_timeout)

        if resp.status_code == 401:
            raise AuthenticationError(_error_message(resp, "Authentication required"))
        if not resp.ok:
            raise PaperworkAPIError(
                _error_message(resp, "Failed to retrieve paperwork"), resp.status_code
            )

        items = _json_body(resp, "Retrieval").get("paperwork") or []
        if not isinstance(items, list):
            logger.warning(f"Retrieval returned non-list paperwork: {type(items).__name__}")
            return []
        return items

    def fetch_all(self) -> list[Paperwork]:
        """Fetch all paperwork, dropping items that fail validation."""
        paperwork = []
        for item in self.fetch_all_raw():
            try:
                paperwork.append(Paperwork.from_api(item))
            except InvalidPaperworkError as e:
                logger.warning(f"Skipping invalid paperwork item: {e}")
        return paperwork

    def submit(self, new: NewPaperwork) -> dict:
        """Validate and submit new paperwork. Returns the response body."""
        new.validate()
        self._ensure_session()
        resp = self._session.post(
            self._url(SUBMISSION_PATH),
            json=new.to_api(),
            timeout=self.config.request_timeout,
        )

        if resp.status_code == 401:
            raise AuthenticationError(_error_message(resp, "Authentication required"))
        if not resp.ok:
            raise PaperworkAPIError(
                _error_message(resp, "Failed to submit paperwork"), resp.status_code
            )
        return _json_body(resp, "Submission")


def submitted_record(new: NewPaperwork, response: dict) -> Paperwork:
    """Build the in-memory record to display after a successful submission."""
    return Paperwork(
        id=str(response.get("paperwork_id", "")),
        title=new.title,
        description=new.description,
        priority=new.priority,
        target_completion_date=format_date(new.target_completion_date),
    )
