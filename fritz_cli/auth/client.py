"""Session client: login handshake and authenticated requests."""

import enum

import requests

from ..config import LOGIN_SID_URL, REQUEST_TIMEOUT, Credentials
from ..exceptions import (
    LoginRejectedError,
    NotLoggedInError,
    TransportError,
)
from ..logging_setup import log
from ..network.client import build_session, endpoint_url
from .password import compute_response
from .session import Session, parse_session_info

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class ClientState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    CHALLENGE_OBTAINED = "challenge_obtained"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class SessionClient:
    """
    Owns the HTTP transport and the router session.

    A client holds a single logical session.  ``login()`` replaces it
    wholesale; every authenticated request reads its sid.  Nothing is
    retried: transport, decode and auth errors propagate to the caller.

    Example:
        >>> creds = Credentials("http://fritz.box", "admin", "secret")
        >>> with SessionClient(creds) as client:
        ...     client.login()
        ...     resp = client.authenticated_request("/data.lua", {"page": "overview"})
    """

    def __init__(
        self,
        credentials: Credentials,
        http: "requests.Session | None" = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.credentials = credentials
        self._http = http if http is not None else build_session()
        self._timeout = timeout
        self._session = Session()
        self._state = ClientState.UNAUTHENTICATED

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is ClientState.AUTHENTICATED and self._session.is_valid

    def _url(self, endpoint: str) -> str:
        return endpoint_url(self.credentials.base_url, endpoint)

    def _send(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = self._url(endpoint)
        try:
            resp = self._http.request(method, url, timeout=self._timeout, **kwargs)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        log.debug("%s %s → HTTP %s", method, url, resp.status_code)
        return resp

    def _fetch_challenge(self) -> Session:
        resp = self._send("GET", LOGIN_SID_URL)
        return parse_session_info(resp.content)

    def login(self) -> Session:
        """
        Run the two-step challenge-response login.

          GET  /login_sid.lua                          → Challenge
          POST /login_sid.lua  username / response     → Session

        The router answers HTTP 200 even for wrong credentials; the only
        rejection signal is the sentinel sid in the second answer, which
        raises LoginRejectedError.  On any failure the client is left in
        FAILED with no session.
        """
        succeeded = False
        try:
            challenge = self._fetch_challenge()
            self._state = ClientState.CHALLENGE_OBTAINED
            if challenge.block_time:
                log.warning(
                    "Router reports login block time of %ds", challenge.block_time
                )

            response = compute_response(challenge.challenge, self.credentials.password)
            resp = self._send(
                "POST",
                LOGIN_SID_URL,
                data={"username": self.credentials.username, "response": response},
                headers=_FORM_HEADERS,
            )
            session = parse_session_info(resp.content)
            if not session.is_valid:
                message = f"Login rejected for user {self.credentials.username!r}"
                if session.block_time:
                    message += f" (blocked for {session.block_time}s)"
                raise LoginRejectedError(message, block_time=session.block_time)
            succeeded = True
        finally:
            if not succeeded:
                self._session = Session()
                self._state = ClientState.FAILED

        self._session = session
        self._state = ClientState.AUTHENTICATED
        log.info("Login successful as %s", self.credentials.username)
        log.debug("SID: %s", session.sid)
        return session

    def authenticated_request(
        self,
        endpoint: str,
        params: "dict | None" = None,
        method: str = "POST",
    ) -> requests.Response:
        """
        Send *params* with the current sid prepended.

        POST sends a form-encoded body, GET a query string.  Raises
        NotLoggedInError before a successful login().
        """
        if not self.is_authenticated:
            raise NotLoggedInError(
                f"No valid session for {endpoint}; call login() first"
            )
        payload = {"sid": self._session.sid}
        payload.update(params or {})

        method = method.upper()
        if method == "GET":
            return self._send("GET", endpoint, params=payload)
        return self._send(method, endpoint, data=payload, headers=_FORM_HEADERS)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

