"""Web user agent built on top of requests.

Every call builds its own ``requests.Session``, applies credentials, headers
and proxy for that single request, and reports the outcome as a
:class:`~webagent.schemas.ResponseResult` instead of raising.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Callable, Dict, Mapping, Optional, Union
from urllib.parse import urlsplit

import requests
from requests import Response

from webagent.core.auth import ChallengeAuth
from webagent.core.diagnostics import DiagnosticSink, logging_sink
from webagent.core.encoding import to_internal
from webagent.core.form_body import coerce_form_body
from webagent.core.headers import build_header_set, dump_request
from webagent.schemas import Credentials, RequestSpec, ResponseResult

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]

RETURN_REQUEST = "REQUEST"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def status_line(code: int, reason: Optional[str] = None) -> str:
    """Format ``code`` and ``reason`` as ``"404 Not Found"``."""

    if not reason:
        try:
            reason = HTTPStatus(code).phrase
        except ValueError:
            reason = "Unknown code"
    return f"{code} {reason}"


def is_success(response: Response) -> bool:
    return 200 <= response.status_code < 300


def transport_failure_status(exc: requests.RequestException, url: str) -> str:
    """Describe a transport exception as a synthetic 500 status line."""

    # ConnectTimeout is both a Timeout and a ConnectionError
    if isinstance(exc, requests.ConnectionError):
        parts = urlsplit(url)
        target = parts.netloc or url
        return status_line(500, f"Can't connect to {target} ({exc.__class__.__name__})")
    if isinstance(exc, requests.Timeout):
        return status_line(500, "read timeout")
    return status_line(500, str(exc) or exc.__class__.__name__)


class WebUserAgent:
    """Synchronous one-shot HTTP client with a fixed timeout."""

    TIMEOUT = 15.0
    USER_AGENT = "PoerSmart"

    def __init__(
        self,
        *,
        session_factory: SessionFactory = requests.Session,
        diagnostic_sink: DiagnosticSink = logging_sink,
    ) -> None:
        self._session_factory = session_factory
        self._diagnostic_sink = diagnostic_sink

    @property
    def timeout(self) -> float:
        return self.TIMEOUT

    @property
    def user_agent(self) -> str:
        return self.USER_AGENT

    def request(
        self,
        url: str,
        *,
        method: str = "GET",
        data: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
        credentials: Union[Credentials, Mapping[str, Any], None] = None,
        proxy: Optional[str] = None,
        return_mode: Optional[str] = None,
        no_log: bool = False,
    ) -> ResponseResult:
        """Perform a GET (default) or POST request and return its outcome.

        Simple GET::

            result = agent.request("http://example.com/somedata.xml")

        POST with a mapping or an ordered list of pairs::

            agent.request(url, method="POST", data={"Attribute1": "Value"})
            agent.request(url, method="POST", data=[("Attribute", "A"), ("Attribute", "B")])

        Extra headers use HTTP or underscore spelling (``Content_Type``).
        Credentials need ``location`` (host:port), ``realm``, ``user`` and
        ``password`` and are only sent when that realm challenges.
        ``return_mode="REQUEST"`` returns a dump of the outgoing request
        instead of the response body.
        """

        spec = RequestSpec(
            url=url,
            method=method,
            data=data,
            headers=dict(headers) if headers is not None else None,
            credentials=credentials,
            proxy=proxy,
            return_mode=return_mode,
            no_log=no_log,
        )
        return self.send(spec)

    def send(self, spec: RequestSpec) -> ResponseResult:
        """Execute ``spec`` on a fresh session."""

        with self._session_factory() as session:
            self._configure(session, spec)
            return self._dispatch(session, spec)

    def _configure(self, session: requests.Session, spec: RequestSpec) -> None:
        # env proxies and .netrc never apply
        session.trust_env = False

        if spec.credentials is not None:
            creds = spec.credentials
            session.auth = ChallengeAuth(
                creds.location, creds.realm, creds.user, creds.password
            )

        if spec.headers:
            session.headers = build_header_set(spec.headers)

        session.headers["User-Agent"] = self.USER_AGENT

        if spec.proxy:
            session.proxies = {"http": spec.proxy}

    def _dispatch(self, session: requests.Session, spec: RequestSpec) -> ResponseResult:
        kwargs: Dict[str, Any] = {"timeout": self.TIMEOUT}
        logger.debug("%s %s (timeout=%ss)", spec.method, spec.url, self.TIMEOUT)

        if spec.method == "GET":
            call = session.get
        else:
            body = coerce_form_body(spec.data)
            if body is None:
                self._diagnose(
                    spec,
                    "WebUserAgent POST: Need Data param containing a mapping "
                    "or a sequence of (key, value) pairs.",
                )
                return ResponseResult(status=0)
            call = session.post
            kwargs["data"] = body.encoded
            kwargs["headers"] = {"Content-Type": FORM_CONTENT_TYPE}
            kwargs["allow_redirects"] = False

        try:
            response = call(spec.url, **kwargs)
        except requests.RequestException as exc:
            status = transport_failure_status(exc, spec.url)
            self._report_failure(spec, status)
            return ResponseResult(status=status)

        status = status_line(response.status_code, response.reason)
        if not is_success(response):
            self._report_failure(spec, status)
            return ResponseResult(status=status)

        content = to_internal(response.content, response.headers.get("Content-Type"))

        if spec.return_mode == RETURN_REQUEST:
            return ResponseResult(status=status, content=dump_request(response.request))

        return ResponseResult(status=status, content=content)

    def _report_failure(self, spec: RequestSpec, status: str) -> None:
        self._diagnose(spec, f"Can't perform {spec.method} on {spec.url}: {status}")

    def _diagnose(self, spec: RequestSpec, message: str) -> None:
        if spec.no_log:
            return
        self._diagnostic_sink(logging.ERROR, message)


def fetch_text(url: str, **kwargs: Any) -> Optional[str]:
    """Convenience wrapper returning decoded content, or None on failure."""

    result = WebUserAgent().request(url, **kwargs)
    return result.content if result.ok else None


__all__ = [
    "FORM_CONTENT_TYPE",
    "RETURN_REQUEST",
    "WebUserAgent",
    "fetch_text",
    "status_line",
    "transport_failure_status",
]
