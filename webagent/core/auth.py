"""Credentials that are only presented when a matching server challenges."""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple
from urllib.parse import urlsplit

from requests import Response
from requests.auth import AuthBase, HTTPBasicAuth, HTTPDigestAuth
from requests.cookies import extract_cookies_to_jar
from requests.utils import parse_dict_header

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def host_port(url: str) -> str:
    """Return ``host:port`` for ``url``, filling in the scheme's default port."""

    parts = urlsplit(url)
    port = parts.port or _DEFAULT_PORTS.get(parts.scheme.lower())
    host = (parts.hostname or "").lower()
    return f"{host}:{port}" if port else host


def parse_challenge(header: str) -> Optional[Tuple[str, dict]]:
    """Split a ``WWW-Authenticate`` value into scheme and parameters."""

    scheme, _, params = header.strip().partition(" ")
    if not scheme:
        return None
    return scheme.lower(), parse_dict_header(params)


class ChallengeAuth(AuthBase):
    """Answer a Basic or Digest 401 challenge for one location and realm.

    ``location`` is matched against the ``host:port`` of the challenged URL
    (the port may be omitted for the scheme default). Nothing is sent
    pre-emptively, and each request is answered at most once.
    """

    def __init__(self, location: str, realm: str, user: str, password: str) -> None:
        self.location = location
        self.realm = realm
        self.user = user
        self.password = password

    def __call__(self, request):
        request.register_hook("response", self.handle_401)
        return request

    def matches(self, url: str, realm: Optional[str]) -> bool:
        if realm != self.realm:
            return False
        wanted = self.location.strip().lower()
        actual = host_port(url)
        return wanted == actual or wanted == actual.rsplit(":", 1)[0]

    def _authorization(self, scheme: str, params: dict, prep) -> Optional[str]:
        if scheme == "basic":
            signed = HTTPBasicAuth(self.user, self.password)(prep.copy())
            return signed.headers["Authorization"]
        if scheme == "digest":
            digest = HTTPDigestAuth(self.user, self.password)
            digest.init_per_thread_state()
            digest._thread_local.chal = params
            return digest.build_digest_header(prep.method, prep.url)
        return None

    def handle_401(self, response: Response, **kwargs: Any) -> Response:
        if response.status_code != 401:
            return response
        if "Authorization" in response.request.headers:
            return response

        challenge = parse_challenge(response.headers.get("www-authenticate", ""))
        if challenge is None:
            return response
        scheme, params = challenge
        if not self.matches(response.request.url, params.get("realm")):
            logger.debug(
                "Ignoring %s challenge for realm %r at %s",
                scheme,
                params.get("realm"),
                response.request.url,
            )
            return response

        # Consume content and release the original connection
        response.content
        response.close()
        prep = response.request.copy()
        extract_cookies_to_jar(prep._cookies, response.request, response.raw)
        prep.prepare_cookies(prep._cookies)

        authorization = self._authorization(scheme, params, prep)
        if not authorization:
            return response
        prep.headers["Authorization"] = authorization

        retried = response.connection.send(prep, **kwargs)
        retried.history.append(response)
        retried.request = prep
        return retried


__all__ = ["ChallengeAuth", "host_port", "parse_challenge"]
