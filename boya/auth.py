"""SSO (CAS) authentication and program token login."""

import logging
from urllib.parse import parse_qs, urlparse

import requests
from bs4 import BeautifulSoup

from config import HTTP_TIMEOUT, LOGIN_URL, SSO_URL
from boya.exceptions import AuthError

log = logging.getLogger(__name__)


def _login_form(html: str):
    """Return the CAS login form on the page, or None when the page has none."""
    soup = BeautifulSoup(html, "html.parser")
    password = soup.find("input", attrs={"name": "password"})
    if password is None:
        return None
    return password.find_parent("form") or soup


def _token_from_url(url: str) -> str | None:
    qs = parse_qs(urlparse(url).query)
    values = qs.get("token")
    return values[0] if values else None


class Authenticator:
    """Logs a requests session into SSO and exchanges it for a program token."""

    def __init__(self, session: requests.Session, sso_url: str = SSO_URL, login_url: str = LOGIN_URL):
        self.session = session
        self.sso_url = sso_url
        self.login_url = login_url

    def sso_login(self, username: str, password: str) -> None:
        """Log in via the CAS form. A session that is already logged in is left alone."""
        log.info("[1/2] Logging in via SSO...")
        try:
            resp = self.session.get(self.sso_url, timeout=HTTP_TIMEOUT)
        except requests.RequestException as e:
            raise AuthError(f"Could not reach SSO: {e}") from e

        form = _login_form(resp.text)
        if form is None:
            log.info("  Already logged in to SSO.")
            return

        if not username or not password:
            raise AuthError("Username or password missing. Pass --username/--password once to store them.")

        execution = form.find("input", attrs={"name": "execution"})
        if execution is None or not execution.get("value"):
            raise AuthError("Could not find the SSO execution token.")

        try:
            resp = self.session.post(
                self.sso_url,
                data={
                    "username": username,
                    "password": password,
                    "submit": "登录",
                    "type": "username_password",
                    "execution": execution["value"],
                    "_eventId": "submit",
                },
                allow_redirects=True,
                timeout=HTTP_TIMEOUT,
            )
        except requests.RequestException as e:
            raise AuthError(f"SSO login request failed: {e}") from e

        if _login_form(resp.text) is not None:
            raise AuthError("SSO login failed. Check credentials.")
        log.info("  Logged in to SSO successfully.")

    def program_login(self) -> str:
        """Follow the program's CAS entry point and return the token it hands out."""
        log.info("[2/2] Logging in to Boya...")
        try:
            resp = self.session.get(self.login_url, allow_redirects=True, timeout=HTTP_TIMEOUT)
        except requests.RequestException as e:
            raise AuthError(f"Boya login request failed: {e}") from e

        for url in [resp.url] + [r.headers.get("Location", "") for r in resp.history]:
            token = _token_from_url(url)
            if token:
                log.info("  Boya login successful.")
                return token
        raise AuthError("Boya login failed: no token in redirect. SSO session may have expired.")
