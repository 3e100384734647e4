"""Local persistence: stored credentials/token and the session's cookies."""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

import requests

from config import COOKIE_FILE, CONFIG_FILE, USER_AGENT

log = logging.getLogger(__name__)


@dataclass
class Credentials:
    username: str = ""
    password: str = ""
    token: str = ""


def new_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    return session


@dataclass
class RunContext:
    """Everything one run owns: credentials and the HTTP session carrying cookies."""

    credentials: Credentials
    session: requests.Session = field(default_factory=new_session)


def load_credentials(path: str | Path = CONFIG_FILE) -> Credentials:
    """Read the config file. Missing or broken files give empty credentials."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        log.debug("No config at %s, starting empty.", path)
        return Credentials()
    except (OSError, ValueError) as e:
        log.warning("Could not read config %s (%s), starting empty.", path, e)
        return Credentials()
    if not isinstance(data, dict):
        log.warning("Config %s is not an object, starting empty.", path)
        return Credentials()
    return Credentials(
        username=str(data.get("username") or ""),
        password=str(data.get("password") or ""),
        token=str(data.get("token") or ""),
    )


def save_credentials(credentials: Credentials, path: str | Path = CONFIG_FILE) -> None:
    Path(path).write_text(json.dumps(asdict(credentials), indent=2), encoding="utf-8")


def load_cookies(session: requests.Session, path: str | Path = COOKIE_FILE) -> None:
    """Restore cookies saved by save_cookies into session. Bad files are ignored."""
    path = Path(path)
    try:
        cookies = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return
    except (OSError, ValueError) as e:
        log.warning("Could not read cookies %s (%s), starting without.", path, e)
        return
    if not isinstance(cookies, list):
        log.warning("Cookie file %s has unexpected format, ignoring.", path)
        return
    for c in cookies:
        if not isinstance(c, dict) or "name" not in c:
            continue
        session.cookies.set(c["name"], c.get("value", ""), domain=c.get("domain", ""), path=c.get("path", "/"))


def save_cookies(session: requests.Session, path: str | Path = COOKIE_FILE) -> None:
    cookies = [
        {"name": c.name, "value": c.value, "domain": c.domain, "path": c.path}
        for c in session.cookies
    ]
    Path(path).write_text(json.dumps(cookies, indent=2), encoding="utf-8")


def open_context(config_path: str | Path = CONFIG_FILE, cookie_path: str | Path = COOKIE_FILE) -> RunContext:
    ctx = RunContext(credentials=load_credentials(config_path))
    load_cookies(ctx.session, cookie_path)
    return ctx


def close_context(ctx: RunContext, config_path: str | Path = CONFIG_FILE,
                  cookie_path: str | Path = COOKIE_FILE) -> None:
    """Persist the run's credentials and cookies, whatever the outcome was."""
    save_cookies(ctx.session, cookie_path)
    save_credentials(ctx.credentials, config_path)
    ctx.session.close()
