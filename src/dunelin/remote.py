"""Git remote operations: clone templates and pull the shadow.

Backed by ``dulwich.porcelain``.  Every failure, whether transport, auth,
missing ref or local I/O, surfaces as :class:`~dunelin.exceptions.RemoteError`
carrying the underlying message.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from dulwich import porcelain
from dulwich.errors import GitProtocolError, NotGitRepository
from dulwich.repo import Repo

from .exceptions import RemoteError

logger = logging.getLogger(__name__)

_REMOTE_ERRORS = (
    porcelain.Error, GitProtocolError, NotGitRepository,
    OSError, KeyError, ValueError,
)


def _message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


def _origin_url(path: str | Path) -> str | None:
    """Return the ``origin`` URL configured for the repo at *path*."""
    repo = Repo(str(path))
    try:
        return repo.get_config().get((b"remote", b"origin"), b"url").decode()
    except KeyError:
        return None
    finally:
        repo.close()


def _set_origin_url(repo: Repo, url: str) -> None:
    config = repo.get_config()
    config.set((b"remote", b"origin"), b"url", url.encode())
    config.write_to_path()


def clone_repo(url: str, target: str | Path) -> None:
    """Clone *url* into *target* with a checked-out working tree.

    Credentials found by :func:`resolve_credentials` are used for the
    transfer only; ``origin`` keeps the plain *url*.
    """
    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    auth_url = resolve_credentials(url)
    errstream = io.BytesIO()
    logger.debug("cloning %s into %s", url, target)
    try:
        repo = porcelain.clone(auth_url, str(target), errstream=errstream)
        try:
            if auth_url != url:
                _set_origin_url(repo, url)
        finally:
            repo.close()
    except _REMOTE_ERRORS as exc:
        raise RemoteError(_message(exc)) from exc


def pull_repo(path: str | Path) -> None:
    """Fetch and fast-forward the working copy at *path* from ``origin``."""
    errstream = io.BytesIO()
    logger.debug("pulling %s", path)
    try:
        url = _origin_url(path)
        auth_url = resolve_credentials(url) if url else None
        location = auth_url if auth_url != url else None
        porcelain.pull(str(path), remote_location=location, errstream=errstream)
    except _REMOTE_ERRORS as exc:
        raise RemoteError(_message(exc)) from exc
    progress = errstream.getvalue().decode("utf-8", "replace").strip()
    if progress:
        logger.debug("%s", progress)


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

def resolve_credentials(url: str) -> str:
    """Inject credentials into an HTTPS URL if available.

    Tries ``git credential fill`` first (works with any configured helper:
    osxkeychain, wincred, libsecret, ``gh auth setup-git``, etc.).  Falls
    back to ``gh auth token`` for GitHub hosts.  Non-HTTPS URLs and URLs
    that already contain credentials are returned unchanged.
    """
    if not url.startswith("https://"):
        return url

    from urllib.parse import quote, urlparse, urlunparse

    parsed = urlparse(url)
    if parsed.username:
        return url

    import subprocess

    def _with_netloc(user: str, secret: str) -> str:
        netloc = f"{quote(user, safe='')}:{quote(secret, safe='')}@{parsed.hostname}"
        if parsed.port:
            netloc += f":{parsed.port}"
        return urlunparse(parsed._replace(netloc=netloc))

    try:
        stdin = f"protocol={parsed.scheme}\nhost={parsed.hostname}\n\n"
        proc = subprocess.run(
            ["git", "credential", "fill"],
            input=stdin, capture_output=True, text=True, timeout=5,
        )
        if proc.returncode == 0:
            creds = {}
            for line in proc.stdout.strip().splitlines():
                if "=" in line:
                    k, _, v = line.partition("=")
                    creds[k] = v
            username = creds.get("username")
            password = creds.get("password")
            if username and password:
                return _with_netloc(username, password)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pass

    try:
        proc = subprocess.run(
            ["gh", "auth", "token", "--hostname", parsed.hostname],
            capture_output=True, text=True, timeout=5,
        )
        token = proc.stdout.strip()
        if proc.returncode == 0 and token:
            return _with_netloc("x-access-token", token)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pass

    return url
