"""Infrastructure: state-directory resolution and ownership fix-ups.

wg-waybar normally runs under ``sudo`` (creating interfaces needs
``CAP_NET_ADMIN``) while the status bar runs as the desktop user.  Files
it creates are therefore handed back to ``$SUDO_USER`` so the unprivileged
status query can still read them.

Resolution order for the state home
-----------------------------------
1. ``$XDG_STATE_HOME/<app>`` when the variable holds an absolute path.
2. ``<home>/.local/state/<app>`` where *home* belongs to ``$SUDO_USER``
   if set, otherwise to the current uid.
"""

from __future__ import annotations

import logging
import os
import pwd
from collections.abc import Callable, Mapping
from pathlib import Path

from wg_waybar.exceptions import (
    HomeDirNotFoundError,
    StateError,
    UncaughtError,
    UserResolutionError,
)

logger = logging.getLogger(__name__)

APP_NAME = "wg-waybar"


# ---------------------------------------------------------------------------
# Home / state-home resolution
# ---------------------------------------------------------------------------

def home_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the home directory of the invoking (pre-sudo) user."""
    env = os.environ if environ is None else environ
    username = env.get("SUDO_USER")
    try:
        if username is None:
            username = pwd.getpwuid(os.getuid()).pw_name
        return Path(pwd.getpwnam(username).pw_dir)
    except KeyError:
        raise HomeDirNotFoundError("HomeDirNotFound") from None


def resolve_state_home(
    app_name: str = APP_NAME,
    *,
    environ: Mapping[str, str] | None = None,
    get_home_dir: Callable[[], Path] | None = None,
) -> Path:
    """Return the per-application state directory (not created)."""
    env = os.environ if environ is None else environ
    xdg = env.get("XDG_STATE_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg) / app_name

    if get_home_dir is None:
        home = home_dir(env)
    else:
        home = get_home_dir()
    return home / ".local" / "state" / app_name


# ---------------------------------------------------------------------------
# Ownership
# ---------------------------------------------------------------------------

def sudo_owner(environ: Mapping[str, str] | None = None) -> tuple[int, int] | None:
    """Return ``(uid, gid)`` of ``$SUDO_USER``, or ``None`` when unset.

    Raises
    ------
    UncaughtError
        If the variable holds bytes that are not valid text.
    UserResolutionError
        If no such user exists.
    """
    env = os.environ if environ is None else environ
    username = env.get("SUDO_USER")
    if username is None:
        return None
    try:
        username.encode("utf-8")
    except UnicodeEncodeError:
        raise UncaughtError("Failed to convert username to str") from None
    try:
        entry = pwd.getpwnam(username)
    except KeyError:
        raise UserResolutionError(username) from None
    return entry.pw_uid, entry.pw_gid


def hand_over(path: Path) -> None:
    """Give *path* to ``$SUDO_USER`` when running under sudo."""
    owner = sudo_owner()
    if owner is None:
        return
    try:
        os.chown(path, *owner)
    except OSError as exc:
        raise StateError(f"I/O error: cannot chown {path}: {exc}") from exc
    logger.debug("Handed %s to uid=%d gid=%d", path, *owner)


def create_owned_dir(path: Path) -> None:
    """Create *path* (and parents) and hand the leaf to ``$SUDO_USER``."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StateError(f"I/O error: cannot create {path}: {exc}") from exc
    hand_over(path)


def write_owned(path: Path, content: str) -> None:
    """Overwrite *path* with *content* and hand it to ``$SUDO_USER``."""
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise StateError(f"I/O error: cannot write {path}: {exc}") from exc
    hand_over(path)
