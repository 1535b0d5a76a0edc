"""Shared constants and path configuration for the Shmrep content service."""

import json
import os

_SETTINGS_FILE = os.environ.get(
    "SHMREP_SETTINGS", os.path.expanduser("~/.config/shmrep/settings.json")
)
_DEFAULT_CONTENT_DIR = os.path.join(os.getcwd(), "src", "content")

ON_ERROR_POLICIES = ("fail", "skip")


def _read_setting(*keys, default=None):
    """Read a nested setting from the settings file."""
    try:
        with open(_SETTINGS_FILE) as f:
            data = json.load(f)
        for k in keys:
            data = data[k]
        return data
    except (FileNotFoundError, json.JSONDecodeError, KeyError, TypeError):
        return default


def get_on_error_policy() -> str:
    """Return the rejected-document policy: "fail" aborts the build, "skip" drops the document."""
    policy = _read_setting("on_error", default="fail")
    return policy if policy in ON_ERROR_POLICIES else "fail"


def get_port() -> int:
    port = _read_setting("port", default=4321)
    return port if isinstance(port, int) and not isinstance(port, bool) else 4321


CONTENT_DIR = _read_setting("content_dir", default=_DEFAULT_CONTENT_DIR)
ON_ERROR = get_on_error_policy()
PORT = get_port()
