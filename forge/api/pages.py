"""HTML pages returned to the merchant's browser."""

import json
from html import escape


def _page(body: str, title: str = "Forge") -> str:
    return (
        "<!DOCTYPE html>"
        f"<html><head><meta charset=\"utf-8\"><title>{escape(title)}</title></head>"
        "<body style=\"background: #0A0A0B; color: white; font-family: sans-serif;\">"
        f"{body}"
        "</body></html>"
    )


def _rank_flag_script(user_id: str | None, close_after_ms: int = 0) -> str:
    """Set the browser-side rank flag and close the popup.

    The flag only mirrors the stored profile for the frontend.
    """
    lines = []
    if user_id:
        key = json.dumps(f"rank_{user_id}").replace("</", "<\\/")
        lines.append(f"localStorage.setItem({key}, 'Commander');")
    if close_after_ms:
        lines.append(f"setTimeout(() => window.close(), {close_after_ms});")
    else:
        lines.append("window.close();")
    return "<script>" + "".join(lines) + "</script>"


def index_page(version: str) -> str:
    return _page(f"Forge v{escape(version)} Live. <a href=\"/health\">Check Health</a>")


def handshake_success_page(user_id: str | None) -> str:
    return _page("<h1>Rank Activated</h1>" + _rank_flag_script(user_id), title="Rank Activated")


def handshake_failure_page() -> str:
    return _page("<h1>Callback error</h1><p>Store linking failed. Please try again.</p>")


def diagnostic_success_page(user_id: str) -> str:
    body = (
        "<div style=\"text-align: center; border: 1px solid #34d399; padding: 40px;\">"
        "<h1 style=\"color: #34d399;\">PROFILE STORE ACTIVE</h1>"
        f"<p>User <b>{escape(user_id)}</b> promoted to Commander.</p>"
        f"{_rank_flag_script(user_id, close_after_ms=3000)}"
        "</div>"
    )
    return _page(body, title="Handshake Test")


def diagnostic_failure_page(user_id: str, reason: str, profile_path: str) -> str:
    body = (
        "<div style=\"border: 1px solid #f87171; padding: 40px;\">"
        "<h1 style=\"color: #f87171;\">HANDSHAKE TEST FAILED</h1>"
        f"<p>Could not write profile for <b>{escape(user_id)}</b>.</p>"
        f"<pre>{escape(reason)}</pre>"
        "<h2>Things to check</h2>"
        "<ol>"
        "<li>DATABASE_URL points at a reachable database.</li>"
        "<li>Migrations have run (<code>alembic upgrade head</code>, or AUTO_MIGRATE=1).</li>"
        f"<li>The service account can write to <code>{escape(profile_path)}</code>.</li>"
        "</ol>"
        "</div>"
    )
    return _page(body, title="Handshake Test Failed")
