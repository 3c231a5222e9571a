# form.py
"""
Turns the raw API Gateway body into the slash command fields.
Slack slash commands are 'application/x-www-form-urlencoded'.
"""

from __future__ import annotations

import base64
import binascii
import urllib.parse

from orbit_intake.errors import MalformedPayload


def unwrap_body(body: str | bytes | None, is_base64_encoded: bool = False) -> str:
    """
    Return the exact text Slack sent (and signed).
    API Gateway base64-wraps bodies it considers binary.
    """
    if body is None:
        return ""

    if is_base64_encoded:
        try:
            raw = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise MalformedPayload("body is flagged base64 but does not decode") from exc
    elif isinstance(body, str):
        return body
    else:
        raw = bytes(body)

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedPayload("body is not valid UTF-8") from exc


def decode_command(text: str) -> dict[str, str]:
    """
    Parse the form body into a plain dict[str, str].
    Duplicate keys: last one wins. Blank values are kept as "".
    Percent escapes that do not decode as UTF-8 raise MalformedPayload.
    Nothing is required here; callers check for the fields they need.
    """
    try:
        return dict(urllib.parse.parse_qsl(text, keep_blank_values=True, errors="strict"))
    except UnicodeDecodeError as exc:
        raise MalformedPayload("form field is not valid UTF-8 once unescaped") from exc
