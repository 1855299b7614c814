"""Render HAR requests as curl command lines."""

from __future__ import annotations

from har_archive.model import Request, removing_all


def _quote(text: str) -> str:
    return "'" + text.replace("'", "'\\''") + "'"


def curl_command(request: Request) -> str:
    """Build a curl command that repeats a request.

    Cookie headers are emitted as ``--cookie`` options from the parsed
    cookies rather than as raw headers.

    Example:
        >>> from har_archive.model import Header
        >>> print(curl_command(Request(method="POST", url="http://example.com/", headers=[Header("Accept", "*/*")])))
        curl 'http://example.com/' \\
          --request POST \\
          --header 'Accept: */*'
    """
    lines = [f"curl {_quote(request.url)}"]
    if request.method != "GET":
        lines.append(f"--request {request.method}")
    for header in removing_all(request.headers, "Cookie"):
        lines.append(f"--header {_quote(f'{header.name}: {header.value}')}")
    for cookie in request.cookies or []:
        lines.append(f"--cookie {_quote(f'{cookie.name}={cookie.value}')}")
    return " \\\n  ".join(lines)
