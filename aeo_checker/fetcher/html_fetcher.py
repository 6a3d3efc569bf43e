"""Website content fetching with SSRF protection."""
from __future__ import annotations

import socket
from ipaddress import ip_address
from urllib.parse import urljoin, urlparse

import requests
import structlog

from aeo_checker.config.settings import settings
from aeo_checker.parser.content_parser import WebsiteContent, parse_content

logger = structlog.get_logger(__name__)


class FetchError(RuntimeError):
    """Raised when a page cannot be retrieved (network error or non-2xx status)."""

    def __init__(self, message: str, url: str = "", status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def _is_url(source: str) -> bool:
    parsed = urlparse(source)
    return parsed.scheme in {"http", "https"}


def _validate_ip(ip_str: str) -> tuple[bool, str]:
    """Check if an IP address is safe (not private/internal)."""
    try:
        ip = ip_address(ip_str)
        if ip.is_private or ip.is_loopback or ip.is_reserved or ip.is_link_local or ip.is_unspecified:
            return False, f"Access to private/internal IP addresses is forbidden: {ip_str}"
        return True, ""
    except ValueError:
        return False, f"Invalid IP address: {ip_str}"


def _resolve_and_validate_url(url: str) -> tuple[str, str, str]:
    """
    Resolve URL hostname to IP and validate it's safe.
    Returns (resolved_ip, hostname, error_message).
    """
    parsed = urlparse(url)

    if parsed.scheme not in {"http", "https"}:
        return "", "", "Only http and https schemes are allowed"

    hostname = parsed.hostname
    if not hostname:
        return "", "", "Invalid URL: hostname not found"

    try:
        resolved_ip = socket.gethostbyname(hostname)
    except socket.gaierror:
        return "", "", f"Could not resolve hostname: {hostname}"

    is_safe, error_msg = _validate_ip(resolved_ip)
    if not is_safe:
        return "", "", error_msg

    return resolved_ip, hostname, ""


def _get(url: str) -> requests.Response:
    try:
        return requests.get(
            url,
            timeout=settings.fetcher.request_timeout,
            allow_redirects=False,  # Redirect targets are validated one by one
            stream=True,
            headers={"User-Agent": settings.fetcher.user_agent},
        )
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch website: {exc}", url=url) from exc


def _check_declared_size(response: requests.Response) -> None:
    max_size = settings.fetcher.max_response_size
    content_length = response.headers.get("Content-Length")
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        response.close()
        raise ValueError(f"Response too large: {int(content_length)} bytes (max {max_size})")


def _read_body(response: requests.Response) -> str:
    max_size = settings.fetcher.max_response_size
    chunks = []
    total_size = 0
    try:
        for chunk in response.iter_content(chunk_size=8192, decode_unicode=False):
            total_size += len(chunk)
            if total_size > max_size:
                response.close()
                raise ValueError(f"Response too large: exceeded {max_size} bytes")
            chunks.append(chunk)
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch website: {exc}", url=response.url) from exc

    content_bytes = b"".join(chunks)
    encoding = response.encoding or "utf-8"
    try:
        return content_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return content_bytes.decode("utf-8", errors="replace")


def fetch_html(source: str) -> tuple[str, str | None]:
    """
    Fetch raw HTML from a URL.

    Returns (html, last_modified_header).

    Security measures:
    - Only accepts http/https URLs (no local file paths)
    - Validates resolved IP is not private/internal (SSRF protection)
    - Follows redirects manually, re-validating every target
    - Limits response size to prevent memory exhaustion
    """
    if not _is_url(source):
        raise ValueError("Only http and https URLs are allowed")

    _, _, error_msg = _resolve_and_validate_url(source)
    if error_msg:
        raise ValueError(f"SSRF protection: {error_msg}")

    response = _get(source)
    _check_declared_size(response)

    redirect_count = 0
    while response.is_redirect and redirect_count < settings.fetcher.max_redirects:
        redirect_count += 1
        redirect_url = response.headers.get("Location", "")
        if not redirect_url:
            break

        redirect_url = urljoin(source, redirect_url)
        _, _, redirect_error = _resolve_and_validate_url(redirect_url)
        if redirect_error:
            response.close()
            raise ValueError(f"SSRF protection: Redirect blocked - {redirect_error}")

        logger.debug("following_redirect", source=source, target=redirect_url)
        response.close()
        response = _get(redirect_url)
        source = redirect_url
        _check_declared_size(response)

    if not 200 <= response.status_code < 300:
        reason = response.reason or f"HTTP {response.status_code}"
        response.close()
        raise FetchError(
            f"Failed to fetch website: {reason}",
            url=source,
            status_code=response.status_code,
        )

    html = _read_body(response)
    return html, response.headers.get("Last-Modified")


def fetch_content(url: str) -> WebsiteContent:
    """Fetch a page and extract its WebsiteContent snapshot."""
    html, last_modified = fetch_html(url)
    logger.info("content_fetched", url=url, size=len(html), last_modified=last_modified)
    return parse_content(html, url, last_modified=last_modified)
