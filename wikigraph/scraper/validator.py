"""Input URL validation: https scheme on a Wikipedia host."""

from __future__ import annotations

from urllib.parse import urlsplit

from wikigraph.config import settings
from wikigraph.errors import ValidationError


def _host_allowed(host: str, domain: str) -> bool:
    host = host.lower().rstrip(".")
    domain = domain.lower()
    return host == domain or host.endswith("." + domain)


def validate_url(raw: str | None, allowed_domain: str | None = None) -> str:
    """Return *raw* unchanged if it is an https URL on an allowed host.

    Any subdomain of the allowed domain is accepted (``en.wikipedia.org``,
    ``de.m.wikipedia.org``).

    Raises:
        ValidationError: With ``reason`` set to ``blank``, ``malformed``,
            ``scheme`` or ``host``.
    """
    if raw is None or not raw.strip():
        raise ValidationError("url must not be blank", reason="blank")

    if any(ch.isspace() for ch in raw):
        raise ValidationError(f"url is not a valid URI: {raw}", reason="malformed")
    try:
        parts = urlsplit(raw)
        host = parts.hostname
        parts.port  # raises ValueError on a non-numeric port
    except ValueError as exc:
        raise ValidationError(f"url is not a valid URI: {raw}", reason="malformed") from exc

    if parts.scheme.lower() != "https":
        raise ValidationError("url must use https scheme", reason="scheme")

    domain = allowed_domain or settings.allowed_domain
    if not host or not _host_allowed(host, domain):
        raise ValidationError(f"url must be a {domain} host", reason="host")

    return raw
