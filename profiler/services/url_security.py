from __future__ import annotations

import ipaddress
import re
import socket
from urllib.parse import urlparse, urlunparse


def normalize_public_url(raw_url: str, *, field_label: str = "URL") -> tuple[str, str]:
    value = (raw_url or "").strip()
    if not value:
        raise ValueError(f"{field_label} is required.")
    if not re.match(r"^https?://", value, flags=re.IGNORECASE):
        if re.match(r"^[a-z][a-z0-9+.\-]*://", value, flags=re.IGNORECASE):
            raise ValueError(f"Only http/https {field_label}s are supported.")
        value = f"https://{value}"
    parsed = urlparse(value)
    if parsed.scheme.lower() not in {"http", "https"}:
        raise ValueError(f"Only http/https {field_label}s are supported.")
    if not parsed.netloc:
        raise ValueError(f"Invalid {field_label}.")
    hostname = (parsed.hostname or "").lower().strip()
    if not hostname:
        raise ValueError(f"Invalid {field_label} host.")
    normalized = urlunparse(
        (
            parsed.scheme.lower(),
            parsed.netloc.lower(),
            parsed.path or "/",
            "",
            parsed.query,
            "",
        )
    )
    return normalized, hostname


def host_is_private_or_local(hostname: str) -> bool:
    host = (hostname or "").strip().lower()
    if host in {"localhost", "127.0.0.1", "::1"} or host.endswith(".local"):
        return True
    try:
        ip = ipaddress.ip_address(host)
        return bool(ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved)
    except ValueError:
        pass
    try:
        for _family, _socktype, _proto, _canon, sockaddr in socket.getaddrinfo(host, None):
            address = sockaddr[0] if sockaddr else ""
            if not address:
                continue
            try:
                resolved = ipaddress.ip_address(address)
            except ValueError:
                continue
            if resolved.is_private or resolved.is_loopback or resolved.is_link_local or resolved.is_reserved:
                return True
    except OSError:
        return False
    return False
