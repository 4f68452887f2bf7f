"""Image URL rewriting through the service's image proxy.

Many image links stored in blocks (private S3 uploads, relative cover paths)
are not directly fetchable. The service exposes a proxy at
``<base>/image/<escaped url>`` that serves them; this helper rewrites a raw
link into that form where needed. It is a pure string transform and never
raises.
"""

from __future__ import annotations

from urllib.parse import quote

from notiontree.core.settings import load_settings

# Hosts that serve images publicly; their links are used as-is.
_DIRECT_HOSTS: tuple[str, ...] = (
    "i.imgur.com",
    "images.unsplash.com",
)

# Left unescaped inside the proxied path segment; "/" is always escaped.
_SAFE = ":@$&+=~!*'()"


def maybe_proxy_image_url(uri: str, *, base: str | None = None) -> str:
    """Return a fetchable URL for an image link.

    Parameters
    ----------
    uri:
        Raw link as found in a block (absolute URL or site-relative path).
    base:
        Proxy origin; defaults to ``Settings.image_proxy_base``.
    """
    if not uri:
        return uri
    if base is None:
        base = load_settings().image_proxy_base
    base = base.rstrip("/")

    if uri.startswith(base + "/image/"):
        return uri
    if uri.startswith("/images/"):
        return base + uri
    if any(f"//{host}/" in uri for host in _DIRECT_HOSTS):
        return uri
    return f"{base}/image/{quote(uri, safe=_SAFE)}"


__all__ = ["maybe_proxy_image_url"]
