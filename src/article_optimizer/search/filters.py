"""Heuristic filter for URLs that are likely articles or blog posts."""

from urllib.parse import urlparse

# Social, video and reference platforms, plus the search engine itself
EXCLUDED_DOMAINS = (
    "youtube.com",
    "youtu.be",
    "facebook.com",
    "twitter.com",
    "x.com",
    "linkedin.com",
    "instagram.com",
    "pinterest.com",
    "tiktok.com",
    "google.com",
    "wikipedia.org",
)

ARTICLE_KEYWORDS = (
    "/blog",
    "/article",
    "/post",
    "/news",
    "/guide",
    "/tutorial",
    "/story",
)

VIDEO_MARKERS = ("/video", "/watch")


def _host(url: str) -> str:
    host = (urlparse(url).hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def is_excluded_domain(url: str) -> bool:
    """Check if the URL's host is, or is a subdomain of, an excluded domain."""
    host = _host(url)
    if not host:
        return False
    return any(host == d or host.endswith("." + d) for d in EXCLUDED_DOMAINS)


def is_blog_or_article(url: str) -> bool:
    """Check if a URL is likely a blog post or article.

    Excluded domains are always rejected. Otherwise the URL is accepted when
    its path carries an article keyword, or when it does not look like a
    video page.
    """
    if not url or not url.lower().startswith(("http://", "https://")):
        return False
    if is_excluded_domain(url):
        return False

    path = urlparse(url).path.lower()
    if any(keyword in path for keyword in ARTICLE_KEYWORDS):
        return True
    return not any(marker in path for marker in VIDEO_MARKERS)
