"""Discovery: find the Tent profile of an entity.

Given the entity URL of a peer, we look for a link with `rel="profile"`
and the Tent profile media type, first in the `Link` header of the
entity’s home page and then (by default) in the page itself.
The profile document it points to is fetched and its core info
is returned as a `Profile` instance.

Which places are examined, and in what order, is controlled by the
`TENT_DISCOVERY_METHODS` setting.
"""

from dataclasses import dataclass, field
from html.parser import HTMLParser
import logging
import re
from urllib.parse import urljoin

from django.conf import settings
import requests

from .protocol import CORE_INFO_TYPE, PROFILE_MEDIA_TYPE, PROFILE_REL


logger = logging.getLogger(__name__)


class DiscoveryError(Exception):
    """Could not get a usable profile for this entity."""

    def __init__(self, entity, reason):
        super().__init__(f"{entity}: {reason}")
        self.entity = entity
        self.reason = reason


@dataclass
class Link:
    """One link from a Link header or a LINK element."""

    rel: list
    href: str
    media_type: str = None

    def is_profile(self):
        return PROFILE_REL in (self.rel or []) and self.media_type == PROFILE_MEDIA_TYPE


@dataclass
class Profile:
    """The core info from an entity’s profile document."""

    entity: str
    licenses: list = field(default_factory=list)
    servers: list = field(default_factory=list)
    data: dict = field(default_factory=dict)  # The whole profile document.

    @classmethod
    def from_json(cls, obj: dict) -> "Profile":
        """Create from a decoded profile document.

        Raises ValueError if it lacks the core info or the core info lacks an entity.
        """
        if not isinstance(obj, dict):
            raise ValueError("profile is not a JSON object")
        core = obj.get(CORE_INFO_TYPE)
        if not isinstance(core, dict):
            raise ValueError(f"profile has no {CORE_INFO_TYPE} info")
        entity = core.get("entity")
        if not entity or not isinstance(entity, str):
            raise ValueError("core info has no entity")
        licenses = core.get("licenses") or []
        servers = core.get("servers") or []
        if not isinstance(licenses, list) or not isinstance(servers, list):
            raise ValueError("core info licenses and servers must be lists")
        return cls(entity=entity, licenses=licenses, servers=servers, data=obj)


COMMA = re.compile(r"\s*,\s*(?=<)")
SEMICOLON = re.compile(r"\s*;\s*")
EQUALS = re.compile(r"\s*=\s*")
LINK_HREF = re.compile(r"^<(.*)>$")
QUOTED = re.compile(r'^"(.*)"$')


def parse_link_header(base_url, comma_separated):
    """Given a base URL and a Link header value, return list of Link instances."""
    links = []
    for link_spec in COMMA.split(comma_separated.strip()):
        if not link_spec:
            continue
        href_part, *parts = SEMICOLON.split(link_spec)
        href = urljoin(base_url, LINK_HREF.sub(r"\1", href_part))
        rel = media_type = None
        for part in parts:
            if "=" not in part:
                continue
            prop, val = EQUALS.split(part, 1)
            prop = prop.lower()
            if prop == "rel":
                rel = QUOTED.sub(r"\1", val).split()
            elif prop == "type":
                media_type = QUOTED.sub(r"\1", val)
        links.append(Link(rel, href, media_type))
    return links


class LinkElementParser(HTMLParser):
    """Collects LINK elements from an HTML page."""

    def __init__(self, base_url):
        super().__init__(convert_charrefs=True)
        self.base_url = base_url
        self.links = []

    def handle_starttag(self, tag, attrs):
        if tag != "link":
            return
        attrs = dict(attrs)
        if href := attrs.get("href"):
            self.links.append(
                Link(
                    (attrs.get("rel") or "").split(),
                    urljoin(self.base_url, href),
                    attrs.get("type"),
                )
            )

    handle_startendtag = handle_starttag


def parse_link_elements(base_url, text):
    """Given a base URL and an HTML page, return list of Link instances."""
    parser = LinkElementParser(base_url)
    parser.feed(text)
    parser.close()
    return parser.links


def find_profile_link(links):
    """Return the href of the first profile link, or None."""
    for link in links:
        if link.is_profile():
            return link.href


def _request(method, url, **kwargs):
    headers = kwargs.pop("headers", {})
    headers.setdefault("User-Agent", settings.TENT_USER_AGENT)
    return requests.request(
        method,
        url,
        headers=headers,
        timeout=settings.TENT_DISCOVERY_TIMEOUT,
        allow_redirects=True,
        **kwargs,
    )


def profile_url_from_head(entity):
    r = _request("HEAD", entity)
    if r.ok:
        return find_profile_link(parse_link_header(r.url or entity, r.headers.get("Link", "")))
    logger.debug("HEAD %s returned %d", entity, r.status_code)


def read_start_of_page(r):
    """Return the text of the first TENT_DISCOVERY_MAX_PAGE_SIZE bytes of a streamed response."""
    limit = settings.TENT_DISCOVERY_MAX_PAGE_SIZE
    chunks, size = [], 0
    for chunk in r.iter_content(chunk_size=8192):
        chunks.append(chunk)
        size += len(chunk)
        if size >= limit:
            logger.debug("Reading only first %d bytes of %s", limit, r.url)
            break
    data = b"".join(chunks)[:limit]
    try:
        return data.decode(r.encoding or "utf-8", errors="replace")
    except LookupError:  # Unknown charset.
        return data.decode("utf-8", errors="replace")


def profile_url_from_get(entity):
    with _request("GET", entity, headers={"Accept": "text/html"}, stream=True) as r:
        if not r.ok:
            logger.debug("GET %s returned %d", entity, r.status_code)
            return None
        base_url = r.url or entity
        if profile_url := find_profile_link(parse_link_header(base_url, r.headers.get("Link", ""))):
            return profile_url
        if "html" in r.headers.get("Content-Type", ""):
            return find_profile_link(parse_link_elements(base_url, read_start_of_page(r)))


discovery_methods = {
    "head": profile_url_from_head,
    "get": profile_url_from_get,
}


def find_profile_url(entity):
    """Try each of the configured discovery methods in turn.

    Returns the URL of the profile document.
    Raises DiscoveryError if none of them finds it.
    """
    for name in settings.TENT_DISCOVERY_METHODS:
        try:
            method = discovery_methods[name.strip()]
        except KeyError:
            raise ValueError(f"unknown discovery method {name!r}") from None
        if profile_url := method(entity):
            return profile_url
    raise DiscoveryError(entity, "no profile link found")


def fetch_profile(entity, profile_url):
    """Download and decode the profile document."""
    r = _request("GET", profile_url, headers={"Accept": PROFILE_MEDIA_TYPE})
    if not r.ok:
        raise DiscoveryError(entity, f"GET {profile_url} returned {r.status_code}")
    media_type = r.headers.get("Content-Type", "").split(";")[0].strip()
    if media_type != PROFILE_MEDIA_TYPE:
        raise DiscoveryError(entity, f"{profile_url} has content-type {media_type!r}")
    try:
        return Profile.from_json(r.json())
    except ValueError as e:  # Includes JSON decode errors.
        raise DiscoveryError(entity, f"{profile_url}: {e}") from e


def discover(entity):
    """Return the Profile for this entity URL.

    Raises DiscoveryError if it cannot be found, including
    when the peer cannot be reached within TENT_DISCOVERY_TIMEOUT seconds.
    """
    try:
        profile_url = find_profile_url(entity)
        profile = fetch_profile(entity, profile_url)
    except requests.RequestException as e:
        logger.warning("Discovery of %s failed: %s", entity, e)
        raise DiscoveryError(entity, str(e)) from e
    except DiscoveryError as e:
        logger.warning("Discovery of %s failed: %s", entity, e.reason)
        raise
    logger.debug("Discovered profile of %s at %s", entity, profile_url)
    return profile
