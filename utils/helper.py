# utils/helper.py
import logging
from urllib.parse import unquote, urlparse

from utils.constants import ANNOTATION_LOCATION
from utils.exceptions import ConfigurationError

DEFAULT_PORTS = {"http": 80, "https": 443}

logger = logging.getLogger(__name__)


def paginated(request_fn, options):
    """
    Page-based iterator for GitLab listing endpoints.

    request_fn: callable taking the query options and returning
        {"items": [...], "next_page": int or None}
    Yields the items one by one, requesting the next page only once the
    current one is exhausted.
    """
    options = dict(options or {})
    while True:
        response = request_fn(dict(options))
        for item in response["items"]:
            yield item
        next_page = response.get("next_page")
        if not next_page:
            break
        options["page"] = next_page


def url_host(url):
    """
    Host of a URL including a non-default port, e.g. "gitlab.example.com:8443".
    """
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    if parsed.port and parsed.port != DEFAULT_PORTS.get(parsed.scheme):
        host = f"{host}:{parsed.port}"
    return host


def _path_components(url):
    return [unquote(c) for c in urlparse(url).path.split("/") if c]


def parse_group_url(url, base_url=None):
    """
    Extract the full group path from a GitLab group URL.

    https://gitlab.com/groups/a/b         -> "a/b"
    https://gitlab.com/a/b/-/group_members -> "a/b"
    https://gitlab.com                     -> None (instance root)

    When base_url carries a path (GitLab served under a relative root), that
    prefix is stripped first.
    """
    path = _path_components(url)

    if base_url:
        base_path = _path_components(base_url)
        if path[:len(base_path)] != base_path:
            raise ConfigurationError(
                f"The GitLab base URL ({base_url}) is not a prefix of the target URL ({url})."
            )
        path = path[len(base_path):]

    # "/groups/" is an optional prefix of group pages
    if path and path[0] == "groups":
        path = path[1:]

    if not path:
        return None

    # "/-/" marks the end of the group path
    if "-" in path:
        dash = path.index("-")
        if dash == 0:
            raise ConfigurationError(f"No group path found before /-/ in target URL ({url}).")
        path = path[:dash]

    return "/".join(path)


def entity_rows(entities):
    """
    Flatten User entities into one dict per user for tabular display.
    """
    rows = []
    for entity in entities:
        metadata = entity.get("metadata") or {}
        profile = (entity.get("spec") or {}).get("profile") or {}
        rows.append({
            "name": metadata.get("name"),
            "display_name": profile.get("displayName"),
            "email": profile.get("email"),
            "picture": profile.get("picture"),
            "location": (metadata.get("annotations") or {}).get(ANNOTATION_LOCATION),
        })
    return rows
