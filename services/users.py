# services/users.py
import logging
from dataclasses import dataclass, replace
from typing import Optional
from urllib.parse import quote

from utils.constants import ANNOTATION_LOCATION, ANNOTATION_ORIGIN_LOCATION, API_VERSION, PER_PAGE
from utils.exceptions import ConfigurationError, PreconditionError
from utils.helper import paginated, parse_group_url, url_host

logger = logging.getLogger(__name__)


class UserTransformer:
    """
    Override for mapping a GitLab user to a User entity.
    Subclasses must override transform(). default_transformer is handed in so
    an override can fall back to (or post-process) the default mapping.
    """

    def transform(self, user, default_transformer):
        raise NotImplementedError


@dataclass
class ReadUsersOptions:
    inherited: Optional[bool] = None
    blocked: Optional[bool] = None
    transformer: Optional[UserTransformer] = None


def default_user_transformer(user):
    """
    Map a GitLab user response to a User entity. Bots map to None.
    """
    if user.get("bot"):
        return None

    web_url = user.get("web_url")
    entity = {
        "apiVersion": API_VERSION,
        "kind": "User",
        "metadata": {
            "name": user["username"],
            "annotations": {
                ANNOTATION_LOCATION: web_url,
                ANNOTATION_ORIGIN_LOCATION: web_url,
            },
        },
        "spec": {
            "profile": {},
            "memberOf": [],
        },
    }

    profile = entity["spec"]["profile"]
    if user.get("name"):
        profile["displayName"] = user["name"]
    if user.get("avatar_url"):
        profile["picture"] = user["avatar_url"]
    if user.get("public_email"):
        profile["email"] = user["public_email"]
    if user.get("email"):
        profile["email"] = user["email"]

    return entity


def _collect_entities(users, options):
    entities = []
    for user in users:
        if options.transformer:
            entity = options.transformer.transform(user, default_user_transformer)
        else:
            entity = default_user_transformer(user)
        if entity is not None:
            entities.append(entity)
    return entities


def get_group_members(client, group_id, options=None):
    """
    Read the members of a group. With options.inherited the members of
    ancestor groups are included as well.
    """
    options = options or ReadUsersOptions()
    endpoint = f"/groups/{quote(group_id, safe='')}/members"
    if options.inherited:
        endpoint += "/all"

    members = paginated(
        lambda opts: client.paged_request(endpoint, opts),
        {"blocked": options.blocked, "per_page": PER_PAGE},
    )
    entities = _collect_entities(members, options)
    logger.info("Read %d users from group %s", len(entities), group_id)
    return entities


def get_instance_users(client, options=None):
    """
    Read all active users of a self-managed instance.
    """
    options = options or ReadUsersOptions()
    if not client.is_self_managed():
        raise PreconditionError(
            "Getting all GitLab instance users is only supported for self-managed hosts."
        )

    # blocked is not forwarded here, only the group listing honours it
    users = paginated(
        lambda opts: client.paged_request("/users", opts),
        {"active": True, "per_page": PER_PAGE},
    )
    entities = _collect_entities(users, options)
    logger.info("Read %d users from instance %s", len(entities), client.base_url)
    return entities


def read_users(client, target, options=None):
    """
    Read users from a GitLab target URL: a group URL yields the group's
    members, the instance root yields every instance user.
    """
    options = options or ReadUsersOptions()
    client_host = url_host(client.base_url)
    target_host = url_host(target)
    if client_host != target_host:
        raise ConfigurationError(
            f"The GitLab client ({client_host}) cannot be used for target host ({target_host})."
        )

    group = parse_group_url(target, client.base_url)
    if not group:
        logger.info("Target %s is the instance root, reading instance users", target)
        return get_instance_users(client, options)

    inherited = True if options.inherited is None else options.inherited
    logger.info("Target %s resolves to group %s", target, group)
    return get_group_members(client, group, replace(options, inherited=inherited))
