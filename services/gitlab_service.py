# services/gitlab_service.py
import logging

import requests

from utils.constants import REQUEST_TIMEOUT, SAAS_HOST
from utils.helper import url_host

logger = logging.getLogger(__name__)


class GitLabService:
    def __init__(self, gitlab_base, token=None, timeout=REQUEST_TIMEOUT):
        """
        gitlab_base: e.g. https://gitlab.com or https://gitlab.company.com
        token: personal access token (PRIVATE-TOKEN) with read_api scope
        """
        self.base_url = gitlab_base.rstrip('/')
        self.api_base = f"{self.base_url}/api/v4"
        self.host = url_host(self.base_url)
        self.headers = {"PRIVATE-TOKEN": token} if token else {}
        self.timeout = timeout

    def is_self_managed(self):
        return self.host != SAAS_HOST

    def paged_request(self, endpoint, options=None):
        """
        Fetch one page of a listing endpoint.
        Returns {"items": [...], "next_page": int or None}, next_page taken
        from the X-Next-Page header.
        """
        url = f"{self.api_base}{endpoint}"
        params = {}
        for key, value in (options or {}).items():
            # GitLab treats a missing flag as false
            if value is None or value is False:
                continue
            params[key] = str(value).lower() if isinstance(value, bool) else value

        logger.debug("GET %s params=%s", url, params)
        r = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
        r.raise_for_status()

        next_page = r.headers.get("X-Next-Page")
        return {"items": r.json(), "next_page": int(next_page) if next_page else None}
