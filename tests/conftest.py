import pytest


class FakeGitLabClient:
    """
    Stands in for GitLabService: serves canned pages per endpoint and
    records every paged_request call.
    """

    def __init__(self, base_url="https://gitlab.example.com", pages=None, self_managed=True):
        self.base_url = base_url
        self.pages = pages or {}
        self.self_managed = self_managed
        self.calls = []

    def is_self_managed(self):
        return self.self_managed

    def paged_request(self, endpoint, options=None):
        options = dict(options or {})
        self.calls.append((endpoint, options))
        pages = self.pages.get(endpoint, [[]])
        index = options.get("page") or 1
        next_page = index + 1 if index < len(pages) else None
        return {"items": pages[index - 1], "next_page": next_page}


def make_user(username, **fields):
    user = {
        "id": abs(hash(username)) % 10000,
        "username": username,
        "name": username.title(),
        "web_url": f"https://gitlab.example.com/{username}",
        "bot": False,
    }
    user.update(fields)
    return user


@pytest.fixture
def fake_client():
    return FakeGitLabClient


@pytest.fixture
def user_factory():
    return make_user
