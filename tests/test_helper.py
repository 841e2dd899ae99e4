import pytest

from services.users import default_user_transformer
from utils.exceptions import ConfigurationError
from utils.helper import entity_rows, paginated, parse_group_url, url_host


def test_paginated_follows_next_page():
    pages = {None: ([1, 2], 2), 2: ([3], 3), 3: ([4], None)}
    seen = []

    def request(options):
        seen.append(options)
        items, next_page = pages[options.get("page")]
        return {"items": items, "next_page": next_page}

    initial = {"per_page": 2}
    assert list(paginated(request, initial)) == [1, 2, 3, 4]
    assert [o.get("page") for o in seen] == [None, 2, 3]
    assert initial == {"per_page": 2}


def test_paginated_is_lazy():
    calls = []

    def request(options):
        calls.append(options.get("page"))
        return {"items": ["a", "b"], "next_page": (options.get("page") or 1) + 1}

    items = paginated(request, {})
    assert next(items) == "a"
    assert next(items) == "b"
    assert calls == [None]
    assert next(items) == "a"
    assert calls == [None, 2]


def test_paginated_empty_page():
    assert list(paginated(lambda opts: {"items": [], "next_page": None}, None)) == []


@pytest.mark.parametrize("url, expected", [
    ("https://gitlab.example.com", "gitlab.example.com"),
    ("https://GitLab.Example.com/groups/a", "gitlab.example.com"),
    ("http://gitlab.example.com:8080/a", "gitlab.example.com:8080"),
    ("https://gitlab.example.com:443/a", "gitlab.example.com"),
    ("http://gitlab.example.com:80", "gitlab.example.com"),
    ("http://gitlab.example.com:443", "gitlab.example.com:443"),
])
def test_url_host(url, expected):
    assert url_host(url) == expected


@pytest.mark.parametrize("url, base_url, expected", [
    ("https://gitlab.example.com/groups/myteam", "https://gitlab.example.com", "myteam"),
    ("https://gitlab.example.com/myteam", "https://gitlab.example.com", "myteam"),
    ("https://gitlab.example.com/groups/a/b/c", "https://gitlab.example.com", "a/b/c"),
    ("https://gitlab.example.com/a/b/-/group_members", "https://gitlab.example.com", "a/b"),
    ("https://gitlab.example.com/gitlab/groups/a", "https://gitlab.example.com/gitlab", "a"),
    ("https://gitlab.example.com/groups/a", None, "a"),
])
def test_parse_group_url(url, base_url, expected):
    assert parse_group_url(url, base_url) == expected


@pytest.mark.parametrize("url", [
    "https://gitlab.example.com",
    "https://gitlab.example.com/",
    "https://gitlab.example.com/groups/",
])
def test_parse_group_url_instance_root(url):
    assert parse_group_url(url, "https://gitlab.example.com") is None


def test_parse_group_url_outside_base_path():
    with pytest.raises(ConfigurationError):
        parse_group_url("https://gitlab.example.com/other/a", "https://gitlab.example.com/gitlab")


def test_parse_group_url_dash_without_group():
    with pytest.raises(ConfigurationError):
        parse_group_url("https://gitlab.example.com/-/profile", "https://gitlab.example.com")


def test_entity_rows():
    entity = default_user_transformer({
        "username": "jdoe",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "web_url": "https://gitlab.example.com/jdoe",
    })
    assert entity_rows([entity]) == [{
        "name": "jdoe",
        "display_name": "Jane Doe",
        "email": "jane@example.com",
        "picture": None,
        "location": "https://gitlab.example.com/jdoe",
    }]
