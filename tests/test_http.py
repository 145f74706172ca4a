"""Tests for urlschema.http (request context and yarl URL glue)."""

import enum

import pytest
from yarl import URL

from urlschema import (
    DecodingError,
    DynamicPath,
    EncodingStrategy,
    NoValueError,
    Query,
    Record,
    StaticPath,
    URLParseError,
)
from urlschema.http import (
    HttpRequest,
    decode_request,
    decode_url,
    encode_url,
    route_template,
    split_url,
)


class RepoType(enum.Enum):
    ALL = "all"
    OWNER = "owner"


class ListUserRepos(Record):
    users = StaticPath()
    user_name = DynamicPath(str)
    repos = StaticPath()
    type = Query(RepoType | None)
    per_page = Query(int, default=30)


class GetUser(Record):
    users = StaticPath()
    id = DynamicPath(int)
    active = Query(bool, placeholder="true")


class TestHttpRequest:
    def test_splits_path_and_query(self) -> None:
        request = HttpRequest("GET", "/users/kate/repos?type=all&per_page=50")
        assert request.path == "/users/kate/repos"
        assert request.path_components == ("users", "kate", "repos")
        assert request.query_params == {"type": "all", "per_page": "50"}

    def test_percent_decoding(self) -> None:
        request = HttpRequest(raw_path="/users/kate%20b/repos?q=a%26b&name=x+y")
        assert request.path_components == ("users", "kate b", "repos")
        assert request.query_param("q") == "a&b"
        assert request.query_param("name") == "x y"

    def test_empty_segments_dropped(self) -> None:
        assert HttpRequest(raw_path="//users///kate/").path_components == ("users", "kate")
        assert HttpRequest().path_components == ()

    def test_repeated_key_last_wins(self) -> None:
        request = HttpRequest(raw_path="/?k=1&k=2")
        assert request.query_param("k") == "2"

    def test_flag_without_value(self) -> None:
        assert HttpRequest(raw_path="/?flag").query_param("flag") == ""

    def test_headers_case_insensitive(self) -> None:
        request = HttpRequest(headers={"Content-Type": "text/plain"})
        assert request.header("content-type") == "text/plain"
        assert request.header("CONTENT-TYPE") == "text/plain"
        assert request.header("accept") is None

    def test_decode_request(self) -> None:
        request = HttpRequest("GET", "/users/kate/repos?type=owner")
        record = decode_request(ListUserRepos, request)
        assert record.user_name == "kate"
        assert record.type is RepoType.OWNER
        assert record.per_page == 30

    def test_decode_request_rejects(self) -> None:
        with pytest.raises(DecodingError):
            decode_request(GetUser, HttpRequest(raw_path="/users/x?active=true"))


class TestSplitUrl:
    def test_absolute_url(self) -> None:
        path, lookup = split_url("https://api.example.com/users/kate/repos?type=all")
        assert path == ("users", "kate", "repos")
        assert lookup("type") == "all"
        assert lookup("missing") is None

    def test_relative_url(self) -> None:
        path, lookup = split_url("/users/5?active=false")
        assert path == ("users", "5")
        assert lookup("active") == "false"

    def test_decodes_and_drops_empty_segments(self) -> None:
        path, _ = split_url(URL("https://example.com/users/kate%20b/"))
        assert path == ("users", "kate b")

    def test_root_only(self) -> None:
        path, _ = split_url("https://example.com/")
        assert path == ()

    def test_repeated_key_last_wins(self) -> None:
        _, lookup = split_url("https://example.com/?k=1&k=2")
        assert lookup("k") == "2"

    def test_not_a_url(self) -> None:
        with pytest.raises(URLParseError):
            split_url(42)


class TestDecodeUrl:
    def test_decode(self) -> None:
        record = decode_url(GetUser, "https://example.com/users/7?active=true")
        assert record.id == 7
        assert record.active is True

    def test_missing_query(self) -> None:
        with pytest.raises(NoValueError):
            decode_url(GetUser, "https://example.com/users/7")


class TestEncodeUrl:
    def test_embed_value(self) -> None:
        record = ListUserRepos(user_name="kate", type=RepoType.ALL)
        url = encode_url(record, "https://api.example.com")
        assert url.host == "api.example.com"
        assert url.path == "/users/kate/repos"
        assert dict(url.query) == {"type": "all", "per_page": "30"}

    def test_replaces_base_path_and_query(self) -> None:
        record = GetUser(id=3, active=False)
        url = encode_url(record, URL("https://example.com/old/path?x=1"))
        assert url.path == "/users/3"
        assert dict(url.query) == {"active": "false"}

    def test_percent_encodes_segments(self) -> None:
        record = ListUserRepos(user_name="kate b/c")
        url = encode_url(record, "https://example.com")
        assert url.raw_path == "/users/kate%20b%2Fc/repos"

    def test_round_trip(self) -> None:
        record = ListUserRepos(user_name="kåte b", type=RepoType.OWNER, per_page=5)
        url = encode_url(record, "https://example.com")
        assert decode_url(ListUserRepos, url) == ListUserRepos.decode(
            ["users", "kåte b", "repos"], {"type": "owner", "per_page": "5"}
        )

    def test_placeholder_strategy(self) -> None:
        url = encode_url(GetUser(), "https://example.com", EncodingStrategy.PLACEHOLDER)
        assert url.path == "/users/:id"
        assert dict(url.query) == {"active": "true"}

    def test_relative_base_rejected(self) -> None:
        with pytest.raises(URLParseError, match="absolute"):
            encode_url(GetUser(id=1, active=True), "/api")

    def test_unset_field(self) -> None:
        with pytest.raises(NoValueError):
            encode_url(GetUser(active=True), "https://example.com")


class TestRouteTemplate:
    def test_path_and_query(self) -> None:
        assert route_template(GetUser) == "/users/:id?active=true"

    def test_prefix(self) -> None:
        assert (
            route_template(ListUserRepos, prefix="/api/")
            == "/api/users/:user_name/repos?type=:type&per_page=:per_page"
        )

    def test_path_only(self) -> None:
        class Health(Record):
            health = StaticPath()

        assert route_template(Health) == "/health"
