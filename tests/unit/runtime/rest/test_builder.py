"""Unit tests for request building."""

from laakhay.paging.models import RequestDescriptor
from laakhay.paging.runtime.rest.builder import build_request, join_url


class TestBuildRequest:
    """Test build_request."""

    def test_get_uses_query(self):
        """Test GET carries params as query."""
        descriptor = RequestDescriptor(url="/items", params=("page=2", "q=a b"), secret_ctx="s")
        request = build_request(descriptor, token=3, base_url="https://api.example.com")
        assert request.token == 3
        assert request.method == "GET"
        assert request.url == "https://api.example.com/items"
        assert request.query == [("page", "2"), ("q", "a b")]
        assert request.form is None
        assert "secret_ctx" not in request.describe()

    def test_post_uses_form(self):
        """Test POST carries params as form fields."""
        descriptor = RequestDescriptor(url="https://x/search", params=("q=abc",))
        request = build_request(descriptor, token=1, method="post")
        assert request.method == "POST"
        assert request.query == []
        assert request.form == [("q", "abc")]

    def test_describe(self):
        """Test the traced request description."""
        descriptor = RequestDescriptor(url="https://x", params=("a=1", "flag"))
        assert build_request(descriptor, token=1).describe() == "GET https://x?a=1&flag"
        assert build_request(RequestDescriptor(url="https://x"), token=1).describe() == "GET https://x"


class TestJoinUrl:
    """Test join_url."""

    def test_relative(self):
        """Test relative path under a base URL."""
        assert join_url("https://h/api/", "/v1/x") == "https://h/api/v1/x"

    def test_absolute_wins(self):
        """Test absolute URL ignores the base."""
        assert join_url("https://h", "http://other/x") == "http://other/x"

    def test_no_base(self):
        """Test without a base URL."""
        assert join_url(None, "/x") == "/x"
