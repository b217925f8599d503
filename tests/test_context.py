"""
Test suite for RequestContext construction from framework requests.
"""

from sslguard.context import RequestContext, RouteParams, strip_default_port


class TestRequestContext:
    """Test the RequestContext value."""

    def test_full_path_without_query(self):
        context = RequestContext(is_secure=False, host="example.com", path="/users")
        assert context.full_path == "/users"

    def test_full_path_with_query(self):
        context = RequestContext(is_secure=False, host="example.com", path="/users", query_string="page=2")
        assert context.full_path == "/users?page=2"

    def test_url_for_scheme(self):
        context = RequestContext(is_secure=False, host="example.com", path="/users/login")
        assert context.url_for_scheme("https") == "https://example.com/users/login"

    def test_route_params_defaults(self):
        assert RouteParams() == RouteParams(controller=None, action=None, prefix=None)


class TestFromRequest:
    """Test RequestContext.from_request."""

    def test_plain_request(self, make_request):
        request = make_request("/users/login", headers={"Host": "example.com"})
        context = RequestContext.from_request(request)
        assert context == RequestContext(is_secure=False, host="example.com", path="/users/login")

    def test_https_scheme(self, make_request):
        request = make_request("/", scheme="https", headers={"Host": "example.com"})
        assert RequestContext.from_request(request).is_secure is True

    def test_query_string(self, make_request):
        request = make_request("/search", query_string=b"q=tls", headers={"Host": "example.com"})
        assert RequestContext.from_request(request).full_path == "/search?q=tls"

    def test_encoded_path(self, make_request):
        request = make_request(
            "/users/a b/x/y", raw_path=b"/users/a%20b/x%2Fy", headers={"Host": "example.com"}
        )
        assert RequestContext.from_request(request).path == "/users/a%20b/x%2Fy"

    def test_decoded_path_without_raw_path(self, make_request):
        request = make_request("/users/login", headers={"Host": "example.com"})
        assert RequestContext.from_request(request).path == "/users/login"

    def test_mount_point_prepended(self, make_request):
        request = make_request("/users/login", root_path="/shop", headers={"Host": "example.com"})
        assert RequestContext.from_request(request).full_path == "/shop/users/login"

    def test_mount_point_already_in_path(self, make_request):
        request = make_request(
            "/shop/users/login",
            raw_path=b"/shop/users/login",
            root_path="/shop",
            headers={"Host": "example.com"},
        )
        assert RequestContext.from_request(request).full_path == "/shop/users/login"

    def test_mount_point_is_a_whole_segment(self, make_request):
        request = make_request("/shopping", root_path="/shop", headers={"Host": "example.com"})
        assert RequestContext.from_request(request).full_path == "/shop/shopping"

    def test_latin1_query_string(self, make_request):
        request = make_request("/search", query_string=b"q=\xe9", headers={"Host": "example.com"})
        assert RequestContext.from_request(request).full_path == "/search?q=\xe9"

    def test_forwarded_headers_ignored_by_default(self, make_request):
        request = make_request(
            "/",
            headers={"Host": "internal", "X-Forwarded-Proto": "https", "X-Forwarded-Host": "example.com"},
        )
        context = RequestContext.from_request(request)
        assert context.is_secure is False
        assert context.host == "internal"

    def test_trusted_forwarded_proto(self, make_request):
        request = make_request(
            "/",
            headers={"Host": "internal", "X-Forwarded-Proto": "https, http", "X-Forwarded-Host": "example.com"},
        )
        context = RequestContext.from_request(request, trust_forwarded_headers=True)
        assert context.is_secure is True
        assert context.host == "example.com"

    def test_trusted_forwarded_ssl(self, make_request):
        request = make_request("/", headers={"Host": "example.com", "X-Forwarded-Ssl": "on"})
        assert RequestContext.from_request(request, trust_forwarded_headers=True).is_secure is True

    def test_server_name_overrides_host(self, make_request):
        request = make_request("/", headers={"Host": "10.0.0.5:8000"})
        context = RequestContext.from_request(request, server_name="www.example.com")
        assert context.host == "www.example.com"

    def test_falls_back_to_server_socket(self, make_request):
        request = make_request("/", server=("example.com", 8080))
        assert RequestContext.from_request(request).host == "example.com:8080"

    def test_default_server_port_is_stripped(self, make_request):
        request = make_request("/", server=("example.com", 80))
        assert RequestContext.from_request(request).host == "example.com"

    def test_no_host_information(self, make_request):
        request = make_request("/", server=None)
        assert RequestContext.from_request(request).host == ""


class TestStripDefaultPort:
    """Test default port removal."""

    def test_strips_http_and_https_ports(self):
        assert strip_default_port("example.com:80") == "example.com"
        assert strip_default_port("example.com:443") == "example.com"

    def test_keeps_other_ports(self):
        assert strip_default_port("example.com:8080") == "example.com:8080"

    def test_without_port(self):
        assert strip_default_port("example.com") == "example.com"
        assert strip_default_port("") == ""

    def test_ipv6(self):
        assert strip_default_port("[::1]:443") == "[::1]"
        assert strip_default_port("[::1]") == "[::1]"
