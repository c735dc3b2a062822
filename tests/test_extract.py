"""Tests for request metadata extraction utilities."""

from siteline.middleware._extract import (
    IP_HEADERS,
    extract_client_ip,
    headers_from_environ,
)


class TestExtractClientIP:
    def test_forwarded_for_single(self):
        assert extract_client_ip({"x-forwarded-for": "192.168.1.1"}) == "192.168.1.1"

    def test_forwarded_for_chain_uses_first(self):
        headers = {"x-forwarded-for": "203.0.113.1, 198.51.100.1"}
        assert extract_client_ip(headers) == "203.0.113.1"

    def test_real_ip(self):
        assert extract_client_ip({"x-real-ip": "203.0.113.2"}) == "203.0.113.2"

    def test_cf_connecting_ip(self):
        assert extract_client_ip({"cf-connecting-ip": "203.0.113.3"}) == "203.0.113.3"

    def test_precedence(self):
        headers = {
            "cf-connecting-ip": "203.0.113.3",
            "x-real-ip": "203.0.113.2",
            "x-forwarded-for": "203.0.113.1",
        }
        assert extract_client_ip(headers) == "203.0.113.1"
        del headers["x-forwarded-for"]
        assert extract_client_ip(headers) == "203.0.113.2"

    def test_case_insensitive(self):
        assert extract_client_ip({"X-Real-IP": "10.0.0.1"}) == "10.0.0.1"

    def test_strips_whitespace(self):
        assert extract_client_ip({"x-forwarded-for": "  10.0.0.1 ,10.0.0.2"}) == "10.0.0.1"

    def test_empty_header_falls_through(self):
        headers = {"x-forwarded-for": " , ", "x-real-ip": "10.0.0.2"}
        assert extract_client_ip(headers) == "10.0.0.2"

    def test_no_headers(self):
        assert extract_client_ip({}) is None

    def test_header_order(self):
        assert IP_HEADERS == ("x-forwarded-for", "x-real-ip", "cf-connecting-ip")


class TestHeadersFromEnviron:
    def test_converts_http_keys(self):
        environ = {
            "HTTP_USER_AGENT": "Mozilla/5.0",
            "HTTP_X_FORWARDED_FOR": "203.0.113.1",
            "REQUEST_METHOD": "GET",
            "CONTENT_TYPE": "text/plain",
        }
        assert headers_from_environ(environ) == {
            "user-agent": "Mozilla/5.0",
            "x-forwarded-for": "203.0.113.1",
        }

    def test_empty(self):
        assert headers_from_environ({}) == {}
