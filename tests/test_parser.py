"""Tests for splitting and validating URI references."""

import pytest

from rdfuri.errors import ErrorKind, MalformedURIError
from rdfuri.parser import (
    URIParts,
    parse_reference,
    scheme_end,
    split_authority,
    validate_parts,
)


class TestSchemeDetection:
    """Test where a scheme is recognised."""

    def test_scheme_before_delimiters(self):
        """The colon must come before '/', '?' and '#'."""
        assert scheme_end("http://a") == 4
        assert scheme_end("a/b:c") == -1
        assert scheme_end("a?b:c") == -1
        assert scheme_end("a#b:c") == -1

    def test_short_schemes_are_not_schemes(self):
        """A leading colon or a drive letter is not a scheme."""
        assert scheme_end("://x") == -1
        assert scheme_end("C:/temp") == -1
        assert scheme_end("ab:c") == 2

    def test_no_colon(self):
        """Relative references have no scheme."""
        assert scheme_end("../g") == -1


class TestSplitAuthority:
    """Test authority sub-parsing."""

    def test_full_authority(self):
        """Userinfo, host and port."""
        assert split_authority("joe:pw@example.org:8080") == (
            "joe:pw",
            "example.org",
            8080,
        )

    def test_host_only(self):
        """No userinfo and no port."""
        assert split_authority("example.org") == (None, "example.org", -1)

    def test_empty_port(self):
        """A colon without digits leaves the port unset."""
        assert split_authority("example.org:") == (None, "example.org", -1)

    def test_non_digit_port(self):
        """Port digits are checked while splitting."""
        with pytest.raises(MalformedURIError) as excinfo:
            split_authority("a:abc")
        assert excinfo.value.kind == ErrorKind.INVALID_PORT
        assert excinfo.value.value == "abc"


class TestParseReference:
    """Test parsing complete references."""

    def test_all_components(self):
        """Every component of a hierarchical URI."""
        parts = parse_reference("http://joe@example.org:8080/a/b;p?x=1&y=2#frag")
        assert parts == URIParts(
            scheme="http",
            userinfo="joe",
            host="example.org",
            port=8080,
            path="/a/b;p",
            query="x=1&y=2",
            fragment="frag",
        )
        assert parts.is_hierarchical

    def test_empty_authority(self):
        """'//' alone still makes the URI hierarchical."""
        parts = parse_reference("file:///etc/hosts")
        assert parts.host == ""
        assert parts.path == "/etc/hosts"
        assert parts.is_hierarchical

    def test_empty_query_and_fragment(self):
        """A bare '?' or '#' gives empty strings, not None."""
        parts = parse_reference("http://a/?#")
        assert parts.query == ""
        assert parts.fragment == ""

    def test_absent_query_and_fragment(self):
        """No delimiter gives None."""
        parts = parse_reference("http://a/b")
        assert parts.query is None
        assert parts.fragment is None

    def test_fragment_without_query(self):
        """'#' before any '?' starts the fragment."""
        parts = parse_reference("http://a/b#c?d")
        assert parts.query is None
        assert parts.fragment == "c?d"

    def test_opaque(self):
        """No '//' keeps everything up to '#' as the opaque path."""
        parts = parse_reference("mailto:joe@example.org?subject=hi#x")
        assert parts.host is None
        assert parts.path == "joe@example.org?subject=hi"
        assert parts.query is None
        assert parts.fragment == "x"
        assert not parts.is_hierarchical

    def test_relative_reference(self):
        """References without a scheme parse on their own."""
        parts = parse_reference("../g?y#s")
        assert parts.scheme is None
        assert parts.path == "../g"
        assert parts.query == "y"
        assert parts.fragment == "s"

    def test_network_path_reference(self):
        """A leading '//' is an authority even without a scheme."""
        parts = parse_reference("//g/x")
        assert parts.scheme is None
        assert parts.host == "g"
        assert parts.path == "/x"

    def test_empty_reference(self):
        """'', '?y' and '#s' refer to the current document."""
        assert parse_reference("").is_empty_reference
        assert parse_reference("?y").is_empty_reference
        assert parse_reference("#s").is_empty_reference
        assert not parse_reference("g").is_empty_reference


class TestParseErrors:
    """Test that malformed references are rejected with the right kind."""

    @pytest.mark.parametrize(
        "reference,kind,component",
        [
            ("http://a:abc/", ErrorKind.INVALID_PORT, "port"),
            ("http://a:70000/", ErrorKind.INVALID_PORT, "port"),
            ("http://a/%2", ErrorKind.INVALID_ESCAPE_SEQUENCE, "path"),
            ("http://a/?q=%zz", ErrorKind.INVALID_ESCAPE_SEQUENCE, "query"),
            ("http://a/#%g1", ErrorKind.INVALID_ESCAPE_SEQUENCE, "fragment"),
            ("http://u%4@a/", ErrorKind.INVALID_ESCAPE_SEQUENCE, "userinfo"),
            ("http://a/b[1]", ErrorKind.INVALID_PATH_CHARACTER, "path"),
            ("http://a/b#c#d", ErrorKind.INVALID_FRAGMENT_CHARACTER, "fragment"),
            ("http://us[er@a/", ErrorKind.INVALID_USERINFO, "userinfo"),
            ("http://a@b@c/", ErrorKind.INVALID_USERINFO, "userinfo"),
            ("http://-a.org/", ErrorKind.INVALID_HOST, "host"),
            ("http://a_b/", ErrorKind.INVALID_HOST, "host"),
            ("http://1.2.3/", ErrorKind.INVALID_HOST, "host"),
            ("1http://a/", ErrorKind.INVALID_SCHEME_NAME, "scheme"),
            ("ht_tp://a/", ErrorKind.INVALID_SCHEME_NAME, "scheme"),
            ("http:", ErrorKind.INVALID_SCHEME_NAME, "scheme"),
        ],
    )
    def test_rejected(self, reference, kind, component):
        """Each malformed reference names its kind and component."""
        with pytest.raises(MalformedURIError) as excinfo:
            parse_reference(reference)
        assert excinfo.value.kind == kind
        assert excinfo.value.component == component

    def test_error_is_value_error(self):
        """MalformedURIError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_reference("http://a/%")


class TestValidateParts:
    """Test the component combination rules."""

    def test_userinfo_requires_host(self):
        """Userinfo without host is an illegal combination."""
        with pytest.raises(MalformedURIError) as excinfo:
            validate_parts(URIParts(scheme="http", userinfo="u", path="/"))
        assert excinfo.value.kind == ErrorKind.ILLEGAL_COMPONENT_COMBINATION

    def test_port_requires_host(self):
        """Port without host is an illegal combination."""
        with pytest.raises(MalformedURIError) as excinfo:
            validate_parts(URIParts(scheme="http", port=80, path="/"))
        assert excinfo.value.kind == ErrorKind.ILLEGAL_COMPONENT_COMBINATION

    def test_query_requires_hierarchical(self):
        """An opaque URI has no query component."""
        with pytest.raises(MalformedURIError) as excinfo:
            validate_parts(URIParts(scheme="urn", path="x", query="q"))
        assert excinfo.value.kind == ErrorKind.ILLEGAL_COMPONENT_COMBINATION

    def test_query_requires_path(self):
        """Query needs a path, even an empty one."""
        with pytest.raises(MalformedURIError) as excinfo:
            validate_parts(URIParts(scheme="http", host="a", query="q"))
        assert excinfo.value.kind == ErrorKind.ILLEGAL_COMPONENT_COMBINATION

    def test_fragment_requires_path(self):
        """Fragment needs a path, even an empty one."""
        with pytest.raises(MalformedURIError) as excinfo:
            validate_parts(URIParts(scheme="http", host="a", fragment="f"))
        assert excinfo.value.kind == ErrorKind.ILLEGAL_COMPONENT_COMBINATION

    def test_opaque_fragment_allowed(self):
        """Fragments apply to opaque URIs too."""
        parts = URIParts(scheme="urn", path="isbn:0451450523", fragment="p1")
        assert validate_parts(parts) is parts

    def test_authority_path_must_be_absolute(self):
        """'http://a' followed by 'b' would read back as host 'ab'."""
        with pytest.raises(MalformedURIError) as excinfo:
            validate_parts(URIParts(scheme="http", host="a", path="b"))
        assert excinfo.value.kind == ErrorKind.ILLEGAL_COMPONENT_COMBINATION

    def test_query_character(self):
        """'#' is not allowed inside a query."""
        with pytest.raises(MalformedURIError) as excinfo:
            validate_parts(URIParts(scheme="http", host="a", path="/", query="a#b"))
        assert excinfo.value.kind == ErrorKind.INVALID_QUERY_CHARACTER

    def test_port_range(self):
        """Ports above 65535 are rejected."""
        with pytest.raises(MalformedURIError) as excinfo:
            validate_parts(URIParts(scheme="http", host="a", port=65536, path="/"))
        assert excinfo.value.kind == ErrorKind.INVALID_PORT
