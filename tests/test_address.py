from blocker.address import INVALID, normalize_address


def test_canonical_address_is_unchanged():
    assert normalize_address("203.0.113.25") == "203.0.113.25"
    assert normalize_address(normalize_address("203.0.113.25")) == "203.0.113.25"


def test_csv_remainder_is_dropped():
    assert normalize_address("203.0.113.25,extra") == "203.0.113.25"
    assert normalize_address('"203.0.113.25","ssh"') == "203.0.113.25"


def test_quotes_and_whitespace_are_stripped():
    assert normalize_address('"198.51.100.7"') == "198.51.100.7"
    assert normalize_address("  198.51.100.7 \n") == "198.51.100.7"
    assert normalize_address('" 198.51.100.7 ",x') == "198.51.100.7"


def test_ipv6_is_canonicalized():
    assert normalize_address("2001:0DB8:0000:0000:0000:0000:0000:0001") == "2001:db8::1"
    assert normalize_address("2001:db8::1") == "2001:db8::1"


def test_invalid_tokens():
    for token in ("not-an-ip", "", "   ", "999.1.1.1", "203.0.113", ",203.0.113.25", None, 42):
        assert normalize_address(token) == INVALID


def test_ipv4_mapped_ipv6_becomes_ipv4():
    assert normalize_address("::ffff:192.168.1.50") == "192.168.1.50"
    assert normalize_address("::FFFF:8.8.8.8") == "8.8.8.8"
    assert normalize_address("::ffff:c0a8:132") == "192.168.1.50"
    # plain IPv6 is left alone
    assert normalize_address("::1") == "::1"
