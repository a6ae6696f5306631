import httpx

from header_checker import FAILED_TO_CONNECT, analyze_headers, classify_headers

MISSING = frozenset({"content-security-policy", "x-frame-options"})
INSECURE = frozenset({"server", "x-powered-by"})
SECURITY = frozenset({"content-security-policy", "x-frame-options", "strict-transport-security"})
FINGERPRINT = frozenset({"server", "x-generator"})


def analyze(domain, client):
    return analyze_headers(domain, MISSING, INSECURE, SECURITY, FINGERPRINT, client=client)


def test_only_csp_reports_frame_options_missing(mock_client):
    client = mock_client({"example.com": [("Content-Security-Policy", "default-src 'self'")]})
    res = analyze("example.com", client)
    assert res.domain == "example.com"
    assert res.missing == ["x-frame-options"]
    assert res.security == ["Content-Security-Policy"]
    assert res.insecure == []
    assert res.fingerprint == []


def test_matching_is_case_insensitive(mock_client):
    client = mock_client({"example.com": [
        ("x-frame-options", "DENY"),
        ("CONTENT-SECURITY-POLICY", "default-src 'none'"),
    ]})
    res = analyze("example.com", client)
    assert res.missing == []
    assert res.security == ["x-frame-options", "CONTENT-SECURITY-POLICY"]


def test_header_can_land_in_several_categories(mock_client):
    client = mock_client({"example.com": [("Server", "nginx"), ("X-Powered-By", "PHP/8.2")]})
    res = analyze("example.com", client)
    assert res.insecure == ["Server", "X-Powered-By"]
    assert res.fingerprint == ["Server"]
    assert res.missing == ["content-security-policy", "x-frame-options"]


def test_unlisted_headers_are_ignored(mock_client):
    client = mock_client({"example.com": [("Content-Type", "text/html"), ("X-Custom", "1")]})
    res = analyze("example.com", client)
    assert res.insecure == res.security == res.fingerprint == []
    # only headers from the required list are ever reported missing
    assert set(res.missing) == MISSING


def test_repeated_header_reported_once(mock_client):
    client = mock_client({"example.com": [("Set-Cookie", "a=1"), ("Server", "a"), ("server", "b")]})
    res = analyze("example.com", client)
    assert res.insecure == ["Server"]


def test_requests_https_root(mock_client):
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        analyze("sub.example.com", client)
    assert seen == ["https://sub.example.com"] or seen == ["https://sub.example.com/"]


def test_connection_failure_is_a_result(mock_client):
    client = mock_client({})
    res = analyze("down.example.com", client)
    assert res.missing == [FAILED_TO_CONNECT]
    assert res.insecure == res.security == res.fingerprint == []
    assert not res.connected


def test_timeout_is_a_result():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        res = analyze("slow.example.com", client)
    assert res.missing == [FAILED_TO_CONNECT]


def test_classify_headers_is_pure():
    res = classify_headers("example.com", ["Server", "X-Frame-Options", "X-Generator"],
                           MISSING, INSECURE, SECURITY, FINGERPRINT)
    assert res.missing == ["content-security-policy"]
    assert res.insecure == ["Server"]
    assert res.security == ["X-Frame-Options"]
    assert res.fingerprint == ["Server", "X-Generator"]
    assert res.connected


def test_missing_is_sorted():
    required = frozenset({"x-frame-options", "content-security-policy", "referrer-policy"})
    res = classify_headers("example.com", [], required, INSECURE, SECURITY, FINGERPRINT)
    assert res.missing == ["content-security-policy", "referrer-policy", "x-frame-options"]
