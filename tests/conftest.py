import httpx
import pytest


@pytest.fixture
def mock_client():
    """Build a client answering each host with the given header list; unknown hosts refuse."""
    clients = []

    def build(headers_by_host):
        def handler(request: httpx.Request) -> httpx.Response:
            headers = headers_by_host.get(request.url.host)
            if headers is None:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, headers=headers)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield build
    for c in clients:
        c.close()


@pytest.fixture
def list_files(tmp_path):
    files = {
        "missing": "# required\nContent-Security-Policy\nX-Frame-Options\n\nStrict-Transport-Security\n",
        "insecure": "Server\nX-Powered-By\n",
        "security": "Content-Security-Policy\nStrict-Transport-Security\nX-Frame-Options\n",
        "fingerprint": "# stack\nServer\nX-Generator\n",
    }
    paths = {}
    for name, text in files.items():
        p = tmp_path / f"{name}.txt"
        p.write_text(text, encoding="utf-8")
        paths[name] = str(p)
    return paths
