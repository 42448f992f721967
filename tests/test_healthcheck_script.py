import pytest
from urllib import error


class _Resp:
    def __init__(self, status):
        self.status = status

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.mark.unit
def test_healthcheck_targets_healthz_and_maps_status(monkeypatch):
    from scripts import healthcheck

    seen = []

    def fake_urlopen(url, timeout):
        seen.append(url)
        return _Resp(200)

    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setattr(healthcheck.request, "urlopen", fake_urlopen)
    assert healthcheck.main() == 0
    assert seen == ["http://127.0.0.1:8080/healthz"]

    monkeypatch.setattr(healthcheck.request, "urlopen", lambda url, timeout: _Resp(503))
    assert healthcheck.main() == 1


@pytest.mark.unit
def test_healthcheck_unreachable_returns_1(monkeypatch):
    from scripts import healthcheck

    def refuse(url, timeout):
        raise error.URLError("refused")

    monkeypatch.setattr(healthcheck.request, "urlopen", refuse)
    assert healthcheck.main() == 1
