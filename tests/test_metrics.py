import pytest

from metrics import Metrics


def test_metrics_are_per_instance():
    first = Metrics()
    second = Metrics()

    first.requests_total.inc()

    assert first.registry.get_sample_value("requests_total") == 1
    assert second.registry.get_sample_value("requests_total") == 0


def test_exposition():
    metrics = Metrics()
    metrics.requests_total.inc(3)

    body, content_type = metrics.exposition()

    assert content_type.startswith("text/plain")
    assert b"# HELP requests_total Total requests" in body
    assert b"requests_total 3.0" in body


@pytest.mark.parametrize("method", ["get", "post"])
def test_metrics_endpoint(client, method):
    client.post("/admission", json={"request": {"uid": "1"}})
    client.post("/admission", json={})

    res = getattr(client, method)("/metrics")

    assert res.status_code == 200
    assert res.content_type.startswith("text/plain")
    assert "requests_total 2.0" in res.text
    assert "admission_request_duration_seconds_count 2.0" in res.text
