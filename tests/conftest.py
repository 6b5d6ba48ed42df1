import pytest

import webhook


@pytest.fixture()
def app():
    app = webhook.create_app(TESTING=True)
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def metrics(app):
    return app.metrics


@pytest.fixture()
def requests_total(metrics):
    def _requests_total():
        return metrics.registry.get_sample_value("requests_total")

    return _requests_total
