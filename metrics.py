from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


class Metrics:
    """Prometheus metrics shared by every request an application serves.

    Each instance owns its own registry, so separate applications (and
    separate tests) never see each other's counts.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        self.requests_total = Counter(
            "requests_total",
            "Total requests",
            registry=self.registry,
        )

        self.request_duration = Histogram(
            "admission_request_duration_seconds",
            "Admission webhook request latency",
            registry=self.registry,
        )

    def exposition(self) -> tuple[bytes, str]:
        return generate_latest(self.registry), CONTENT_TYPE_LATEST
