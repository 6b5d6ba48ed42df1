import functools
import logging
import pydantic

from flask import Flask, request, jsonify, current_app

from models import (
    BaseModel,
    AdmissionReview,
    AdmissionResponse,
)

from images import log_containers
from metrics import Metrics

LOG = logging.getLogger(__name__)


class DEFAULTS:
    CERT = "/tls/tls.crt"
    KEY = "/tls/tls.key"
    HOST = "0.0.0.0"
    PORT = 8443
    LOG_LEVEL = "INFO"


def jsonresponse():
    """Transforms the response from a view function into a JSON object."""

    def _outer(func):
        @functools.wraps(func)
        def _inner(*args, **kwargs):
            res = func(*args, **kwargs)
            if isinstance(res, BaseModel):
                return jsonify(res.model_dump(exclude_none=True))
            else:
                return jsonify(res)

        return _inner

    return _outer


def review_pod(review: AdmissionReview, metrics: Metrics) -> AdmissionReview:
    """Log the images of the pod in an admission review and allow it.

    A review without a request is answered with an empty envelope. Missing
    object, spec or container lists mean there is nothing to log.
    """
    metrics.requests_total.inc()

    req = review.request
    if req is None:
        return AdmissionReview(apiVersion=review.apiVersion, kind=review.kind)

    LOG.debug("reviewing %s request %s", req.operation, req.uid)

    pod = req.object
    if pod is not None and pod.spec is not None:
        log_containers(pod.spec.containers, "container")
        if pod.spec.initContainers is not None:
            log_containers(pod.spec.initContainers, "init container")

    return AdmissionReview(
        apiVersion=review.apiVersion,
        kind=review.kind,
        response=AdmissionResponse(uid=req.uid, allowed=True),
    )


@jsonresponse()
def admission():
    metrics = current_app.metrics
    with metrics.request_duration.time():
        body = AdmissionReview.model_validate(request.get_json())
        return review_pod(body, metrics)


def export_metrics():
    body, content_type = current_app.metrics.exposition()
    return body, 200, {"content-type": content_type}


def handle_validationerror(err):
    return str(err), 400, {"content-type": "text/plain"}


def health():
    return "OK", 200, {"content-type": "text/plain"}


def port_number(val):
    """Return val as a TCP port, or the default port if it is not one."""
    try:
        port = None if isinstance(val, bool) else int(val)
    except (TypeError, ValueError):
        port = None

    if port is None or not 0 < port < 65536:
        LOG.warning("invalid port %r, using %d", val, DEFAULTS.PORT)
        return DEFAULTS.PORT

    return port


def create_app(**config) -> Flask:
    """Use an application factory [1] to create the Flask app.

    Configuration comes from DEFAULTS, then from WEBHOOK_* environment
    variables, then from keyword arguments.

    [1]: https://flask.palletsprojects.com/en/3.0.x/patterns/appfactories/
    """

    app = Flask(__name__)
    app.config.from_object(DEFAULTS)
    app.config.from_prefixed_env("WEBHOOK")
    if config:
        app.config.update(config)

    app.config["PORT"] = port_number(app.config["PORT"])
    app.metrics = Metrics()

    app.errorhandler(pydantic.ValidationError)(handle_validationerror)
    app.add_url_rule("/healthz", view_func=health)
    app.add_url_rule("/admission", view_func=admission, methods=["POST"])
    app.add_url_rule("/metrics", view_func=export_metrics, methods=["GET", "POST"])

    return app
