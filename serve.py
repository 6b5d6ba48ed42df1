import logging
import os
import ssl
import sys

from exc import ConfigurationError
from logformat import configure_logging
from webhook import create_app

LOG = logging.getLogger(__name__)


def load_tls_context(cert, key) -> ssl.SSLContext:
    """Build a server TLS context from PEM certificate and key files.

    Every problem found is reported in a single ConfigurationError.
    """
    errors = []
    for label, path in (("certificate", cert), ("key", key)):
        if not os.path.isfile(path):
            errors.append(f"{label} file {path} does not exist")

    if errors:
        raise ConfigurationError("; ".join(errors))

    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    try:
        context.load_cert_chain(certfile=cert, keyfile=key)
    except (OSError, ssl.SSLError) as err:
        raise ConfigurationError(
            f"unable to load certificate {cert} with key {key}: {err}"
        ) from err

    return context


def main():
    app = create_app()
    configure_logging(app.config["LOG_LEVEL"])

    try:
        context = load_tls_context(app.config["CERT"], app.config["KEY"])
    except ConfigurationError as err:
        LOG.error("failed to configure TLS: %s", err)
        sys.exit(1)

    LOG.info("listening on %s:%d", app.config["HOST"], app.config["PORT"])
    try:
        app.run(
            host=app.config["HOST"],
            port=app.config["PORT"],
            ssl_context=context,
            threaded=True,
        )
    except OSError as err:
        LOG.error("failed to listen on port %d: %s", app.config["PORT"], err)
        sys.exit(1)


if __name__ == "__main__":
    main()
