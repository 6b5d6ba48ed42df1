"""Parse container image references and log them.

Image references have the conventional form
``[registry/][path/]name[:tag][@digest]``. Parsing is purely textual: nothing
is validated against a real registry.
"""

import logging
from collections.abc import Iterable

from models import Container, ImageReference

LOG = logging.getLogger(__name__)

DEFAULT_TAG = "latest"


def parse_image(image: str) -> ImageReference:
    """Split an image reference into registry, name, tag and digest.

    The tag is taken from the last colon in whatever remains after the digest
    is removed, before the registry is split off. A registry with a port but
    no tag (``myregistry:5000/app``) therefore yields the port as part of the
    tag and an empty registry.
    """
    digest = ""
    tag = DEFAULT_TAG

    working, at, rest = image.partition("@")
    if at:
        digest = rest

    head, colon, rest = working.rpartition(":")
    if colon:
        tag = rest
        working = head

    parts = working.split("/")
    if len(parts) > 1 and ("." in parts[0] or ":" in parts[0]):
        return ImageReference(parts[0], "/".join(parts[1:]), tag, digest)

    return ImageReference("", working, tag, digest)


def log_containers(containers: Iterable[Container], kind: str) -> None:
    """Emit one structured record per container that has an image."""
    for container in containers:
        if container.image is None:
            continue

        ref = parse_image(container.image)
        LOG.info(
            "container image info",
            extra={"image": {"kind": kind, **ref._asdict()}},
        )
