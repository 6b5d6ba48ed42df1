from typing import Any, NamedTuple
from pydantic import BaseModel
from enum import StrEnum


class ApiVersion(StrEnum):
    V1 = "admission.k8s.io/v1"


class Operation(StrEnum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CONNECT = "CONNECT"


class ImageReference(NamedTuple):
    """A container image reference split into its parts.

    An empty registry means "use the default registry" and an empty digest
    means the image is not pinned.
    """

    registry: str
    name: str
    tag: str
    digest: str


# https://kubernetes.io/docs/reference/kubernetes-api/workload-resources/pod-v1/#Container
class Container(BaseModel):
    name: str | None = None
    image: str | None = None


# https://kubernetes.io/docs/reference/kubernetes-api/workload-resources/pod-v1/#PodSpec
class PodSpec(BaseModel):
    containers: list[Container] = []
    initContainers: list[Container] | None = None


class Metadata(BaseModel):
    name: str | None = None
    namespace: str | None = None
    labels: dict[str, str] = {}


class Pod(BaseModel):
    metadata: Metadata | None = None
    spec: PodSpec | None = None


# https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.30/#status-v1-meta
class AdmissionReviewStatus(BaseModel):
    message: str


# https://kubernetes.io/docs/reference/config-api/apiserver-admission.v1/#admission-k8s-io-v1-AdmissionResponse
class AdmissionResponse(BaseModel):
    uid: str
    allowed: bool
    status: AdmissionReviewStatus | None = None


# https://kubernetes.io/docs/reference/config-api/apiserver-admission.v1/#admission-k8s-io-v1-AdmissionRequest
class AdmissionRequest(BaseModel):
    uid: str
    kind: dict[str, Any] | None = None
    resource: dict[str, Any] | None = None
    name: str | None = None
    namespace: str | None = None
    operation: Operation | None = None
    object: Pod | None = None


# https://kubernetes.io/docs/reference/config-api/apiserver-admission.v1/#admission-k8s-io-v1-AdmissionReview
#
# apiVersion and kind are plain strings because they are echoed back
# unchanged, whatever the API server sent.
class AdmissionReview(BaseModel):
    apiVersion: str = ApiVersion.V1
    kind: str = "AdmissionReview"
    request: AdmissionRequest | None = None
    response: AdmissionResponse | None = None
