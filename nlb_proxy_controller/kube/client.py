from typing import Any, Dict, Mapping, Optional
import logging
import os
import kubernetes
from ..annotations import OPERATOR_MARKER_ANNOTATION, MARKER_VALUE

logger = logging.getLogger(__name__)

def running_in_cluster(environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when the service account environment markers are both present."""
    if environ is None:
        environ = os.environ
    return 'KUBERNETES_SERVICE_HOST' in environ and 'KUBERNETES_SERVICE_PORT' in environ

def load_kube_config(environ: Optional[Mapping[str, str]] = None) -> None:
    """
    Load cluster credentials for the kubernetes client.

    Uses the in-cluster service account when running inside a pod, the local
    kubeconfig otherwise.

    Raises:
        kubernetes.config.ConfigException: If no usable credentials are found
    """
    if running_in_cluster(environ):
        logger.info("Loading in-cluster Kubernetes configuration")
        kubernetes.config.load_incluster_config()
    else:
        logger.info("Loading Kubernetes configuration from kubeconfig")
        kubernetes.config.load_kube_config()

def get_core_v1_api() -> kubernetes.client.CoreV1Api:
    return kubernetes.client.CoreV1Api()

def build_marker_patch(enabled: bool) -> Dict[str, Any]:
    """Merge patch that sets or removes the operator marker annotation."""
    return {
        'metadata': {
            'annotations': {
                OPERATOR_MARKER_ANNOTATION: MARKER_VALUE if enabled else None
            }
        }
    }

def annotate_service(core_v1: Any, namespace: str, name: str, enabled: bool) -> None:
    """
    Record the synchronized PROXY protocol state on a Service.

    Only the operator marker annotation is touched; a null value in the
    patch removes the key.

    Args:
        core_v1: Kubernetes CoreV1Api client
        namespace: Namespace of the service
        name: Name of the service
        enabled: True to set the marker, False to remove it

    Raises:
        kubernetes.client.rest.ApiException: If the patch is rejected
    """
    core_v1.patch_namespaced_service(
        name=name,
        namespace=namespace,
        body=build_marker_patch(enabled),
        _content_type='application/merge-patch+json'
    )
    logger.info(f"Service {namespace}/{name} marker annotation {'set' if enabled else 'removed'}")
