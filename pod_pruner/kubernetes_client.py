"""
Kubernetes API access for Pod Pruner
"""

import os
from typing import Optional

from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from .exceptions import AuthenticationError
from .logger import get_logger
from .models import ResourceKind, ResourcePage

logger = get_logger(__name__)

# Deletion policy per kind; None keeps the API server default
PROPAGATION_POLICIES = {
    ResourceKind.PODS: None,
    ResourceKind.JOBS: "Background",
}


def load_kubernetes_config() -> None:
    """Load cluster credentials, raising AuthenticationError if none are usable"""
    try:
        # First, try to load from environment variable if set
        kubeconfig_path = os.getenv("KUBECONFIG")
        if kubeconfig_path and os.path.exists(kubeconfig_path):
            config.load_kube_config(config_file=kubeconfig_path)
            logger.info("Loaded kubeconfig from KUBECONFIG environment", path=kubeconfig_path)
            return

        try:
            # Running inside the cluster
            config.load_incluster_config()
            logger.info("Loaded in-cluster Kubernetes configuration")
        except ConfigException:
            config.load_kube_config()
            logger.info("Loaded kubeconfig from default location")
    except (ConfigException, OSError) as e:
        raise AuthenticationError(f"could not load Kubernetes configuration: {e}") from e


class KubernetesClient:
    """Lists and deletes pods and jobs through the Kubernetes API"""

    def __init__(self, api_client: Optional[client.ApiClient] = None):
        self.core_v1 = client.CoreV1Api(api_client)
        self.batch_v1 = client.BatchV1Api(api_client)

    @classmethod
    def authenticate(cls) -> "KubernetesClient":
        """Load credentials and build a client, once, at startup"""
        load_kubernetes_config()
        try:
            k8s_client = cls()
        except Exception as e:
            raise AuthenticationError(f"unable to create Kubernetes client: {e}") from e
        logger.info("Successfully created Kubernetes client")
        return k8s_client

    def list_resources(self, kind: ResourceKind, namespace: str,
                       continue_token: Optional[str] = None,
                       limit: Optional[int] = None,
                       timeout: Optional[float] = None) -> ResourcePage:
        """Fetch one page of pods or jobs in a namespace"""
        kwargs = {}
        if continue_token:
            kwargs["_continue"] = continue_token
        if limit:
            kwargs["limit"] = limit
        if timeout is not None:
            kwargs["_request_timeout"] = timeout

        if kind is ResourceKind.PODS:
            result = self.core_v1.list_namespaced_pod(namespace, **kwargs)
        else:
            result = self.batch_v1.list_namespaced_job(namespace, **kwargs)

        return ResourcePage(
            items=list(result.items or []),
            continue_token=result.metadata._continue if result.metadata else None,
        )

    def delete_resource(self, kind: ResourceKind, namespace: str, name: str,
                        propagation_policy: Optional[str] = None) -> None:
        """Delete a single pod or job"""
        body = client.V1DeleteOptions(propagation_policy=propagation_policy)
        if kind is ResourceKind.PODS:
            self.core_v1.delete_namespaced_pod(name=name, namespace=namespace, body=body)
        else:
            self.batch_v1.delete_namespaced_job(name=name, namespace=namespace, body=body)

    def test_connection(self) -> bool:
        """Test Kubernetes connection"""
        try:
            self.core_v1.get_api_resources()
            return True
        except Exception as e:
            logger.warning("Kubernetes connection test failed", error=str(e))
            return False
