from typing import Any, List
import logging

logger = logging.getLogger(__name__)

TARGET_GROUP_RESOURCE_TYPE = "elasticloadbalancing:targetgroup"
SERVICE_NAME_TAG = "kubernetes.io/service-name"

def service_tag_value(namespace: str, service_name: str) -> str:
    """Value of the service-name tag the load balancer controller puts on target groups."""
    return f"{namespace}/{service_name}"

def resolve_target_groups(tagging: Any, namespace: str, service_name: str) -> List[str]:
    """
    Find the ARNs of the target groups that belong to a Service.

    Args:
        tagging: AWS Resource Groups Tagging API client
        namespace: Namespace of the service
        service_name: Name of the service

    Returns:
        List[str]: Target group ARNs, empty when none are tagged for the service

    Raises:
        botocore.exceptions.ClientError: If the tag lookup fails
    """
    paginator = tagging.get_paginator('get_resources')
    pages = paginator.paginate(
        ResourceTypeFilters=[TARGET_GROUP_RESOURCE_TYPE],
        TagFilters=[{
            'Key': SERVICE_NAME_TAG,
            'Values': [service_tag_value(namespace, service_name)]
        }]
    )

    target_group_arns = []
    for page in pages:
        for mapping in page.get('ResourceTagMappingList', []):
            arn = mapping.get('ResourceARN')
            if arn:
                target_group_arns.append(arn)

    logger.debug(f"Resolved {len(target_group_arns)} target group(s) for {namespace}/{service_name}")
    return target_group_arns
