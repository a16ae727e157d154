from typing import Any, Dict, List
import enum
import logging

logger = logging.getLogger(__name__)

PROXY_PROTOCOL_ATTRIBUTE = "proxy_protocol_v2.enabled"

class SyncOutcome(enum.Enum):
    UNCHANGED = "unchanged"
    MODIFIED = "modified"

def is_proxy_protocol_enabled(attributes: List[Dict[str, str]]) -> bool:
    """
    Read the PROXY protocol v2 state out of a target group attribute list.

    Only an explicit "false" value counts as disabled. A missing attribute is
    reported as enabled.

    Args:
        attributes: Attributes as returned by describe_target_group_attributes

    Returns:
        bool: False only if proxy_protocol_v2.enabled is "false"
    """
    for attribute in attributes or []:
        if attribute.get('Key') == PROXY_PROTOCOL_ATTRIBUTE and attribute.get('Value') == "false":
            return False
    return True

def sync_proxy_protocol(elbv2: Any, target_group_arn: str, desired_enabled: bool) -> SyncOutcome:
    """
    Bring the PROXY protocol v2 attribute of a target group to the desired state.

    Args:
        elbv2: AWS ELBv2 client
        target_group_arn: ARN of the target group
        desired_enabled: Whether PROXY protocol v2 should be enabled

    Returns:
        SyncOutcome: MODIFIED if an attribute change was issued, UNCHANGED otherwise

    Raises:
        botocore.exceptions.ClientError: If reading or modifying the attributes fails
    """
    response = elbv2.describe_target_group_attributes(TargetGroupArn=target_group_arn)
    current_enabled = is_proxy_protocol_enabled(response.get('Attributes', []))

    if current_enabled == desired_enabled:
        logger.debug(f"PROXY protocol already {'enabled' if desired_enabled else 'disabled'} on {target_group_arn}")
        return SyncOutcome.UNCHANGED

    elbv2.modify_target_group_attributes(
        TargetGroupArn=target_group_arn,
        Attributes=[{
            'Key': PROXY_PROTOCOL_ATTRIBUTE,
            'Value': "true" if desired_enabled else "false"
        }]
    )
    logger.info(f"PROXY protocol {'enabled' if desired_enabled else 'disabled'} on target group {target_group_arn}")
    return SyncOutcome.MODIFIED
