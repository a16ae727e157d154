"""
Classification of Service annotations into the action the controller must take.
"""

import enum
from typing import Mapping, Optional

LB_TYPE_ANNOTATION = "service.beta.kubernetes.io/aws-load-balancer-type"
LB_PROXY_PROTOCOL_ANNOTATION = "service.beta.kubernetes.io/aws-load-balancer-proxy-protocol"
OPERATOR_MARKER_ANNOTATION = "ironnet.com/k8s-aws-nlb-proxy-protocol-operator"

NLB_LB_TYPE = "nlb"
PROXY_PROTOCOL_ALL = "*"
MARKER_VALUE = "*"


class Classification(enum.Enum):
    IGNORE = "ignore"
    ENABLE_REQUESTED = "enable-requested"
    DISABLE_REQUESTED = "disable-requested"

    @property
    def desired_state(self) -> Optional[bool]:
        """PROXY protocol state this classification asks for, None for IGNORE."""
        if self is Classification.ENABLE_REQUESTED:
            return True
        if self is Classification.DISABLE_REQUESTED:
            return False
        return None


def classify(annotations: Optional[Mapping[str, str]]) -> Classification:
    """
    Decide what a Service needs from its annotations alone.

    Rules, first match wins:
        nlb, *, *          -> IGNORE (already enabled and marked)
        nlb, *, anything   -> ENABLE_REQUESTED
        any, any, *        -> DISABLE_REQUESTED (marked but intent withdrawn)
        otherwise          -> IGNORE

    Args:
        annotations: Service annotations, None is treated as empty

    Returns:
        Classification: the action required for the service
    """
    annotations = annotations or {}
    lb_type = annotations.get(LB_TYPE_ANNOTATION)
    lb_proxy = annotations.get(LB_PROXY_PROTOCOL_ANNOTATION)
    marked = annotations.get(OPERATOR_MARKER_ANNOTATION) == MARKER_VALUE

    requested = lb_type == NLB_LB_TYPE and lb_proxy == PROXY_PROTOCOL_ALL
    if requested and marked:
        return Classification.IGNORE
    if requested:
        return Classification.ENABLE_REQUESTED
    if marked:
        return Classification.DISABLE_REQUESTED
    return Classification.IGNORE
