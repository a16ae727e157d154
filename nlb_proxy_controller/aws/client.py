import boto3
from botocore.config import Config
import logging
import os

# Constants
DEFAULT_MAX_ATTEMPTS = 3

# Configure to use regional STS endpoints for IRSA
if os.environ.get('AWS_DEFAULT_REGION'):
    os.environ['AWS_STS_REGIONAL_ENDPOINTS'] = 'regional'

logger = logging.getLogger(__name__)

def get_session(region=None):
    """Get a boto3 session resolving credentials through the default chain.

    The chain will try:
    1. IRSA (IAM Roles for Service Accounts)
    2. EC2 Instance Profile (Node IAM Role)
    3. Environment variables
    4. Shared credentials file

    Clients created from the session keep the chain's credential provider, so
    expiring credentials (IRSA, assume-role, instance profile) are refreshed
    by botocore.

    Args:
        region (str, optional): AWS region to use. If not provided, uses default region.

    Returns:
        boto3.session.Session: Session for the region
    """
    session = boto3.session.Session(region_name=region or os.environ.get('AWS_DEFAULT_REGION') or None)
    if session.get_credentials() is None:
        logger.warning("No AWS credentials found in the credential chain")
    return session

def _client_config(max_attempts=DEFAULT_MAX_ATTEMPTS):
    return Config(retries={'max_attempts': max_attempts, 'mode': 'standard'})

def get_elbv2_client(region=None, max_attempts=DEFAULT_MAX_ATTEMPTS):
    """Get AWS ELBv2 client used to read and modify target group attributes.

    Args:
        region (str, optional): AWS region to use. If not provided, uses default region.
        max_attempts (int, optional): botocore transport-level attempts per call.

    Returns:
        boto3.client: AWS ELBv2 client
    """
    return get_session(region).client('elbv2', config=_client_config(max_attempts))

def get_tagging_client(region=None, max_attempts=DEFAULT_MAX_ATTEMPTS):
    """Get AWS Resource Groups Tagging API client used to locate target groups by tag.

    Args:
        region (str, optional): AWS region to use. If not provided, uses default region.
        max_attempts (int, optional): botocore transport-level attempts per call.

    Returns:
        boto3.client: AWS resourcegroupstaggingapi client
    """
    return get_session(region).client('resourcegroupstaggingapi', config=_client_config(max_attempts))
