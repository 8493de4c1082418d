"""Secret Manager helpers."""
from .domains.aws_client import AWSSecretManager
from .domains.gcp_client import GCPSecretManager
from .domains.helper import SecretManagerHelper
from .domains.models import SecretPath

__all__ = ["AWSSecretManager", "GCPSecretManager", "SecretManagerHelper", "SecretPath"]
