"""
AWS implementations of the credential broker and parameter store.
"""

from .credentials import StsCredentialBroker
from .parameter_store import SsmParameterStore

__all__ = ["StsCredentialBroker", "SsmParameterStore"]
