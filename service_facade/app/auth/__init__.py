"""
Service account authentication for the facade.
"""

from .session import AccountCredentials, ServiceSession, SessionCredential
from .bootstrap import CredentialBootstrapper

__all__ = [
    "AccountCredentials",
    "CredentialBootstrapper",
    "ServiceSession",
    "SessionCredential",
]
