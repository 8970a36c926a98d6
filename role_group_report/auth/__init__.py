from .authenticator import AuthenticationError, CredentialProvider, MsalCredentialProvider
from .session import establish_session

__all__ = [
    "AuthenticationError",
    "CredentialProvider",
    "MsalCredentialProvider",
    "establish_session",
]
