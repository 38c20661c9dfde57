from .verifier import IdentityVerifier
from .credential import Credential, VerifiedIdentity
from .jwt_verifier import JwtIdentityVerifier

__all__ = ["Credential", "IdentityVerifier", "JwtIdentityVerifier", "VerifiedIdentity"]
