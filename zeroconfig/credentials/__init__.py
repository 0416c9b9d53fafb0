from zeroconfig.credentials.store import CredentialStore

__all__ = ('CredentialStore',)
