from zeroconfig.client.zeroconfig_client import ZeroConfigClient

__all__ = ('ZeroConfigClient',)
