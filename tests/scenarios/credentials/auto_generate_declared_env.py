import re

import vedro

from contexts.project_root import project_root
from zeroconfig.credentials import CredentialStore
from zeroconfig.credentials.env_secrets import AUTO_GENERATE
from zeroconfig.credentials.env_secrets import resolve_declared_env


class Scenario(vedro.Scenario):
    async def given_credential_store(self):
        self.credentials_file = project_root() / '.zeroconfig.env'
        self.store = CredentialStore(self.credentials_file)

    async def given_declared_environment(self):
        self.environment = {
            'API_KEY': AUTO_GENERATE,
            'APP_JWT_SECRET': AUTO_GENERATE,
            'DB_PASSWORD': AUTO_GENERATE,
            'REQUEST_UUID': AUTO_GENERATE,
            'SESSION_TOKEN': AUTO_GENERATE,
            'LOG_LEVEL': 'debug',
        }

    async def when_user_resolves_environment(self):
        self.resolved = await resolve_declared_env('api', self.environment, self.store)

    async def then_secrets_should_match_their_kinds(self):
        assert re.fullmatch(r'[A-Za-z0-9]{32}', self.resolved['API_KEY'])
        assert re.fullmatch(r'[A-Za-z0-9]{64}', self.resolved['APP_JWT_SECRET'])
        assert re.fullmatch(r'[A-Za-z0-9]{24}', self.resolved['DB_PASSWORD'])
        assert re.fullmatch(r'[0-9a-f-]{36}', self.resolved['REQUEST_UUID'])
        assert re.fullmatch(r'[A-Za-z0-9]{32}', self.resolved['SESSION_TOKEN'])

    async def and_plain_values_should_be_kept(self):
        assert self.resolved['LOG_LEVEL'] == 'debug'

    async def and_secrets_should_be_persisted_per_service(self):
        reloaded = CredentialStore(self.credentials_file)
        assert reloaded.get('api_API_KEY') == self.resolved['API_KEY']
        assert 'api_LOG_LEVEL' not in reloaded.get_all()

    async def and_resolving_again_should_return_same_secrets(self):
        assert await resolve_declared_env('api', self.environment, self.store) == self.resolved
