import vedro

from zeroconfig.credentials import generator


class Scenario(vedro.Scenario):
    async def when_user_generates_many_passwords(self):
        self.passwords = [generator.db_password() for _ in range(50)]

    async def then_passwords_should_not_repeat(self):
        assert len(set(self.passwords)) == len(self.passwords)
