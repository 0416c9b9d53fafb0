from contexts.project_root import project_root
from helpers.stub_engine_cli import StubEngineCli
from zeroconfig.runtime.shell_interface import ShellEngineInterface


def stub_engine_cli(branches: str) -> StubEngineCli:
    return StubEngineCli(project_root(), branches)


def shell_engine(cli: StubEngineCli, native_restart: bool = True) -> ShellEngineInterface:
    return ShellEngineInterface(cli.runtime(native_restart))
