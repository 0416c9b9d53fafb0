from zeroconfig.server.zeroconfig_server import run_server

run_server()
