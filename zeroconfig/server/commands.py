HEALTHCHECK_PATH = '/healthcheck'
SERVICES_PATH = '/services'
START_PATH = '/services/start'
STOP_PATH = '/services/stop'
RESTART_PATH = '/services/restart'
EXEC_PATH = '/services/exec'
LOGS_PATH = '/services/logs'
HEALTH_PATH = '/services/health'
STATS_PATH = '/services/stats'
