class Label:
    PROJECT = 'zeroconfig.project'
    SERVICE = 'zeroconfig.service'
    MANAGED = 'zeroconfig.managed'
