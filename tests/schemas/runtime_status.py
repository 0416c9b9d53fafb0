from d42 import schema

RuntimeStatusSchema = schema.dict({
    'runtime': schema.str,
    'command': schema.str,
    'installed': schema.bool,
    'running': schema.bool,
    'version': schema.str | schema.none,
    'preferred': schema.bool,
    'docker_compatible': schema.bool,
    'kubernetes_compatible': schema.bool,
})
