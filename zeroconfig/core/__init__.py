"""
Core of zeroconfig engine.

It turns declared services of one project into running containers.

Base run sequence:
    - build: create project network `zeroconfig_{project}`, allocate host ports from base port
    - start: for each service (in parallel)
      -> pull image
      -> remove stale `{project}_{service}` container
      -> resolve credentials (generated once, persisted in project credential file)
      -> create and start container
      -> optionally wait for it to become healthy

Container engine calls are made through runtime/engine_interface,
the engine itself (docker API or docker-compatible cli) is picked by runtime/discovery.
"""
