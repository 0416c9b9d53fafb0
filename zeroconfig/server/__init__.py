"""
Http control surface of a running zeroconfig engine.

Client for this server - zeroconfig/client

Each command has its params set described in its handler as TypedDict (for example services_exec:
ExecRequestParams). The client serializes the same param set into json, the server reads it back.

Typed engine failures are answered with 422 and {"error": message}, anything unexpected with 500.
"""
