"""
Text and process-lifecycle utilities for a streaming source client.

The package is split the same way the rest of the client is:

- `config`: static constants and the optional `config.user.yaml` overrides.
- `domain`: exceptions and the small value types used by the transcoder.
- `services`: the transcoding engine and the pid-file manager.
- `utils`: string helpers (suffix checks, shell quoting) and the stream URL parser.
"""
