"""
Configuration Package for streamutil.

Static settings live here so that the transcoder, the string helpers and the
URL parser share one definition of their limits and markers.

This package includes settings for:
- Logging format and user-overridable defaults loaded from `config.user.yaml`.
- Transcoding constants (chunk size, placeholder byte, target-name suffixes).
- Shell quoting and stream URL limits.
"""
