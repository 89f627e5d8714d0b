"""
Core domain types of streamutil.

Modules:
    exceptions.py: Custom exception types for converter and URL
                   failures, so callers can react to each condition precisely.
    conversion.py: The conversion mode selector and the two buffers the
                   transcoding loop writes through (`ChunkBuffer` and
                   `OutputAccumulator`).
"""
