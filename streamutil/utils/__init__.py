"""
Utilities Package for streamutil.

Modules:
    - string_utils.py: Suffix comparison (used to check file extensions) and
      shell quoting/substitution for building decoder and encoder commands.
    - url_utils.py: Strict parser for `http://host:port/mount` stream URLs.
"""
