"""
Services Package for streamutil.

- **Transcoder (`transcoder.py`):** converts byte strings between the process
  locale's codeset and UTF-8 through an incremental, chunked conversion loop
  with a three-step converter fallback.

- **Pid-file manager (`pidfile_service.py`):** writes and locks the process
  id file at startup and removes it again at normal exit.
"""
