"""
Configuration settings for text conversion, shell quoting and URL parsing.

These constants bound the work done on externally supplied strings (stream
metadata, configured endpoints, values substituted into decoder commands).
"""

# ======================================================================================
# Transcoding
# ======================================================================================

# Capacity in bytes of the scratch buffer each conversion round writes into.
# One byte is held back, mirroring the terminator slot of the output buffer.
TRANSCODE_CHUNK_SIZE = 1024

# Emitted for every input byte that cannot be converted in "replace" mode.
PLACEHOLDER = b"?"

# Suffixes appended to the target encoding name to select the converter's own
# handling of unrepresentable characters.
TRANSLIT_SUFFIX = "//TRANSLIT"
IGNORE_SUFFIX = "//IGNORE"

# The fixed side of the locale <-> UTF-8 conversions.
UTF8_ENCODING = "UTF-8"

# Codec error handler name registered by the transcoder for transliteration.
TRANSLIT_ERROR_HANDLER = "streamutil.translit"

# Approximations used before falling back to Unicode decomposition.
TRANSLIT_TABLE = {
    "‘": "'",    # left single quotation mark
    "’": "'",    # right single quotation mark
    "‚": "'",
    "“": '"',    # left double quotation mark
    "”": '"',    # right double quotation mark
    "„": '"',
    "«": "<<",
    "»": ">>",
    "–": "-",    # en dash
    "—": "-",    # em dash
    "…": "...",  # horizontal ellipsis
    "\u00a0": " ",  # no-break space
    "ß": "ss",
    "æ": "ae",
    "Æ": "AE",
    "œ": "oe",
    "Œ": "OE",
    "ø": "o",
    "Ø": "O",
    "€": "EUR",
    "©": "(C)",
    "®": "(R)",
    "™": "(TM)",
}


# ======================================================================================
# Shell Quoting
# ======================================================================================

# Longest input, in characters, that shell_quote() processes. Anything beyond
# is dropped without error.
SHELLQUOTE_INLEN_MAX = 8191


# ======================================================================================
# Stream URL
# ======================================================================================

HTTP_SCHEME = "http://"

# The port segment may hold at most this many characters.
PORT_MAX_DIGITS = 5
PORT_MIN = 1
PORT_MAX = 65535
