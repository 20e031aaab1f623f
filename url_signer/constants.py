"""
Constants for URL signer library.
"""

# Query string parameters reserved by the signer
DEFAULT_HASH_PARAMETER = "_hash"
DEFAULT_TIMESTAMP_PARAMETER = "_timestamp"

# Default configuration values
DEFAULT_CONFIG = {
    'hash_parameter': DEFAULT_HASH_PARAMETER,
    'timestamp_parameter': DEFAULT_TIMESTAMP_PARAMETER,
}

# WSGI default ports, omitted from the rebuilt host
DEFAULT_PORTS = {
    'http': '80',
    'https': '443',
}

# Characters a client may send unescaped in a path (RFC 3986 pchar)
PATH_SAFE_CHARS = "/:@!$&'()*+,;=~"
