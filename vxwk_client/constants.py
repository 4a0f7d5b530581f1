"""
Constants for the Vxwk API client.
Parameter names and defaults match what the Vxwk open API verifies.
"""

# Signed query parameters
PARAM_ACCESS_KEY = "xaccesskey"
PARAM_NONCE = "xn"
PARAM_TIMESTAMP = "xtimestamp"
PARAM_RUN_MODE = "xrunmode"
PARAM_SIGNATURE = "xsignature"
PARAM_SIGN = "xsign"

RESERVED_PARAMS = frozenset({
    PARAM_ACCESS_KEY,
    PARAM_NONCE,
    PARAM_TIMESTAMP,
    PARAM_RUN_MODE,
    PARAM_SIGNATURE,
    PARAM_SIGN,
})

# The verifier always expects this token, whatever the real HTTP method is.
SIGNING_METHOD = "GET"

DEFAULT_HEADERS = {
    'Accept': 'application/json',
}

NONCE_LENGTH = 18
RUN_MODE_RELEASE = "release"

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,              # HTTP timeout in seconds
    'nonce_length': NONCE_LENGTH,  # decimal digits in xn
    'run_mode': RUN_MODE_RELEASE,  # value of xrunmode
}
