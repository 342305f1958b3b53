"""
Seth RPC Constants

This module consolidates the global constants and `.env` configuration used
throughout the codebase. Values read from `.env` are wrapped so that callers
can always recover the built-in default.
"""
import ast
from dotenv import dotenv_values

# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================
# Load environment variables once at module import
_config = dotenv_values(".env")

NODE_DEFAULTS = {
    'SETH_RPC_HOST':                   '127.0.0.1',
    'SETH_RPC_PORT':                   '3030',
    'SETH_VALIDATOR_URL':              'memory://',
}

LOGGER_DEFAULTS = {
    'LOG_LEVEL':                       'INFO',
    'LOG_FORMAT':                      '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    'LOG_DATE_FORMAT':                 '%Y-%m-%dT%H:%M:%S',
    'LOG_CONSOLE_HIGHLIGHTING':        'True',
    'LOG_FILE_OUTPUT':                 'True',
    'LOG_FILE_PATH':                   'logs/seth-rpc.log',
}

LOG_MAX_FILE_SIZE = 10 * 1024 * 1024 # 10MB
LOG_BACKUP_COUNT = 5


# ==================================================================================
# ETHEREUM JSON-RPC WIRE FORMAT
# ==================================================================================
HEX_PREFIX = '0x'
ADDRESS_LENGTH = 20                                      # bytes
ADDRESS_HEX_LENGTH = len(HEX_PREFIX) + 2 * ADDRESS_LENGTH  # 42 characters
MIN_STORAGE_POSITION_LENGTH = len(HEX_PREFIX) + 2          # one byte
BLOCK_HASH_LENGTH = 32                                   # bytes
MAX_BLOCK_NUMBER = 2 ** 64 - 1

NODE_VERSION = '0.1.0'


# ==================================================================================
# CONFIGURATION WRAPPERS
# ==================================================================================
class ConfigString(str):
    """
    String subclass that stores a default value.
    """
    def __new__(cls, value, default):
        obj = str.__new__(cls, value)
        obj._default = default
        return obj

    def default(self):
        return self._default

class ConfigBool(int):
    """
    Int subclass acting as a boolean that stores a default value.
    """
    def __new__(cls, value, default):
        obj = int.__new__(cls, bool(value))
        obj._default = default
        return obj

    def default(self):
        return self._default

    def __repr__(self):
        return str(bool(self))

    def __str__(self):
        return str(bool(self))

    def __eq__(self, other):
        return bool(self) == other

    __hash__ = int.__hash__


# ==================================================================================
# DYNAMIC CONFIGURATION LOADING
# ==================================================================================
DEFAULTS = NODE_DEFAULTS | LOGGER_DEFAULTS
namespace = globals()

def parse_bool(v):
    """
    Convert "True"/"False" (any casing, with surrounding whitespace) into bool.
    Only known literals are handed to ast.literal_eval.
    """
    if not isinstance(v, str):
        return v
    s = v.strip()
    if not s:
        return v
    if s.casefold() in {"true", "false"}:
        # ast.literal_eval expects "True"/"False"
        return ast.literal_eval(s.title())
    return v

for key, default_raw in DEFAULTS.items():
    # dotenv_values returns strings or None. None is treated as missing.
    raw = _config.get(key)
    value_raw = default_raw if raw is None else raw

    value = parse_bool(value_raw)
    default_val = parse_bool(default_raw)

    if isinstance(value, bool):
        namespace[key] = ConfigBool(value, default_val)
    else:
        namespace[key] = ConfigString(value_raw, default_val)
