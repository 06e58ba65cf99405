# bridge/common/netdefs.py
"""
Network constants shared with the companion device application.

These are protocol constants, not runtime settings: VTube Studio broadcasts its
discovery announcement to DISCOVERY_PORT, and a discovery listen must never
block longer than DISCOVERY_TIMEOUT_MS.
"""

DISCOVERY_PORT = 47779
DISCOVERY_TIMEOUT_MS = 2000
DISCOVERY_BUFSIZE = 4096

BIND_ALL_INTERFACES = ""  # "" == INADDR_ANY for AF_INET

MIN_PORT = 1
MAX_PORT = 65535
