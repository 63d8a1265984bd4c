"""
Runtime defaults for the registries, read from the environment at import.
"""

import os

# Principal allowed to manage the verifier allow-list when a
# VerificationStore is created without an explicit owner.
CONTRACT_OWNER = os.getenv(
    "IDVERIFY_CONTRACT_OWNER", "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
)

# Height a new BlockClock starts at when none is given.
START_HEIGHT = int(os.getenv("IDVERIFY_START_HEIGHT", "0"))
