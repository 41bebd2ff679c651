"""Tent protocol.

Implementation of the subset of the Tent protocol we use.
Which is essentially discovering a peer’s profile and
handing out MAC credentials to followers and apps.
"""

PROFILE_MEDIA_TYPE = "application/vnd.tent.profile+json"
PROFILE_REL = "profile"

CORE_INFO_TYPE = "https://tent.io/types/info/core/v0.1.0"

# View of a post type a follower gets if the type URI has no fragment.
DEFAULT_VIEW = "full"

mac_algorithms = [
    "hmac-sha-256",
    "hmac-sha-1",
]
