"""Minting MAC credentials for followers and apps."""

from collections import namedtuple
import secrets

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .protocol import mac_algorithms


MacCredentials = namedtuple("MacCredentials", ["mac_key_id", "mac_key", "mac_algorithm"])


def issue_mac_credentials():
    """Return a fresh MacCredentials triple.

    The key ID and key are drawn independently from the `secrets` module,
    so concurrent callers never share state.
    The algorithm is the one named by the `TENT_MAC_ALGORITHM` setting.
    """
    algorithm = settings.TENT_MAC_ALGORITHM
    if algorithm not in mac_algorithms:
        raise ImproperlyConfigured(f"TENT_MAC_ALGORITHM must be one of {', '.join(mac_algorithms)}, not {algorithm!r}")
    return MacCredentials(
        mac_key_id=f"s:{secrets.token_hex(8)}",
        mac_key=secrets.token_hex(32),
        mac_algorithm=algorithm,
    )
