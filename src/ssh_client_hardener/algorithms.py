"""Algorithm catalogs offered by the hardened client.

Each catalog is split into a ``safe`` part, always offered, and a ``weak``
part that is appended only when the matching policy flag allows it. List
order is preference order during SSH negotiation, so weak entries always
sit after every safe one.
"""

from typing import NamedTuple, Tuple

from ssh_client_hardener.exceptions import ConfigurationError


class AlgorithmSuite(NamedTuple):
    """Ordered algorithm list with an optional weak tail."""

    name: str
    safe: Tuple[str, ...]
    weak: Tuple[str, ...]

    def select(self, allow_weak: bool) -> Tuple[str, ...]:
        """Return the algorithms to offer.

        Args:
            allow_weak: Whether the weak tail may be appended

        Returns:
            Safe algorithms, followed by the weak ones when allowed
        """
        if allow_weak:
            return self.safe + self.weak
        return self.safe


def make_suite(name: str, safe: Tuple[str, ...], weak: Tuple[str, ...]) -> AlgorithmSuite:
    """Build a suite, rejecting catalogs where safe is not a strict prefix.

    Raises:
        ConfigurationError: If either list is empty, has duplicates or the
            two lists overlap
    """
    if not safe or not weak:
        raise ConfigurationError(f"{name}: safe and weak lists must be non-empty")

    combined = safe + weak
    if len(set(combined)) != len(combined):
        raise ConfigurationError(f"{name}: duplicate algorithm in catalog")

    return AlgorithmSuite(name=name, safe=safe, weak=weak)


CIPHERS = make_suite(
    "Ciphers",
    safe=("aes128-ctr", "aes256-ctr", "aes192-ctr"),
    weak=("aes128-cbc", "aes256-cbc", "aes192-cbc"),
)

MACS = make_suite(
    "MACs",
    safe=("hmac-sha2-256", "hmac-sha2-512", "hmac-ripemd160"),
    weak=("hmac-sha1",),
)

KEX_ALGORITHMS = make_suite(
    "KexAlgorithms",
    safe=(
        "ecdh-sha2-nistp256",
        "ecdh-sha2-nistp384",
        "ecdh-sha2-nistp521",
        "diffie-hellman-group-exchange-sha256",
    ),
    weak=(
        "diffie-hellman-group-exchange-sha1",
        "diffie-hellman-group14-sha1",
        "diffie-hellman-group1-sha1",
    ),
)
