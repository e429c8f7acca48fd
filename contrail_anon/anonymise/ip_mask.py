import secrets
from dataclasses import dataclass
from typing import Sequence, Tuple

from contrail_anon.common.constants import IP_MASK_SIZE, IP_MASK_UPPER_BOUND, IP_OCTETS_SEPARATOR
from contrail_anon.common.exceptions import MalformedValueError


@dataclass(frozen=True)
class IpMask:
    """
    Run scoped XOR mask for the last three octets of public IPs.

    Same IP gives the same anonymised IP during a run, a new mask is drawn
    on every run.
    """
    octets: Tuple[int, int, int]

    def __post_init__(self):
        if len(self.octets) != IP_MASK_SIZE:
            raise ValueError(f"IP mask must have {IP_MASK_SIZE} items, got {len(self.octets)}")

        for octet in self.octets:
            if isinstance(octet, bool) or not isinstance(octet, int) or not 0 <= octet < IP_MASK_UPPER_BOUND:
                raise ValueError(f"IP mask items must be integers in [0, {IP_MASK_UPPER_BOUND - 1}], got {octet!r}")

    @classmethod
    def generate(cls) -> "IpMask":
        return cls(tuple(secrets.randbelow(IP_MASK_UPPER_BOUND) for _ in range(IP_MASK_SIZE)))

    @classmethod
    def from_list(cls, octets: Sequence[int]) -> "IpMask":
        return cls(tuple(octets))

    def apply(self, ip: str) -> str:
        octets = ip.split(IP_OCTETS_SEPARATOR)
        if len(octets) != 4:
            raise MalformedValueError(f"Not a dotted-quad IPv4 address: {ip!r}")

        for octet in octets:
            if not (octet.isascii() and octet.isdigit()) or int(octet) > 255:
                raise MalformedValueError(f"Invalid octet {octet!r} in IPv4 address {ip!r}")

        # first octet is kept as written
        result = [octets[0]]
        for octet, mask in zip(octets[1:], self.octets):
            result.append(str(int(octet) ^ mask))

        return IP_OCTETS_SEPARATOR.join(result)
