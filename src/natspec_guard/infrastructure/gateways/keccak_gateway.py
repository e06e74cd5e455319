"""Keccak-256 hasher backed by pycryptodome."""

from Crypto.Hash import keccak

from natspec_guard.domain.protocols import HasherProtocol


class Keccak256Hasher(HasherProtocol):
    """
    Ethereum's Keccak-256 (original padding).

    hashlib.sha3_256 is the NIST variant and produces different digests, so it
    cannot stand in here.
    """

    def digest(self, data: bytes) -> bytes:
        return keccak.new(digest_bits=256, data=data).digest()
