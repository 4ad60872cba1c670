"""
Public-key signature and AEAD encryption workloads (cryptography).

Every worker generates or builds its own keys in setup(), so no key object
is shared between threads. OpenSSL releases the GIL while it works, so
these workloads scale across threads.
"""

import hashlib

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa, utils
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from harness.errors import ConfigError, WorkloadInvariantViolation
from .base_workload import BaseWorkload, ThroughputWorkload

MESSAGE = b"testing"
AEAD_BUFFER_SIZE = 8192
AEAD_NONCE_SIZE = 12
AEAD_AD_SIZE = 13

AEAD_CIPHERS = {
    'aes-128-gcm': (AESGCM, 16),
    'chacha20-poly1305': (ChaCha20Poly1305, 32),
}


def _prehashed_digest():
    return hashlib.sha256(MESSAGE).digest(), utils.Prehashed(hashes.SHA256())


class EcdsaSignWorkload(BaseWorkload):
    """ECDSA P-256 signature over a SHA-256 digest. Reports ops/s."""

    def setup(self):
        key = ec.generate_private_key(ec.SECP256R1())
        digest, algorithm = _prehashed_digest()
        signature_algorithm = ec.ECDSA(algorithm)

        def sign():
            key.sign(digest, signature_algorithm)

        return sign


class EcdsaVerifyWorkload(BaseWorkload):
    """
    ECDSA P-256 verification of a signature made during setup.

    A signature that no longer verifies is a WorkloadInvariantViolation.
    """

    def setup(self):
        key = ec.generate_private_key(ec.SECP256R1())
        digest, algorithm = _prehashed_digest()
        signature_algorithm = ec.ECDSA(algorithm)
        signature = key.sign(digest, signature_algorithm)
        public_key = key.public_key()
        name = self.name

        def verify():
            try:
                public_key.verify(signature, digest, signature_algorithm)
            except InvalidSignature as e:
                raise WorkloadInvariantViolation(f"{name}: signature failed to verify") from e

        return verify


class RsaSignWorkload(BaseWorkload):
    """RSA PKCS#1 v1.5 signature over a SHA-256 digest. Reports ops/s."""

    def __init__(self, name: str, key_size: int = 2048, public_exponent: int = 65537):
        super().__init__(name)
        self.key_size = key_size
        self.public_exponent = public_exponent

    def validate_config(self) -> bool:
        if self.key_size < 1024:
            raise ConfigError(f"{self.name}: key_size must be at least 1024, got {self.key_size}")
        if self.public_exponent not in (3, 65537):
            raise ConfigError(f"{self.name}: public_exponent must be 3 or 65537, got {self.public_exponent}")
        return True

    def setup(self):
        key = rsa.generate_private_key(public_exponent=self.public_exponent, key_size=self.key_size)
        digest, algorithm = _prehashed_digest()
        pkcs1 = padding.PKCS1v15()

        def sign():
            key.sign(digest, pkcs1, algorithm)

        return sign


class AeadEncryptWorkload(ThroughputWorkload):
    """
    AEAD seal of a zero-filled buffer with an all-zero key and nonce.

    The key and nonce are fixed, which is fine for measuring speed and
    nothing else. Reports MiB/s of plaintext.
    """

    def __init__(self, name: str, cipher: str = 'aes-128-gcm', buffer_size: int = AEAD_BUFFER_SIZE):
        super().__init__(name)
        self.cipher = cipher
        self.buffer_size = buffer_size

    def validate_config(self) -> bool:
        if self.cipher not in AEAD_CIPHERS:
            raise ConfigError(f"{self.name}: unknown AEAD cipher {self.cipher!r}. Available: {list(AEAD_CIPHERS)}")
        if self.buffer_size <= 0:
            raise ConfigError(f"{self.name}: buffer_size must be positive, got {self.buffer_size}")
        return True

    def payload_size(self) -> int:
        return self.buffer_size

    def setup(self):
        cipher_class, key_size = AEAD_CIPHERS[self.cipher]
        aead = cipher_class(bytes(key_size))
        nonce = bytes(AEAD_NONCE_SIZE)
        associated_data = bytes(AEAD_AD_SIZE)
        buf = bytes(self.buffer_size)

        def seal():
            aead.encrypt(nonce, buf, associated_data)

        return seal
