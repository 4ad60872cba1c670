"""
Hash digest workload.
"""

import hashlib

from harness.errors import ConfigError
from .base_workload import ThroughputWorkload


class HashWorkload(ThroughputWorkload):
    """
    hashlib digest of a fixed zero-filled buffer. Reports MiB/s.

    hashlib releases the GIL for large inputs, so this workload scales
    across threads.
    """

    def __init__(self, name: str, algorithm: str = 'sha256', buffer_size: int = 8192):
        super().__init__(name)
        self.algorithm = algorithm
        self.buffer_size = buffer_size

    def validate_config(self) -> bool:
        if self.algorithm not in hashlib.algorithms_available:
            raise ConfigError(f"{self.name}: unknown hash algorithm {self.algorithm!r}")
        if self.buffer_size <= 0:
            raise ConfigError(f"{self.name}: buffer_size must be positive, got {self.buffer_size}")
        return True

    def payload_size(self) -> int:
        return self.buffer_size

    def setup(self):
        buf = bytes(self.buffer_size)
        algorithm = self.algorithm

        def digest():
            hashlib.new(algorithm, buf).digest()

        return digest
