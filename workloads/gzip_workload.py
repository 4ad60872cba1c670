"""
gzip compression and decompression workloads over a named corpus.
"""

import gzip
import io

from harness.errors import ConfigError, WorkloadInvariantViolation
from .base_workload import ThroughputWorkload


class GzipCompressWorkload(ThroughputWorkload):
    """
    gzip compression of a corpus at a fixed level. Reports MiB/s of input.

    Each worker reuses one output buffer across operations.
    """

    def __init__(self, name: str, data: bytes, level: int = 8):
        super().__init__(name)
        self.data = data
        self.level = level

    def validate_config(self) -> bool:
        if not 0 <= self.level <= 9:
            raise ConfigError(f"{self.name}: compression level must be 0-9, got {self.level}")
        if not self.data:
            raise ConfigError(f"{self.name}: corpus is empty")
        return True

    def payload_size(self) -> int:
        return len(self.data)

    def setup(self):
        data = self.data
        level = self.level
        buffer = io.BytesIO()

        def compress():
            buffer.seek(0)
            buffer.truncate()
            with gzip.GzipFile(fileobj=buffer, mode='wb', compresslevel=level) as f:
                f.write(data)

        return compress


class GzipDecompressWorkload(ThroughputWorkload):
    """gzip decompression of a pre-compressed corpus. Reports MiB/s of output."""

    def __init__(self, name: str, data: bytes, level: int = 8):
        super().__init__(name)
        self.data = data
        self.level = level

    def validate_config(self) -> bool:
        if not self.data:
            raise ConfigError(f"{self.name}: corpus is empty")
        return True

    def payload_size(self) -> int:
        return len(self.data)

    def setup(self):
        compressed = gzip.compress(self.data, compresslevel=self.level)
        expected = len(self.data)
        name = self.name

        def decompress():
            if len(gzip.decompress(compressed)) != expected:
                raise WorkloadInvariantViolation(f"{name}: decompressed size mismatch")

        return decompress
