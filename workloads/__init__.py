"""
Benchmark workload implementations.

Each workload implements:
- setup(): Per-worker preparation returning the operation to repeat
- report(): Throughput string for a total operation count

Available workloads:
- regexp: re.search over generated text (pure Python)
- crypto: ECDSA and RSA signatures, AES-GCM and ChaCha20-Poly1305 sealing (cryptography)
- hash: hashlib digests of a fixed buffer
- html: html.escape / html.unescape
- gzip: compression and decompression of text corpora
- matmul: Matrix multiplication (NumPy)
"""

from .base_workload import (
    BaseWorkload, ThroughputWorkload, WorkloadRegistry, ops_per_second, mib_per_second,
)
from .fixtures import SharedFixtures, generate_text
from .regex_workload import RegexMatchWorkload
from .crypto_workload import AeadEncryptWorkload, EcdsaSignWorkload, EcdsaVerifyWorkload, RsaSignWorkload
from .hash_workload import HashWorkload
from .html_workload import HtmlEscapeWorkload, HtmlUnescapeWorkload
from .gzip_workload import GzipCompressWorkload, GzipDecompressWorkload
from .matmul_workload import MatMulWorkload
from .catalog import build_default_registry

__all__ = [
    'BaseWorkload',
    'ThroughputWorkload',
    'WorkloadRegistry',
    'ops_per_second',
    'mib_per_second',
    'SharedFixtures',
    'generate_text',
    'RegexMatchWorkload',
    'EcdsaSignWorkload',
    'EcdsaVerifyWorkload',
    'RsaSignWorkload',
    'AeadEncryptWorkload',
    'HashWorkload',
    'HtmlEscapeWorkload',
    'HtmlUnescapeWorkload',
    'GzipCompressWorkload',
    'GzipDecompressWorkload',
    'MatMulWorkload',
    'build_default_registry',
]
