"""
Built-in workload catalog.
"""

import logging

from .base_workload import WorkloadRegistry
from .fixtures import SharedFixtures
from .crypto_workload import AeadEncryptWorkload, EcdsaSignWorkload, EcdsaVerifyWorkload, RsaSignWorkload
from .gzip_workload import GzipCompressWorkload, GzipDecompressWorkload
from .hash_workload import HashWorkload
from .html_workload import HtmlEscapeWorkload, HtmlUnescapeWorkload
from .matmul_workload import MatMulWorkload
from .regex_workload import (
    EASY, EASY_I, EASY2, MEDIUM, HARD, HARD2, RegexMatchWorkload,
)

logger = logging.getLogger(__name__)

GENERATED_CORPUS = 'random text'
GZIP_LEVEL = 8

REGEX_PATTERNS = [
    ('easy', EASY),
    ('easy (i)', EASY_I),
    ('easy2', EASY2),
    ('medium', MEDIUM),
    ('hard', HARD),
    ('hard2', HARD2),
]


def build_default_registry(fixtures: SharedFixtures) -> WorkloadRegistry:
    """
    Register the built-in workloads in their canonical order.

    Args:
        fixtures: Shared fixture data, built once at startup

    Returns:
        Populated WorkloadRegistry

    Raises:
        ConfigError: If the fixtures cannot satisfy a workload
    """
    registry = WorkloadRegistry()

    text = fixtures.text(fixtures.text_size)
    for label, pattern in REGEX_PATTERNS:
        registry.register(RegexMatchWorkload(f"regexp.Match {label}", pattern, text))

    registry.register(EcdsaSignWorkload("ECDSA-P256 Sign"))
    registry.register(EcdsaVerifyWorkload("ECDSA-P256 Verify"))
    registry.register(RsaSignWorkload("RSA2048 Sign", key_size=2048))
    registry.register(AeadEncryptWorkload("AES-128-GCM Enc", "aes-128-gcm"))
    registry.register(AeadEncryptWorkload("ChaCha20-Poly1305 Enc", "chacha20-poly1305"))
    registry.register(HashWorkload("SHA-256 8KiB", "sha256", 8192))

    registry.register(HtmlEscapeWorkload("html.escape", fixtures.escape_data))
    registry.register(HtmlUnescapeWorkload("html.unescape", fixtures.escape_data))

    corpora = {GENERATED_CORPUS: fixtures.text_bytes(fixtures.text_size)}
    corpora.update(fixtures.corpora)
    for corpus, data in corpora.items():
        if not data:
            logger.warning(f"Skipping empty corpus {corpus}")
            continue
        registry.register(GzipCompressWorkload(f"gzip compression {corpus} -{GZIP_LEVEL}", data, GZIP_LEVEL))
        registry.register(GzipDecompressWorkload(f"gzip decompression {corpus}", data, GZIP_LEVEL))

    registry.register(MatMulWorkload("numpy.matmul 256x256", matrix_size=256))

    logger.debug(f"Registered {len(registry)} built-in workloads")
    return registry
