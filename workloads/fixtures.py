"""
Shared fixture data for workloads.

Built once at startup from the `fixtures` configuration section and passed
to the workloads that need it. Everything here is read-only after
construction, so workers on different threads may share it freely.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional

from harness.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TEXT_SIZE = 1 << 18
DEFAULT_ESCAPE_REPEAT = 10000
ESCAPE_SAMPLE = "AAAAA < BBBBB > CCCCC & DDDDD ' EEEEE \" "


def generate_text(size: int) -> bytes:
    """
    Generate deterministic pseudo-random printable text.

    A 32-bit shift register drives the output: roughly one byte in 31 is a
    newline, the rest are printable ASCII (0x20-0x7E). The same size always
    yields the same bytes, and a shorter text is a prefix of a longer one.
    """
    text = bytearray(size)
    x = 0xFFFFFFFF
    for i in range(size):
        x = (x + x) & 0xFFFFFFFF
        x ^= 1
        if x & 0x80000000:
            x ^= 0x88888EEF
        if x % 31 == 0:
            text[i] = 0x0A
        else:
            text[i] = x % (0x7E + 1 - 0x20) + 0x20
    return bytes(text)


def load_corpora(paths: Dict[str, str]) -> Dict[str, bytes]:
    """
    Read named text corpora.

    Unreadable paths are logged and skipped; the corresponding workloads are
    simply not registered.
    """
    corpora = {}
    for name, path in paths.items():
        try:
            corpora[name] = Path(path).read_bytes()
        except OSError as e:
            logger.warning(f"Skipping corpus {name}: {e}")
            continue
        logger.debug(f"Loaded corpus {name} ({len(corpora[name])} bytes) from {path}")
    return corpora


class SharedFixtures:
    """Read-only data shared by workload setups."""

    def __init__(self, text_size: int = DEFAULT_TEXT_SIZE,
                 escape_repeat: int = DEFAULT_ESCAPE_REPEAT,
                 corpora: Optional[Dict[str, bytes]] = None):
        """
        Initialize fixtures.

        Args:
            text_size: Bytes of generated text to prepare
            escape_repeat: Repetitions of the HTML escape sample string
            corpora: Named corpora contents
        """
        for name, value in (('text_size', text_size), ('escape_repeat', escape_repeat)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"fixtures.{name} must be a positive integer, got {value!r}")

        self._text = generate_text(text_size)
        self.escape_data = ESCAPE_SAMPLE * escape_repeat
        self.corpora: Dict[str, bytes] = dict(corpora or {})

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'SharedFixtures':
        """
        Build fixtures from the `fixtures` configuration section.

        Args:
            config: Mapping with optional text_size, escape_repeat and corpora keys
        """
        paths = config.get('corpora') or {}
        if not isinstance(paths, dict):
            raise ConfigError("fixtures.corpora must map corpus names to paths")

        return cls(
            text_size=config.get('text_size', DEFAULT_TEXT_SIZE),
            escape_repeat=config.get('escape_repeat', DEFAULT_ESCAPE_REPEAT),
            corpora=load_corpora({str(k): str(v) for k, v in paths.items()}),
        )

    @property
    def text_size(self) -> int:
        return len(self._text)

    def text_bytes(self, size: int) -> bytes:
        """
        First `size` bytes of the generated text.

        Raises:
            ConfigError: If more text is requested than was generated
        """
        if size > len(self._text):
            raise ConfigError(
                f"Requested {size} bytes of fixture text but only {len(self._text)} were generated "
                f"(raise fixtures.text_size)"
            )
        return self._text[:size]

    def text(self, size: int) -> str:
        """First `size` characters of the generated text as a string."""
        return self.text_bytes(size).decode('ascii')
