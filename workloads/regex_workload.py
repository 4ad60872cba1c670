"""
Regular expression search workload.

Searches a block of generated text for a pattern that must never match;
a match means the fixture text or the regex engine is broken.
"""

import re

from harness.errors import ConfigError, WorkloadInvariantViolation
from .base_workload import BaseWorkload

EASY = "ABCDEFGHIJKLMNOPQRSTUVWXYZ$"
EASY_I = "(?i)ABCDEFGHIJklmnopqrstuvwxyz$"
EASY2 = "A[AB]B[BC]C[CD]D[DE]E[EF]F[FG]G[GH]H[HI]I[IJ]J$"
MEDIUM = "[XYZ]ABCDEFGHIJKLMNOPQRSTUVWXYZ$"
HARD = "[ -~]*ABCDEFGHIJKLMNOPQRSTUVWXYZ$"
HARD2 = "ABCD|CDEF|EFGH|GHIJ|IJKL|KLMN|MNOP|OPQR|QRST|STUV|UVWX|WXYZ"


class RegexMatchWorkload(BaseWorkload):
    """
    re.search over fixture text.

    Each worker compiles its own pattern object during setup. Reports ops/s.
    """

    def __init__(self, name: str, pattern: str, text: str):
        super().__init__(name)
        self.pattern = pattern
        self.text = text

    def validate_config(self) -> bool:
        try:
            re.compile(self.pattern)
        except re.error as e:
            raise ConfigError(f"{self.name}: invalid pattern {self.pattern!r}: {e}") from e
        if not self.text:
            raise ConfigError(f"{self.name}: text must not be empty")
        return True

    def setup(self):
        regex = re.compile(self.pattern)
        text = self.text
        name = self.name

        def search():
            if regex.search(text):
                raise WorkloadInvariantViolation(f"{name}: pattern {regex.pattern!r} unexpectedly matched")

        return search
