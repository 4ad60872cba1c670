"""
HTML escaping workloads.
"""

import html

from harness.errors import WorkloadInvariantViolation
from .base_workload import ThroughputWorkload


class HtmlEscapeWorkload(ThroughputWorkload):
    """html.escape over the shared escape sample. Reports MiB/s of input."""

    def __init__(self, name: str, data: str):
        super().__init__(name)
        self.data = data

    def payload_size(self) -> int:
        return len(self.data)

    def setup(self):
        data = self.data

        def escape():
            html.escape(data)

        return escape


class HtmlUnescapeWorkload(ThroughputWorkload):
    """html.unescape of the escaped sample. Reports MiB/s of escaped input."""

    def __init__(self, name: str, data: str):
        super().__init__(name)
        self.data = data
        self.escaped = html.escape(data)

    def payload_size(self) -> int:
        return len(self.escaped)

    def setup(self):
        escaped = self.escaped
        expected = len(self.data)
        name = self.name

        def unescape():
            if len(html.unescape(escaped)) != expected:
                raise WorkloadInvariantViolation(f"{name}: unescaped text has the wrong length")

        return unescape
