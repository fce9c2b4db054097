"""
Minimal message model used by the message cache.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class Message:
    """A command sent between services with named string parameters."""

    command: str
    parameters: Dict[str, str] = field(default_factory=dict)

    def has_parameter(self, name: str) -> bool:
        return name in self.parameters

    def get_parameter(self, name: str) -> Optional[str]:
        return self.parameters.get(name)

    def add_parameter(self, name: str, value) -> "Message":
        self.parameters[name] = str(value)
        return self
