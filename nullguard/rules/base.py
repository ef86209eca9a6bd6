# Rule interface (abstract base class): the contract every check implements.
# The comparison rule subclasses Rule and implements run().

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nullguard.config import Config
    from nullguard.context import FileContext
    from nullguard.findings.models import Finding


class Rule(ABC):
    """
    Abstract base class for all lint rules.

    Subclasses must define:
    - id: str: unique rule identifier (e.g. "no-undefined-or-null-comparison")
    - name: str: human-readable rule name
    - run(context, config) -> list[Finding]: analyze one file and return findings

    The host calls run() once per file; context holds path, source bytes, and AST.
    """

    id: str
    name: str

    @abstractmethod
    def run(self, context: FileContext, config: Config | None) -> list[Finding]:
        """
        Analyze one file and return any findings.

        Args:
            context: Per-file state (path, source bytes, AST tree).
            config: Host config carrying the raw per-rule arguments. None means
                    every rule runs with its defaults.

        Returns:
            List of Finding objects, empty if the file is clean.
        """
        ...
