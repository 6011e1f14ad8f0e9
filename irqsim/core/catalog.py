"""Interrupt catalog: the static registry of interrupt kinds.

The catalog is built once and never mutated afterwards. It is passed to the
scheduler as a parameter, so new kinds can be added through configuration
without touching dispatch logic.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from irqsim.core.exceptions import ConfigurationError, UnknownInterruptKind
from irqsim.interfaces.interrupt_queue import InterruptKind
from irqsim.utils.config_loader import get_config

logger = logging.getLogger(__name__)


class InterruptCatalog:
    """Read-only registry of interrupt kinds keyed by id.

    THREAD SAFETY: Safe to share between threads; no method mutates state
    after construction.
    """

    def __init__(self, kinds: Iterable[InterruptKind]):
        entries: dict[str, InterruptKind] = {}
        for kind in kinds:
            if kind.id in entries:
                raise ConfigurationError(
                    "interrupts", f"duplicate interrupt id '{kind.id}'"
                )
            entries[kind.id] = kind
        self._kinds = entries

    @classmethod
    def default(cls) -> "InterruptCatalog":
        """Catalog with the bundled Exception, Timer, Keyboard and Disk I/O kinds."""
        return cls(get_config().interrupts)

    def lookup(self, kind_id: str) -> InterruptKind:
        """Return the kind registered under kind_id.

        Raises:
            UnknownInterruptKind: if kind_id is not registered
        """
        kind = self._kinds.get(kind_id)
        if kind is None:
            logger.warning("Lookup of unknown interrupt kind '%s'", kind_id)
            raise UnknownInterruptKind(kind_id, available=self.ids())
        return kind

    def get(self, kind_id: str) -> Optional[InterruptKind]:
        return self._kinds.get(kind_id)

    def ids(self) -> list[str]:
        """Registered ids, most urgent first."""
        return [kind.id for kind in self]

    def __contains__(self, kind_id: object) -> bool:
        return kind_id in self._kinds

    def __iter__(self) -> Iterator[InterruptKind]:
        return iter(sorted(self._kinds.values(), key=lambda k: (k.priority, k.id)))

    def __len__(self) -> int:
        return len(self._kinds)

    def __repr__(self) -> str:
        return f"InterruptCatalog({self.ids()!r})"
