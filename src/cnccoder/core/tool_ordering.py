"""Order in which tools, and the cuts made with them, are run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .tool import Tool

logger = logging.getLogger(__name__)


@dataclass
class ToolOrdering:
    """Maps every known tool to a tool number starting at 1.

    Tools get the lowest free number when first used.  An explicit number
    set with :meth:`set_ordering` wins; any other tool holding that number
    is renumbered onto the next free slot.
    """

    tools: list[Tool] = field(default_factory=list)
    orders: dict[Tool, int] = field(default_factory=dict)
    explicit: dict[Tool, int] = field(default_factory=dict)

    def next_auto_order(self) -> int:
        used = set(self.orders.values()) | set(self.explicit.values())
        order = 1
        while order in used:
            order += 1
        return order

    def auto_ordering(self, tool: Tool) -> None:
        """Give *tool* the next free number unless it already has one."""
        if tool in self.orders:
            return
        self.tools.append(tool)
        self.orders[tool] = self.next_auto_order()
        logger.debug("Tool %s assigned number %d", tool, self.orders[tool])

    def set_ordering(self, tool: Tool, order: int) -> None:
        """Assign *order* (at least 1) to *tool* and renumber the rest."""
        order = max(order, 1)
        if tool not in self.tools:
            self.tools.append(tool)

        self.explicit = {t: o for t, o in self.explicit.items() if o != order or t == tool}
        self.explicit[tool] = order

        # Full recomputation: explicit numbers first, then first-use order
        self.orders = dict(self.explicit)
        for known in self.tools:
            if known not in self.orders:
                self.orders[known] = self.next_auto_order()
        logger.debug("Tool %s explicitly numbered %d", tool, order)

    def ordering(self, tool: Tool) -> Optional[int]:
        """Number of *tool*, or ``None`` if it was never added."""
        return self.orders.get(tool)

    def tools_ordered(self) -> list[Tool]:
        return [tool for tool, _ in sorted(self.orders.items(), key=lambda item: item[1])]
