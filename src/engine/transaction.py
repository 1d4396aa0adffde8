"""
Transaction — атомарная граница публичной операции

Snapshot-and-restore: при входе снимаются снапшоты всех участников, при
исключении внутри блока все участники восстанавливаются, а исключение
пропагирует без изменений. Либо фиксируются все изменения операции,
либо ни одно.

Участники — объекты протокола Journaled (стор движка и, опционально,
внешние коллабораторы, чьё состояние тоже должно откатываться).
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from src.engine.interfaces import Journaled

logger = logging.getLogger(__name__)


class Transaction:
    """
    Context manager атомарной операции.

    Пример:
        with Transaction([store, token], name="deposit", on_commit=publish):
            store.credit_collateral(...)
            token.transfer_from(...)
    """

    def __init__(
        self,
        participants: Iterable[Journaled],
        name: Optional[str] = None,
        on_commit: Optional[Callable[[], None]] = None,
    ):
        self.participants: List[Journaled] = list(participants)
        self.name = name or "tx"
        self.on_commit = on_commit
        self._snapshots: Dict[int, Any] = {}
        self.committed = False

    def __enter__(self) -> "Transaction":
        self._snapshots = {id(p): p.snapshot() for p in self.participants}
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self._rollback()
            logger.warning(
                "Operation aborted, state restored",
                extra={
                    "event": "engine.rollback",
                    "operation": self.name,
                    "error": exc_type.__name__,
                },
            )
            return False

        self.committed = True
        if self.on_commit is not None:
            self.on_commit()
        return False

    def _rollback(self) -> None:
        for participant in self.participants:
            if id(participant) in self._snapshots:
                participant.restore(self._snapshots[id(participant)])
