"""
Reentrancy Guard — взаимное исключение для изменяющих операций

Правила:
1. Повторный вход из того же потока, пока операция в процессе
   (например, из внешнего transfer или запроса цены), отклоняется
   ReentrancyError ДО любых изменений состояния.
2. Операции из разных потоков сериализуются настоящим mutex
   (threading.Lock): второй поток ждёт завершения первой операции.

Флаг привязан к экземпляру движка, а не глобальный.
"""

import functools
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from src.engine.errors import ReentrancyError

F = TypeVar("F", bound=Callable)


class ReentrancyGuard:
    """Non-reentrant lock, охватывающий всё дерево вызовов одной операции."""

    def __init__(self):
        self._lock = threading.Lock()
        self._owner: Optional[int] = None
        self._operation: Optional[str] = None

    @property
    def entered(self) -> bool:
        """True если операция в процессе (в любом потоке)."""
        return self._owner is not None

    @property
    def operation(self) -> Optional[str]:
        """Имя операции в процессе."""
        return self._operation

    @contextmanager
    def enter(self, operation: str) -> Iterator[None]:
        """
        Вход в защищённую секцию.

        Raises:
            ReentrancyError: Если текущий поток уже внутри защищённой операции
        """
        # _owner == текущий поток может выставить только сам этот поток
        if self._owner == threading.get_ident():
            raise ReentrancyError(operation, self._operation)

        self._lock.acquire()
        self._owner = threading.get_ident()
        self._operation = operation
        try:
            yield
        finally:
            self._owner = None
            self._operation = None
            self._lock.release()


def nonreentrant(method: F) -> F:
    """
    Декоратор метода: выполнение под self._guard.

    Объект должен иметь атрибут _guard: ReentrancyGuard.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._guard.enter(method.__name__):
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
