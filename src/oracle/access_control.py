"""
Access Control — проверка ролей manager / admin

Простое сравнение идентичностей с записью Roles в OracleState.
Fail closed: при несовпадении — исключение, состояние не меняется.
"""

from src.core.domain.oracle_state import OracleState
from src.oracle.errors import NotAdmin, NotManager


class AccessControl:
    """Guard-функции для двух ролей."""

    def __init__(self, state: OracleState):
        self._state = state

    def is_manager(self, caller: str | None) -> bool:
        return caller is not None and caller == self._state.roles.manager

    def is_admin(self, caller: str | None) -> bool:
        return caller is not None and caller == self._state.roles.admin

    def require_manager(self, caller: str | None) -> None:
        """
        Raises:
            NotManager: если caller не manager
        """
        if not self.is_manager(caller):
            raise NotManager()

    def require_admin(self, caller: str | None) -> None:
        """
        Raises:
            NotAdmin: если caller не admin
        """
        if not self.is_admin(caller):
            raise NotAdmin()
