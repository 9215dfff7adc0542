"""Контроль доступа owner / pending owner с двухшаговой передачей."""

from typing import Optional

from src.pool.errors import AuthorizationError


class Ownable:
    """Единственный owner, передается через set_pending_owner + accept_ownership.

    Usage:
        access = Ownable("alice")
        access.set_pending_owner("alice", "bob")
        access.accept_ownership("bob")
    """

    def __init__(self, owner: str) -> None:
        if not owner:
            raise ValueError("owner must be non-empty")
        self._owner = owner
        self._pending_owner: Optional[str] = None

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def pending_owner(self) -> Optional[str]:
        return self._pending_owner

    def is_owner(self, caller: str) -> bool:
        return caller == self._owner

    def require_owner(self, caller: str) -> None:
        if not self.is_owner(caller):
            raise AuthorizationError(f"{caller!r} is not the owner")

    def set_pending_owner(self, caller: str, pending_owner: Optional[str]) -> None:
        """Назначение следующего owner; ``None`` отменяет назначение."""
        self.require_owner(caller)
        if pending_owner is not None and not pending_owner:
            raise ValueError("pending owner must be non-empty")
        self._pending_owner = pending_owner

    def accept_ownership(self, caller: str) -> str:
        """Завершение передачи; возвращает предыдущего owner."""
        if self._pending_owner is None or caller != self._pending_owner:
            raise AuthorizationError(f"{caller!r} is not the pending owner")
        previous = self._owner
        self._owner = caller
        self._pending_owner = None
        return previous

    def restore(self, owner: str, pending_owner: Optional[str]) -> None:
        """Возврат прежней пары (owner, pending_owner) при откате."""
        self._owner = owner
        self._pending_owner = pending_owner
