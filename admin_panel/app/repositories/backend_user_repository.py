from abc import ABC, abstractmethod
from typing import List, Optional

from admin_panel.domain.entities import BackendUser


class IBackendUserRepository(ABC):
    """BackendUser repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[BackendUser]:
        """Get backend user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[BackendUser]:
        """Get backend user by ID"""
        pass

    @abstractmethod
    async def first(self) -> Optional[BackendUser]:
        """Get whichever backend user the store returns first"""
        pass

    @abstractmethod
    async def list(self, name: Optional[str] = None) -> List[BackendUser]:
        """List backend users, optionally filtered by exact name"""
        pass

    @abstractmethod
    async def create(self, user: BackendUser) -> BackendUser:
        """Create a new backend user"""
        pass

    @abstractmethod
    async def update(self, user: BackendUser) -> BackendUser:
        """Update existing backend user"""
        pass

    @abstractmethod
    async def delete(self, user: BackendUser) -> None:
        """Delete backend user"""
        pass
