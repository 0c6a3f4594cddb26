"""Client service - Business logic for client operations"""

import logging

from sqlalchemy.orm import Session

from ...models import Client, Quote, User
from ...shared.errors import NotFound
from ..quotes.repository import QuoteRepository
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(self, user: User) -> list[Client]:
        return self.repo.get_clients(self.db, user.id)

    def get_client(self, client_id: int, user: User) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id, user.id)
        if not client:
            raise NotFound("Client not found")
        return client

    def get_client_quotes(self, client_id: int, user: User) -> list[Quote]:
        client = self.get_client(client_id, user)
        return QuoteRepository.get_quotes_for_client(self.db, client.id, user.id)

    def create_client(self, data: ClientCreate, user: User) -> Client:
        logger.info(f"📥 Creating client for user_id: {user.id}")
        return self.repo.create_client(self.db, user.id, **data.model_dump())

    def update_client(self, client_id: int, data: ClientUpdate, user: User) -> Client:
        client = self.get_client(client_id, user)
        return self.repo.update_client(self.db, client, **data.model_dump(exclude_none=True))

    def delete_client(self, client_id: int, user: User) -> dict:
        """Delete a client; its quotes keep their copied contact details"""
        client = self.get_client(client_id, user)
        self.repo.delete_client(self.db, client)
        return {"message": "Client deleted"}
