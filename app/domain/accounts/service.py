"""Account service - signup, login and profile edits"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import User
from ...security_utils import create_access_token, hash_password, verify_password
from ...shared.errors import Conflict, Unauthorized
from .schemas import LoginRequest, ProfileUpdate, RegisterRequest

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, db: Session):
        self.db = db

    def register(self, data: RegisterRequest) -> dict:
        if self.db.query(User).filter(User.email == data.email).first():
            raise Conflict("An account with this email already exists")

        user = User(
            email=data.email,
            password_hash=hash_password(data.password),
            name=data.name,
            business_name=data.businessName,
            phone=data.phone,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Concurrent signup with the same email
            self.db.rollback()
            raise Conflict("An account with this email already exists") from e
        self.db.refresh(user)

        logger.info(f"✅ New account {user.id} registered")
        return {"token": create_access_token(user.id), "user": user}

    def login(self, data: LoginRequest) -> dict:
        user = self.db.query(User).filter(User.email == data.email).first()
        if not user or not verify_password(data.password, user.password_hash):
            logger.warning("⚠️ Failed login attempt")
            raise Unauthorized("Invalid email or password")
        return {"token": create_access_token(user.id), "user": user}

    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        if data.name is not None:
            user.name = data.name
        if data.businessName is not None:
            user.business_name = data.businessName
        if data.phone is not None:
            user.phone = data.phone
        self.db.commit()
        self.db.refresh(user)
        return user
