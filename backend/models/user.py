# backend/models/user.py
import uuid
import sqlalchemy as sa
from sqlalchemy.orm import attributes, relationship

from backend.services.auth_service import hash_password, verify_password
from backend.utils.database import Base, utcnow


class User(Base):
    __tablename__ = "users"
    id = sa.Column(sa.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = sa.Column(sa.Text, nullable=False)
    email = sa.Column(sa.Text, unique=True, nullable=False, index=True)
    # always a bcrypt hash once flushed, see _hash_password_before_save
    password = sa.Column(sa.String(255), nullable=False)
    created_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    tasks = relationship("Task", back_populates="owner", passive_deletes=True)

    def match_password(self, entered_password: str) -> bool:
        return verify_password(entered_password, self.password)

    def to_dict(self) -> dict:
        # never expose the hash
        return {"id": self.id, "name": self.name, "email": self.email}


@sa.event.listens_for(User, "before_insert")
def _hash_password_on_insert(mapper, connection, target: User):
    target.password = hash_password(target.password)


@sa.event.listens_for(User, "before_update")
def _hash_password_before_save(mapper, connection, target: User):
    # only rehash when the password was reassigned since the last flush
    if attributes.get_history(target, "password").has_changes():
        target.password = hash_password(target.password)
