# backend/models/task.py
import uuid

import sqlalchemy as sa
from sqlalchemy.orm import relationship

from backend.utils.database import Base, utcnow

TASK_STATUSES = ("pending", "in_progress", "completed")


class Task(Base):
    __tablename__ = "tasks"
    id = sa.Column(sa.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = sa.Column(sa.Text, nullable=False)
    description = sa.Column(sa.Text, nullable=True)
    status = sa.Column(
        sa.Enum(*TASK_STATUSES, name="task_status", native_enum=False, validate_strings=True),
        nullable=False,
        default="pending",
    )
    user_id = sa.Column(sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = sa.Column(sa.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="tasks")

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "user": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
