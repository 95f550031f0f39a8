"""Base model class with common functionality."""
import uuid
from datetime import datetime
from typing import Dict, Any
from brigade_attendance import db
from brigade_attendance.utils.helpers import serialize_value, to_camel

def generate_id() -> str:
    return str(uuid.uuid4())

class BaseModel(db.Model):
    """Base model class with common fields and methods."""

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    def save(self) -> 'BaseModel':
        """Save instance to database."""
        db.session.add(self)
        db.session.commit()
        return self

    def soft_delete(self) -> None:
        """Deactivate instead of removing the row."""
        self.is_active = False
        db.session.commit()

    def update(self, **kwargs) -> 'BaseModel':
        """Update instance with provided data."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

        self.updated_at = datetime.now()
        db.session.commit()
        return self

    def to_dict(self, exclude: list = None) -> Dict[str, Any]:
        """Convert instance to a camelCase dictionary."""
        exclude = exclude or []
        result = {}

        for column in self.__table__.columns:
            key = column.name
            if key not in exclude:
                result[to_camel(key)] = serialize_value(getattr(self, key))

        return result

    @classmethod
    def get_or_404(cls, id: str, message: str = None) -> 'BaseModel':
        """Get instance by ID or raise a 404 API error."""
        from brigade_attendance.utils.errors import NotFoundError

        instance = db.session.get(cls, id)
        if instance is None:
            raise NotFoundError(message or f'{cls.__name__} not found')
        return instance

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.id}>'
