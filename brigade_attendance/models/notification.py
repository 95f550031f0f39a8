"""Notification models: the message itself and per-user read state."""
from enum import Enum
from brigade_attendance import db
from brigade_attendance.models.base import BaseModel
from brigade_attendance.models.user import UserRole

class NotificationType(Enum):
    INFO = 'INFO'
    WARNING = 'WARNING'
    SUCCESS = 'SUCCESS'
    ERROR = 'ERROR'

class Notification(BaseModel):
    """A message addressed to everyone or to one role."""

    __tablename__ = 'notifications'

    title = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    type = db.Column(db.Enum(NotificationType), nullable=False, default=NotificationType.INFO)
    is_global = db.Column(db.Boolean, default=False, nullable=False)
    target_role = db.Column(db.Enum(UserRole), nullable=True)
    expires_at = db.Column(db.DateTime, nullable=True)
    created_by = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True)

    recipients = db.relationship('UserNotification', back_populates='notification', lazy='dynamic')

class UserNotification(BaseModel):
    """Delivery of a notification to one user."""

    __tablename__ = 'user_notifications'

    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    notification_id = db.Column(
        db.String(36), db.ForeignKey('notifications.id'), nullable=False, index=True
    )
    is_read = db.Column(db.Boolean, default=False, nullable=False)
    read_at = db.Column(db.DateTime, nullable=True)

    notification = db.relationship('Notification', back_populates='recipients')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'notification_id', name='uq_user_notification'),
    )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['notification'] = self.notification.to_dict()
        return data
