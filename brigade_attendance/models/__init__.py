"""Models package with all models."""
from .base import BaseModel
from .user import User, UserRole
from .brigade import Brigade
from .student import Student
from .event import Event, EventDay
from .attendance import AttendanceRecord, AttendanceSession, AttendanceStatus
from .notification import Notification, NotificationType, UserNotification

__all__ = [
    'BaseModel', 'User', 'UserRole', 'Brigade', 'Student',
    'Event', 'EventDay', 'AttendanceRecord', 'AttendanceSession',
    'AttendanceStatus', 'Notification', 'NotificationType',
    'UserNotification'
]
