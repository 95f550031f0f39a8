"""Notification creation, fan-out and per-user read state."""
from datetime import datetime
from typing import Dict

from flask import current_app

from brigade_attendance import db
from brigade_attendance.models.base import generate_id
from brigade_attendance.models.notification import (
    Notification,
    NotificationType,
    UserNotification,
)
from brigade_attendance.models.user import User, UserRole
from brigade_attendance.utils.errors import NotFoundError
from brigade_attendance.utils.validators import Validator

class NotificationService:

    @staticmethod
    def create_notification(author: User, data: Dict) -> Notification:
        """Store a notification and deliver it to its recipients.

        Global notifications go to every active user, role-targeted ones to
        the active users of that role; with neither set nobody receives it.
        The notification is committed before the deliveries, so a failure
        while fanning out leaves it without recipients.
        """
        Validator.require(data, ['title', 'message'], "Title and message are required")

        notification_type = Validator.parse_enum(
            NotificationType, data.get('type') or 'INFO', "Invalid notification type"
        )
        target_role = None
        if data.get('targetRole'):
            target_role = Validator.parse_enum(UserRole, data['targetRole'], "Invalid target role")

        is_global = False
        if data.get('isGlobal') is not None:
            is_global = Validator.validate_bool(data['isGlobal'], 'isGlobal')
        expires_at = None
        if data.get('expiresAt'):
            expires_at = Validator.parse_datetime(data['expiresAt'], 'expiry date')

        notification = Notification(
            title=str(data['title']).strip(),
            message=str(data['message']).strip(),
            type=notification_type,
            is_global=is_global,
            target_role=target_role,
            expires_at=expires_at,
            created_by=author.id
        )
        notification.save()

        delivered = NotificationService.fan_out(notification)
        current_app.logger.info(
            f"Notification {notification.id} created by {author.email} "
            f"for {delivered} users"
        )
        return notification

    @staticmethod
    def fan_out(notification: Notification) -> int:
        """Create one delivery row per recipient; returns how many were created."""
        if notification.is_global:
            query = User.query.filter(User.is_active.is_(True))
        elif notification.target_role is not None:
            query = User.query.filter(
                User.is_active.is_(True),
                User.role == notification.target_role
            )
        else:
            return 0

        user_ids = [row.id for row in query.with_entities(User.id).all()]
        if not user_ids:
            return 0

        now = datetime.now()
        db.session.execute(
            db.insert(UserNotification),
            [
                {
                    'id': generate_id(),
                    'user_id': user_id,
                    'notification_id': notification.id,
                    'is_read': False,
                    'created_at': now,
                    'updated_at': now,
                }
                for user_id in user_ids
            ]
        )
        db.session.commit()
        return len(user_ids)

    @staticmethod
    def inbox_query(user: User, unread_only: bool = False):
        """The user's own deliveries, newest first."""
        query = UserNotification.query.filter(UserNotification.user_id == user.id)
        if unread_only:
            query = query.filter(UserNotification.is_read.is_(False))
        return query.order_by(UserNotification.created_at.desc())

    @staticmethod
    def unread_count(user: User) -> int:
        return NotificationService.inbox_query(user, unread_only=True).count()

    @staticmethod
    def mark_read(user: User, user_notification_id: str) -> UserNotification:
        delivery = UserNotification.query.filter_by(
            id=user_notification_id, user_id=user.id
        ).first()
        if delivery is None:
            raise NotFoundError("Notification not found")

        delivery.is_read = True
        delivery.read_at = datetime.now()
        db.session.commit()
        return delivery
