"""Events API."""
from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import current_user, jwt_required
from brigade_attendance.models.event import Event
from brigade_attendance.services.event_service import EventService
from brigade_attendance.utils.decorators import admin_required
from brigade_attendance.utils.errors import NotFoundError
from brigade_attendance.utils.helpers import json_body, success_response

events_bp = Blueprint('events', __name__)

@events_bp.route('/', methods=['GET'])
@jwt_required()
def get_events():
    """Active events, latest first, with their days."""
    return jsonify([event.to_dict() for event in EventService.active_events()])

@events_bp.route('/current', methods=['GET'])
@jwt_required()
def get_current_event():
    """The event running now and today's day of it."""
    event, current_day = EventService.current_event()
    if event is None:
        raise NotFoundError("No active event found")

    return jsonify({
        'event': event.to_dict(),
        'currentDay': current_day.to_dict() if current_day else None
    })

@events_bp.route('/<event_id>', methods=['GET'])
@jwt_required()
def get_event(event_id):
    return jsonify(Event.get_or_404(event_id, "Event not found").to_dict())

@events_bp.route('/<event_id>/days', methods=['GET'])
@jwt_required()
def get_event_days(event_id):
    return jsonify(EventService.days_with_counts(event_id))

@events_bp.route('/', methods=['POST'])
@admin_required
def create_event():
    event = EventService.create_event(json_body())
    current_app.logger.info(f"Event created: {event.name} by {current_user.email}")
    return jsonify(event.to_dict()), 201

@events_bp.route('/<event_id>', methods=['PUT'])
@admin_required
def update_event(event_id):
    event = EventService.update_event(event_id, json_body())
    current_app.logger.info(f"Event updated: {event.name} by {current_user.email}")
    return jsonify(event.to_dict())

@events_bp.route('/days/<day_id>', methods=['PUT'])
@admin_required
def update_event_day(day_id):
    """Enable or disable sessions and change session times for one day."""
    event_day = EventService.update_day(day_id, json_body())
    current_app.logger.info(f"Event day updated: {event_day.date} by {current_user.email}")
    return jsonify(event_day.to_dict(include_event=True))

@events_bp.route('/<event_id>', methods=['DELETE'])
@admin_required
def delete_event(event_id):
    event = EventService.delete_event(event_id)
    current_app.logger.info(f"Event deleted: {event.name} by {current_user.email}")
    return success_response("Event deleted successfully")
