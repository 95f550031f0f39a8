"""Helper functions for the application."""
import traceback
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Dict, Tuple

from flask import current_app, jsonify, request

def handle_error(error, status_code: int):
    """Render an unexpected error; details are hidden in production."""
    env_name = current_app.config.get('ENV_NAME')
    body = {'error': 'Server error'}

    if env_name == 'production':
        body['message'] = 'Internal server error'
    else:
        body['message'] = str(error)
        if env_name == 'development':
            body['stack'] = ''.join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )

    return jsonify(body), status_code

def success_response(message: str = "Success", data: Any = None, status_code: int = 200):
    """Return a plain message response, optionally with extra payload."""
    response = {'message': message}

    if data is not None:
        response.update(data)

    return jsonify(response), status_code

def error_response(message: str, status_code: int = 400, details: str = None):
    """Return consistent error response."""
    body = {'error': message}
    if details:
        body['message'] = details
    return jsonify(body), status_code

def get_pagination_args(default_limit: int = None) -> Tuple[int, int]:
    """Read ``page``/``limit`` from the query string, clamped to sane values."""
    if default_limit is None:
        default_limit = current_app.config.get('DEFAULT_PAGE_SIZE', 10)
    max_limit = current_app.config.get('MAX_PAGE_SIZE', 100)

    page = request.args.get('page', 1, type=int) or 1
    limit = request.args.get('limit', default_limit, type=int) or default_limit

    return max(page, 1), min(max(limit, 1), max_limit)

def paginated_response(key: str, pagination, serializer):
    """Render a Flask-SQLAlchemy pagination as ``{key: [...], pagination: {...}}``."""
    return jsonify({
        key: [serializer(item) for item in pagination.items],
        'pagination': {
            'currentPage': pagination.page,
            'totalPages': pagination.pages,
            'totalItems': pagination.total,
            'itemsPerPage': pagination.per_page
        }
    })

def to_camel(name: str) -> str:
    """snake_case -> camelCase."""
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)

def serialize_value(value: Any) -> Any:
    """Make dates and enums JSON friendly."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value

def day_bounds(day: date = None) -> Tuple[datetime, datetime]:
    """Local-day window: midnight to 23:59:59.999."""
    day = day or date.today()
    start = datetime.combine(day, time.min)
    end = start + timedelta(days=1) - timedelta(milliseconds=1)
    return start, end

def json_body() -> Dict[str, Any]:
    """Request JSON as a dict, ``{}`` when the body is missing or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
