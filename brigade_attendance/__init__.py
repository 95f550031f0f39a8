"""Brigade Attendance - Application Factory."""
import logging
import os
from datetime import datetime
from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)

def create_app(config_name: str = None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)
    app.url_map.strict_slashes = False

    # Load configuration
    from config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Setup logging
    setup_logging(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database
    setup_database(app)

    # Add CLI commands
    register_commands(app)

    # Add health check
    @app.route('/api/health')
    @limiter.exempt
    def health_check():
        return jsonify({
            'status': 'OK',
            'timestamp': datetime.now().isoformat(),
            'environment': app.config.get('ENV_NAME', 'development')
        })

    return app

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from brigade_attendance.api.auth import auth_bp
    from brigade_attendance.api.users import users_bp
    from brigade_attendance.api.students import students_bp
    from brigade_attendance.api.brigades import brigades_bp
    from brigade_attendance.api.events import events_bp
    from brigade_attendance.api.attendance import attendance_bp
    from brigade_attendance.api.notifications import notifications_bp
    from brigade_attendance.api.analytics import analytics_bp

    # Auth
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    # Administration
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(students_bp, url_prefix='/api/students')
    app.register_blueprint(brigades_bp, url_prefix='/api/brigades')
    app.register_blueprint(events_bp, url_prefix='/api/events')

    # Core Features
    app.register_blueprint(attendance_bp, url_prefix='/api/attendance')
    app.register_blueprint(notifications_bp, url_prefix='/api/notifications')
    app.register_blueprint(analytics_bp, url_prefix='/api/analytics')

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from sqlalchemy.exc import IntegrityError, NoResultFound
    from werkzeug.exceptions import HTTPException
    from brigade_attendance.utils.errors import APIError
    from brigade_attendance.utils.helpers import error_response, handle_error

    @app.errorhandler(APIError)
    def handle_api_error(e):
        return error_response(e.message, e.status_code, details=e.details)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e):
        db.session.rollback()
        app.logger.warning('Integrity error on %s %s: %s', request.method, request.path, e.orig)
        return error_response(
            'Duplicate entry', 400,
            details='A record with this information already exists'
        )

    @app.errorhandler(NoResultFound)
    def handle_no_result(e):
        return error_response(
            'Record not found', 404,
            details='The requested record was not found'
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return error_response(e.name, e.code, details=e.description)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        app.logger.exception('Unhandled error on %s %s', request.method, request.path)
        return handle_error(e, 500)

    # JWT error handlers
    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return error_response('Access token required', 401)

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return error_response('Invalid or expired token', 403)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return error_response('Invalid or expired token', 403)

    @jwt.user_lookup_error_loader
    def user_lookup_error_callback(jwt_header, jwt_payload):
        return error_response('User not found or inactive', 403)

    @jwt.user_lookup_loader
    def user_lookup_callback(jwt_header, jwt_payload):
        from brigade_attendance.models.user import User
        user = db.session.get(User, jwt_payload['sub'])
        if user is None or not user.is_active:
            return None
        return user

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'))
    app.logger.setLevel(level)

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)
        app.logger.info('Brigade Attendance startup')

    @app.after_request
    def log_request(response):
        app.logger.info('%s %s %s', request.method, request.full_path.rstrip('?'), response.status_code)
        return response

def setup_database(app: Flask) -> None:
    """Setup database connections."""
    with app.app_context():
        # Import all models so metadata knows every table
        from brigade_attendance.models import (  # noqa: F401
            User, UserRole, Student, Brigade,
            Event, EventDay, AttendanceRecord,
            Notification, UserNotification
        )

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

        # Create default admin
        from brigade_attendance.models.user import User, UserRole

        admin = User.query.filter_by(email='admin@brigade.local').first()
        if not admin:
            admin = User(
                email='admin@brigade.local',
                first_name='System',
                last_name='Administrator',
                role=UserRole.ADMIN
            )
            admin.set_password('admin123456')
            db.session.add(admin)
            db.session.commit()
            click.echo('Created admin user: admin@brigade.local / admin123456')

    @app.cli.command('seed-db')
    def seed_db():
        """Seed database with demo data."""
        from brigade_attendance.services.seed_service import SeedService

        summary = SeedService.seed_all()
        click.echo(
            f"Seeded {summary['brigades']} brigades, {summary['students']} students "
            f"and {summary['event_days']} event days."
        )

    @app.cli.command('create-admin')
    def create_admin():
        """Create admin user."""
        email = click.prompt('Admin email')
        first_name = click.prompt('First name')
        last_name = click.prompt('Last name')
        password = click.prompt('Password', hide_input=True, confirmation_prompt=True)

        from brigade_attendance.services.user_service import UserService
        from brigade_attendance.utils.errors import APIError

        try:
            user = UserService.create_user({
                'email': email,
                'password': password,
                'firstName': first_name,
                'lastName': last_name,
                'role': 'ADMIN'
            })
        except APIError as e:
            raise click.ClickException(e.message)
        click.echo(f'Admin user created: {user.email}')
