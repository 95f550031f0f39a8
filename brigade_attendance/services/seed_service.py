"""Database seeding service for demo data."""
from datetime import date, datetime, time, timedelta
from typing import Dict, List
from flask import current_app
from brigade_attendance import db
from brigade_attendance.models.brigade import Brigade
from brigade_attendance.models.event import Event, EventDay
from brigade_attendance.models.student import Student
from brigade_attendance.models.user import User, UserRole
from brigade_attendance.services.event_service import EventService

DEMO_LEADS = [
    ('lead.alpha@brigade.local', 'Arjun', 'Menon'),
    ('lead.beta@brigade.local', 'Priya', 'Nair'),
]

DEMO_BRIGADES = ['Alpha Brigade', 'Beta Brigade']

FIRST_NAMES = ['Aarav', 'Diya', 'Kabir', 'Meera', 'Rohan', 'Sneha', 'Vikram', 'Ananya']
LAST_NAMES = ['Iyer', 'Pillai', 'Rao', 'Shah', 'Verma', 'Das']

STUDENTS_PER_BRIGADE = 5
EVENT_LENGTH_DAYS = 3

class SeedService:
    """Service to seed the database with demo data.

    Every step is idempotent: rows that already exist (matched by email,
    name or roll number) are reused instead of duplicated.
    """

    @staticmethod
    def seed_all() -> Dict[str, int]:
        """Seed all demo data and return how many rows of each kind exist."""
        SeedService.seed_admin()
        leads = SeedService.seed_brigade_leads()
        brigades = SeedService.seed_brigades(leads)
        students = SeedService.seed_students(brigades)
        event = SeedService.seed_event()

        return {
            'brigades': len(brigades),
            'students': len(students),
            'event_days': len(event.event_days),
        }

    @staticmethod
    def _get_or_create_user(email: str, first_name: str, last_name: str,
                            role: UserRole, password: str) -> User:
        user = User.query.filter_by(email=email).first()
        if user:
            return user

        user = User(email=email, first_name=first_name, last_name=last_name, role=role)
        user.set_password(password)
        db.session.add(user)
        return user

    @staticmethod
    def seed_admin() -> User:
        admin = SeedService._get_or_create_user(
            'admin@brigade.local', 'System', 'Administrator', UserRole.ADMIN, 'admin123456'
        )
        db.session.commit()
        return admin

    @staticmethod
    def seed_brigade_leads() -> List[User]:
        leads = [
            SeedService._get_or_create_user(email, first, last, UserRole.BRIGADE_LEAD, 'lead123')
            for email, first, last in DEMO_LEADS
        ]
        db.session.commit()
        current_app.logger.info(f"Seeded {len(leads)} brigade leads")
        return leads

    @staticmethod
    def seed_brigades(leads: List[User]) -> List[Brigade]:
        brigades = []
        for name, leader in zip(DEMO_BRIGADES, leads):
            brigade = Brigade.query.filter_by(name=name).first()
            if brigade is None:
                brigade = Brigade(name=name, leader_id=leader.id)
                db.session.add(brigade)
            brigades.append(brigade)

        db.session.commit()
        return brigades

    @staticmethod
    def seed_students(brigades: List[Brigade]) -> List[Student]:
        """Students with STUDENT accounts using the configured default password."""
        password = current_app.config['STUDENT_DEFAULT_PASSWORD']
        students = []

        for brigade_index, brigade in enumerate(brigades):
            for i in range(STUDENTS_PER_BRIGADE):
                roll_number = f"T{brigade_index + 1:02d}{i + 1:03d}"
                student = Student.query.filter_by(temp_roll_number=roll_number).first()
                if student is None:
                    first_name = FIRST_NAMES[(brigade_index * STUDENTS_PER_BRIGADE + i) % len(FIRST_NAMES)]
                    last_name = LAST_NAMES[i % len(LAST_NAMES)]
                    email = f"{roll_number.lower()}@students.brigade.local"

                    account = SeedService._get_or_create_user(
                        email, first_name, last_name, UserRole.STUDENT, password
                    )
                    db.session.flush()

                    student = Student(
                        temp_roll_number=roll_number,
                        first_name=first_name,
                        last_name=last_name,
                        email=email,
                        brigade_id=brigade.id,
                        user_id=account.id
                    )
                    db.session.add(student)
                students.append(student)

        db.session.commit()
        current_app.logger.info(f"Seeded {len(students)} students")
        return students

    @staticmethod
    def seed_event() -> Event:
        """A short event starting today with both sessions enabled every day."""
        name = 'Orientation Week'
        event = Event.query.filter_by(name=name, is_active=True).first()
        if event:
            return event

        start = date.today()
        end = start + timedelta(days=EVENT_LENGTH_DAYS - 1)
        event = Event(
            name=name,
            description='Demo event created by seed-db',
            start_date=datetime.combine(start, time.min),
            end_date=datetime.combine(end, time.max)
        )
        event.event_days = [EventDay(date=day) for day in EventService.days_between(start, end)]

        db.session.add(event)
        db.session.commit()
        return event
