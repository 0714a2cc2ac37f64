"""
Test Celery tasks.
"""
from datetime import timedelta
from unittest.mock import patch

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_events.database.db import utcnow
from campus_events.models.otp import OtpCode
from campus_events.tasks import deliver_otp_task, purge_expired_otps_task
from campus_events.tests.conftest import TestingSessionLocal


class TestCeleryTasks:
    """Test Celery task functionality."""

    def test_deliver_otp_task(self):
        """The delivery task reports the address it handled."""
        result = deliver_otp_task.run("org@campus.edu", "123456")

        assert result == {"email": "org@campus.edu", "delivered": True}

    def test_deliver_otp_task_keeps_code_out_of_logs(self):
        with patch("campus_events.tasks.logger") as logger:
            deliver_otp_task.run("org@campus.edu", "123456")

        logger.info.assert_called_once()
        _, kwargs = logger.info.call_args
        assert kwargs["email"] == "org@campus.edu"
        assert "123456" not in kwargs.values()
        assert "code" not in kwargs

    def test_deliver_otp_task_eager(self):
        """With eager mode on, delay() runs the task inline."""
        result = deliver_otp_task.delay("org@campus.edu", "654321")

        assert result.successful()
        assert result.get()["delivered"] is True

    def test_purge_expired_otps_task(self, db_session: Session):
        """Expired codes are removed, live ones are kept."""
        db_session.add_all(
            [
                OtpCode(email="old@campus.edu", code="111111", expires_at=utcnow() - timedelta(minutes=1)),
                OtpCode(email="new@campus.edu", code="222222", expires_at=utcnow() + timedelta(minutes=9)),
            ]
        )
        db_session.commit()

        # Mock SessionLocal to return a fresh session from the test sessionmaker
        with patch("campus_events.tasks.SessionLocal", return_value=TestingSessionLocal()):
            purged = purge_expired_otps_task.run()

        assert purged == 1
        db_session.expire_all()
        emails = list(db_session.scalars(select(OtpCode.email)))
        assert emails == ["new@campus.edu"]

    def test_purge_with_nothing_expired(self):
        with patch("campus_events.tasks.SessionLocal", return_value=TestingSessionLocal()):
            assert purge_expired_otps_task.run() == 0

    def test_celery_app_configuration(self):
        """Test that Celery app is properly configured."""
        from campus_events.core.celery_config import celery_app

        assert celery_app.conf.task_serializer == "json"
        assert celery_app.conf.result_serializer == "json"
        assert "json" in celery_app.conf.accept_content
        assert celery_app.conf.task_track_started is True
        assert celery_app.conf.task_always_eager is True

    def test_purge_is_scheduled(self):
        from campus_events.core.celery_config import celery_app

        entry = celery_app.conf.beat_schedule["purge-expired-otps"]
        assert entry["task"] == "campus_events.tasks.purge_expired_otps_task"
        assert entry["schedule"] == 15 * 60.0

    def test_tasks_are_registered(self):
        from campus_events.core.celery_config import celery_app

        assert "campus_events.tasks.deliver_otp_task" in celery_app.tasks
        assert "campus_events.tasks.purge_expired_otps_task" in celery_app.tasks
