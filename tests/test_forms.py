import pytest

from course_api.errors import FormValidationError
from course_api.models import ContactMessage, MembershipRequest
from course_api.services import public_service


class UntouchableSession:
    """Échoue au moindre accès : la validation doit précéder la base."""

    def __getattr__(self, name):
        raise AssertionError(f"accès à la base inattendu : {name}")


def test_empty_message_is_rejected_before_database():
    with pytest.raises(FormValidationError):
        public_service.submit_contact(
            UntouchableSession(),
            {"name": "Paul", "email": "paul@traine-savates.ch", "subject": "Dossard", "message": "   "},
        )


def test_missing_membership_fields_rejected_before_database():
    with pytest.raises(FormValidationError) as exc_info:
        public_service.submit_membership(
            UntouchableSession(), {"first_name": "Lina", "email": "pas-un-email"}
        )
    assert "last_name" in exc_info.value.message


def test_complete_contact_creates_one_new_row(db_session):
    message = public_service.submit_contact(
        db_session,
        {"name": " Paul ", "email": "paul@traine-savates.ch", "subject": "Dossard", "message": "Perdu mon dossard"},
    )
    assert message.status == "new"
    assert message.name == "Paul"
    assert db_session.query(ContactMessage).count() == 1


def test_contact_endpoint(client, db_session):
    response = client.post(
        "/api/contact",
        json={"name": "Paul", "email": "paul@traine-savates.ch", "subject": "Dossard", "message": "Bonjour"},
    )

    assert response.status_code == 201
    assert response.json()["success"] is True
    rows = db_session.query(ContactMessage).all()
    assert len(rows) == 1
    assert rows[0].status == "new"


def test_contact_endpoint_rejects_blank_message(client, db_session):
    response = client.post(
        "/api/contact",
        json={"name": "Paul", "email": "paul@traine-savates.ch", "subject": "Dossard", "message": ""},
    )
    assert response.status_code == 422
    assert db_session.query(ContactMessage).count() == 0


def test_membership_endpoint(client, db_session):
    response = client.post(
        "/api/membership",
        json={
            "first_name": "Lina",
            "last_name": "Favre",
            "email": "lina@traine-savates.ch",
            "birth_date": "2010-03-02",
            "membership_type": "junior",
        },
    )

    assert response.status_code == 201
    request = db_session.query(MembershipRequest).one()
    assert request.status == "new"
    assert request.birth_date.isoformat() == "2010-03-02"


def test_notification_failure_does_not_fail_submission(client, db_session, monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "re_test")
    monkeypatch.setenv("NOTIFICATION_EMAILS", "comite@traine-savates.ch")

    def broken_send(params):
        raise RuntimeError("Resend indisponible")

    monkeypatch.setattr("resend.Emails.send", broken_send)

    response = client.post(
        "/api/contact",
        json={"name": "Paul", "email": "paul@traine-savates.ch", "subject": "Dossard", "message": "Bonjour"},
    )

    assert response.status_code == 201
    assert db_session.query(ContactMessage).count() == 1
