import pytest

from portfolio.lib.contact import (
    ContactValidationError,
    MalformedRequestError,
    Submission,
    compose_notification,
    is_valid_email,
    parse_submission,
    render_html_body,
    render_text_body,
    validate_submission,
)


def test_parse_keeps_values_and_ignores_unknown_keys():
    sub = parse_submission({"name": "  Jane ", "email": "jane@example.com", "message": "Hi", "extra": 1})
    assert sub.name == "  Jane "
    assert sub.phone is None
    assert not sub.is_spam


def test_parse_rejects_non_string_values():
    with pytest.raises(MalformedRequestError):
        parse_submission({"name": ["Jane"], "email": "jane@example.com", "message": "Hi"})


def test_any_honeypot_value_is_spam():
    assert Submission(honeypot=" ").is_spam
    assert Submission(honeypot="x").is_spam
    assert not Submission(honeypot="").is_spam
    assert not Submission().is_spam


def test_padded_email_is_rejected():
    with pytest.raises(ContactValidationError) as exc:
        validate_submission(Submission(name="Jane", email=" jane@example.com ", message="Hi"))
    assert exc.value.message == "Please provide a valid email address"


def test_blank_name_counts_as_missing():
    with pytest.raises(ContactValidationError) as exc:
        validate_submission(Submission(name="   ", email="jane@example.com", message="Hi"))
    assert exc.value.message == "Name, email, and message are required"


@pytest.mark.parametrize(
    "email,ok",
    [
        ("jane@example.com", True),
        ("j.doe+tag@mail.example.co.uk", True),
        ("jane@example", False),
        ("jane.example.com", False),
        ("ja ne@example.com", False),
        ("jane@@example.com", False),
    ],
)
def test_email_pattern(email, ok):
    assert is_valid_email(email) is ok


def test_required_fields_checked_before_email():
    with pytest.raises(ContactValidationError) as exc:
        validate_submission(Submission(name="Jane", email="bad", message=""))
    assert exc.value.message == "Name, email, and message are required"


def test_text_body_uses_placeholder_for_phone():
    body = render_text_body(Submission(name="Jane", email="jane@example.com", message="Line 1\nLine 2"))
    assert "Phone: Not provided" in body
    assert body.endswith("Message:\nLine 1\nLine 2")


def test_html_body_escapes_and_keeps_line_breaks():
    sub = Submission(
        name="<b>Jane</b>",
        email="jane@example.com",
        phone="555-0100",
        message="Hi & bye\n<script>alert(1)</script>",
    )
    body = render_html_body(sub)
    assert "&lt;b&gt;Jane&lt;/b&gt;" in body
    assert "Hi &amp; bye<br>&lt;script&gt;" in body
    assert "<script>" not in body
    assert "555-0100" in body


def test_compose_notification_has_both_parts():
    sub = Submission(name="Jane\nDoe", email="jane@example.com", message="Hello")
    msg = compose_notification(sub, sender="owner@example.com", recipient="inbox@example.com")

    assert msg["Subject"] == "New Contact Form Submission from Jane Doe"
    assert msg["From"] == "Portfolio Contact Form <owner@example.com>"
    assert msg["To"] == "inbox@example.com"
    types = [part.get_content_type() for part in msg.get_payload()]
    assert types == ["text/plain", "text/html"]
