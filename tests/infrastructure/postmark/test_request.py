"""Tests for mapping messages to the Postmark request body."""

from __future__ import annotations

import json

from sendout.domain.entities import Address, Attachment, Body
from sendout.infrastructure.email.providers.postmark import PostmarkEmailRequest


def test_method_and_endpoint():
    assert PostmarkEmailRequest.method == "POST"
    assert PostmarkEmailRequest.endpoint == "/email"


def test_required_fields_only(make_message):
    payload = PostmarkEmailRequest.from_message(make_message()).to_payload()

    assert payload == {
        "From": "Wangari Maathai <wangari@example.org>",
        "To": "kwame@example.org",
        "Subject": "Green Belt Movement Monthly Update",
        "TextBody": "We planted 10,000 trees across Kenya this month.",
    }


def test_text_body_sets_only_text_body(make_message):
    payload = PostmarkEmailRequest.from_message(make_message(body=Body.text("plain"))).to_payload()

    assert payload["TextBody"] == "plain"
    assert "HtmlBody" not in payload


def test_html_body_sets_only_html_body(make_message):
    payload = PostmarkEmailRequest.from_message(
        make_message(body=Body.html("<h1>Pan-African Unity Conference</h1>"))
    ).to_payload()

    assert payload["HtmlBody"] == "<h1>Pan-African Unity Conference</h1>"
    assert "TextBody" not in payload


def test_recipients_are_comma_separated_and_formatted(make_message):
    message = make_message(
        to=["Kwame Nkrumah <kwame@example.org>", "yaa@example.org"],
        cc=["steve@example.org"],
        bcc=["miriam@example.org", "thomas@example.org"],
        reply_to=["Replies <replies@example.org>"],
    )

    payload = PostmarkEmailRequest.from_message(message).to_payload()

    assert payload["To"] == "Kwame Nkrumah <kwame@example.org>,yaa@example.org"
    assert payload["Cc"] == "steve@example.org"
    assert payload["Bcc"] == "miriam@example.org,thomas@example.org"
    assert payload["ReplyTo"] == "Replies <replies@example.org>"


def test_optional_fields_when_present(make_message):
    message = make_message(
        tag="african-literature",
        metadata={"literary_genre": "african-fiction"},
        message_stream="outbound",
        headers={"X-Manuscript-Id": "draft-1", "X-Priority": "1"},
    )

    payload = PostmarkEmailRequest.from_message(message).to_payload()

    assert payload["Tag"] == "african-literature"
    assert payload["Metadata"] == {"literary_genre": "african-fiction"}
    assert payload["MessageStream"] == "outbound"
    assert payload["Headers"] == [
        {"Name": "X-Manuscript-Id", "Value": "draft-1"},
        {"Name": "X-Priority", "Value": "1"},
    ]


def test_attachments_are_base64_encoded(make_message):
    message = make_message(
        attachments=[
            Attachment("hello.txt", b"hello", "text/plain"),
            Attachment("chapter-one.pdf", b"%PDF-1.4", "application/pdf"),
        ]
    )

    payload = PostmarkEmailRequest.from_message(message).to_payload()

    assert payload["Attachments"] == [
        {"Name": "hello.txt", "Content": "aGVsbG8=", "ContentType": "text/plain"},
        {"Name": "chapter-one.pdf", "Content": "JVBERi0xLjQ=", "ContentType": "application/pdf"},
    ]


def test_never_requests_tracking(make_message):
    payload = PostmarkEmailRequest.from_message(make_message(tag="t")).to_payload()

    assert "TrackOpens" not in payload
    assert "TrackLinks" not in payload


def test_json_bytes_match_payload(make_message):
    request = PostmarkEmailRequest.from_message(make_message(cc=["steve@example.org"]))

    assert json.loads(request.to_json_bytes()) == request.to_payload()


def test_non_ascii_addresses_are_kept_as_text(make_message):
    message = make_message(
        from_="Buchhandlung <info@bücher.de>",
        to=["Jürgen <jürgen@example.org>", Address("anna@example.org", "Müller, Anna")],
    )

    payload = PostmarkEmailRequest.from_message(message).to_payload()

    assert payload["From"] == "Buchhandlung <info@bücher.de>"
    assert payload["To"] == 'Jürgen <jürgen@example.org>,"Müller, Anna" <anna@example.org>'
