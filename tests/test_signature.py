import pytest

from orbit_intake.signature import (
    FRESHNESS_WINDOW_SECONDS,
    MISSING_CREDENTIALS,
    SIGNATURE_MISMATCH,
    STALE_TIMESTAMP,
    SignatureVerifier,
)

from tests.conftest import NOW, TEST_SECRET, signed_headers, slack_signature

BODY = "token=x&team_id=T1&command=%2Forbit&text=deploy+now&user_name=alice"


@pytest.fixture
def verifier(clock):
    return SignatureVerifier(TEST_SECRET, clock=clock)


def test_valid_signature_is_accepted(verifier):
    result = verifier.verify(signed_headers(BODY), BODY)
    assert result.ok
    assert result.reason is None


def test_lowercase_headers_are_accepted(verifier):
    assert verifier.verify(signed_headers(BODY, lowercase=True), BODY)


def test_sign_matches_slack_scheme(verifier):
    assert verifier.sign(NOW, BODY) == slack_signature(TEST_SECRET, NOW, BODY)
    assert verifier.sign(NOW, BODY).startswith("v0=")


@pytest.mark.parametrize("missing", ["X-Slack-Signature", "X-Slack-Request-Timestamp"])
def test_missing_header_is_rejected(verifier, missing):
    headers = signed_headers(BODY)
    del headers[missing]
    result = verifier.verify(headers, BODY)
    assert not result.ok
    assert result.reason == MISSING_CREDENTIALS


def test_empty_headers_are_rejected(verifier):
    assert verifier.verify({}, BODY).reason == MISSING_CREDENTIALS


@pytest.mark.parametrize("offset", [301, -301, 3600])
def test_stale_timestamp_is_rejected_even_if_correctly_signed(verifier, offset):
    ts = NOW + offset
    result = verifier.verify(signed_headers(BODY, timestamp=ts), BODY)
    assert not result.ok
    assert result.reason == STALE_TIMESTAMP


@pytest.mark.parametrize("offset", [300, -300, 0])
def test_timestamp_at_edge_of_window_is_accepted(verifier, offset):
    assert verifier.verify(signed_headers(BODY, timestamp=NOW + offset), BODY)


def test_non_numeric_timestamp_is_rejected(verifier):
    headers = signed_headers(BODY, timestamp="yesterday")
    assert verifier.verify(headers, BODY).reason == STALE_TIMESTAMP


def test_wrong_secret_is_rejected(verifier):
    headers = signed_headers(BODY, secret="some-other-secret")
    assert verifier.verify(headers, BODY).reason == SIGNATURE_MISMATCH


def test_every_single_body_byte_flip_is_rejected(verifier):
    headers = signed_headers(BODY)
    for i in range(len(BODY)):
        flipped = BODY[:i] + chr(ord(BODY[i]) ^ 0x01) + BODY[i + 1:]
        assert not verifier.verify(headers, flipped), f"accepted tampered body at {i}"


def test_every_single_signature_char_flip_is_rejected(verifier):
    headers = signed_headers(BODY)
    good = headers["X-Slack-Signature"]
    for i in range(len(good)):
        bad = good[:i] + chr(ord(good[i]) ^ 0x01) + good[i + 1:]
        result = verifier.verify(dict(headers, **{"X-Slack-Signature": bad}), BODY)
        assert result.reason == SIGNATURE_MISMATCH, f"accepted tampered signature at {i}"


def test_tampered_timestamp_is_rejected(verifier):
    headers = signed_headers(BODY)
    headers["X-Slack-Request-Timestamp"] = str(NOW + 1)
    assert verifier.verify(headers, BODY).reason == SIGNATURE_MISMATCH


def test_truncated_and_non_ascii_signatures_are_rejected(verifier):
    headers = signed_headers(BODY)
    for bad in (headers["X-Slack-Signature"][:-1], "v0=ñ", "v1=" + headers["X-Slack-Signature"][3:]):
        assert verifier.verify(dict(headers, **{"X-Slack-Signature": bad}), BODY).reason == SIGNATURE_MISMATCH


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        SignatureVerifier("")


def test_replay_window_is_five_minutes():
    assert FRESHNESS_WINDOW_SECONDS == 300
