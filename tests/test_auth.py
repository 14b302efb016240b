from datetime import datetime, timedelta, timezone

from jose import jwt

from services.auth import SubscriptionClaims, create_access_token, verify_credential

SECRET = "test-secret"


def test_valid_token_with_bearer_prefix():
    token = create_access_token({"sub": "fan@example.com", "subscribed": True}, SECRET)
    claims = verify_credential(f"Bearer {token}", SECRET)

    assert isinstance(claims, SubscriptionClaims)
    assert claims.sub == "fan@example.com"
    assert claims.subscribed is True


def test_scheme_prefix_is_optional_and_case_insensitive():
    token = create_access_token({"subscribed": True}, SECRET)

    assert verify_credential(token, SECRET) is not None
    assert verify_credential(f"bearer {token}", SECRET) is not None
    assert verify_credential(f"BEARER   {token}", SECRET) is not None


def test_subscribed_defaults_to_false():
    token = create_access_token({"sub": "free@example.com"}, SECRET)
    claims = verify_credential(token, SECRET)

    assert claims is not None
    assert claims.subscribed is False


def test_missing_header_is_invalid():
    assert verify_credential(None, SECRET) is None
    assert verify_credential("", SECRET) is None
    assert verify_credential("Bearer ", SECRET) is None


def test_malformed_token_is_invalid():
    assert verify_credential("Bearer not-a-jwt", SECRET) is None


def test_wrong_signature_is_invalid():
    token = create_access_token({"subscribed": True}, "another-secret")
    assert verify_credential(token, SECRET) is None


def test_expired_token_is_invalid():
    expired = jwt.encode(
        {"subscribed": True, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        SECRET,
        algorithm="HS256",
    )
    assert verify_credential(expired, SECRET) is None


def test_claims_outside_schema_are_invalid():
    token = create_access_token({"subscribed": "yes"}, SECRET)
    assert verify_credential(token, SECRET) is None
