# tests/test_security.py
from datetime import UTC, datetime, timedelta

import pytest
from jose import JWTError, jwt

from daily_shloka.core.security import create_access_token, decode_access_token


def test_token_round_trips_the_user_id() -> None:
    assert decode_access_token(create_access_token(42)) == 42


def test_expired_token_is_rejected(test_settings) -> None:
    token = jwt.encode(
        {"sub": "42", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        test_settings.secret_key,
        algorithm=test_settings.jwt_algorithm,
    )
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_token_signed_with_another_key_is_rejected(test_settings) -> None:
    token = jwt.encode({"sub": "42"}, "not-the-secret", algorithm=test_settings.jwt_algorithm)
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_token_without_a_numeric_subject_is_rejected(test_settings) -> None:
    for claims in ({"foo": "bar"}, {"sub": "abc"}):
        token = jwt.encode(claims, test_settings.secret_key, algorithm=test_settings.jwt_algorithm)
        with pytest.raises(JWTError):
            decode_access_token(token)
