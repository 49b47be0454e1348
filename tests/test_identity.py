"""
JWT identity verification.
"""
from datetime import timedelta

import pytest
from jose import jwt

from roomshare.core.exceptions import UnauthenticatedError
from roomshare.utils.identity import JWTIdentityVerifier, create_access_token


@pytest.fixture
def verifier():
    return JWTIdentityVerifier(secret_key="k", algorithm="HS256", principal_claim="email")


def test_valid_token_yields_principal(verifier):
    token = create_access_token("alice@x.com", secret_key="k")
    assert verifier.verify(token) == "alice@x.com"


def test_falls_back_to_sub_claim(verifier):
    token = jwt.encode({"sub": "bob@x.com"}, "k", algorithm="HS256")
    assert verifier.verify(token) == "bob@x.com"


@pytest.mark.parametrize(
    "token",
    [
        "",
        "not-a-jwt",
        jwt.encode({"email": "a@x.com"}, "other-key", algorithm="HS256"),
        jwt.encode({"role": "student"}, "k", algorithm="HS256"),
    ],
)
def test_rejected_tokens(verifier, token):
    with pytest.raises(UnauthenticatedError):
        verifier.verify(token)


def test_expired_token(verifier):
    token = create_access_token("a@x.com", expires_delta=timedelta(seconds=-10), secret_key="k")
    with pytest.raises(UnauthenticatedError):
        verifier.verify(token)
