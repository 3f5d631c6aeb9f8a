# tests/test_auth_gate.py
from datetime import datetime, timedelta, timezone

import pytest

from futurehire.api.v1.deps import authenticate
from futurehire.core.errors import ExpiredToken, InvalidToken, Unauthenticated


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Basic dXNlcjpwdw==", "Token abc"])
def test_missing_bearer_token_is_unauthenticated(tokens, header):
    with pytest.raises(Unauthenticated):
        authenticate(header, tokens)

def test_valid_token_resolves_identity(tokens):
    ctx = authenticate(f"Bearer {tokens.issue('abc123')}", tokens)
    assert ctx.identity_id == "abc123"

def test_scheme_is_case_insensitive(tokens):
    ctx = authenticate(f"bearer {tokens.issue('abc123')}", tokens)
    assert ctx.identity_id == "abc123"

def test_invalid_token_is_rejected(tokens):
    with pytest.raises(InvalidToken):
        authenticate("Bearer abc.def.ghi", tokens)

def test_expired_token_is_rejected(tokens):
    token = tokens.issue("abc123", now=datetime.now(timezone.utc) - timedelta(days=2))
    with pytest.raises(ExpiredToken):
        authenticate(f"Bearer {token}", tokens)

def test_gate_is_deterministic(tokens):
    header = f"Bearer {tokens.issue('abc123')}"
    assert authenticate(header, tokens) == authenticate(header, tokens)
