"""
Test cases for the masked token codec.
"""
import base64

import pytest

from csrfguard.security import token_codec


def _flip_bit(token, index):
    raw = bytearray(base64.urlsafe_b64decode(token))
    raw[index // 8] ^= 1 << (index % 8)
    return base64.urlsafe_b64encode(bytes(raw)).decode('ascii')


class TestIssue:
    """Test cases for token issuance."""
    
    def test_issued_token_verifies(self):
        secret = token_codec.generate_secret()
        assert token_codec.verify(token_codec.issue(secret), secret)
    
    def test_round_trip_for_many_secrets(self):
        for _ in range(50):
            secret = token_codec.generate_secret()
            assert token_codec.verify(token_codec.issue(secret), secret)
    
    def test_tokens_differ_per_issuance(self):
        secret = token_codec.generate_secret()
        tokens = {token_codec.issue(secret) for _ in range(100)}
        assert len(tokens) == 100
    
    def test_token_hides_secret(self):
        """The raw secret must not appear in the token."""
        secret = token_codec.generate_secret()
        raw = base64.urlsafe_b64decode(token_codec.issue(secret))
        assert len(raw) == 2 * token_codec.SECRET_LENGTH
        assert secret not in raw
    
    def test_token_is_url_safe(self):
        token = token_codec.issue(token_codec.generate_secret())
        assert '+' not in token and '/' not in token
    
    def test_short_secret_rejected(self):
        with pytest.raises(ValueError):
            token_codec.issue(b'too-short')


class TestVerify:
    """Test cases for token verification."""
    
    def test_every_single_bit_flip_rejected(self):
        secret = token_codec.generate_secret()
        token = token_codec.issue(secret)
        for index in range(2 * token_codec.SECRET_LENGTH * 8):
            assert not token_codec.verify(_flip_bit(token, index), secret)
    
    def test_wrong_secret_rejected(self):
        token = token_codec.issue(token_codec.generate_secret())
        assert not token_codec.verify(token, token_codec.generate_secret())
    
    @pytest.mark.parametrize('token', [
        '',
        None,
        'not base64 at all!!',
        'é' * 88,
        base64.urlsafe_b64encode(b'x' * 10).decode('ascii'),
        base64.urlsafe_b64encode(b'x' * 63).decode('ascii'),
        base64.urlsafe_b64encode(b'x' * 128).decode('ascii'),
    ])
    def test_malformed_tokens_rejected(self, token):
        """Malformed input returns False and never raises."""
        assert token_codec.verify(token, token_codec.generate_secret()) is False
    
    def test_secret_length_mismatch_rejected(self):
        secret = token_codec.generate_secret()
        token = token_codec.issue(secret)
        assert not token_codec.verify(token, secret + b'\x00')
        assert not token_codec.verify(token, secret[:16])
    
    def test_empty_secret_rejected(self):
        token = token_codec.issue(token_codec.generate_secret())
        assert not token_codec.verify(token, b'')
    
    def test_unmask_recovers_secret(self):
        secret = token_codec.generate_secret()
        assert token_codec.unmask(token_codec.issue(secret)) == secret
