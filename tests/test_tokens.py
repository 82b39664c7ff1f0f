"""Unit tests for cms_auth.core.tokens: signed token encode / decode_and_verify."""

import base64
import json
import time
import unittest

import jwt

from cms_auth.core.tokens import decode_and_verify, encode
from cms_auth.schemas.auth import Claims

SECRET = "unit-test-signing-secret-0123456789abcdef"


def _claims(**overrides: object) -> Claims:
    values: dict[str, object] = {
        "sub": "3f1c2d4e-0000-4000-8000-000000000001",
        "email": "a@x.com",
        "name": "Ada",
        "roles": ["admin", "editor"],
        "session": "opaque-session-id",
        "exp": int(time.time()) + 3600,
    }
    values.update(overrides)
    return Claims(**values)


def _b64url_json(segment: str) -> dict:
    padded = segment + "=" * (-len(segment) % 4)
    return json.loads(base64.urlsafe_b64decode(padded))


class TestEncode(unittest.TestCase):
    """encode builds header.payload.signature with unpadded base64url segments."""

    def test_three_unpadded_segments(self) -> None:
        token = encode(_claims(), SECRET)
        segments = token.split(".")
        self.assertEqual(len(segments), 3)
        for segment in segments:
            self.assertNotIn("=", segment)
            self.assertNotIn("+", segment)
            self.assertNotIn("/", segment)

    def test_header_and_payload(self) -> None:
        claims = _claims()
        header_seg, payload_seg, _ = encode(claims, SECRET).split(".")
        header = _b64url_json(header_seg)
        self.assertEqual(header["alg"], "HS256")
        self.assertEqual(header["typ"], "JWT")
        payload = _b64url_json(payload_seg)
        self.assertEqual(payload["sub"], claims.sub)
        self.assertEqual(payload["roles"], ["admin", "editor"])
        self.assertEqual(payload["session"], "opaque-session-id")
        self.assertEqual(payload["exp"], claims.exp)


class TestDecodeAndVerify(unittest.TestCase):
    """decode_and_verify returns the claims or None; it never raises."""

    def test_round_trip(self) -> None:
        claims = _claims()
        self.assertEqual(decode_and_verify(encode(claims, SECRET), SECRET), claims)

    def test_round_trip_without_name(self) -> None:
        claims = _claims(name=None, roles=[])
        decoded = decode_and_verify(encode(claims, SECRET), SECRET)
        self.assertIsNotNone(decoded)
        self.assertIsNone(decoded.name)
        self.assertEqual(decoded.roles, [])

    def test_wrong_secret(self) -> None:
        token = encode(_claims(), SECRET)
        self.assertIsNone(decode_and_verify(token, SECRET + "-rotated"))

    def test_tampered_segments(self) -> None:
        token = encode(_claims(), SECRET)
        header_seg, payload_seg, sig_seg = token.split(".")
        forged_payload = _b64url_json(payload_seg)
        forged_payload["roles"] = ["admin"]
        forged_payload["sub"] = "someone-else"
        forged_seg = (
            base64.urlsafe_b64encode(json.dumps(forged_payload).encode()).decode().rstrip("=")
        )
        flipped_sig = ("A" if sig_seg[0] != "A" else "B") + sig_seg[1:]
        tampered = [
            f"{header_seg}.{forged_seg}.{sig_seg}",
            f"{header_seg}.{payload_seg}.{flipped_sig}",
            f"{header_seg[:-1]}.{payload_seg}.{sig_seg}",
        ]
        for candidate in tampered:
            with self.subTest(token=candidate):
                self.assertIsNone(decode_and_verify(candidate, SECRET))

    def test_wrong_segment_count(self) -> None:
        token = encode(_claims(), SECRET)
        header_seg, payload_seg, sig_seg = token.split(".")
        for candidate in (
            f"{header_seg}.{payload_seg}",
            f"{token}.{sig_seg}",
            header_seg,
            "",
        ):
            with self.subTest(token=candidate):
                self.assertIsNone(decode_and_verify(candidate, SECRET))

    def test_expiry_boundary(self) -> None:
        exp = 2_000_000_000
        token = encode(_claims(exp=exp), SECRET)
        self.assertIsNotNone(decode_and_verify(token, SECRET, now=exp - 1))
        self.assertIsNone(decode_and_verify(token, SECRET, now=exp))
        self.assertIsNone(decode_and_verify(token, SECRET, now=exp + 1))

    def test_expired_against_wall_clock(self) -> None:
        token = encode(_claims(exp=int(time.time()) - 10), SECRET)
        self.assertIsNone(decode_and_verify(token, SECRET))

    def test_unsigned_token_rejected(self) -> None:
        header = base64.urlsafe_b64encode(b'{"alg":"none","typ":"JWT"}').decode().rstrip("=")
        _, payload_seg, _ = encode(_claims(), SECRET).split(".")
        self.assertIsNone(decode_and_verify(f"{header}.{payload_seg}.", SECRET))

    def test_payload_missing_required_claims(self) -> None:
        incomplete = jwt.encode(
            {"sub": "u1", "email": "a@x.com", "exp": int(time.time()) + 60},
            SECRET,
            algorithm="HS256",
        )
        self.assertIsNone(decode_and_verify(incomplete, SECRET))


if __name__ == "__main__":
    unittest.main()
