"""Unit tests for cms_auth.core.security: PBKDF2 password hashing and verification."""

import hashlib
import unittest

from cms_auth.core.security import (
    PBKDF2_ITERATIONS,
    hash_password,
    verify_password,
)


class TestHashPassword(unittest.TestCase):
    """hash_password produces a self-describing pbkdf2 string with a random salt."""

    def test_stored_format(self) -> None:
        stored = hash_password("correct horse")
        tag, iterations, salt_hex, derived_hex = stored.split(":")
        self.assertEqual(tag, "pbkdf2")
        self.assertEqual(int(iterations), PBKDF2_ITERATIONS)
        self.assertEqual(len(bytes.fromhex(salt_hex)), 16)
        self.assertEqual(len(bytes.fromhex(derived_hex)), 32)

    def test_same_password_gets_distinct_salts(self) -> None:
        first = hash_password("longenough")
        second = hash_password("longenough")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("longenough", first))
        self.assertTrue(verify_password("longenough", second))


class TestVerifyPassword(unittest.TestCase):
    """verify_password accepts the right password and fails closed on everything else."""

    def setUp(self) -> None:
        self.stored = hash_password("s3cret-pass")

    def test_correct_password(self) -> None:
        self.assertTrue(verify_password("s3cret-pass", self.stored))

    def test_wrong_password(self) -> None:
        self.assertFalse(verify_password("s3cret-pasS", self.stored))
        self.assertFalse(verify_password("", self.stored))

    def test_unicode_password(self) -> None:
        stored = hash_password("pässwörd-ü")
        self.assertTrue(verify_password("pässwörd-ü", stored))
        self.assertFalse(verify_password("passwort-u", stored))

    def test_honours_embedded_iteration_count(self) -> None:
        # A hash written with a different cost still verifies.
        _, _, salt_hex, _ = self.stored.split(":")
        derived = hashlib.pbkdf2_hmac("sha256", b"legacy-pass", bytes.fromhex(salt_hex), 1000, dklen=32)
        legacy = f"pbkdf2:1000:{salt_hex}:{derived.hex()}"
        self.assertTrue(verify_password("legacy-pass", legacy))

    def test_malformed_stored_values_return_false(self) -> None:
        _, iterations, salt_hex, derived_hex = self.stored.split(":")
        malformed = [
            "",
            "not-a-hash",
            f"bcrypt:{iterations}:{salt_hex}:{derived_hex}",
            f"pbkdf2:{iterations}:{salt_hex}",
            f"pbkdf2:{iterations}:{salt_hex}:{derived_hex}:extra",
            f"pbkdf2:many:{salt_hex}:{derived_hex}",
            f"pbkdf2:0:{salt_hex}:{derived_hex}",
            f"pbkdf2:{iterations}:zz:{derived_hex}",
            f"pbkdf2:{iterations}:{salt_hex}:",
        ]
        for stored in malformed:
            with self.subTest(stored=stored):
                self.assertFalse(verify_password("s3cret-pass", stored))

    def test_non_string_stored_value(self) -> None:
        self.assertFalse(verify_password("s3cret-pass", None))  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
