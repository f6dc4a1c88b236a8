"""
Tests for the native signature schemes and the byte binding surface.

Covers:
- Schnorr keygen/sign/verify and the challenge path (Rescue over R.x, pk.x, msg)
- EdDSA over byte messages (SHA-512 + domain-tagged Rescue)
- bindings: derive_public_key / sign / verify with fixed-length bytes
"""

import hashlib

import pytest

from atms import bindings
from atms.encoding import decode_point, encode_point
from atms.errors import EncodingError
from atms.field import FR, FS, FR_MODULUS, fr_from_bytes_wide, fs_from_fr
from atms.jubjub import GENERATOR, add, multiply
from atms.rescue.sponge import RescueSponge
from atms.signatures import eddsa
from atms.signatures.schnorr import DUMMY_SIGNATURE, Schnorr


# ─────────────────────────────────────────────────────────────────────
# Schnorr
# ─────────────────────────────────────────────────────────────────────

class TestSchnorr:

    @pytest.fixture
    def key_pair(self, rng):
        return Schnorr.keygen(rng)

    def test_keygen(self, key_pair):
        sk, pk = key_pair
        assert pk == multiply(GENERATOR, sk)

    def test_sign_verify(self, key_pair, rng):
        msg = FR(rng.randrange(FR_MODULUS))
        sig = Schnorr.sign(key_pair, msg, rng)
        assert Schnorr.verify(msg, key_pair[1], sig)

    def test_response_equation(self, key_pair, rng):
        msg = FR(42)
        announcement, response = Schnorr.sign(key_pair, msg, rng)
        c = RescueSponge.hash([announcement[0], key_pair[1][0], msg])
        assert Schnorr.challenge(announcement, key_pair[1], msg) == c
        assert multiply(GENERATOR, response) == add(
            announcement, multiply(key_pair[1], fs_from_fr(c))
        )

    def test_wrong_message(self, key_pair, rng):
        sig = Schnorr.sign(key_pair, FR(1), rng)
        assert not Schnorr.verify(FR(2), key_pair[1], sig)

    def test_wrong_key(self, key_pair, rng):
        sig = Schnorr.sign(key_pair, FR(1), rng)
        _, other = Schnorr.keygen(rng)
        assert not Schnorr.verify(FR(1), other, sig)

    def test_perturbed_response(self, key_pair, rng):
        announcement, response = Schnorr.sign(key_pair, FR(1), rng)
        assert not Schnorr.verify(FR(1), key_pair[1], (announcement, response + FS(1)))

    def test_dummy_signature_does_not_verify(self, key_pair):
        assert not Schnorr.verify(FR(1), key_pair[1], DUMMY_SIGNATURE)


# ─────────────────────────────────────────────────────────────────────
# EdDSA
# ─────────────────────────────────────────────────────────────────────

class TestEdDSA:

    def test_sign_verify(self, rng):
        sk = FS(rng.randrange(1, 2 ** 200))
        pk = multiply(GENERATOR, sk)
        sig = eddsa.sign(b"hello atms", sk, rng)
        assert eddsa.verify(sig, pk, b"hello atms")

    def test_modified_message(self, rng):
        sk = FS(987654321)
        pk = multiply(GENERATOR, sk)
        sig = eddsa.sign(b"hello atms", sk, rng)
        assert not eddsa.verify(sig, pk, b"hello atmz")

    def test_wrong_key(self, rng):
        sk = FS(987654321)
        sig = eddsa.sign(b"msg", sk, rng)
        assert not eddsa.verify(sig, multiply(GENERATOR, 5), b"msg")

    def test_message_hash(self):
        expected = fr_from_bytes_wide(hashlib.sha512(b"abc").digest())
        assert eddsa.hash_message(b"abc") == expected

    def test_challenge_differs_from_schnorr(self):
        """EdDSA와 Schnorr는 서로 다른 챌린지 경로를 쓴다."""
        R = multiply(GENERATOR, 3)
        pk = multiply(GENERATOR, 5)
        m = eddsa.hash_message(b"abc")
        assert eddsa.challenge(R, pk, b"abc") != fs_from_fr(Schnorr.challenge(R, pk, m))


# ─────────────────────────────────────────────────────────────────────
# Bindings
# ─────────────────────────────────────────────────────────────────────

PRIVATE_KEY = bytes(range(64))


class TestBindings:

    def test_derive_public_key(self):
        pk = bindings.derive_public_key(PRIVATE_KEY)
        assert len(pk) == 32
        expected = multiply(GENERATOR, int.from_bytes(PRIVATE_KEY, "little"))
        assert decode_point(pk) == expected
        assert pk == encode_point(expected)

    def test_sign_verify(self, rng):
        pk = bindings.derive_public_key(PRIVATE_KEY)
        sig = bindings.sign(b"message", PRIVATE_KEY, rng)
        assert len(sig) == 64
        assert bindings.verify(b"message", sig, pk) is True

    def test_flipped_message_bit(self, rng):
        pk = bindings.derive_public_key(PRIVATE_KEY)
        sig = bindings.sign(b"message", PRIVATE_KEY, rng)
        assert bindings.verify(b"messagf", sig, pk) is False

    def test_wrong_public_key(self, rng):
        sig = bindings.sign(b"message", PRIVATE_KEY, rng)
        other = bindings.derive_public_key(bytes(reversed(PRIVATE_KEY)))
        assert bindings.verify(b"message", sig, other) is False

    def test_length_errors(self, rng):
        pk = bindings.derive_public_key(PRIVATE_KEY)
        sig = bindings.sign(b"message", PRIVATE_KEY, rng)
        with pytest.raises(EncodingError):
            bindings.derive_public_key(PRIVATE_KEY[:63])
        with pytest.raises(EncodingError):
            bindings.sign(b"message", PRIVATE_KEY + b"\x00")
        with pytest.raises(EncodingError):
            bindings.verify(b"message", sig[:63], pk)
        with pytest.raises(EncodingError):
            bindings.verify(b"message", sig, pk[:31])

    def test_invalid_public_key(self, rng):
        sig = bindings.sign(b"message", PRIVATE_KEY, rng)
        low_order = (FR_MODULUS - 1).to_bytes(32, "little")
        with pytest.raises(EncodingError):
            bindings.verify(b"message", sig, low_order)
