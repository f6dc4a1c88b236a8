"""
Schnorr 서명 (네이티브)
=========================

회로의 Schnorr 검증 게이트가 따라야 하는 기준 구현.

    keygen:  sk ← FS,  pk = sk·G
    sign:    k ← FS,   R = k·G
             c = Rescue(R.x, pk.x, msg)  → FS로 재인코딩
             s = k + c·sk
    verify:  s·G == R + c·pk

메시지는 FR 원소 하나이다. 서명은 (R, s) 튜플이다.

사용 예시:
    >>> sk, pk = Schnorr.keygen()
    >>> sig = Schnorr.sign((sk, pk), FR(42))
    >>> Schnorr.verify(FR(42), pk, sig)
    True
"""

from atms.field import FR, FS, fs_from_fr, random_fs
from atms.jubjub import GENERATOR, IDENTITY, add, multiply
from atms.rescue.sponge import RescueSponge


# 빈 슬롯에 쓰는 더미 서명 (항등원, 0)
DUMMY_SIGNATURE = (IDENTITY, FS(0))


class Schnorr:

    @staticmethod
    def keygen(rng=None):
        """(비밀키, 공개키) 쌍을 만든다."""
        sk = random_fs(rng)
        return sk, multiply(GENERATOR, sk)

    @staticmethod
    def challenge(announcement, pk, msg):
        """Fiat-Shamir 챌린지 (FR). 회로에서는 이 값 그대로 곱셈에 쓴다."""
        return RescueSponge.hash([announcement[0], pk[0], FR(int(msg))])

    @staticmethod
    def sign(key_pair, msg, rng=None):
        """메시지 msg(FR)에 서명한다.

        Args:
            key_pair: (sk, pk)
            msg: FR 원소
            rng: 논스 생성용 난수 발생기 (None이면 secrets)

        Returns:
            (R, s)
        """
        sk, pk = key_pair
        k = random_fs(rng)
        announcement = multiply(GENERATOR, k)
        c = fs_from_fr(Schnorr.challenge(announcement, pk, msg))
        return announcement, k + c * FS(int(sk))

    @staticmethod
    def verify(msg, pk, sig):
        announcement, response = sig
        c = fs_from_fr(Schnorr.challenge(announcement, pk, msg))
        return multiply(GENERATOR, response) == add(announcement, multiply(pk, c))
