"""
Rescue 블록 암호 (카운터 모드)
================================

키가 있는 Rescue 순열을 키 스트림 생성기로 쓴다.

    keystream_i = permute_key([i, 0, 0, 0])
    ciphertext_i = plaintext_i + keystream_i     (원소별, 블록 = FR 4개)
    plaintext_i  = ciphertext_i - keystream_i

회로 밖에서만 사용한다.
"""

from atms.field import FR
from atms.rescue.parameters import STATE_WIDTH
from atms.rescue.permutation import RescuePRP


class RescueBlockCipher:

    @staticmethod
    def keygen(rng=None):
        return RescuePRP.keygen(rng)

    @staticmethod
    def _apply_key_stream(blocks, key, encrypt):
        prp = RescuePRP(key)
        counter = [FR(0)] * STATE_WIDTH
        output = []
        for block in blocks:
            if len(block) != STATE_WIDTH:
                raise ValueError(f"블록 길이는 {STATE_WIDTH}이어야 합니다 (받은 길이: {len(block)})")
            stream = prp.permute(counter)
            if encrypt:
                output.append([FR(int(b)) + k for b, k in zip(block, stream)])
            else:
                output.append([FR(int(b)) - k for b, k in zip(block, stream)])
            counter = [counter[0] + FR(1)] + counter[1:]
        return output

    @classmethod
    def encrypt(cls, blocks, key):
        """평문 블록 리스트를 암호화한다."""
        return cls._apply_key_stream(blocks, key, True)

    @classmethod
    def decrypt(cls, blocks, key):
        """암호문 블록 리스트를 복호화한다."""
        return cls._apply_key_stream(blocks, key, False)
