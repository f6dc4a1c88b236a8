"""
바이트 바인딩
===============

외부 호출자를 위한 얇은 바이트 인터페이스. 모든 입력 길이를 검사하고
해석 실패는 EncodingError로 전달한다.

  | 함수              | 입력                          | 출력        |
  |-------------------|-------------------------------|-------------|
  | derive_public_key | 비밀키 64B                    | 공개키 32B  |
  | sign              | 메시지, 비밀키 64B            | 서명 64B    |
  | verify            | 메시지, 서명 64B, 공개키 32B  | bool        |
"""

from atms.encoding import (
    decode_private_key, decode_public_key, decode_signature,
    encode_point, encode_signature,
)
from atms.jubjub import GENERATOR, multiply
from atms.signatures import eddsa


def derive_public_key(private_key):
    sk = decode_private_key(private_key)
    return encode_point(multiply(GENERATOR, sk))


def sign(message, private_key, rng=None):
    """EdDSA 서명을 64바이트로 반환한다."""
    sk = decode_private_key(private_key)
    return encode_signature(eddsa.sign(bytes(message), sk, rng))


def verify(message, signature, public_key):
    """서명이 유효하면 True. 인코딩이 잘못되면 EncodingError."""
    pk = decode_public_key(public_key)
    sig = decode_signature(signature)
    return eddsa.verify(sig, pk, bytes(message))
