"""
ATMS 데모: 4명 명단, 임계값 3
===============================

이 스크립트는 ATMS 회로의 전체 흐름을 시연한다.

실행:
    python -m atms.example

흐름:
    1. 키 생성 (4명)
    2. 명단 커밋먼트 계산
    3. 0, 1, 2번 서명자가 같은 메시지에 Schnorr 서명
    4. 회로 합성 + 제약 검사 (threshold = 3 → 만족)
    5. 서명 하나를 뺀 경우 (threshold = 3 → 불만족)
"""

import random

from atms.field import FR
from atms.proof import commit_roster, prove
from atms.signatures.schnorr import Schnorr


def main():
    print("=" * 60)
    print("  ATMS (Ad-hoc Threshold Multi-Signature) Demo")
    print("  명단: 4명, 임계값: 3")
    print("=" * 60)

    rng = random.Random(2024)

    # ── 1. 키 생성 ──
    print("\n[1] 키 생성...")
    keys = [Schnorr.keygen(rng) for _ in range(4)]
    pks = [pk for _, pk in keys]
    for i, pk in enumerate(pks):
        print(f"    pk[{i}].x = {hex(int(pk[0]))[:18]}...")

    # ── 2. 커밋먼트 ──
    commitment = commit_roster(pks)
    print(f"\n[2] 명단 커밋먼트: {hex(int(commitment))[:18]}...")

    # ── 3. 서명 ──
    msg = FR(int.from_bytes(b"ATMS demo message", "little"))
    print("\n[3] 0, 1, 2번 서명...")
    signatures = [Schnorr.sign(keys[i], msg, rng) for i in range(3)] + [None]
    for i, sig in enumerate(signatures):
        ok = sig is not None and Schnorr.verify(msg, pks[i], sig)
        print(f"    slot {i}: {'present' if sig else 'absent '} → {'✓' if ok else '-'}")

    # ── 4. 회로 검사 ──
    print("\n[4] 회로 합성 + 제약 검사 (threshold = 3)...")
    result = prove(pks, signatures, commitment, msg, 3)
    print(f"    결과: {'✓ 만족' if result else '✗ 불만족'}")

    # ── 5. 서명 부족 ──
    print("\n[5] 서명 2개만 제출 (threshold = 3)...")
    short = signatures[:2] + [None, None]
    result = prove(pks, short, commitment, msg, 3)
    print(f"    결과: {'✓ 만족' if result else '✗ 불만족'}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
