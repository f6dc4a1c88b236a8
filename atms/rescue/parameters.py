"""
Rescue 파라미터
=================

폭 4, 12라운드, α = 5 인 Rescue 순열의 상수.

**라운드 구성** (한 라운드 = S-box 층 두 개):
    st ← M · st^(1/5) + V[2r+1]
    st ← M · st^5     + V[2r+2]
  시작 전에 st ← st + V[0]. 따라서 상태 벡터 상수는 2·12 + 1 = 25개.

**상수 벡터**:
  - RC_VECTOR: 고정 키(해시) 모드의 라운드 상수
  - KI_VECTOR: 키 모드에서 키 스케줄을 돌릴 때 쓰는 키 주입 상수
  둘 다 레이블을 붙인 SHAKE-256 출력을 64바이트씩 잘라 r로 wide 축약한다.
  (결정론적이므로 모든 Prover/Verifier가 같은 값을 얻는다)

**MDS 행렬**:
  코시(Cauchy) 행렬 M[i][j] = 1 / (x_i - y_j), x_i = i, y_j = -(j + 4).
  x와 y가 서로 겹치지 않으므로 모든 정방 부분행렬이 가역 → MDS.
"""

import hashlib

from atms.field import FR, FR_MODULUS, fr_from_bytes_wide


STATE_WIDTH = 4
RATE = 3
CAPACITY = 1
N_ROUNDS = 12
N_CONSTS = 2 * N_ROUNDS + 1

ALPHA = 5
# 5 · ALPHA_INV ≡ 1 (mod r - 1)
ALPHA_INV = pow(ALPHA, -1, FR_MODULUS - 1)

MDS = [
    [FR(1) / FR(i + j + 4) for j in range(STATE_WIDTH)]
    for i in range(STATE_WIDTH)
]


def _expand_constants(label):
    # 25 × 4 개의 원소를 SHAKE-256 스트림에서 뽑는다
    stream = hashlib.shake_256(label).digest(N_CONSTS * STATE_WIDTH * 64)
    elements = [
        fr_from_bytes_wide(stream[64 * i:64 * (i + 1)])
        for i in range(N_CONSTS * STATE_WIDTH)
    ]
    return [
        elements[STATE_WIDTH * i:STATE_WIDTH * (i + 1)]
        for i in range(N_CONSTS)
    ]


RC_VECTOR = _expand_constants(b"atms.rescue.round_constants")
KI_VECTOR = _expand_constants(b"atms.rescue.key_injection")
