"""
ATMS 예외 계층
================

세 가지 실패 범주를 구분한다.

  - EncodingError: 잘못된 길이의 바이트열, 곡선 위에 있지 않은 점,
    비정규(non-canonical) 스칼라 등 인코딩 실패. 호출자에게 즉시 전달된다.
  - SynthesisError: 회로 구성(합성) 자체의 오류. 같은 셀에 두 번 할당,
    equality가 켜지지 않은 열에 대한 복사 제약, 행 예산 초과 등.
    잘못된 위트니스 값 때문에 발생하지 않는다.
  - 제약 불만족: 예외가 아니다. MockProver.verify()가 실패 목록을 반환하고
    atms.proof.prove()는 False를 반환한다.
"""


class AtmsError(Exception):
    """ATMS 라이브러리의 최상위 예외."""


class EncodingError(AtmsError, ValueError):
    """바이트 인코딩을 해석할 수 없을 때 발생한다."""


class SynthesisError(AtmsError):
    """회로 배치/합성 단계의 구조적 오류."""
