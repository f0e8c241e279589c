"""
rsquare 예외 계층
=================

인코딩/커밋 파이프라인에서 발생하는 모든 실패는 아래 예외 중 하나로 보고된다.
모두 생성 시점(또는 호출 시점)에 동기적으로 감지되며 재시도하지 않는다.

  - InvalidDimension: 행/share 개수나 scale이 2의 거듭제곱이 아니거나 길이 불일치
  - DomainUnavailable: 체(field)에 필요한 위수의 단위근 부분군이 없음
  - CommitmentSetupFailure: SRS(공개 파라미터) 생성/검증 실패
  - CommitmentFailure: 개별 다항식 커밋 실패
  - MerkleConstructionFailure: 빈/잘못된 리프 집합으로 머클 루트 구성 실패
  - ProofGenerationUnavailable: 열기 증명 생성은 구현되지 않음

사용 예시:
    >>> from rsquare.errors import InvalidDimension
    >>> raise InvalidDimension("scale must be a power of 2", data={"scale": 3})
"""


class RSquareError(Exception):
    """rsquare 예외의 기반 클래스.

    속성:
        message: 사람이 읽을 수 있는 메시지
        code: 기계가 읽을 수 있는 안정적인 코드 (snake_case)
        data: 진단용 부가 정보 (dict)
    """

    default_code = "rsquare_error"

    def __init__(self, message="", code=None, data=None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.data = dict(data) if data else {}

    def __str__(self):
        if self.message:
            return f"{self.code}: {self.message}"
        return self.code

    def to_dict(self):
        """JSON 응답용 dict로 변환한다."""
        return {
            "code": self.code,
            "message": self.message or None,
            "data": self.data or None,
        }


class InvalidDimension(RSquareError, ValueError):
    default_code = "invalid_dimension"


class DomainUnavailable(RSquareError, ValueError):
    default_code = "domain_unavailable"


class CommitmentSetupFailure(RSquareError):
    default_code = "commitment_setup_failure"


class CommitmentFailure(RSquareError, ValueError):
    default_code = "commitment_failure"


class MerkleConstructionFailure(RSquareError):
    default_code = "merkle_construction_failure"


class ProofGenerationUnavailable(RSquareError, NotImplementedError):
    """열기 증명(opening proof) 생성/검증은 이 코어에 존재하지 않는다."""

    default_code = "proof_generation_unavailable"
