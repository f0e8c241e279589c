"""
rsquare 공유 유틸리티
=====================

여러 모듈에서 공유되는 작은 헬퍼 함수.

  - is_power_of_two: 도메인 크기/scale 검사
  - log2_exact: 2의 거듭제곱의 지수
  - pad_to_length: FFT 입력 길이를 맞추기 위한 0 패딩
  - parallel_map: 선택적 concurrent.futures Executor 위의 map
"""


def is_power_of_two(n):
    """n이 양의 2의 거듭제곱인지 확인한다.

    0과 음수는 2의 거듭제곱이 아니다.

    예시:
        >>> is_power_of_two(1)  # True (2^0)
        >>> is_power_of_two(6)  # False
    """
    if not isinstance(n, int) or isinstance(n, bool) or n <= 0:
        return False
    return n & (n - 1) == 0


def log2_exact(n):
    """2의 거듭제곱 n에 대해 log2(n)을 반환한다.

    Raises:
        ValueError: n이 2의 거듭제곱이 아닐 때
    """
    if not is_power_of_two(n):
        raise ValueError(f"n은 2의 거듭제곱이어야 합니다: {n}")
    return n.bit_length() - 1


def pad_to_length(lst, length, fill):
    """리스트를 fill 값으로 length까지 패딩한다.

    Args:
        lst: 패딩할 리스트
        length: 목표 길이 (len(lst) 이상)
        fill: 채울 값 (보통 체의 0)

    Returns:
        list: 길이 length의 새 리스트
    """
    if len(lst) > length:
        raise ValueError(f"리스트 길이 {len(lst)}가 목표 길이 {length}보다 깁니다")
    return list(lst) + [fill] * (length - len(lst))


def parallel_map(executor, fn, items):
    """fn을 items에 적용한 결과 리스트. 입력 순서를 유지한다.

    executor가 None이면 현재 스레드에서 순차 실행한다.
    결과를 모두 모은 뒤 반환하므로 호출자에게는 패스 간 barrier가 된다.
    """
    if executor is None:
        return [fn(item) for item in items]
    return list(executor.map(fn, items))
