"""
Foundation module tests: utils.py, field.py, polynomial.py, domain.py
"""
import pytest

from rsquare.domain import EvaluationDomain
from rsquare.errors import DomainUnavailable, InvalidDimension, RSquareError
from rsquare.field import (
    BLS12_381, BLSFR, BN128, CURVE_ORDER, CURVES, FR,
    get_curve, get_root_of_unity, get_roots_of_unity,
)
from rsquare.polynomial import Polynomial, fft, ifft
from rsquare.utils import is_power_of_two, log2_exact, pad_to_length, parallel_map


# =====================================================================
# utils
# =====================================================================

class TestUtils:
    @pytest.mark.parametrize("n", [1, 2, 4, 1024, 2 ** 28])
    def test_power_of_two(self, n):
        assert is_power_of_two(n)

    @pytest.mark.parametrize("n", [0, -2, 3, 6, 12, 1.0, True, "4", None])
    def test_not_power_of_two(self, n):
        assert not is_power_of_two(n)

    def test_log2_exact(self):
        assert log2_exact(1) == 0
        assert log2_exact(16) == 4

    def test_log2_exact_rejects(self):
        with pytest.raises(ValueError):
            log2_exact(12)

    def test_pad_to_length(self):
        assert pad_to_length([1, 2], 4, 0) == [1, 2, 0, 0]
        assert pad_to_length([1, 2], 2, 0) == [1, 2]

    def test_pad_to_length_too_long(self):
        with pytest.raises(ValueError):
            pad_to_length([1, 2, 3], 2, 0)

    def test_parallel_map_sequential(self):
        assert parallel_map(None, lambda x: x * 2, range(4)) == [0, 2, 4, 6]

    def test_parallel_map_executor_keeps_order(self):
        from concurrent.futures import ThreadPoolExecutor
        with ThreadPoolExecutor(max_workers=4) as pool:
            assert parallel_map(pool, lambda x: x * x, range(8)) == [x * x for x in range(8)]


# =====================================================================
# 스칼라 필드
# =====================================================================

class TestFR:
    def test_modulus(self):
        assert FR.field_modulus == CURVE_ORDER

    def test_modular_reduction(self):
        assert FR(CURVE_ORDER + 7) == FR(7)

    def test_arithmetic(self):
        assert FR(3) + FR(5) == FR(8)
        assert FR(0) - FR(1) == FR(CURVE_ORDER - 1)
        assert FR(3) * FR(7) == FR(21)
        assert FR(1) / FR(3) * FR(3) == FR(1)

    def test_operations_keep_subclass(self):
        assert isinstance(FR(3) * FR(4), FR)
        assert isinstance(BLSFR(3) + BLSFR(4), BLSFR)

    def test_byte_length(self):
        assert FR.byte_length() == 32
        assert BLSFR.byte_length() == 32

    def test_bytes_roundtrip(self):
        x = FR(123456789)
        data = x.to_bytes()
        assert len(data) == 32
        assert FR.from_bytes(data) == x

    def test_from_bytes_wrong_length(self):
        with pytest.raises(ValueError):
            FR.from_bytes(b"\x01")

    def test_from_bytes_out_of_range(self):
        with pytest.raises(ValueError):
            FR.from_bytes(b"\xff" * 32)


# =====================================================================
# 곡선
# =====================================================================

class TestCurve:
    def test_registry(self):
        assert get_curve("bn128") is BN128
        assert get_curve("bls12_381") is BLS12_381
        assert set(CURVES) == {"bn128", "bls12_381"}

    def test_unknown_curve(self):
        with pytest.raises(ValueError):
            get_curve("secp256k1")

    def test_scalar_fields(self):
        assert BN128.scalar_field is FR
        assert BLS12_381.scalar_field is BLSFR

    def test_coordinate_sizes(self):
        assert BN128.coordinate_size == 32
        assert BLS12_381.coordinate_size == 48

    def test_mul_add(self):
        p2 = BN128.mul(BN128.G1, 2)
        assert p2 == BN128.add(BN128.G1, BN128.G1)
        assert BN128.mul(BN128.G1, FR(2)) == p2

    def test_mul_by_order_is_infinity(self):
        assert BN128.mul(BN128.G1, 0) is None
        assert BN128.mul(BN128.G1, CURVE_ORDER) is None

    def test_neg(self):
        assert BN128.add(BN128.G1, BN128.neg(BN128.G1)) is None

    def test_g1_to_bytes(self):
        data = BN128.g1_to_bytes(BN128.G1)
        assert len(data) == 64
        assert data == (1).to_bytes(32, "big") + (2).to_bytes(32, "big")

    def test_g1_to_bytes_infinity(self):
        assert BN128.g1_to_bytes(None) == bytes(64)
        assert BLS12_381.g1_to_bytes(None) == bytes(96)


# =====================================================================
# 단위근
# =====================================================================

class TestRootsOfUnity:
    @pytest.mark.parametrize("n", [2, 4, 8, 16])
    def test_root_of_unity(self, n):
        omega = get_root_of_unity(n)
        assert omega ** n == FR(1)
        assert omega ** (n // 2) == FR(-1)

    def test_order_one(self):
        assert get_root_of_unity(1) == FR(1)
        assert get_root_of_unity(1, BLSFR) == BLSFR(1)

    def test_largest_bn128_subgroup_is_primitive(self):
        omega = get_root_of_unity(2 ** 28)
        assert omega ** (2 ** 27) == FR(-1)

    def test_largest_bls_subgroup_is_primitive(self):
        omega = get_root_of_unity(2 ** 32, BLSFR)
        assert isinstance(omega, BLSFR)
        assert omega ** (2 ** 31) == BLSFR(-1)

    def test_stride_relation(self):
        """ω_{4n}^4 == ω_n"""
        assert get_root_of_unity(16) ** 4 == get_root_of_unity(4)

    def test_not_power_of_two(self):
        with pytest.raises(InvalidDimension):
            get_root_of_unity(6)

    def test_domain_too_large(self):
        with pytest.raises(DomainUnavailable) as exc_info:
            get_root_of_unity(2 ** 29)
        assert exc_info.value.code == "domain_unavailable"
        assert isinstance(exc_info.value, RSquareError)
        with pytest.raises(DomainUnavailable):
            get_root_of_unity(2 ** 33, BLSFR)

    def test_roots_list(self):
        roots = get_roots_of_unity(4)
        omega = get_root_of_unity(4)
        assert roots == [FR(1), omega, omega ** 2, omega ** 3]
        assert len(set(int(r) for r in roots)) == 4


# =====================================================================
# Polynomial
# =====================================================================

class TestPolynomial:
    def test_trim(self):
        p = Polynomial([FR(1), FR(2), FR(0), FR(0)])
        assert p.coeffs == [FR(1), FR(2)]
        assert p.degree == 1

    def test_zero(self):
        assert Polynomial().coeffs == [FR(0)]
        assert Polynomial().degree == 0
        assert Polynomial([0, 0]) == Polynomial()

    def test_int_coeffs_lifted(self):
        p = Polynomial([1, 2, 3])
        assert all(isinstance(c, FR) for c in p.coeffs)
        assert len(p) == 3

    def test_field_inferred(self):
        p = Polynomial([BLSFR(1), BLSFR(2)])
        assert p.field is BLSFR
        assert Polynomial([], field=BLSFR).coeffs == [BLSFR(0)]

    def test_evaluate(self):
        p = Polynomial([FR(1), FR(2), FR(3)])
        assert p.evaluate(FR(2)) == FR(17)
        assert p.evaluate(2) == FR(17)

    def test_equality(self):
        assert Polynomial([1, 2]) == Polynomial([FR(1), FR(2), FR(0)])
        assert Polynomial([1, 2]) != Polynomial([2, 1])

    def test_repr(self):
        assert repr(Polynomial([1, 0, 3])) == "Poly(1 + 3*x^2)"
        assert repr(Polynomial()) == "Poly(0)"

    def test_interpolation_roundtrip(self):
        omega = get_root_of_unity(4)
        p = Polynomial([5, 6, 7, 8])
        evals = [p.evaluate(omega ** i) for i in range(4)]
        assert Polynomial(ifft(evals, omega)) == p


# =====================================================================
# FFT / IFFT
# =====================================================================

class TestFFT:
    def test_fft_matches_evaluation(self):
        omega = get_root_of_unity(8)
        coeffs = [FR(i + 1) for i in range(8)]
        p = Polynomial(coeffs)
        assert fft(coeffs, omega) == [p.evaluate(omega ** i) for i in range(8)]

    def test_ifft_inverts_fft(self):
        omega = get_root_of_unity(8)
        coeffs = [FR(3 * i + 2) for i in range(8)]
        assert ifft(fft(coeffs, omega), omega) == coeffs

    def test_constant(self):
        omega = get_root_of_unity(4)
        assert fft([FR(9), FR(0), FR(0), FR(0)], omega) == [FR(9)] * 4

    def test_bls_field(self):
        omega = get_root_of_unity(4, BLSFR)
        coeffs = [BLSFR(1), BLSFR(2), BLSFR(3), BLSFR(4)]
        evals = fft(coeffs, omega)
        assert all(isinstance(v, BLSFR) for v in evals)
        assert ifft(evals, omega) == coeffs


# =====================================================================
# EvaluationDomain
# =====================================================================

class TestEvaluationDomain:
    def test_attributes(self):
        domain = EvaluationDomain(8)
        assert domain.size == 8
        assert len(domain) == 8
        assert domain.log_size_of_group == 3
        assert domain.group_gen == get_root_of_unity(8)
        assert domain.field is FR

    def test_elements(self):
        domain = EvaluationDomain(4)
        assert domain.elements() == [domain.element(i) for i in range(4)]

    def test_equality(self):
        assert EvaluationDomain(4) == EvaluationDomain(4)
        assert EvaluationDomain(4) != EvaluationDomain(8)
        assert EvaluationDomain(4) != EvaluationDomain(4, BLSFR)

    def test_small_is_stride_of_large(self):
        small = EvaluationDomain(4)
        large = EvaluationDomain(16)
        assert large.elements()[::4] == small.elements()

    def test_interpolate_evaluate(self):
        domain = EvaluationDomain(4)
        evals = [FR(1), FR(5), FR(2), FR(9)]
        poly = domain.interpolate(evals)
        assert poly.degree < 4
        assert domain.evaluate(poly) == evals

    def test_evaluate_on_larger_domain_keeps_values(self):
        small = EvaluationDomain(2)
        large = EvaluationDomain(4)
        poly = small.interpolate([FR(1), FR(2)])
        assert large.evaluate(poly)[0::2] == [FR(1), FR(2)]

    def test_interpolate_wrong_length(self):
        with pytest.raises(InvalidDimension):
            EvaluationDomain(4).interpolate([FR(1), FR(2)])

    def test_evaluate_degree_too_high(self):
        with pytest.raises(InvalidDimension):
            EvaluationDomain(2).evaluate(Polynomial([1, 2, 3]))

    def test_invalid_size(self):
        with pytest.raises(InvalidDimension):
            EvaluationDomain(3)
        with pytest.raises(InvalidDimension):
            EvaluationDomain(0)

    def test_unavailable_size(self):
        with pytest.raises(DomainUnavailable):
            EvaluationDomain(2 ** 29)
