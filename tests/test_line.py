"""
Line tests: 배치, 인덱스 접근, small → large 확장
"""
import pytest

from rsquare.domain import EvaluationDomain
from rsquare.errors import DomainUnavailable, InvalidDimension
from rsquare.field import BLSFR, FR
from rsquare.line import Line


class TestLineConstruction:
    def test_stride_placement(self):
        line = Line([1, 2], 2)
        assert line.values == [FR(1), FR(0), FR(2), FR(0)]
        assert len(line) == 4

    def test_scale_one(self):
        line = Line([5, 6, 7, 8], 1)
        assert line.values == [FR(5), FR(6), FR(7), FR(8)]

    def test_field_from_shares(self):
        line = Line([BLSFR(1), BLSFR(2)], 2)
        assert line.field is BLSFR
        assert all(isinstance(v, BLSFR) for v in line)

    def test_explicit_field(self):
        line = Line([1, 2], 2, field=BLSFR)
        assert line.field is BLSFR

    def test_zeros(self):
        line = Line.zeros(4, 2)
        assert line.values == [FR(0)] * 8

    @pytest.mark.parametrize("shares", [[], [1, 2, 3], [1] * 6])
    def test_share_count_not_power_of_two(self, shares):
        with pytest.raises(InvalidDimension):
            Line(shares, 2)

    @pytest.mark.parametrize("scale", [0, 3, -2])
    def test_scale_not_power_of_two(self, scale):
        with pytest.raises(InvalidDimension) as exc_info:
            Line([1, 2], scale)
        assert exc_info.value.data == {"scale": scale}

    def test_domain_checked_before_allocation(self):
        # 2^40 자리 리스트는 할당할 수 없으므로 먼저 거절되어야 한다
        with pytest.raises(DomainUnavailable) as exc_info:
            Line([1], 2 ** 40)
        assert exc_info.value.data == {"length": 2 ** 40, "two_adicity": 28}

    def test_domain_limit_per_field(self):
        with pytest.raises(DomainUnavailable):
            Line([1, 2], 2 ** 28)
        with pytest.raises(DomainUnavailable):
            Line([1], 2 ** 33, field=BLSFR)

    def test_invalid_dimension_is_value_error(self):
        with pytest.raises(ValueError):
            Line([1, 2, 3], 2)


class TestLineAccess:
    def test_get_set(self):
        line = Line([1, 2], 2)
        line.set_element_at(1, 9)
        assert line.get_element_at(1) == FR(9)
        assert isinstance(line.get_element_at(1), FR)

    @pytest.mark.parametrize("idx", [-1, 4, 100])
    def test_out_of_range(self, idx):
        line = Line([1, 2], 2)
        with pytest.raises(IndexError):
            line.get_element_at(idx)
        with pytest.raises(IndexError):
            line.set_element_at(idx, 1)

    def test_compressed_vals(self):
        line = Line([3, 4, 5, 6], 4)
        assert line.compressed_vals() == [FR(3), FR(4), FR(5), FR(6)]

    def test_copy_is_independent(self):
        line = Line([1, 2], 2)
        other = line.copy()
        other.set_element_at(0, 7)
        assert line.get_element_at(0) == FR(1)
        assert other != line

    def test_equality(self):
        assert Line([1, 2], 2) == Line([1, 2], 2)
        assert Line([1, 2], 2) != Line([1, 2], 4)

    def test_repr(self):
        assert repr(Line([1, 2], 2)) == "Line(scale=2, vals=[1, 0, 2, 0])"


class TestLineExtend:
    def test_extend_is_systematic(self):
        line = Line([7, 11, 13, 17], 4)
        line.extend(EvaluationDomain(4), EvaluationDomain(16))
        assert len(line) == 16
        assert line.compressed_vals() == [FR(7), FR(11), FR(13), FR(17)]

    def test_extend_matches_polynomial(self):
        small = EvaluationDomain(2)
        large = EvaluationDomain(4)
        line = Line([1, 2], 2)
        line.extend(small, large)
        poly = small.interpolate([FR(1), FR(2)])
        assert line.values == [poly.evaluate(x) for x in large.elements()]

    def test_extend_constant(self):
        line = Line([5, 5, 5, 5], 2)
        line.extend(EvaluationDomain(4), EvaluationDomain(8))
        assert line.values == [FR(5)] * 8

    def test_extend_single_share(self):
        line = Line([9], 8)
        line.extend(EvaluationDomain(1), EvaluationDomain(8))
        assert line.values == [FR(9)] * 8

    def test_extend_scale_one_is_identity(self):
        line = Line([1, 2, 3, 4], 1)
        before = line.values
        line.extend(EvaluationDomain(4), EvaluationDomain(4))
        assert line.values == before

    def test_extend_large_smaller_than_small(self):
        line = Line([1, 2, 3, 4], 1)
        with pytest.raises(InvalidDimension):
            line.extend(EvaluationDomain(4), EvaluationDomain(2))

    def test_extend_wrong_small_domain(self):
        line = Line([1, 2], 2)
        with pytest.raises(InvalidDimension):
            line.extend(EvaluationDomain(4), EvaluationDomain(8))

    def test_extend_bls(self):
        line = Line([1, 2], 2, field=BLSFR)
        line.extend(EvaluationDomain(2, BLSFR), EvaluationDomain(4, BLSFR))
        assert line.compressed_vals() == [BLSFR(1), BLSFR(2)]
        assert all(isinstance(v, BLSFR) for v in line)
