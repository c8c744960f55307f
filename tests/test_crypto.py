"""
Tests for the commitment modules: SRS / CommitmentKey, KZG engine, encoding.

Covers:
- ParamsKZG.setup (deterministic with a seeded provider, independent setups differ)
- Lagrange basis: Σ L_i(τ)·G1 == G1, recovery from monomial powers
- commit_lagrange (unit vectors, zero padding, hiding term, length mismatch)
- Lagrange-form and coefficient-form commitments agree
- KZG opening proof (valid / invalid)
- Canonical point / scalar encoding and rejection of malformed chunks
"""
import random

import pytest

from kzgcommit.domain import EvaluationDomain
from kzgcommit.encoding import (
    POINT_SIZE, compress_g1, decompress_g1, scalar_to_bytes, scalar_from_bytes,
)
from kzgcommit.errors import LengthMismatch, PointDecodeError, ScalarDecodeError
from kzgcommit.field import (
    FQ, FR, CURVE_B, CURVE_ORDER, FIELD_MODULUS, G1, G2,
    ec_add, ec_mul, ec_neg, fq_sqrt, is_on_curve_g1,
)
from kzgcommit.kzg import msm, commit, commit_lagrange, create_witness, verify_opening
from kzgcommit.polynomial import Polynomial
from kzgcommit.srs import CommitmentKey, ParamsKZG, hiding_generator, lagrange_basis_from_powers


@pytest.fixture(scope="module")
def params_k2():
    return ParamsKZG.setup(2, rng=random.Random(99))


# ─────────────────────────────────────────────────────────────────────
# SRS / CommitmentKey
# ─────────────────────────────────────────────────────────────────────

class TestParamsKZG:
    """ParamsKZG.setup 테스트."""

    def test_lengths(self, params_k3):
        assert params_k3.n == 8
        assert len(params_k3.g1_powers) == 8
        assert len(params_k3.g_lagrange) == 8
        assert params_k3.max_degree == 7

    def test_first_power_is_generator(self, params_k3):
        assert params_k3.g1_powers[0] == G1
        assert params_k3.g2 == G2

    def test_deterministic_with_same_seed(self):
        a = ParamsKZG.setup(1, rng=random.Random(3))
        b = ParamsKZG.setup(1, rng=random.Random(3))
        assert a.g1_powers == b.g1_powers
        assert a.g_lagrange == b.g_lagrange
        assert a.s_g2 == b.s_g2

    def test_independent_setups_differ(self, params_k3, params_k3_other):
        assert params_k3.g_lagrange != params_k3_other.g_lagrange

    def test_setup_without_rng(self):
        params = ParamsKZG.setup(1)
        assert len(params.g_lagrange) == 2

    def test_lagrange_basis_sums_to_generator(self, params_k3):
        """Σ L_i(τ) = 1, so Σ [L_i(τ)]₁ = G1."""
        total = None
        for point in params_k3.g_lagrange:
            total = ec_add(total, point)
        assert total == G1

    def test_lagrange_basis_from_powers(self, params_k2):
        domain = EvaluationDomain(2)
        recovered = lagrange_basis_from_powers(params_k2.g1_powers, domain.omega)
        assert tuple(recovered) == params_k2.g_lagrange

    def test_from_powers(self, params_k2):
        rebuilt = ParamsKZG.from_powers(2, params_k2.g1_powers, params_k2.g2, params_k2.s_g2)
        assert rebuilt.g_lagrange == params_k2.g_lagrange

    def test_constructor_checks_lengths(self, params_k2):
        with pytest.raises(LengthMismatch):
            ParamsKZG(3, params_k2.g1_powers, params_k2.g_lagrange, G2, params_k2.s_g2)

    def test_commitment_key_is_stable(self, params_k3):
        assert params_k3.commitment_key() is params_k3.commitment_key()

    def test_commitment_key_basis(self, params_k3):
        key = params_k3.commitment_key()
        assert len(key) == 8
        assert key.basis(8) == params_k3.g_lagrange
        assert key.basis() == params_k3.g_lagrange
        assert key.h == params_k3.h

    def test_commitment_key_wrong_domain_size(self, params_k3):
        with pytest.raises(LengthMismatch):
            params_k3.commitment_key().basis(16)

    def test_hiding_generator(self):
        h = hiding_generator()
        assert is_on_curve_g1(h)
        assert h != G1
        assert h == hiding_generator()
        assert int(h[1]) % 2 == 0

    def test_hiding_generator_depends_on_label(self):
        assert hiding_generator(b"other-label") != hiding_generator()


# ─────────────────────────────────────────────────────────────────────
# KZG engine
# ─────────────────────────────────────────────────────────────────────

class TestMSM:
    def test_empty(self):
        assert msm([], []) is None

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatch):
            msm([G1, G1], [FR(1)])

    def test_small(self):
        two_g = ec_mul(G1, 2)
        assert msm([G1, two_g], [FR(3), FR(4)]) == ec_mul(G1, 11)

    def test_zero_scalars_skipped(self):
        assert msm([G1, G1], [FR(0), FR(0)]) is None


class TestCommitLagrange:
    """commit_lagrange 테스트."""

    def test_unit_vector_selects_basis_point(self, params_k3):
        key = params_k3.commitment_key()
        for i in (0, 3, 7):
            evals = [FR(0)] * 8
            evals[i] = FR(1)
            assert commit_lagrange(key, evals) == params_k3.g_lagrange[i]

    def test_all_zero_is_infinity(self, params_k3):
        assert commit_lagrange(params_k3.commitment_key(), [FR(0)] * 8) is None

    def test_length_mismatch(self, params_k3):
        with pytest.raises(LengthMismatch):
            commit_lagrange(params_k3.commitment_key(), [FR(1)] * 7)

    def test_deterministic(self, params_k3):
        key = params_k3.commitment_key()
        evals = EvaluationDomain(3).lagrange_from_vec([1, 0, 1])
        assert commit_lagrange(key, evals) == commit_lagrange(key, evals)

    def test_zero_padding_equals_explicit_zero_suffix(self, params_k3):
        key = params_k3.commitment_key()
        padded = EvaluationDomain(3).lagrange_from_vec([5, 6, 7])
        explicit = [FR(5), FR(6), FR(7), FR(0), FR(0), FR(0), FR(0), FR(0)]
        assert commit_lagrange(key, padded) == commit_lagrange(key, explicit)

    def test_zero_blind_is_no_op(self, params_k3):
        key = params_k3.commitment_key()
        evals = EvaluationDomain(3).lagrange_from_vec([2, 4])
        assert commit_lagrange(key, evals, blind=FR(0)) == commit_lagrange(key, evals)
        assert commit_lagrange(key, evals, blind=0) == commit_lagrange(key, evals)

    def test_blind_adds_hiding_term(self, params_k3):
        key = params_k3.commitment_key()
        evals = EvaluationDomain(3).lagrange_from_vec([2, 4])
        expected = ec_add(commit_lagrange(key, evals), ec_mul(key.h, FR(11)))
        assert commit_lagrange(key, evals, blind=FR(11)) == expected

    def test_hiding_only(self, params_k3):
        key = params_k3.commitment_key()
        assert commit_lagrange(key, [FR(0)] * 8, blind=FR(3)) == ec_mul(key.h, 3)

    def test_linearity(self, params_k3):
        key = params_k3.commitment_key()
        domain = EvaluationDomain(3)
        a = domain.lagrange_from_vec([1, 2, 3])
        b = domain.lagrange_from_vec([4, 0, 6, 1])
        summed = [x + y for x, y in zip(a, b)]
        assert commit_lagrange(key, summed) == ec_add(
            commit_lagrange(key, a), commit_lagrange(key, b)
        )

    def test_agrees_with_coefficient_commitment(self, params_k3):
        """[p(τ)]₁ via the Lagrange basis == via the monomial basis."""
        domain = EvaluationDomain(3)
        evals = domain.lagrange_from_vec([1, 0, 1])
        poly = Polynomial(domain.lagrange_to_coeff(evals))
        assert commit_lagrange(params_k3.commitment_key(), evals) == commit(poly, params_k3)

    def test_custom_key(self):
        key = CommitmentKey([G1, ec_mul(G1, 2)], hiding_generator())
        assert commit_lagrange(key, [FR(1), FR(1)]) == ec_mul(G1, 3)


class TestOpening:
    """KZG 열기 증명 테스트."""

    def test_commit_degree_overflow(self, params_k2):
        with pytest.raises(ValueError):
            commit(Polynomial([1, 1, 1, 1, 1]), params_k2)

    def test_valid_opening(self, params_k2):
        poly = Polynomial([FR(3), FR(1), FR(4)])
        c = commit(poly, params_k2)
        proof, y = create_witness(poly, FR(10), params_k2)
        assert y == poly.evaluate(FR(10))
        assert verify_opening(c, proof, FR(10), y, params_k2)

    def test_wrong_evaluation_rejected(self, params_k2):
        poly = Polynomial([FR(3), FR(1), FR(4)])
        c = commit(poly, params_k2)
        proof, y = create_witness(poly, FR(10), params_k2)
        assert not verify_opening(c, proof, FR(10), y + FR(1), params_k2)


# ─────────────────────────────────────────────────────────────────────
# Encoding
# ─────────────────────────────────────────────────────────────────────

def _non_residue_x():
    x = 1
    while fq_sqrt(FQ(x) ** 3 + CURVE_B) is not None:
        x += 1
    return x


class TestEncoding:
    def test_generator_roundtrip(self):
        encoded = compress_g1(G1)
        assert len(encoded) == POINT_SIZE
        assert encoded[-1] & 0xC0 == 0  # G1 = (1, 2): y 짝수
        assert decompress_g1(encoded) == G1

    def test_negated_generator_sets_sign(self):
        encoded = compress_g1(ec_neg(G1))
        assert encoded[-1] & 0x80
        assert decompress_g1(encoded) == ec_neg(G1)

    def test_identity(self):
        encoded = compress_g1(None)
        assert encoded == bytes(31) + b"\x40"
        assert decompress_g1(encoded) is None

    def test_random_points(self):
        for scalar in (2, 3, 2 ** 200 + 17):
            point = ec_mul(G1, scalar)
            assert decompress_g1(compress_g1(point)) == point

    def test_wrong_length(self):
        with pytest.raises(PointDecodeError):
            decompress_g1(bytes(31))

    def test_x_not_canonical(self):
        with pytest.raises(PointDecodeError):
            decompress_g1(FIELD_MODULUS.to_bytes(32, "little"))

    def test_x_not_on_curve(self):
        with pytest.raises(PointDecodeError):
            decompress_g1(_non_residue_x().to_bytes(32, "little"))

    def test_identity_with_nonzero_x(self):
        data = bytearray(compress_g1(None))
        data[0] = 1
        with pytest.raises(PointDecodeError):
            decompress_g1(bytes(data))

    def test_identity_with_sign_flag(self):
        with pytest.raises(PointDecodeError):
            decompress_g1(bytes(31) + b"\xc0")

    def test_scalar_roundtrip(self):
        value = FR(CURVE_ORDER - 5)
        assert scalar_from_bytes(scalar_to_bytes(value)) == value

    def test_scalar_little_endian(self):
        assert scalar_to_bytes(FR(1)) == b"\x01" + bytes(31)

    def test_scalar_not_canonical(self):
        with pytest.raises(ScalarDecodeError):
            scalar_from_bytes(CURVE_ORDER.to_bytes(32, "little"))

    def test_scalar_wrong_length(self):
        with pytest.raises(ScalarDecodeError):
            scalar_from_bytes(b"\x01")
