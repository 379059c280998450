import numpy as np
import pytest

from secretpix.errors import SizeMismatch
from secretpix.pixels import dimensions
from secretpix.reconcile import (
    ReconcilePolicy,
    expand_to,
    needs_reconcile,
    reconcile,
    resize_to,
)


@pytest.fixture
def small(rng):
    return rng.integers(1, 256, size=(5, 7, 3), dtype=np.uint8)   # 7x5


@pytest.fixture
def large(rng):
    return rng.integers(0, 256, size=(9, 11, 3), dtype=np.uint8)  # 11x9


class TestNeedsReconcile:

    def test_secret_fits(self, small, large):
        assert not needs_reconcile(large, small)
        assert not needs_reconcile(small, small)

    def test_secret_larger(self, small, large):
        assert needs_reconcile(small, large)

    def test_one_axis_is_enough(self):
        wide = np.zeros((4, 10, 3), dtype=np.uint8)
        tall = np.zeros((10, 4, 3), dtype=np.uint8)
        assert needs_reconcile(wide, tall)
        assert needs_reconcile(tall, wide)


class TestExpand:

    def test_carrier_padded_with_black(self, small, large):
        carrier, secret = reconcile(small, large, ReconcilePolicy.EXPAND)
        assert dimensions(carrier) == dimensions(large)
        np.testing.assert_array_equal(carrier[:5, :7], small)
        assert (carrier[5:, :] == 0).all()
        assert (carrier[:, 7:] == 0).all()
        np.testing.assert_array_equal(secret, large)

    def test_mixed_axes_expand_both(self):
        wide = np.full((4, 10, 3), 9, dtype=np.uint8)
        tall = np.full((10, 4, 3), 7, dtype=np.uint8)
        carrier, secret = reconcile(wide, tall, "expand")
        assert dimensions(carrier) == dimensions(secret) == (10, 10)
        assert (carrier[:4] == 9).all() and (carrier[4:] == 0).all()
        assert (secret[:, :4] == 7).all() and (secret[:, 4:] == 0).all()

    def test_cannot_shrink(self, large):
        with pytest.raises(ValueError):
            expand_to(large, (3, 3))


class TestResize:

    def test_output_matches_larger_dimensions(self, small, large):
        carrier, secret = reconcile(small, large, ReconcilePolicy.RESIZE)
        assert dimensions(carrier) == dimensions(secret) == (11, 9)
        np.testing.assert_array_equal(secret, large)

    def test_mixed_axes(self):
        wide = np.zeros((4, 10, 3), dtype=np.uint8)
        tall = np.zeros((10, 4, 3), dtype=np.uint8)
        carrier, secret = reconcile(wide, tall, ReconcilePolicy.RESIZE)
        assert dimensions(carrier) == dimensions(secret) == (10, 10)

    def test_same_size_is_a_copy(self, large):
        out = resize_to(large, dimensions(large))
        np.testing.assert_array_equal(out, large)
        assert out is not large

    def test_flat_color_survives_resampling(self):
        flat = np.full((3, 3, 3), 128, dtype=np.uint8)
        assert (resize_to(flat, (12, 8)) == 128).all()


class TestPolicyHandling:

    @pytest.mark.parametrize("policy", [None, ReconcilePolicy.RESIZE, ReconcilePolicy.EXPAND])
    def test_fitting_secret_untouched(self, small, large, policy):
        carrier, secret = reconcile(large, small, policy)
        np.testing.assert_array_equal(carrier, large)
        np.testing.assert_array_equal(secret, small)

    def test_no_policy_raises(self, small, large):
        with pytest.raises(SizeMismatch) as exc:
            reconcile(small, large)
        assert exc.value.details == {"carrier": (7, 5), "secret": (11, 9)}

    def test_unknown_policy(self, small, large):
        with pytest.raises(ValueError):
            reconcile(small, large, "stretch")
