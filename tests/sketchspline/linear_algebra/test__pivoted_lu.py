import pytest
import torch

from sketchspline import ShapeMismatchError, SingularMatrixWarning
from sketchspline.linear_algebra import PivotedLUResult, pivoted_lu


def _factors(result):
    n = result.lu.shape[0]
    lower = torch.tril(result.lu, diagonal=-1) + torch.eye(n, dtype=torch.float64)
    upper = torch.triu(result.lu)
    return lower, upper


class TestPivotedLU:
    @pytest.mark.parametrize("n", [1, 2, 5, 10])
    def test_reconstruction(self, n):
        """P A = L U for a random square matrix."""
        generator = torch.Generator().manual_seed(n)
        a = torch.randn(n, n, generator=generator, dtype=torch.float64)

        result = pivoted_lu(a)

        assert isinstance(result, PivotedLUResult)
        lower, upper = _factors(result)
        torch.testing.assert_close(lower @ upper, a[result.permutation])

    def test_multipliers_bounded(self):
        """Partial pivoting keeps every multiplier within [-1, 1]."""
        generator = torch.Generator().manual_seed(7)
        a = torch.randn(6, 6, generator=generator, dtype=torch.float64)

        result = pivoted_lu(a)

        assert bool((torch.tril(result.lu, diagonal=-1).abs() <= 1.0).all())

    def test_input_not_modified(self):
        a = torch.tensor([[0.0, 1.0], [2.0, 3.0]], dtype=torch.float64)
        original = a.clone()

        pivoted_lu(a)

        torch.testing.assert_close(a, original)

    def test_permutation(self):
        """The largest entry of the first column becomes the first pivot."""
        a = torch.tensor(
            [[1.0, 0.0, 0.0], [3.0, 1.0, 0.0], [2.0, 0.0, 1.0]],
            dtype=torch.float64,
        )

        result = pivoted_lu(a)

        assert result.permutation[0].item() == 1
        assert sorted(result.permutation.tolist()) == [0, 1, 2]

    def test_pivot_tie_goes_to_lowest_row(self):
        """Equal-magnitude pivot candidates pick the first row found."""
        a = torch.tensor(
            [[1.0, 2.0, 0.0], [-3.0, 1.0, 5.0], [3.0, 4.0, 1.0]],
            dtype=torch.float64,
        )

        result = pivoted_lu(a)

        assert result.permutation[0].item() == 1
        assert result.permutation.tolist() == [1, 2, 0]

    def test_identity(self):
        result = pivoted_lu(torch.eye(3, dtype=torch.float64))

        torch.testing.assert_close(result.lu, torch.eye(3, dtype=torch.float64))
        assert result.permutation.tolist() == [0, 1, 2]

    def test_zero_column_is_left_in_place(self):
        """A column of zeros does not stop the decomposition."""
        a = torch.tensor([[0.0, 1.0], [0.0, 2.0]], dtype=torch.float64)

        result = pivoted_lu(a)

        assert result is not None
        assert result.lu[0, 0].item() == 0.0

    def test_non_finite_multiplier(self):
        """Overflow during elimination makes the decomposition fail."""
        a = torch.tensor(
            [[1.0, 1e308, 0.0], [1.0, -1e308, 0.0], [1.0, -1e308, 0.0]],
            dtype=torch.float64,
        )

        with pytest.warns(SingularMatrixWarning):
            assert pivoted_lu(a) is None

    @pytest.mark.parametrize("shape", [(2, 3), (3,), (1, 2, 2)])
    def test_not_square(self, shape):
        with pytest.raises(ShapeMismatchError):
            pivoted_lu(torch.zeros(*shape, dtype=torch.float64))
