"""Square matrices and affine transform builders.

Matrices are stored row-major in a read-only NumPy array. The linear algebra
needed by the renderer (determinant and inverse) is computed by cofactor
expansion, on demand, every time it is requested.

Builder chaining reads in application order: ``m.scale(...).translate(...)``
scales first and translates second, i.e. each chained builder is the *left*
operand of the product.

Example:
    >>> import math
    >>> from src.prism.core.matrix import Axis, Matrix
    >>> from src.prism.core.tuples import point
    >>> transform = Matrix.identity().rotate(Axis.X, math.pi / 2).scale(5, 5, 5)
    >>> transform * point(1, 0, 1) == point(5, -5, 0)
    True
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum
from typing import Any, overload

import numpy as np
import numpy.typing as npt

from src.prism.core.constants import EPSILON
from src.prism.core.tuples import Tuple


class Axis(Enum):
    """Rotation axes."""

    X = "x"
    Y = "y"
    Z = "z"


class NonInvertibleMatrixError(ValueError):
    """Raised when inverting a matrix whose determinant is zero."""


class Matrix:
    """A square matrix of floats.

    Attributes:
        order: Number of rows (and columns).
    """

    __slots__ = ("_values",)

    def __init__(self, values: Sequence[float]) -> None:
        """Build a matrix from a flat, row-major list of values.

        Args:
            values: The values; their count must be a perfect square.

        Raises:
            ValueError: If the number of values is not a perfect square.
        """
        count = len(values)
        order = math.isqrt(count)
        if count == 0 or order * order != count:
            raise ValueError(f"Number of source values ({count}) is not a square value")

        array = np.array(values, dtype=np.float64).reshape(order, order)
        array.setflags(write=False)
        self._values = array

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Matrix:
        return cls([value for row in rows for value in row])

    @classmethod
    def _from_array(cls, array: npt.NDArray[np.float64]) -> Matrix:
        matrix = cls.__new__(cls)
        array = np.array(array, dtype=np.float64)
        array.setflags(write=False)
        matrix._values = array
        return matrix

    @property
    def order(self) -> int:
        return self._values.shape[0]

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the values."""
        return self._values.copy()

    def __getitem__(self, key: int | tuple[int, int]) -> Any:
        return self._values[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._values.shape != other._values.shape:
            return False
        return bool(np.all(np.abs(self._values - other._values) < EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join(str(list(row)) for row in self._values.tolist())
        return f"Matrix([{rows}])"

    # =========================================================================
    # Products
    # =========================================================================

    @overload
    def __mul__(self, other: Matrix) -> Matrix: ...

    @overload
    def __mul__(self, other: Tuple) -> Tuple: ...

    def __mul__(self, other):
        if isinstance(other, Matrix):
            if other.order != self.order:
                raise ValueError(
                    f"Cannot multiply matrices of order {self.order} and {other.order}"
                )
            return Matrix._from_array(self._values @ other._values)

        if isinstance(other, Tuple):
            if self.order != 4:
                raise ValueError("Only matrices of order 4 are allowed to be multiplied by a Tuple")
            rows = self._values
            x, y, z, w = other.x, other.y, other.z, other.w
            return Tuple(
                float(rows[0, 0] * x + rows[0, 1] * y + rows[0, 2] * z + rows[0, 3] * w),
                float(rows[1, 0] * x + rows[1, 1] * y + rows[1, 2] * z + rows[1, 3] * w),
                float(rows[2, 0] * x + rows[2, 1] * y + rows[2, 2] * z + rows[2, 3] * w),
                float(rows[3, 0] * x + rows[3, 1] * y + rows[3, 2] * z + rows[3, 3] * w),
            )

        return NotImplemented

    # =========================================================================
    # Linear Algebra
    # =========================================================================

    def transpose(self) -> Matrix:
        return Matrix._from_array(self._values.T)

    def submatrix(self, row: int, column: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        reduced = np.delete(np.delete(self._values, row, axis=0), column, axis=1)
        return Matrix._from_array(reduced)

    def minor(self, row: int, column: int) -> float:
        return self.submatrix(row, column).determinant()

    def cofactor(self, row: int, column: int) -> float:
        minor = self.minor(row, column)
        return -minor if (row + column) % 2 else minor

    def determinant(self) -> float:
        """Compute the determinant.

        2x2 matrices use the closed form; larger ones expand along the first
        row.
        """
        values = self._values
        if self.order == 1:
            return float(values[0, 0])
        if self.order == 2:
            return float(values[0, 0] * values[1, 1] - values[0, 1] * values[1, 0])
        return float(
            sum(values[0, column] * self.cofactor(0, column) for column in range(self.order))
        )

    def is_invertible(self) -> bool:
        return self.determinant() != 0.0

    def inverse(self) -> Matrix:
        """Compute the inverse as the adjugate divided by the determinant.

        Raises:
            NonInvertibleMatrixError: If the determinant is zero.
        """
        determinant = self.determinant()
        if determinant == 0.0:
            raise NonInvertibleMatrixError("The matrix has zero determinant")

        order = self.order
        inverted = np.empty((order, order), dtype=np.float64)
        for row in range(order):
            for column in range(order):
                # Transposed on purpose: this is the adjugate.
                inverted[column, row] = self.cofactor(row, column) / determinant
        return Matrix._from_array(inverted)

    # =========================================================================
    # Transform Builders
    # =========================================================================

    @classmethod
    def identity(cls, order: int = 4) -> Matrix:
        return cls._from_array(np.identity(order, dtype=np.float64))

    @classmethod
    def translation(cls, x: float, y: float, z: float) -> Matrix:
        # fmt: off
        return cls([
            1.0, 0.0, 0.0, x,
            0.0, 1.0, 0.0, y,
            0.0, 0.0, 1.0, z,
            0.0, 0.0, 0.0, 1.0,
        ])
        # fmt: on

    @classmethod
    def scaling(cls, x: float, y: float, z: float) -> Matrix:
        # fmt: off
        return cls([
            x,   0.0, 0.0, 0.0,
            0.0, y,   0.0, 0.0,
            0.0, 0.0, z,   0.0,
            0.0, 0.0, 0.0, 1.0,
        ])
        # fmt: on

    @classmethod
    def rotation(cls, axis: Axis, radians: float) -> Matrix:
        """Build a left-handed rotation about one of the coordinate axes."""
        cos_r, sin_r = math.cos(radians), math.sin(radians)

        # fmt: off
        if axis is Axis.X:
            values = [
                1.0, 0.0,   0.0,    0.0,
                0.0, cos_r, -sin_r, 0.0,
                0.0, sin_r, cos_r,  0.0,
                0.0, 0.0,   0.0,    1.0,
            ]
        elif axis is Axis.Y:
            values = [
                cos_r,  0.0, sin_r, 0.0,
                0.0,    1.0, 0.0,   0.0,
                -sin_r, 0.0, cos_r, 0.0,
                0.0,    0.0, 0.0,   1.0,
            ]
        elif axis is Axis.Z:
            values = [
                cos_r, -sin_r, 0.0, 0.0,
                sin_r, cos_r,  0.0, 0.0,
                0.0,   0.0,    1.0, 0.0,
                0.0,   0.0,    0.0, 1.0,
            ]
        else:
            raise ValueError(f"Unknown rotation axis: {axis}")
        # fmt: on

        return cls(values)

    @classmethod
    def shearing(
        cls,
        x_y: float,
        x_z: float,
        y_x: float,
        y_z: float,
        z_x: float,
        z_y: float,
    ) -> Matrix:
        """Build a shear; ``x_y`` moves x in proportion to y, and so on."""
        # fmt: off
        return cls([
            1.0, x_y, x_z, 0.0,
            y_x, 1.0, y_z, 0.0,
            z_x, z_y, 1.0, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ])
        # fmt: on

    @classmethod
    def view_transform(cls, from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
        """Orient the world relative to an eye at ``from_point`` looking at ``to_point``.

        Args:
            from_point: Eye position.
            to_point: Point being looked at.
            up: Approximate up vector; it need not be orthogonal to the view
                direction.

        Returns:
            The world-to-camera transform.
        """
        forward = (to_point - from_point).normalize()
        left = forward.cross(up.normalize())
        true_up = left.cross(forward)

        # fmt: off
        orientation = cls([
            left.x,     left.y,     left.z,     0.0,
            true_up.x,  true_up.y,  true_up.z,  0.0,
            -forward.x, -forward.y, -forward.z, 0.0,
            0.0,        0.0,        0.0,        1.0,
        ])
        # fmt: on

        return orientation * cls.translation(-from_point.x, -from_point.y, -from_point.z)

    # =========================================================================
    # Chaining (application order)
    # =========================================================================

    def apply(self, transform: Matrix) -> Matrix:
        return transform * self

    def translate(self, x: float, y: float, z: float) -> Matrix:
        return Matrix.translation(x, y, z) * self

    def scale(self, x: float, y: float, z: float) -> Matrix:
        return Matrix.scaling(x, y, z) * self

    def equiscale(self, factor: float) -> Matrix:
        return Matrix.scaling(factor, factor, factor) * self

    def rotate(self, axis: Axis, radians: float) -> Matrix:
        return Matrix.rotation(axis, radians) * self

    def shear(
        self,
        x_y: float,
        x_z: float,
        y_x: float,
        y_z: float,
        z_x: float,
        z_y: float,
    ) -> Matrix:
        return Matrix.shearing(x_y, x_z, y_x, y_z, z_x, z_y) * self


IDENTITY = Matrix.identity(4)
