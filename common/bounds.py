import numpy as np


class Bounds:
    def __init__ (self, left, top, width, height):
        self.left = left
        self.top = top
        self.width = width
        self.height = height

    @classmethod
    def from_points(cls, points) -> "Bounds":
        """
        Axis-aligned bounds enclosing a set of points.

        Parameters:
        - points: Array-like of shape (N, 2) with x, y columns.

        Returns:
        - Bounds: The smallest box containing every point.
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if len(pts) == 0:
            raise ValueError("Cannot compute bounds of an empty point set")

        min_x, min_y = pts.min(axis=0)
        max_x, max_y = pts.max(axis=0)
        return cls(float(min_x), float(min_y), float(max_x - min_x), float(max_y - min_y))

    def __str__(self) -> str:
        return f"Bounds({self.left}, {self.top}, {self.width}, {self.height})"

    def __repr__(self) -> str:
        return str(self)

    @property
    def right(self):
        return self.left + self.width

    @property
    def bottom(self):
        return self.top + self.height

    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)

    def isInside(self, other, checkCenterOnly=False) -> bool:
        """
        Check if the current Bounds object is completely inside another Bounds object.

        Parameters:
        - other (Bounds): The other Bounds object to compare against.

        Returns:
        - bool: True if the current Bounds object is completely inside the other Bounds object, False otherwise.
        """
        if checkCenterOnly:
            center = self.center()
            return Bounds(center[0], center[1], 0, 0).isInside(other)

        return self.left >= other.left and self.right <= other.right and self.top >= other.top and self.bottom <= other.bottom

    def area(self):
        """
        Calculate the area of the Bounds object.

        Returns:
        - float: The area of the Bounds object.
        """
        return self.width * self.height

    def aspect_ratio(self) -> float:
        """Width divided by height, 0 for a flat box."""
        if self.height <= 0:
            return 0.0
        return self.width / self.height

    def intersection(self, other) -> "Bounds":
        """
        Overlapping region of two Bounds objects.

        Returns:
        - Bounds: The shared box, with zero width/height when they do not overlap.
        """
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Bounds(left, top, max(0, right - left), max(0, bottom - top))

    def iou(self, other) -> float:
        """
        Intersection over union of two Bounds objects.

        Returns:
        - float: 0.0 for disjoint boxes up to 1.0 for identical ones.
        """
        inter = self.intersection(other).area()
        union = self.area() + other.area() - inter
        if union <= 0:
            return 0.0
        return inter / union
