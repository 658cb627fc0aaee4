"""Head outline features: nose and ear curves."""

import numpy as np


def nose_points(angle: float, radius: float, tip: float = 0.85) -> np.ndarray:
    """
    Points of one side of the nose.

    A positive ``angle`` (degrees from the vertex) gives the left side,
    a negative one the right side. The line runs from the head circle of
    ``radius`` to the nose tip at ``(0, tip)``.

    Returns:
        Array of shape (2, 2).
    """
    theta = np.deg2rad(90 + angle)
    return np.array([
        [radius * np.cos(theta), radius * np.sin(theta)],
        [0.0, tip],
    ])


def ear_points(
    focus_x: float,
    radius: float,
    n_points: int = 100,
    width: float = 0.09,
    height: float = 0.18,
) -> np.ndarray:
    """
    Points of the ellipse drawn as an ear.

    The ellipse is centred at ``(focus_x, 0)``, negative for the left ear
    and positive for the right one. Points inside the head circle of
    ``radius`` are replaced with NaN so only the outer arc is drawn.

    Returns:
        Array of shape (n_points, 2), closed (first point == last point).
    """
    t = np.linspace(0, 2 * np.pi, n_points)
    points = np.column_stack([focus_x + width * np.cos(t), height * np.sin(t)])
    points[np.hypot(points[:, 0], points[:, 1]) < radius] = np.nan
    return points
