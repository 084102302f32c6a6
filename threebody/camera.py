#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.
"""
from typing import Tuple

from .constants import DEFAULT_CAMERA_ZOOM, VIEW_HEIGHT, VIEW_WIDTH
from .data_models import CameraView
from .vector_utils import Vector2


class Camera2D:
    """
    Smoothed 2D tracking camera.

    The camera follows a target with a single-pole low-pass filter:
        position = position * easing + target * (1 - easing)
    Zoom is fixed for the lifetime of the camera. Screen space puts the camera
    position at the viewport centre.
    """

    def __init__(self, position: Vector2 = Vector2(0.0, 0.0), zoom: float = DEFAULT_CAMERA_ZOOM):
        self.position = position
        self.zoom = zoom
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def track(self, target: Vector2, easing: float) -> Vector2:
        self.position = self.position * easing + target * (1.0 - easing)
        return self.position

    def recenter(self, target: Vector2) -> None:
        self.position = target

    def world_to_screen(self, pos: Vector2) -> Tuple[int, int]:
        px = (pos.x - self.position.x) * self.zoom + self.viewport_size[0] / 2
        py = (pos.y - self.position.y) * self.zoom + self.viewport_size[1] / 2
        return (int(px), int(py))

    def screen_to_world(self, screen: Tuple[int, int]) -> Vector2:
        wx = (screen[0] - self.viewport_size[0] / 2) / self.zoom + self.position.x
        wy = (screen[1] - self.viewport_size[1] / 2) / self.zoom + self.position.y
        return Vector2(wx, wy)

    def view(self) -> CameraView:
        return CameraView(position=self.position, zoom=self.zoom)
