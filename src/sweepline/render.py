"""Raster rendering of segments and their intersections."""
from pathlib import Path
from typing import Iterable, Tuple, Union
import logging

import pygame

from .config.settings import render as config
from .utils.geometry import Intersection, Point, Segment


def to_screen(point: Point) -> Tuple[float, float]:
    """Map unit-square coordinates to canvas pixels."""
    return (point.x * config.SCALE + config.OFFSET[0],
            point.y * config.SCALE + config.OFFSET[1])


def draw_scene(segments: Iterable[Segment],
               intersections: Iterable[Intersection]) -> pygame.Surface:
    """Draw segments and intersection points on a fresh canvas.

    Args:
        segments: Segments, drawn as lines
        intersections: Intersections, drawn as dots on top

    Returns:
        The canvas surface
    """
    surface = pygame.Surface((config.WIDTH, config.HEIGHT))
    surface.fill(config.BACKGROUND_COLOR)

    for segment in segments:
        pygame.draw.line(surface, config.SEGMENT_COLOR, to_screen(segment.a), to_screen(segment.b),
                         config.SEGMENT_WIDTH)

    for intersection in intersections:
        pygame.draw.circle(surface, config.POINT_COLOR, to_screen(intersection.point), config.POINT_RADIUS)

    return surface


def save_png(surface: pygame.Surface, path: Union[str, Path, None] = None) -> Path:
    """Write a surface to a PNG file and return its path."""
    path = Path(config.OUTPUT if path is None else path)
    pygame.image.save(surface, str(path))
    logging.info(f"Saved {path}")
    return path


def show(surface: pygame.Surface) -> None:
    """Display a surface in a window until it is closed or Escape is pressed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode(surface.get_size())
        pygame.display.set_caption(config.CAPTION)
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False

            screen.blit(surface, (0, 0))
            pygame.display.flip()
            clock.tick(30)
    finally:
        pygame.quit()
