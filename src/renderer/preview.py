# renderer/preview.py
import numpy as np
import pygame

def to_surface(rgb: np.ndarray) -> "pygame.Surface":
    # pygame's surfarray is indexed [x, y]
    return pygame.surfarray.make_surface(np.ascontiguousarray(rgb.transpose(1, 0, 2)))

def show_image(rgb: np.ndarray, title: str = "Path Tracer"):
    """
    Display the finished image in a window until it is closed or Escape is pressed.
    """
    pygame.init()
    try:
        height, width = rgb.shape[:2]
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        screen.blit(to_surface(rgb), (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()
