"""
Game surfaces the solver can play on.

- SimulatedSurface: In-memory game with a known mine layout
- WebDriverSurface: minesweeperonline.com through selenium
"""
from solver.surface import GameSurface
from .simulated_surface import SimulatedSurface
from .webdriver_surface import BrowserConfig, WebDriverSurface

__all__ = [
    "GameSurface",
    "SimulatedSurface",
    "BrowserConfig",
    "WebDriverSurface",
]
