"""
Browser game surface driven through selenium.

Targets minesweeperonline.com, where every square is an element with id
"<row>_<col>" (1-based) and a class string describing how it renders.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from selenium import webdriver
from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from solver.errors import (
    ElementNotFound,
    StaleReference,
    SurfaceError,
    SurfaceUnavailable,
)
from solver.position import Position
from solver.surface import GameSurface

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

GAME_URL = "https://minesweeperonline.com/"
BLANK_SELECTOR = ".square.blank"
FACE_ID = "face"
FACE_WIN_CLASS = "facewin"

# (width, height, mines) -> URL fragment selecting that game
GAME_FRAGMENTS = {
    (9, 9, 10): "#beginner",
    (16, 16, 40): "#intermediate",
    (30, 16, 99): "",
}


@dataclass
class BrowserConfig:
    """
    Options for the browser behind the surface.

    Attributes:
        url: Game page.
        remote_url: WebDriver endpoint (e.g. a chromedriver on
            http://localhost:9515); None starts a local Chrome.
        headless: Run Chrome without a window.
        timeout: Seconds to wait for the board to appear.
    """

    url: str = GAME_URL
    remote_url: Optional[str] = None
    headless: bool = False
    timeout: float = 10.0


# ============================================================================
# WebDriver Surface
# ============================================================================

class WebDriverSurface(GameSurface):
    """Game surface backed by a live browser session."""

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        driver: Optional[WebDriver] = None,
    ) -> None:
        """
        Initialize the surface.

        Args:
            config: Browser options.
            driver: Existing driver to use instead of starting one.
        """
        self.config = config or BrowserConfig()
        self._driver = driver
        self._owns_driver = driver is None

    @property
    def driver(self) -> WebDriver:
        """The driver, started on first use."""
        if self._driver is None:
            self._driver = self._start_driver()
        return self._driver

    def _start_driver(self) -> WebDriver:
        """Start Chrome locally or connect to a remote WebDriver."""
        options = Options()
        if self.config.headless:
            options.add_argument("--headless=new")
            options.add_argument("--window-size=1920,1080")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")

        try:
            if self.config.remote_url:
                logger.info("Connecting to WebDriver at %s", self.config.remote_url)
                return webdriver.Remote(
                    command_executor=self.config.remote_url, options=options
                )
            logger.info("Starting Chrome")
            return webdriver.Chrome(options=options)
        except WebDriverException as e:
            raise SurfaceUnavailable(f"Failed to start browser: {e.msg}") from e

    # ========================================================================
    # Element Lookup (Low-level)
    # ========================================================================

    @staticmethod
    def element_id(position: Position) -> str:
        """Element id of the square at ``position``."""
        return f"{position.row + 1}_{position.col + 1}"

    @contextmanager
    def _translate_errors(self, what: str) -> Iterator[None]:
        """Re-raise selenium failures as surface errors."""
        try:
            yield
        except NoSuchElementException as e:
            raise ElementNotFound(f"{what}: {e.msg}") from e
        except StaleElementReferenceException as e:
            raise StaleReference(f"{what}: {e.msg}") from e
        except WebDriverException as e:
            raise SurfaceError(f"{what}: {e.msg}") from e

    def _find(self, position: Position) -> WebElement:
        return self.driver.find_element(By.ID, self.element_id(position))

    def _face(self) -> WebElement:
        return self.driver.find_element(By.ID, FACE_ID)

    # ========================================================================
    # Surface Interface
    # ========================================================================

    def launch(self, width: int, height: int, mines: int) -> None:
        """Open the game page and wait for the board."""
        fragment = GAME_FRAGMENTS.get((width, height, mines))
        if fragment is None:
            raise SurfaceUnavailable(
                f"No preset game for {width}x{height} with {mines} mines"
            )
        url = self.config.url + fragment

        try:
            logger.info("Navigating to %s", url)
            self.driver.get(url)
            WebDriverWait(self.driver, self.config.timeout).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, BLANK_SELECTOR))
            )
            self._face()
        except TimeoutException as e:
            raise SurfaceUnavailable(f"Board never appeared at {url}") from e
        except WebDriverException as e:
            raise SurfaceUnavailable(f"Could not load {url}: {e.msg}") from e

    def observe(self, position: Position) -> str:
        """Return the square's class string."""
        with self._translate_errors(f"observe {position.coords()}"):
            token = self._find(position).get_attribute("class")
        if token is None:
            raise ElementNotFound(f"Square {position.coords()} has no class")
        return token

    def click(self, position: Position) -> None:
        """Left-click the square."""
        with self._translate_errors(f"click {position.coords()}"):
            self._find(position).click()

    def right_click(self, position: Position) -> None:
        """Right-click the square to place a flag."""
        with self._translate_errors(f"right-click {position.coords()}"):
            element = self._find(position)
            ActionChains(self.driver).context_click(element).perform()

    def is_won(self) -> bool:
        """Check if the face shows a win."""
        with self._translate_errors("read face"):
            face_class = self._face().get_attribute("class") or ""
        return FACE_WIN_CLASS in face_class

    def reset(self) -> None:
        """Click the face to start a new game."""
        with self._translate_errors("click face"):
            self._face().click()

    def close(self) -> None:
        """Quit the browser if this surface started it."""
        if self._driver is not None and self._owns_driver:
            self._driver.quit()
            self._driver = None
            logger.info("Browser closed")
