import re
from dataclasses import dataclass
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.config.logger_config import logger
from src.release_cleanup.domain.errors import ConsoleUnavailable, DeletionFailed
from src.release_cleanup.domain.extractor import snapshot_from_html
from src.release_cleanup.domain.models import DeletionResult, PageSnapshot
from src.release_cleanup.domain.rules import DEFAULT_REGISTRY_BASE_URL, build_manage_url

LOG_IN = re.compile(r"log in", re.I)
SIGN_IN = re.compile(r"sign in|log in", re.I)
USERNAME = re.compile(r"username", re.I)
RELEASES_HEADING = re.compile(r"releases|release history", re.I)
OPTIONS = re.compile(r"options", re.I)
DELETE = re.compile(r"delete", re.I)
DELETE_RELEASE = re.compile(r"delete release", re.I)
CONFIRM = re.compile(r"delete|confirm", re.I)
CONFIRM_ONLY = re.compile(r"yes|confirm|delete", re.I)


@dataclass(frozen=True)
class BrowserConsoleConfig:
    headless: bool = True
    base_url: str = DEFAULT_REGISTRY_BASE_URL
    default_timeout_ms: int = 30000
    page_load_delay_ms: int = 3000
    login_delay_ms: int = 4000
    action_delay_ms: int = 500
    menu_delay_ms: int = 1500
    login_check_timeout_ms: int = 2000
    locate_timeout_ms: int = 3000
    verify_timeout_ms: int = 5000
    scroll_passes: int = 3
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )


class PlaywrightReleaseConsole:
    """Drives the registry's release management page in Chromium.

    Implements the session, page-text and deletion ports over one page.
    Use it as an async context manager so the browser is always closed.
    """

    def __init__(self, config: BrowserConsoleConfig | None = None) -> None:
        self.config = config or BrowserConsoleConfig()
        self._playwright: Any = None
        self._browser: Any = None
        self._context: Any = None
        self._page: Page | None = None

    async def __aenter__(self) -> "PlaywrightReleaseConsole":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> None:
        if self._page is not None:
            return
        try:
            logger.info("Launching Chromium: headless={}", self.config.headless)
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                args=["--no-sandbox", "--disable-dev-shm-usage", "--disable-gpu"],
            )
            self._context = await self._browser.new_context(
                viewport={"width": 1920, "height": 1080},
                user_agent=self.config.user_agent,
            )
            self._context.set_default_timeout(self.config.default_timeout_ms)
            self._page = await self._context.new_page()
        except PlaywrightError as exc:
            await self.close()
            raise ConsoleUnavailable(f"Failed to start browser: {exc}") from exc

    async def close(self) -> None:
        try:
            if self._context is not None:
                await self._context.close()
            if self._browser is not None:
                await self._browser.close()
            if self._playwright is not None:
                await self._playwright.stop()
        except PlaywrightError as exc:
            logger.warning("Error closing browser: {}", exc)
        finally:
            self._page = None
            self._context = None
            self._browser = None
            self._playwright = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise ConsoleUnavailable("Browser console is not started")
        return self._page

    async def open_manage_page(self, package_name: str) -> str:
        url = build_manage_url(package_name, self.config.base_url)
        logger.info("Navigating to: {}", url)
        try:
            await self.page.goto(url, wait_until="domcontentloaded")
        except PlaywrightError as exc:
            raise ConsoleUnavailable(f"Failed to open {url}: {exc}") from exc
        await self.page.wait_for_timeout(self.config.page_load_delay_ms)
        return url

    async def log_in_if_required(self, username: str, password: str) -> bool:
        page = self.page
        login_control = await self._wait_first(
            page.get_by_role("link", name=LOG_IN).or_(page.get_by_role("button", name=LOG_IN)),
            self.config.login_check_timeout_ms,
        )
        if login_control is None:
            return False

        logger.info("Login required, proceeding with authentication...")
        await login_control.click()
        await page.wait_for_timeout(self.config.menu_delay_ms)

        logger.info("Entering username...")
        username_field = await self._require(
            page.get_by_role("textbox", name=USERNAME).or_(page.locator("input[name='username'], #username")),
            "username field",
            ConsoleUnavailable,
        )
        await username_field.fill(username)
        await page.wait_for_timeout(self.config.action_delay_ms)

        logger.info("Entering password...")
        password_field = await self._require(
            page.locator("input[type='password'], #password"),
            "password field",
            ConsoleUnavailable,
        )
        await password_field.fill(password)
        await page.wait_for_timeout(self.config.action_delay_ms)

        submit = await self._require(page.get_by_role("button", name=SIGN_IN), "sign in button", ConsoleUnavailable)
        await submit.click()
        logger.info("Waiting for login to complete...")
        await page.wait_for_timeout(self.config.login_delay_ms)
        return True

    async def verify_manage_page(self) -> bool:
        heading = await self._wait_first(
            self.page.get_by_role("heading", name=RELEASES_HEADING),
            self.config.verify_timeout_ms,
        )
        return heading is not None

    async def get_page_text(self) -> PageSnapshot:
        page = self.page
        logger.info("Scrolling to view all versions...")
        for _ in range(self.config.scroll_passes):
            await page.keyboard.press("End")
            await page.wait_for_timeout(self.config.action_delay_ms)
        return snapshot_from_html(await page.content())

    async def trigger_deletion(self, version: str) -> DeletionResult:
        page = self.page
        version_element = await self._wait_first(
            page.get_by_text(version, exact=True),
            self.config.verify_timeout_ms,
        )
        if version_element is not None:
            logger.info("Found version element for {}", version)
            await version_element.scroll_into_view_if_needed()
            await page.wait_for_timeout(self.config.action_delay_ms)
        else:
            logger.warning("Could not find version element directly, trying alternative method...")

        method = await self._delete_via_options_menu(version)
        if method is None:
            method = await self._delete_via_direct_button()
        if method is None:
            raise DeletionFailed("Could not find delete button or option")

        confirmed, warning = await self._confirm_deletion(version)
        await page.wait_for_timeout(self.config.page_load_delay_ms)
        return DeletionResult(version=version, method=method, confirmed=confirmed, warning=warning)

    async def _delete_via_options_menu(self, version: str) -> str | None:
        page = self.page
        logger.info("Looking for Options button...")
        try:
            row_options = page.locator("tr, li, .release", has=page.get_by_text(version, exact=True)).get_by_role(
                "button", name=OPTIONS
            )
            if await row_options.count() > 0:
                options_button = row_options.first
            else:
                all_options = page.get_by_role("button", name=OPTIONS)
                count = await all_options.count()
                if count == 0:
                    return None
                # Releases are listed newest first, so the last menu belongs to the oldest.
                options_button = all_options.nth(count - 1)

            await options_button.click()
            await page.wait_for_timeout(self.config.menu_delay_ms)

            logger.info("Looking for Delete option in menu...")
            delete_option = await self._require(
                page.get_by_role("button", name=DELETE).or_(page.get_by_role("link", name=DELETE)),
                "delete menu entry",
            )
            await delete_option.click()
            await page.wait_for_timeout(self.config.menu_delay_ms)
            return "options_menu"
        except (PlaywrightError, DeletionFailed) as exc:
            logger.warning("Options button approach failed, trying direct delete button: {}", exc)
            return None

    async def _delete_via_direct_button(self) -> str | None:
        page = self.page
        try:
            buttons = page.get_by_role("button", name=DELETE).or_(page.get_by_role("link", name=DELETE_RELEASE))
            count = await buttons.count()
            if count == 0:
                logger.warning("Direct delete button not found...")
                return None
            await buttons.nth(count - 1).click()
            await page.wait_for_timeout(self.config.menu_delay_ms)
            return "direct_button"
        except PlaywrightError as exc:
            logger.warning("Direct delete button failed: {}", exc)
            return None

    async def _confirm_deletion(self, version: str) -> tuple[bool, str | None]:
        page = self.page
        logger.info("Looking for confirmation dialog...")
        confirm_input = await self._wait_first(page.get_by_role("textbox"), self.config.locate_timeout_ms)
        if confirm_input is not None:
            logger.info("Entering confirmation...")
            await confirm_input.fill(version)
            await page.wait_for_timeout(self.config.action_delay_ms)
            confirm_button = await self._wait_first(
                page.get_by_role("button", name=CONFIRM),
                self.config.locate_timeout_ms,
            )
            if confirm_button is not None:
                await confirm_button.click()
                logger.info("Deletion confirmed")
                return True, None

        logger.info("No text confirmation needed, looking for confirm button...")
        confirm_button = await self._wait_first(
            page.get_by_role("button", name=CONFIRM_ONLY),
            self.config.locate_timeout_ms,
        )
        if confirm_button is not None:
            await confirm_button.click()
            logger.info("Deletion confirmed")
            return True, None

        warning = "Could not find confirmation button - deletion may have proceeded automatically"
        logger.warning(warning)
        return False, warning

    async def _wait_first(self, locator: Locator, timeout_ms: int) -> Locator | None:
        candidate = locator.first
        try:
            await candidate.wait_for(state="visible", timeout=timeout_ms)
        except PlaywrightTimeoutError:
            return None
        return candidate

    async def _require(
        self,
        locator: Locator,
        label: str,
        error: type[Exception] = DeletionFailed,
    ) -> Locator:
        found = await self._wait_first(locator, self.config.locate_timeout_ms)
        if found is None:
            raise error(f"Could not find {label}")
        return found
