"""
Playwright scraper for the Albert Heijn bonus page.
Opens every promotion card and collects the product links inside it; the
product identifier is the number after "/wi" in each link.
"""
from __future__ import annotations

import re

from playwright.async_api import Page, async_playwright

from bonusplan.config import settings
from bonusplan.logging import get_logger

logger = get_logger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

PROMOTION_CARD = '[data-testhook="promotion-card"]'
ACCEPT_COOKIES = '[data-testhook="accept-cookies"]'
PERIOD_TOGGLE = '[data-testhook="period-toggle-button"]'
NEXT_PERIOD_ITEM = '[data-testhook="period-toggle-item"]:nth-child(2)'
PANEL_BODY = '[data-testhook="panel-body"]'
PANEL_CLOSE = '[data-testhook="panel-header-close-button"]'
PRODUCT_LINK = '[href^="/producten/product/"]'

PRODUCT_ID_PATTERN = re.compile(r"/wi(\d+)(?:/|$)")


def extract_product_ids(hrefs: list[str]) -> list[str]:
    """Product ids from links like /producten/product/wi123456/name, deduplicated in order."""
    ids: list[str] = []
    seen: set[str] = set()
    for href in hrefs:
        match = PRODUCT_ID_PATTERN.search(href or "")
        if not match:
            logger.debug("ah_scraper: no product id in href=%s", href)
            continue
        pid = match.group(1)
        if pid not in seen:
            seen.add(pid)
            ids.append(pid)
    return ids


class BonusPage:
    def __init__(self, page: Page, url: str | None = None, timeout_ms: int | None = None) -> None:
        self.page = page
        self.url = url or settings.bonus_url
        self.timeout_ms = timeout_ms or settings.browser_timeout_ms

    async def goto(self) -> None:
        await self.page.goto(self.url, wait_until="domcontentloaded", timeout=self.timeout_ms)

    async def accept_terms(self) -> None:
        await self.page.wait_for_selector(ACCEPT_COOKIES, timeout=self.timeout_ms)
        await self.page.click(ACCEPT_COOKIES)

    async def select_next_week(self) -> None:
        await self.page.click(PERIOD_TOGGLE)
        await self.page.click(NEXT_PERIOD_ITEM)

    async def wait_for_promotion_cards(self) -> None:
        await self.page.wait_for_selector(PROMOTION_CARD, timeout=self.timeout_ms)

    async def collect_product_hrefs(self) -> list[str]:
        """Open each promotion card in turn and read the product links in its panel."""
        cards = self.page.locator(PROMOTION_CARD)
        count = await cards.count()
        logger.info("ah_scraper: promotion cards=%s", count)
        hrefs: list[str] = []
        for index in range(count):
            await cards.nth(index).click()
            await self.page.wait_for_selector(f"{PANEL_BODY} {PRODUCT_LINK}", timeout=self.timeout_ms)
            hrefs.extend(
                await self.page.eval_on_selector_all(
                    PRODUCT_LINK, "els => els.map(e => e.getAttribute('href'))"
                )
            )
            close = self.page.locator(PANEL_CLOSE)
            if await close.count():
                await close.first.click()
        return hrefs


async def scrape_bonus_product_ids(
    url: str | None = None,
    headless: bool | None = None,
    select_next_week: bool | None = None,
) -> list[str]:
    """Launch Chromium, walk the bonus page and return the discounted product ids."""
    headless = settings.browser_headless if headless is None else headless
    select_next_week = settings.bonus_select_next_week if select_next_week is None else select_next_week
    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=headless,
            args=["--no-sandbox", "--disable-setuid-sandbox"],
        )
        try:
            context = await browser.new_context(user_agent=USER_AGENT, locale="nl-NL")
            page = await context.new_page()
            bonus_page = BonusPage(page, url=url)
            logger.info("ah_scraper: navigating url=%s next_week=%s", bonus_page.url, select_next_week)
            await bonus_page.goto()
            await bonus_page.accept_terms()
            if select_next_week:
                await bonus_page.select_next_week()
            await bonus_page.wait_for_promotion_cards()
            hrefs = await bonus_page.collect_product_hrefs()
        finally:
            await browser.close()
    product_ids = extract_product_ids(hrefs)
    logger.info("ah_scraper: links=%s product_ids=%s", len(hrefs), len(product_ids))
    return product_ids
