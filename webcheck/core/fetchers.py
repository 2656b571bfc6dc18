import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import httpx
from playwright.async_api import async_playwright

from .errors import EngineFailure
from .utils import default_headers

log = logging.getLogger("webcheck")

CHROME_ARGS = ["--no-sandbox"]


class LighthouseEngine:
    """Performance/SEO/accessibility audit through the Lighthouse CLI."""

    name = "lighthouse"

    def __init__(self, binary: str = "lighthouse"):
        self.binary = binary

    def command(self, url: str) -> list:
        return [
            self.binary,
            url,
            "--output=json",
            "--output-path=stdout",
            "--quiet",
            "--chrome-flags=--headless --no-sandbox",
        ]

    async def run(self, url: str) -> dict:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command(url),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise EngineFailure(self.name, f"could not start {self.binary}: {e}") from e

        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            detail = stderr.decode(errors="replace").strip().splitlines()
            raise EngineFailure(
                self.name,
                f"exited with {proc.returncode}" + (f": {detail[-1]}" if detail else ""),
            )
        try:
            lhr = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise EngineFailure(self.name, f"unreadable report: {e}") from e
        if not isinstance(lhr, dict):
            raise EngineFailure(self.name, "report is not a JSON object")
        return lhr


class AxeEngine:
    """Accessibility violation scan: axe-core injected into a Playwright page."""

    name = "axe"

    def __init__(
        self,
        script_path: Optional[str] = None,
        script_url: Optional[str] = None,
        navigation_timeout_ms: int = 30000,
    ):
        self.script_path = script_path
        self.script_url = script_url
        self.navigation_timeout_ms = navigation_timeout_ms
        self._source: Optional[str] = None

    async def axe_source(self) -> str:
        if self._source is not None:
            return self._source
        if self.script_path:
            self._source = Path(self.script_path).read_text(encoding="utf-8")
        elif self.script_url:
            async with httpx.AsyncClient(timeout=30, follow_redirects=True) as client:
                r = await client.get(self.script_url)
                r.raise_for_status()
                self._source = r.text
            log.info("Loaded axe-core from %s", self.script_url)
        else:
            raise EngineFailure(self.name, "no axe-core source configured")
        return self._source

    async def run(self, url: str) -> dict:
        try:
            source = await self.axe_source()
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=True, args=CHROME_ARGS)
                try:
                    page = await browser.new_page()
                    await page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
                    await page.add_script_tag(content=source)
                    results = await page.evaluate("async () => await axe.run()")
                finally:
                    await browser.close()
        except EngineFailure:
            raise
        except Exception as e:
            raise EngineFailure(self.name, str(e)) from e
        return results or {}


class HeaderFetcher:
    """Plain GET of the target, following redirects, for its response headers."""

    def __init__(self, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    async def run(self, url: str) -> dict:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=default_headers(),
            transport=self.transport,
        ) as client:
            r = await client.get(url)
        return {k.lower(): v for k, v in r.headers.items()}
