import html
import json
import logging

from playwright.async_api import async_playwright

log = logging.getLogger("webcheck")

REPORT_TEMPLATE = """<!doctype html>
<html>
<head><meta charset="utf-8"><title>Report</title></head>
<body>
  <h1>WebCheck Pro Report for {target}</h1>
  <pre>{body}</pre>
</body>
</html>
"""


def report_html(target: str, data: dict) -> str:
    return REPORT_TEMPLATE.format(
        target=html.escape(target),
        body=html.escape(json.dumps(data, indent=2)),
    )


async def render_report_pdf(target: str, data: dict) -> bytes:
    """Render an audit result (or an empty dict) as an A4 PDF."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=["--no-sandbox"])
        try:
            page = await browser.new_page()
            await page.set_content(report_html(target, data), wait_until="networkidle")
            pdf = await page.pdf(format="A4")
        finally:
            await browser.close()
    log.info("Rendered PDF report for %s (%d bytes)", target, len(pdf))
    return pdf
